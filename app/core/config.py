"""
core/config.py
--------------
Centralised settings management using pydantic-settings.
All configuration is loaded from environment variables / .env file.
This is the single source of truth for application configuration.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────────────────────
    APP_NAME: str = "Notes SaaS Backend"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # ── Security ─────────────────────────────────────────────────────────
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    BCRYPT_ROUNDS: int = 12

    # ── Tenancy ──────────────────────────────────────────────────────────
    SEED_DEMO_DATA: bool = True
    # Password given to seeded demo users and to invited users
    DEFAULT_USER_PASSWORD: str = "password"
    FREE_PLAN_NOTE_LIMIT: int = 3

    # ── Billing (Stripe) ─────────────────────────────────────────────────
    STRIPE_SECRET: str = ""
    STRIPE_PUBLISHABLE: str = ""
    STRIPE_LINK_BASIC: Optional[str] = None
    STRIPE_LINK_PRO: Optional[str] = None
    PRO_PLAN_PRICE_CENTS: int = 500
    BILLING_CURRENCY: str = "usd"

    # ── CORS ─────────────────────────────────────────────────────────────
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v):
        if isinstance(v, str):
            import json
            return json.loads(v)
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def normalise_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings factory.
    Use this everywhere to avoid re-reading .env on every call.
    """
    return Settings()


settings = get_settings()
