"""
schemas/billing.py
------------------
Pydantic models for the Stripe config and checkout endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import TENANT_SLUG_ALIASES


class StripeConfigRead(BaseModel):
    publishable_key: Optional[str] = None
    enabled: bool
    payment_link_basic: Optional[str] = None
    payment_link_pro: Optional[str] = None


class CheckoutRequest(BaseModel):
    plan: str = Field(..., examples=["pro"])
    tenant_slug: str = Field(
        ..., validation_alias=TENANT_SLUG_ALIASES, examples=["acme"]
    )


class CheckoutResponse(BaseModel):
    url: Optional[str] = None
    message: Optional[str] = None
