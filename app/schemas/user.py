"""
schemas/user.py
---------------
Pydantic models for login, signup, invite and their responses.

Security note:
  - password_hash is NEVER included in any response schema.
  - Emails are plain strings rather than EmailStr: the demo tenants live
    under the reserved .test TLD, which strict validators reject.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.models.user import UserRole
from app.schemas.tenant import TenantRead


class _Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=320, examples=["admin@acme.test"])
    password: str = Field(..., max_length=128, examples=["password"])

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


# The web client posts camelCase bodies; both spellings are accepted.
TENANT_SLUG_ALIASES = AliasChoices("tenantSlug", "tenant_slug")


class LoginRequest(_Credentials):
    tenant_slug: Optional[str] = Field(
        default=None,
        validation_alias=TENANT_SLUG_ALIASES,
        description="Optional: reject the login unless the user belongs to this tenant",
    )


class SignupRequest(_Credentials):
    """Self-registration as a member of an existing tenant."""
    tenant_slug: str = Field(
        ..., min_length=1, validation_alias=TENANT_SLUG_ALIASES, examples=["acme"]
    )


class InviteRequest(BaseModel):
    """Used by an admin to add a user to their own tenant."""
    email: str = Field(..., min_length=3, max_length=320)
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class UserRead(BaseModel):
    id: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserRead
    tenant: TenantRead


class InviteResponse(BaseModel):
    message: str = "User invited"
    user: UserRead
