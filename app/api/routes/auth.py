"""
api/routes/auth.py
------------------
Authentication endpoints.

POST /auth/login   — Exchange email + password for a JWT access token.
POST /auth/signup  — Self-registration as a member of an existing tenant.

Both return the same body: the token plus public views of the user and
their tenant.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.db.store import Store, get_store
from app.schemas.tenant import TenantRead
from app.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserRead
from app.services.auth_service import AuthService, AuthSession

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _to_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        token=session.token,
        token_type="bearer",
        expires_in=session.expires_in,
        user=UserRead.model_validate(session.user),
        tenant=TenantRead.model_validate(session.tenant),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and receive a JWT access token",
)
async def login(
    body: LoginRequest,
    store: Annotated[Store, Depends(get_store)],
) -> AuthResponse:
    """
    Authenticate with email + password (JSON body) and receive a signed JWT
    valid for 7 days. Send it back as `Authorization: Bearer <token>`.
    """
    session = AuthService.login(store, body.email, body.password, body.tenant_slug)
    return _to_response(session)


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a member account in an existing tenant",
)
async def signup(
    body: SignupRequest,
    store: Annotated[Store, Depends(get_store)],
) -> AuthResponse:
    session = AuthService.signup(store, body.email, body.password, body.tenant_slug)
    return _to_response(session)
