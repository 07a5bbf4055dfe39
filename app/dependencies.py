"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and authorisation.

Flow:
  1. HTTPBearer extracts the Bearer token from the Authorization header.
  2. AuthService.verify_token validates the JWT and builds an AuthIdentity
     (user_id, tenant_id, role) from its claims.
  3. require_role(...) layers a role check on top of get_current_identity.

The tenant_id in the identity scopes every store access downstream, so a
token for one tenant can never reach another tenant's data.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import Forbidden, InvalidToken, MissingAuth
from app.models.identity import AuthIdentity
from app.models.user import UserRole
from app.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> AuthIdentity:
    """
    Raises MissingAuth when no Authorization header is sent, InvalidToken
    when it is malformed or the JWT does not verify.
    """
    if credentials is None:
        if request.headers.get("Authorization"):
            raise InvalidToken("Invalid Authorization header")
        raise MissingAuth()
    return AuthService.verify_token(credentials.credentials)


def require_role(role: UserRole):
    """
    Build a dependency that admits identities whose role ranks at least
    `role` (member < admin). Raises Forbidden otherwise.
    """

    async def role_gate(
        identity: Annotated[AuthIdentity, Depends(get_current_identity)],
    ) -> AuthIdentity:
        if not identity.has_role(role):
            raise Forbidden(f"{role.value.capitalize()} role required")
        return identity

    return role_gate


get_current_member = require_role(UserRole.member)
get_current_admin = require_role(UserRole.admin)
