"""
services/auth_service.py
------------------------
Business logic for login, self-signup and admin invites.

Email uniqueness is global across tenants (see Store.find_user_by_email).
The tenant of a new user is never taken from the client when an identity is
available: invites always land in the inviting admin's tenant.
"""

from dataclasses import dataclass
from typing import Optional

from jose import JWTError

from app.core.config import settings
from app.core.exceptions import (
    EmailExists,
    InvalidCredentials,
    InvalidTenant,
    InvalidToken,
    MissingAuth,
)
from app.core.logging import get_logger
from app.core.security import (
    access_token_lifetime,
    create_access_token,
    decode_access_token,
    dummy_verify,
    hash_password,
    verify_password,
)
from app.db.store import Store
from app.models.identity import AuthIdentity
from app.models.tenant import Tenant
from app.models.user import User, UserRole

logger = get_logger(__name__)


@dataclass
class AuthSession:
    token: str
    expires_in: int  # seconds
    user: User
    tenant: Tenant


class AuthService:

    @staticmethod
    def issue_session(user: User, tenant: Tenant) -> AuthSession:
        lifetime = access_token_lifetime()
        token = create_access_token(
            subject=user.id,
            tenant_id=user.tenant_id,
            role=user.role.value,
            expires_delta=lifetime,
        )
        return AuthSession(
            token=token,
            expires_in=int(lifetime.total_seconds()),
            user=user,
            tenant=tenant,
        )

    @staticmethod
    def verify_token(token: Optional[str]) -> AuthIdentity:
        """
        Decode a bearer token into the caller's identity.

        No store round-trip: the signed claims are trusted as-is, and a
        tenant that has since disappeared surfaces later as SessionExpired.
        """
        if not token:
            raise MissingAuth()
        try:
            payload = decode_access_token(token)
        except JWTError as exc:
            logger.warning("JWT decode failed", error=str(exc))
            raise InvalidToken()

        user_id = payload.get("sub")
        tenant_id = payload.get("tenant_id")
        if not user_id or not tenant_id:
            raise InvalidToken()
        try:
            role = UserRole(payload.get("role"))
        except ValueError:
            raise InvalidToken()

        return AuthIdentity(user_id=user_id, tenant_id=tenant_id, role=role)

    @staticmethod
    def login(
        store: Store,
        email: str,
        password: str,
        tenant_slug: Optional[str] = None,
    ) -> AuthSession:
        """
        Verify credentials and issue a token.

        Unknown email, wrong password and a tenant_slug that does not name
        the user's tenant all fail the same way.
        """
        user = store.find_user_by_email(email)
        if user is None:
            dummy_verify()
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.info("Login rejected", user_id=user.id, reason="password")
            raise InvalidCredentials()

        tenant = store.get_tenant(user.tenant_id)
        if tenant is None:
            raise InvalidCredentials()
        if tenant_slug and tenant_slug.lower() != tenant.slug.lower():
            logger.info("Login rejected", user_id=user.id, reason="tenant_mismatch")
            raise InvalidCredentials()

        logger.info("User logged in", user_id=user.id, tenant_id=tenant.id)
        return AuthService.issue_session(user, tenant)

    @staticmethod
    def signup(store: Store, email: str, password: str, tenant_slug: str) -> AuthSession:
        """
        Self-registration: creates a 'member' account in the given tenant.
        Raises InvalidTenant for an unknown slug, EmailExists on duplicates.
        """
        password_hash = hash_password(password)

        with store.lock:
            tenant = store.find_tenant_by_slug(tenant_slug)
            if tenant is None:
                raise InvalidTenant()
            if store.email_exists(email):
                raise EmailExists()

            user = store.add_user(User(
                email=email.lower(),
                password_hash=password_hash,
                role=UserRole.member,
                tenant_id=tenant.id,
            ))

        logger.info("User signed up", user_id=user.id, tenant_id=tenant.id)
        return AuthService.issue_session(user, tenant)

    @staticmethod
    def invite(
        store: Store,
        email: str,
        role: Optional[UserRole],
        caller: AuthIdentity,
    ) -> User:
        """
        Admin-initiated user creation within the caller's own tenant.

        The invited user gets DEFAULT_USER_PASSWORD and must log in
        separately; no token is issued here.
        """
        password_hash = hash_password(settings.DEFAULT_USER_PASSWORD)

        with store.lock:
            if store.email_exists(email):
                raise EmailExists()

            user = store.add_user(User(
                email=email.lower(),
                password_hash=password_hash,
                role=role or UserRole.member,
                tenant_id=caller.tenant_id,
            ))

        logger.info(
            "Admin invited user",
            new_user_id=user.id,
            role=user.role.value,
            tenant_id=caller.tenant_id,
            invited_by=caller.user_id,
        )
        return user
