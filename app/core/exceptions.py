"""
core/exceptions.py
------------------
Domain error taxonomy.

Services raise these; they never build HTTP responses themselves. The
application factory registers a single handler that renders any AppError as
    {"error": "<message>"}
with the status code carried by the exception class.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


# ── Authentication ────────────────────────────────────────────────────────────

class MissingAuth(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Missing Authorization header"


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class SessionExpired(AppError):
    """The token is valid but its tenant no longer resolves; sign in again."""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Session expired. Please sign in again."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


# ── Registration ──────────────────────────────────────────────────────────────

class InvalidTenant(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid tenant"


class EmailExists(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already exists"


# ── Resources ─────────────────────────────────────────────────────────────────

class TenantNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Tenant not found"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class QuotaExceeded(AppError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    message = "Free plan limit reached for members. Upgrade to Pro."


# ── External services ─────────────────────────────────────────────────────────

class PaymentProviderError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Payment provider error"
