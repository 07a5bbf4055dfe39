"""
services/tenant_service.py
--------------------------
Business logic for tenant lookup and plan upgrades.

Service layer is responsible for:
  - Resolving tenants from the store
  - Enforcing business rules (tenants may only upgrade themselves)
  - Returning domain objects to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from app.core.exceptions import Forbidden, PaymentProviderError, SessionExpired, TenantNotFound
from app.core.logging import get_logger
from app.db.store import Store
from app.models.identity import AuthIdentity
from app.models.tenant import Tenant
from app.services.billing_service import BillingService

logger = get_logger(__name__)


class TenantService:

    @staticmethod
    def get_mine(store: Store, identity: AuthIdentity) -> Tenant:
        """
        Return the caller's tenant.
        Raises SessionExpired if the token references a tenant that no
        longer resolves; the client should discard its token.
        """
        tenant = store.get_tenant(identity.tenant_id)
        if tenant is None:
            logger.warning("Token references unknown tenant", tenant_id=identity.tenant_id)
            raise SessionExpired()
        return tenant

    @staticmethod
    async def upgrade(
        store: Store,
        slug: str,
        identity: AuthIdentity,
        billing: BillingService,
    ) -> Tenant:
        """
        Move the tenant named by `slug` to the pro plan.

        Checks, in order: the slug resolves (TenantNotFound), the caller's
        own tenant resolves (SessionExpired), and they are the same tenant
        (Forbidden).

        A payment intent is recorded first when billing is enabled. A
        provider failure is logged and ignored so the upgrade still goes
        through. That path skips real payment verification and is only
        acceptable for the demo deployment.
        """
        tenant = store.find_tenant_by_slug(slug)
        if tenant is None:
            raise TenantNotFound()
        if store.get_tenant(identity.tenant_id) is None:
            raise SessionExpired()
        if tenant.id != identity.tenant_id:
            logger.warning(
                "Cross-tenant upgrade rejected",
                caller_tenant_id=identity.tenant_id,
                target_tenant_id=tenant.id,
            )
            raise Forbidden("Cannot upgrade another tenant")

        try:
            await billing.record_upgrade_intent(tenant)
        except PaymentProviderError as exc:
            logger.warning(
                "Payment intent failed (ignored, upgrading anyway)",
                tenant_id=tenant.id,
                error=str(exc),
            )

        store.upgrade_tenant_to_pro(tenant)
        logger.info("Tenant upgraded", tenant_id=tenant.id, plan=tenant.plan.value)
        return tenant
