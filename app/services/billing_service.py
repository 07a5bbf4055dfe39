"""
services/billing_service.py
---------------------------
Stripe integration seam.

The service is "enabled" only when STRIPE_SECRET is set. When disabled:
  - checkout returns url=None with an explanatory message, and the client
    is expected to fall back to the admin upgrade endpoint;
  - no upgrade payment intent is recorded.

The core never depends on Stripe being reachable. Stripe SDK calls are
blocking, so they run in Starlette's threadpool.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import stripe
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import PaymentProviderError, TenantNotFound
from app.core.logging import get_logger
from app.db.store import Store
from app.models.tenant import Tenant, TenantPlan

logger = get_logger(__name__)


@dataclass
class CheckoutResult:
    url: Optional[str]
    message: Optional[str] = None


class BillingService:

    def __init__(
        self,
        secret_key: Optional[str] = None,
        publishable_key: Optional[str] = None,
    ) -> None:
        self._secret_key = settings.STRIPE_SECRET if secret_key is None else secret_key
        self._publishable_key = (
            settings.STRIPE_PUBLISHABLE if publishable_key is None else publishable_key
        )
        self.enabled = bool(self._secret_key)
        if not self.enabled:
            logger.info("BillingService in DISABLED mode — set STRIPE_SECRET to enable Stripe")

    def get_config(self) -> Dict[str, Any]:
        return {
            "publishable_key": self._publishable_key or None,
            "enabled": self.enabled,
            "payment_link_basic": settings.STRIPE_LINK_BASIC or None,
            "payment_link_pro": settings.STRIPE_LINK_PRO or None,
        }

    @staticmethod
    def price_for_plan(plan: str) -> int:
        """One-time price in the smallest currency unit; 0 means nothing to pay."""
        if plan == TenantPlan.pro.value:
            return settings.PRO_PLAN_PRICE_CENTS
        return 0

    # ── Checkout ──────────────────────────────────────────────────────────────

    async def create_checkout(
        self,
        store: Store,
        plan: str,
        tenant_slug: str,
        base_url: str,
    ) -> CheckoutResult:
        """
        Create a Stripe Checkout Session for a one-time plan payment.

        Raises:
            TenantNotFound:        unknown tenant slug.
            PaymentProviderError:  Stripe rejected the request.
        """
        tenant = store.find_tenant_by_slug(tenant_slug)
        if tenant is None:
            raise TenantNotFound()

        if not self.enabled:
            return CheckoutResult(url=None, message="Stripe not configured")

        amount = self.price_for_plan(plan)
        if amount <= 0:
            return CheckoutResult(url=None, message="No payment needed")

        base_url = base_url.rstrip("/")
        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.create,
                api_key=self._secret_key,
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": settings.BILLING_CURRENCY,
                            "product_data": {"name": f"Notes {plan.upper()} Plan"},
                            "unit_amount": amount,
                        },
                        "quantity": 1,
                    }
                ],
                success_url=f"{base_url}/app?checkout=success",
                cancel_url=f"{base_url}/app?checkout=cancel",
                metadata={"tenant_slug": tenant.slug, "plan": plan},
            )
        except stripe.StripeError as exc:
            logger.error("Stripe checkout failed", tenant_id=tenant.id, error=str(exc))
            raise PaymentProviderError(exc.user_message or str(exc)) from exc

        logger.info("Checkout session created", tenant_id=tenant.id, plan=plan)
        return CheckoutResult(url=session.url)

    # ── Upgrade payment intent ────────────────────────────────────────────────

    async def record_upgrade_intent(self, tenant: Tenant) -> Optional[str]:
        """
        Record an unconfirmed PaymentIntent for the pro plan.

        Returns the intent id, or None when billing is disabled.
        Raises PaymentProviderError if Stripe fails.
        """
        if not self.enabled:
            return None

        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self._secret_key,
                amount=self.price_for_plan(TenantPlan.pro.value),
                currency=settings.BILLING_CURRENCY,
                payment_method_types=["card"],
                confirm=False,
                description=f"Upgrade {tenant.slug} to Pro",
            )
        except stripe.StripeError as exc:
            raise PaymentProviderError(str(exc)) from exc

        logger.info("Upgrade payment intent recorded", tenant_id=tenant.id, intent_id=intent.id)
        return intent.id


# Singleton — shared across all requests
billing_service = BillingService()


def get_billing_service() -> BillingService:
    """FastAPI dependency; override in tests to swap in a configured service."""
    return billing_service
