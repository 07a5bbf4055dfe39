"""
api/routes/billing.py
---------------------
Stripe-facing endpoints. Both are public: checkout only produces a payment
URL, the plan itself changes through the admin upgrade endpoint.

GET  /stripe/config     — Whether Stripe is enabled, plus payment links
POST /billing/checkout  — Create a Checkout Session (url is null when
                          Stripe is not configured)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.db.store import Store, get_store
from app.schemas.billing import CheckoutRequest, CheckoutResponse, StripeConfigRead
from app.services.billing_service import BillingService, get_billing_service

router = APIRouter(tags=["Billing"])


@router.get(
    "/stripe/config",
    response_model=StripeConfigRead,
    summary="Public Stripe configuration",
)
async def get_stripe_config(
    billing: Annotated[BillingService, Depends(get_billing_service)],
) -> StripeConfigRead:
    return StripeConfigRead(**billing.get_config())


@router.post(
    "/billing/checkout",
    response_model=CheckoutResponse,
    summary="Create a Stripe checkout session for a plan",
)
async def create_checkout(
    body: CheckoutRequest,
    request: Request,
    store: Annotated[Store, Depends(get_store)],
    billing: Annotated[BillingService, Depends(get_billing_service)],
) -> CheckoutResponse:
    """
    Redirect URLs point back to `<this host>/app?checkout=success|cancel`.
    """
    result = await billing.create_checkout(
        store,
        plan=body.plan,
        tenant_slug=body.tenant_slug,
        base_url=str(request.base_url),
    )
    return CheckoutResponse(url=result.url, message=result.message)
