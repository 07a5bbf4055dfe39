"""
api/routes/tenants.py
---------------------
Tenant endpoints.

GET  /tenants/me               — Current user's tenant (slug, name, plan).
POST /tenants/{slug}/upgrade   — Admin only: move own tenant to the pro plan.
POST /tenants/{slug}/invite    — Admin only: add a user to own tenant.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.db.store import Store, get_store
from app.dependencies import get_current_admin, get_current_member
from app.models.identity import AuthIdentity
from app.schemas.tenant import TenantRead, UpgradeResponse
from app.schemas.user import InviteRequest, InviteResponse, UserRead
from app.services.auth_service import AuthService
from app.services.billing_service import BillingService, get_billing_service
from app.services.tenant_service import TenantService

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get(
    "/me",
    response_model=TenantRead,
    summary="Get the tenant of the authenticated user",
)
async def get_my_tenant(
    store: Annotated[Store, Depends(get_store)],
    identity: Annotated[AuthIdentity, Depends(get_current_member)],
) -> TenantRead:
    tenant = TenantService.get_mine(store, identity)
    return TenantRead.model_validate(tenant)


@router.post(
    "/{slug}/upgrade",
    response_model=UpgradeResponse,
    summary="Upgrade your own tenant to the pro plan (admin only)",
)
async def upgrade_tenant(
    slug: str,
    store: Annotated[Store, Depends(get_store)],
    admin: Annotated[AuthIdentity, Depends(get_current_admin)],
    billing: Annotated[BillingService, Depends(get_billing_service)],
) -> UpgradeResponse:
    """
    Admin-only. An admin can only upgrade their own tenant, even if they
    know another tenant's slug.
    """
    tenant = await TenantService.upgrade(store, slug, admin, billing)
    return UpgradeResponse(plan=tenant.plan)


@router.post(
    "/{slug}/invite",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a user into your tenant (admin only)",
)
async def invite_user(
    slug: str,
    body: InviteRequest,
    store: Annotated[Store, Depends(get_store)],
    admin: Annotated[AuthIdentity, Depends(get_current_admin)],
) -> InviteResponse:
    """
    The new user always joins the admin's own tenant (taken from the JWT);
    the slug in the path is informational. Role defaults to 'member' and
    the password to the configured default.
    """
    user = AuthService.invite(store, body.email, body.role, admin)
    return InviteResponse(user=UserRead.model_validate(user))
