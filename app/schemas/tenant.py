"""
schemas/tenant.py
-----------------
Pydantic response models for Tenant.

TenantRead is the public view: the internal id is never exposed, clients
address tenants by slug.
"""

from pydantic import BaseModel

from app.models.tenant import TenantPlan


class TenantRead(BaseModel):
    slug: str
    name: str
    plan: TenantPlan

    model_config = {"from_attributes": True}


class UpgradeResponse(BaseModel):
    message: str = "Upgraded to Pro"
    plan: TenantPlan
