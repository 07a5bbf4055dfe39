"""
models/tenant.py
----------------
Tenant (company) record.

Each tenant is an isolated organisational unit. Users and notes point at
their tenant by id; every read and write of tenant data is filtered by that
id at the store level.
"""

from dataclasses import dataclass, field
from enum import Enum as PyEnum

from app.db.base import generate_uuid


class TenantPlan(str, PyEnum):
    free = "free"
    pro = "pro"


@dataclass(repr=False)
class Tenant:
    slug: str
    name: str
    plan: TenantPlan = TenantPlan.free
    id: str = field(default_factory=generate_uuid)

    @property
    def is_free_plan_limited(self) -> bool:
        return self.plan == TenantPlan.free

    def __repr__(self) -> str:
        return f"<Tenant id={self.id} slug={self.slug} plan={self.plan.value}>"
