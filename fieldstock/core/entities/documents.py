"""
Source documents that can seed a handover.

Each document kind is wrapped in a named variant; SourceDocument is the
discriminated union the handover resolver dispatches on.
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from fieldstock.core.entities.inventory import AssetCondition, InventoryUnit


class ApprovalDecision(str, Enum):
    """Per-line decision recorded on a procurement request."""

    APPROVED = "approved"
    REJECTED = "rejected"
    PARTIAL = "partial"
    STOCK_ALLOCATED = "stock_allocated"
    PROCUREMENT_NEEDED = "procurement_needed"


class AllocationTarget(str, Enum):
    """Whether a procurement serves the requester or restocks the warehouse."""

    USAGE = "usage"
    INVENTORY = "inventory"


class User(BaseModel):
    """Minimal user record used to resolve recipients and divisions."""

    id: int
    name: str
    role: str = "Staff"
    division_id: int | None = None


class ItemApproval(BaseModel):
    decision: ApprovalDecision
    approved_quantity: float | None = None
    reason: str | None = None


class RequestItem(BaseModel):
    """A line on a procurement request."""

    id: int
    item_name: str
    brand: str = ""
    quantity: float
    unit: str | None = None
    note: str = ""


class ProcurementRequest(BaseModel):
    """New procurement request (carries an order section)."""

    id: str
    doc_number: str | None = None
    requester: str
    division: str = ""
    request_date: datetime | None = None
    order_type: str = "Regular Stock"
    allocation_target: AllocationTarget = AllocationTarget.USAGE
    items: list[RequestItem] = Field(default_factory=list)
    item_statuses: dict[int, ItemApproval] = Field(default_factory=dict)
    partially_registered: dict[int, float] = Field(default_factory=dict)

    def target_quantity(self, item: RequestItem) -> float:
        """Approved quantity when an approval exists, else the requested one."""
        approval = self.item_statuses.get(item.id)
        if approval is not None and approval.approved_quantity is not None:
            return approval.approved_quantity
        return item.quantity

    def is_rejected(self, item: RequestItem) -> bool:
        approval = self.item_statuses.get(item.id)
        return approval is not None and approval.decision == ApprovalDecision.REJECTED


class LoanItem(BaseModel):
    id: int
    item_name: str
    brand: str = ""
    quantity: float
    unit: str | None = None
    note: str = ""
    return_date: date | None = None


class LoanRequest(BaseModel):
    """Loan request; assigned_asset_ids maps loan item id -> picked unit ids."""

    id: str
    requester: str
    division: str = ""
    items: list[LoanItem] = Field(default_factory=list)
    assigned_asset_ids: dict[int, list[str]] | None = None
    notes: str | None = None

    @property
    def assigned_unit_ids(self) -> list[str]:
        if not self.assigned_asset_ids:
            return []
        return [uid for ids in self.assigned_asset_ids.values() for uid in ids]


class InstallationAsset(BaseModel):
    asset_id: str
    asset_name: str
    serial_number: str | None = None


class UsedMaterial(BaseModel):
    """Material consumed at a customer site (installation or maintenance)."""

    material_asset_id: str | None = None
    item_name: str
    brand: str = ""
    quantity: float
    unit: str | None = None


class Installation(BaseModel):
    id: str
    doc_number: str
    installation_date: date | None = None
    technician: str
    customer_id: str = ""
    customer_name: str = ""
    assets_installed: list[InstallationAsset] = Field(default_factory=list)
    materials_used: list[UsedMaterial] = Field(default_factory=list)
    notes: str = ""


class Maintenance(BaseModel):
    id: str
    doc_number: str
    maintenance_date: date | None = None
    technician: str
    customer_id: str = ""
    customer_name: str = ""
    materials_used: list[UsedMaterial] = Field(default_factory=list)


class Dismantle(BaseModel):
    id: str
    doc_number: str
    asset_id: str
    asset_name: str
    dismantle_date: date
    technician: str
    customer_id: str = ""
    customer_name: str = ""
    retrieved_condition: AssetCondition = AssetCondition.USED_OKAY
    notes: str | None = None


# --- Tagged variants -------------------------------------------------------


class NewRequestSource(BaseModel):
    kind: Literal["new_request"] = "new_request"
    document: ProcurementRequest


class LoanSource(BaseModel):
    kind: Literal["loan_request"] = "loan_request"
    document: LoanRequest


class InstallationSource(BaseModel):
    kind: Literal["installation"] = "installation"
    document: Installation


class DismantleSource(BaseModel):
    kind: Literal["dismantle"] = "dismantle"
    document: Dismantle


class SingleAssetSource(BaseModel):
    kind: Literal["single_asset"] = "single_asset"
    document: InventoryUnit


SourceDocument = Annotated[
    NewRequestSource | LoanSource | InstallationSource | DismantleSource | SingleAssetSource,
    Field(discriminator="kind"),
]
