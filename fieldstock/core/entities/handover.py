"""Handover domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from fieldstock.core.entities.inventory import AssetStatus, InventoryUnit


class HandoverLineItem(BaseModel):
    """
    A transaction-ready handover line.

    An empty asset_id marks a shortfall placeholder the user resolves at
    handover time. Locked lines have their unit fixed by the source document.
    """

    asset_id: str = ""
    item_name: str
    brand: str = ""
    condition_notes: str = ""
    quantity: float = 1
    unit: str | None = None
    checked: bool = True
    is_locked: bool = False

    @property
    def is_shortfall(self) -> bool:
        return not self.asset_id


class HandoverInitialState(BaseModel):
    """Normalized result of resolving a source document."""

    recipient: str = ""
    division_id: str = ""
    reference_number: str = ""
    items: list[HandoverLineItem] = Field(default_factory=list)
    notes: str | None = None
    is_locked: bool = False
    target_asset_status: AssetStatus = AssetStatus.IN_USE


class Handover(BaseModel):
    """A completed handover document, as submitted by the handover form."""

    id: str = ""
    doc_number: str
    handover_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    handed_over_by: str = ""
    recipient: str
    acknowledged_by: str = ""
    reference_number: str | None = None
    items: list[HandoverLineItem] = Field(default_factory=list)


class MovementType(str, Enum):
    """Stock movement kinds recorded alongside unit changes."""

    IN_PURCHASE = "in_purchase"
    IN_RETURN = "in_return"
    OUT_INSTALLATION = "out_installation"
    OUT_HANDOVER = "out_handover"
    OUT_BROKEN = "out_broken"
    OUT_ADJUSTMENT = "out_adjustment"
    OUT_USAGE_CUSTODY = "out_usage_custody"
    CONSUMED = "consumed"


class StockMovement(BaseModel):
    """A ledger line describing a quantity change on a model."""

    asset_name: str
    brand: str = ""
    movement_type: MovementType
    quantity: float
    reference_id: str | None = None
    actor: str = ""
    notes: str | None = None
    related_asset_id: str | None = None
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AssetUpdate(BaseModel):
    """Partial update to apply to an existing unit; None fields are untouched."""

    asset_id: str
    status: AssetStatus | None = None
    current_user: str | None = None
    clear_current_user: bool = False
    location: str | None = None
    current_balance: float | None = None


class SourceDocumentKind(str, Enum):
    LOAN_REQUEST = "loan_request"
    PROCUREMENT_REQUEST = "procurement_request"


class SourceStatusUpdate(BaseModel):
    """Status transition to apply to the document a handover fulfils."""

    kind: SourceDocumentKind
    reference_number: str
    new_status: str
    handover_id: str | None = None


class HandoverExecutionPlan(BaseModel):
    """Everything the persistence layer must write once a handover completes."""

    unit_updates: list[AssetUpdate] = Field(default_factory=list)
    new_units: list[InventoryUnit] = Field(default_factory=list)
    movements: list[StockMovement] = Field(default_factory=list)
    source_update: SourceStatusUpdate | None = None
    skipped_asset_ids: list[str] = Field(default_factory=list)
