"""Request DTOs for use cases.

Pydantic v2 models validating use case input.
These are the ONLY contracts between callers and use cases.
"""

from typing import Any

from pydantic import BaseModel, Field

from fieldstock.core.entities.documents import ProcurementRequest
from fieldstock.core.entities.handover import Handover
from fieldstock.core.entities.inventory import AssetStatus
from fieldstock.core.entities.stock import RegistrationPlan, SourceMode

# --- Allocation ---


class AllocateMaterialRequest(BaseModel):
    """Request to list units that can supply a material."""

    item_name: str = Field(..., min_length=1, description="Material name")
    brand: str = Field(default="", description="Brand filter (substring)")
    source_mode: SourceMode = Field(
        default=SourceMode.PERSONAL,
        description="Draw from technician custody or the warehouse",
    )
    owner_name: str = Field(
        default="",
        description="Custody holder; defaults to the current user",
    )
    current_user: str = Field(default="", description="Logged-in user name")
    search: str = Field(default="", description="Free text over id, location, serial")


# --- Stock Analysis ---


class AnalyzeStockRequest(BaseModel):
    """Request for dashboard stock alerts."""

    default_threshold: int | None = Field(
        default=None,
        ge=0,
        description="Threshold for models without an override",
    )
    build_restock_draft: bool = Field(
        default=False,
        description="Also pre-fill a restock request from the alert buckets",
    )


class StockOverviewRequest(BaseModel):
    """Request for the per-model stock overview."""

    include_usage: bool = Field(
        default=True,
        description="Add installation and maintenance usage to in-use balances",
    )


# --- Handover ---


class ResolveHandoverRequest(BaseModel):
    """Request to pre-fill a handover from an untyped source record."""

    source: dict[str, Any] | None = Field(
        default=None,
        description="Backend record of the source document",
    )
    current_user_id: int | None = Field(
        default=None,
        description="Logged-in user; receives dismantled units",
    )


class ExecuteHandoverRequest(BaseModel):
    """Request to plan the writes of a submitted handover."""

    handover: Handover
    target_status: AssetStatus = AssetStatus.IN_USE
    actor: str = Field(default="", description="User performing the handover")
    strict: bool = Field(
        default=False,
        description="Fail on unknown unit ids instead of skipping them",
    )


# --- Registration ---


class PlanRegistrationRequest(BaseModel):
    """Request to start a registration, manual or from a request line."""

    item_name: str = Field(default="", description="Model name for manual entry")
    brand: str = Field(default="", description="Model brand for manual entry")
    request: ProcurementRequest | None = Field(
        default=None,
        description="Approved procurement request to register against",
    )
    request_item_id: int | None = Field(
        default=None,
        description="Line of the request to register",
    )


class RegisterAssetsRequest(BaseModel):
    """Request to validate a plan and build its units."""

    plan: RegistrationPlan
    recorded_by: str = ""
    po_number: str | None = None
    purchase_price: float | None = Field(default=None, ge=0)


# --- Stock Ledger ---


class CheckAvailabilityRequest(BaseModel):
    """Request to check warehouse availability of one model."""

    item_name: str = Field(..., min_length=1)
    brand: str = ""
    quantity: float = Field(..., description="Quantity needed")


class ConsumeStockRequest(BaseModel):
    """Request to draw a quantity from warehouse stock."""

    item_name: str = Field(..., min_length=1)
    brand: str = ""
    quantity: float = Field(..., description="Quantity to consume")
    unit: str | None = Field(default=None, description="Unit label for the record")
    strict: bool = Field(
        default=True,
        description="Fail when stock cannot cover the full quantity",
    )
