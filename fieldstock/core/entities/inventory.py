"""Inventory domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class AssetStatus(str, Enum):
    """Where an inventory unit currently is in its lifecycle."""

    IN_STORAGE = "in_storage"
    IN_USE = "in_use"
    IN_CUSTODY = "in_custody"
    UNDER_REPAIR = "under_repair"
    OUT_FOR_REPAIR = "out_for_repair"
    DAMAGED = "damaged"
    DECOMMISSIONED = "decommissioned"
    AWAITING_RETURN = "awaiting_return"
    CONSUMED = "consumed"


class AssetCondition(str, Enum):
    """Physical condition recorded for a unit."""

    BRAND_NEW = "brand_new"
    GOOD = "good"
    USED_OKAY = "used_okay"
    MINOR_DAMAGE = "minor_damage"
    MAJOR_DAMAGE = "major_damage"
    FOR_PARTS = "for_parts"


class TrackingMethod(str, Enum):
    """Whether units are tracked one by one or as bulk stock."""

    INDIVIDUAL = "individual"
    BULK = "bulk"


class BulkType(str, Enum):
    """How bulk stock is quantified."""

    COUNT = "count"  # discrete, e.g. connectors
    MEASUREMENT = "measurement"  # divisible balance, e.g. cable drums


# Statuses in which a unit no longer holds usable stock
DEAD_STATUSES = frozenset({AssetStatus.CONSUMED, AssetStatus.DECOMMISSIONED})


class InventoryUnit(BaseModel):
    """
    A physical or logical unit of stock.

    (name, brand) is the model key used for aggregation. Measurement units
    carry a capacity (initial_balance) and a remaining balance
    (current_balance) with 0 <= current_balance <= initial_balance.
    """

    id: str
    name: str
    brand: str = ""
    category: str = ""
    type: str = ""

    tracking_method: TrackingMethod = TrackingMethod.INDIVIDUAL
    bulk_type: BulkType | None = None

    status: AssetStatus = AssetStatus.IN_STORAGE
    condition: AssetCondition = AssetCondition.GOOD
    current_user: str | None = None
    location: str | None = None
    location_detail: str | None = None

    serial_number: str | None = None
    mac_address: str | None = None
    po_number: str | None = None
    reference_number: str | None = None  # WO/RO/INT document the unit came from
    purchase_price: float | None = None

    registration_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    recorded_by: str = ""

    initial_balance: float | None = None
    current_balance: float | None = None

    # Sub-divided remnant of a measurement unit
    is_fragment: bool = False
    parent_id: str | None = None

    @model_validator(mode="after")
    def check_tracking_and_balance(self) -> "InventoryUnit":
        """Enforce bulk-type presence and the balance invariant."""
        if self.tracking_method == TrackingMethod.INDIVIDUAL and self.bulk_type is not None:
            raise ValueError("individual units cannot carry a bulk_type")
        if self.tracking_method == TrackingMethod.BULK and self.bulk_type is None:
            self.bulk_type = BulkType.COUNT

        if self.current_balance is not None and self.current_balance < 0:
            raise ValueError("current_balance cannot be negative")
        if self.initial_balance is not None and self.initial_balance < 0:
            raise ValueError("initial_balance cannot be negative")
        if (
            self.initial_balance is not None
            and self.current_balance is not None
            and self.current_balance > self.initial_balance
        ):
            raise ValueError("current_balance cannot exceed initial_balance")
        return self

    @property
    def model_key(self) -> tuple[str, str]:
        return (self.name, self.brand)

    @property
    def is_measurement(self) -> bool:
        return self.bulk_type == BulkType.MEASUREMENT

    @property
    def is_count(self) -> bool:
        return self.bulk_type == BulkType.COUNT

    @property
    def is_dead(self) -> bool:
        """Consumed or decommissioned units are logically gone."""
        return self.status in DEAD_STATUSES


class StandardItem(BaseModel):
    """
    Catalog entry (model) for a (name, brand) pair.

    quantity_per_unit is the capacity of one container, expressed in
    base_unit_of_measure (e.g. 1000 Meter per Hasbal).
    """

    id: int | None = None
    name: str
    brand: str = ""
    bulk_type: BulkType | None = None
    unit_of_measure: str | None = None
    base_unit_of_measure: str | None = None
    quantity_per_unit: float | None = None

    @property
    def model_key(self) -> tuple[str, str]:
        return (self.name, self.brand)


class AssetType(BaseModel):
    """Catalog type grouping standard items that share a tracking method."""

    id: int | None = None
    name: str
    category: str = ""
    tracking_method: TrackingMethod = TrackingMethod.INDIVIDUAL
    unit_of_measure: str | None = None
    standard_items: list[StandardItem] = Field(default_factory=list)
