"""
Derived stock views.

Pure Pydantic models, never persisted. Recomputed from the live inventory
snapshot on every read.
"""

from enum import Enum

from pydantic import BaseModel, Field

from fieldstock.core.entities.documents import AllocationTarget
from fieldstock.core.entities.inventory import InventoryUnit


class SourceMode(str, Enum):
    """Where a requester draws stock from."""

    PERSONAL = "personal"  # technician custody
    WAREHOUSE = "warehouse"


class AllocationQuery(BaseModel):
    item_name: str
    brand: str = ""
    source_mode: SourceMode = SourceMode.PERSONAL
    owner_name: str = ""
    search: str = ""


class AllocationCandidate(BaseModel):
    """A unit offered for allocation; empty units are shown but not selectable."""

    unit: InventoryUnit
    balance: float
    is_selectable: bool
    is_recommended: bool = False


class AllocationResult(BaseModel):
    query: AllocationQuery
    candidates: list[AllocationCandidate] = Field(default_factory=list)
    recommended_id: str | None = None
    suggestion: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    def can_select(self, unit_id: str) -> bool:
        return any(c.unit.id == unit_id and c.is_selectable for c in self.candidates)


class StockLevel(BaseModel):
    """Per-(name, brand) in-storage count with its resolved threshold."""

    name: str
    brand: str = ""
    category: str = ""
    count: int = 0
    threshold: int = 0


class StockAlerts(BaseModel):
    critical: list[StockLevel] = Field(default_factory=list)
    low: list[StockLevel] = Field(default_factory=list)

    @property
    def total_critical(self) -> int:
        return len(self.critical)

    @property
    def total_low(self) -> int:
        return len(self.low)


class RestockLine(BaseModel):
    name: str
    brand: str = ""
    current_stock: int
    threshold: int


class RestockDraft(BaseModel):
    """Pre-filled restock request built from alert buckets."""

    items: list[RestockLine] = Field(default_factory=list)
    allocation_target: AllocationTarget = AllocationTarget.INVENTORY


class StockAvailability(BaseModel):
    is_sufficient: bool
    available: float
    requested: float
    deficit: float
    unit_ids: list[str] = Field(default_factory=list)
    is_fragmented: bool = False


class Consumption(BaseModel):
    unit_id: str
    consumed: float
    previous_balance: float
    new_balance: float


class ConsumptionPlan(BaseModel):
    item_name: str
    brand: str = ""
    requested: float
    unit: str | None = None
    consumptions: list[Consumption] = Field(default_factory=list)
    shortfall: float = 0.0

    @property
    def consumed_total(self) -> float:
        return sum(c.consumed for c in self.consumptions)


class StockSummary(BaseModel):
    name: str
    brand: str = ""
    total: float = 0.0
    count: int = 0


class StockOverviewRow(BaseModel):
    """Per-model warehouse overview, fragments merged into their parent model."""

    name: str
    brand: str = ""
    category: str = ""
    unit_of_measure: str = "Unit"
    base_unit: str | None = None
    is_measurement: bool = False
    is_bulk: bool = False

    in_storage: int = 0
    in_use: int = 0
    damaged: int = 0
    total: int = 0
    value_in_storage: float = 0.0

    storage_balance: float = 0.0
    in_use_balance: float = 0.0
    damaged_balance: float = 0.0
    grand_total_balance: float = 0.0
    usage_documents: list[str] = Field(default_factory=list)


class RegistrationRow(BaseModel):
    serial_number: str = ""
    mac_address: str = ""
    initial_balance: float | None = None
    current_balance: float | None = None


class RegistrationPlan(BaseModel):
    """Rows to register for one (name, brand), optionally tied to a request line."""

    item_name: str
    brand: str = ""
    category: str = ""
    type: str = ""
    is_bulk: bool = False
    is_measurement: bool = False
    quantity: float = 0
    unit: str | None = None
    rows: list[RegistrationRow] = Field(default_factory=list)
    request_id: str | None = None
    request_item_id: int | None = None
    remaining_quantity: float | None = None

    @property
    def is_count(self) -> bool:
        return self.is_bulk and not self.is_measurement


class ValidationIssue(BaseModel):
    """A rejectable problem in user input; surfaced, never raised by the core."""

    code: str
    field: str
    message: str
    row_index: int | None = None
