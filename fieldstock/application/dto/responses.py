"""Response DTOs for use cases.

Pydantic v2 models for serializing use case results.
"""

from pydantic import BaseModel, Field


class AllocationCandidateResponse(BaseModel):
    """One unit offered for allocation."""

    unit_id: str
    name: str
    brand: str
    location: str | None = None
    serial_number: str | None = None
    balance: float
    is_selectable: bool
    is_recommended: bool


class AllocationResponse(BaseModel):
    """Ranked candidates for a material request."""

    candidates: list[AllocationCandidateResponse] = Field(default_factory=list)
    recommended_id: str | None = None
    suggestion: str | None = None
    total: int = 0


class StockLevelResponse(BaseModel):
    name: str
    brand: str
    category: str
    count: int
    threshold: int


class StockAlertsResponse(BaseModel):
    """Dashboard alert buckets."""

    critical: list[StockLevelResponse] = Field(default_factory=list)
    low: list[StockLevelResponse] = Field(default_factory=list)
    total_critical: int = 0
    total_low: int = 0


class ConsumptionResponse(BaseModel):
    """Balance changes planned for a consumption."""

    item_name: str
    brand: str
    requested: float
    consumed: float
    shortfall: float
    unit_ids: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict = Field(default_factory=dict)
