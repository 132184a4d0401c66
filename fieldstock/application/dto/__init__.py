"""Data Transfer Objects for the application layer.

Request DTOs: Validate and parse use case input.
Response DTOs: Structure and serialize use case results.
"""

from fieldstock.application.dto.requests import (
    AllocateMaterialRequest,
    AnalyzeStockRequest,
    CheckAvailabilityRequest,
    ConsumeStockRequest,
    ExecuteHandoverRequest,
    PlanRegistrationRequest,
    RegisterAssetsRequest,
    ResolveHandoverRequest,
    StockOverviewRequest,
)
from fieldstock.application.dto.responses import (
    AllocationCandidateResponse,
    AllocationResponse,
    ConsumptionResponse,
    ErrorResponse,
    StockAlertsResponse,
    StockLevelResponse,
)

__all__ = [
    # Requests
    "AllocateMaterialRequest",
    "AnalyzeStockRequest",
    "StockOverviewRequest",
    "ResolveHandoverRequest",
    "ExecuteHandoverRequest",
    "PlanRegistrationRequest",
    "RegisterAssetsRequest",
    "CheckAvailabilityRequest",
    "ConsumeStockRequest",
    # Responses
    "AllocationCandidateResponse",
    "AllocationResponse",
    "StockLevelResponse",
    "StockAlertsResponse",
    "ConsumptionResponse",
    "ErrorResponse",
]
