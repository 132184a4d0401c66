"""
Application layer - use cases, DTOs and backend mappers.

This layer orchestrates business logic by:
1. Defining request/response DTOs for use case contracts
2. Implementing use cases that coordinate core services
3. Mapping backend API records to and from core entities

Use cases are the only entry point for callers.
"""

from fieldstock.application.dto import (
    AllocateMaterialRequest,
    AllocationResponse,
    AnalyzeStockRequest,
    CheckAvailabilityRequest,
    ConsumeStockRequest,
    ConsumptionResponse,
    ErrorResponse,
    ExecuteHandoverRequest,
    PlanRegistrationRequest,
    RegisterAssetsRequest,
    ResolveHandoverRequest,
    StockAlertsResponse,
    StockOverviewRequest,
)
from fieldstock.application.use_cases import (
    AllocateMaterialUseCase,
    AnalyzeStockUseCase,
    CheckAvailabilityUseCase,
    ConsumeStockUseCase,
    ExecuteHandoverUseCase,
    PlanRegistrationUseCase,
    RegisterAssetsUseCase,
    ResolveHandoverUseCase,
    StockOverviewUseCase,
)

__all__ = [
    # Request DTOs
    "AllocateMaterialRequest",
    "AnalyzeStockRequest",
    "StockOverviewRequest",
    "ResolveHandoverRequest",
    "ExecuteHandoverRequest",
    "PlanRegistrationRequest",
    "RegisterAssetsRequest",
    "CheckAvailabilityRequest",
    "ConsumeStockRequest",
    # Response DTOs
    "AllocationResponse",
    "StockAlertsResponse",
    "ConsumptionResponse",
    "ErrorResponse",
    # Use Cases
    "AllocateMaterialUseCase",
    "AnalyzeStockUseCase",
    "StockOverviewUseCase",
    "ResolveHandoverUseCase",
    "ExecuteHandoverUseCase",
    "PlanRegistrationUseCase",
    "RegisterAssetsUseCase",
    "CheckAvailabilityUseCase",
    "ConsumeStockUseCase",
]
