"""Application use cases."""

from fieldstock.application.use_cases.allocate_material import (
    AllocateMaterialResult,
    AllocateMaterialUseCase,
)
from fieldstock.application.use_cases.analyze_stock import (
    AnalyzeStockResult,
    AnalyzeStockUseCase,
    StockOverviewResult,
    StockOverviewUseCase,
)
from fieldstock.application.use_cases.consume_stock import (
    CheckAvailabilityUseCase,
    ConsumeStockResult,
    ConsumeStockUseCase,
)
from fieldstock.application.use_cases.execute_handover import (
    ExecuteHandoverResult,
    ExecuteHandoverUseCase,
)
from fieldstock.application.use_cases.plan_registration import (
    PlanRegistrationResult,
    PlanRegistrationUseCase,
    RegisterAssetsResult,
    RegisterAssetsUseCase,
)
from fieldstock.application.use_cases.resolve_handover import (
    ResolveHandoverResult,
    ResolveHandoverUseCase,
)

__all__ = [
    "AllocateMaterialUseCase",
    "AllocateMaterialResult",
    "AnalyzeStockUseCase",
    "AnalyzeStockResult",
    "StockOverviewUseCase",
    "StockOverviewResult",
    "ResolveHandoverUseCase",
    "ResolveHandoverResult",
    "ExecuteHandoverUseCase",
    "ExecuteHandoverResult",
    "PlanRegistrationUseCase",
    "PlanRegistrationResult",
    "RegisterAssetsUseCase",
    "RegisterAssetsResult",
    "CheckAvailabilityUseCase",
    "ConsumeStockUseCase",
    "ConsumeStockResult",
]
