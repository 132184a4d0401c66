"""
Use case wiring.

Builds every use case over one inventory source. Building the container
configures logging for the process.
"""

from dataclasses import dataclass

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
from fieldstock.config import Settings, configure_logging, get_logger, get_settings
from fieldstock.core.interfaces import IInventorySource

logger = get_logger(__name__)


@dataclass
class UseCases:
    """Every use case, sharing one inventory source."""

    allocate_material: AllocateMaterialUseCase
    analyze_stock: AnalyzeStockUseCase
    stock_overview: StockOverviewUseCase
    resolve_handover: ResolveHandoverUseCase
    execute_handover: ExecuteHandoverUseCase
    plan_registration: PlanRegistrationUseCase
    register_assets: RegisterAssetsUseCase
    check_availability: CheckAvailabilityUseCase
    consume_stock: ConsumeStockUseCase


def build_use_cases(
    inventory_source: IInventorySource, settings: Settings | None = None
) -> UseCases:
    settings = settings or get_settings()
    configure_logging(settings)
    logger.info(
        "use_cases_ready",
        environment=settings.environment,
        log_level=settings.log_level,
    )
    return UseCases(
        allocate_material=AllocateMaterialUseCase(inventory_source),
        analyze_stock=AnalyzeStockUseCase(inventory_source),
        stock_overview=StockOverviewUseCase(inventory_source),
        resolve_handover=ResolveHandoverUseCase(inventory_source),
        execute_handover=ExecuteHandoverUseCase(inventory_source),
        plan_registration=PlanRegistrationUseCase(inventory_source),
        register_assets=RegisterAssetsUseCase(inventory_source),
        check_availability=CheckAvailabilityUseCase(inventory_source),
        consume_stock=ConsumeStockUseCase(inventory_source),
    )
