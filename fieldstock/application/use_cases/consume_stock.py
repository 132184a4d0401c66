"""Stock ledger use cases — availability checks and consumption."""

from dataclasses import dataclass

from fieldstock.application.dto.requests import CheckAvailabilityRequest, ConsumeStockRequest
from fieldstock.application.dto.responses import ConsumptionResponse
from fieldstock.config import get_logger
from fieldstock.core.entities.stock import ConsumptionPlan, StockAvailability
from fieldstock.core.interfaces.inventory_source import IInventorySource
from fieldstock.core.services.ledger import StockLedger

logger = get_logger(__name__)


class CheckAvailabilityUseCase:
    """Check whether warehouse stock covers a quantity."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: CheckAvailabilityRequest) -> StockAvailability:
        """Execute availability check."""
        units = await self._source.list_units()
        availability = StockLedger().check_availability(
            units, request.item_name, request.brand, request.quantity
        )
        logger.info(
            "stock_availability_checked",
            item_name=request.item_name,
            brand=request.brand,
            requested=request.quantity,
            available=availability.available,
            sufficient=availability.is_sufficient,
        )
        return availability


@dataclass
class ConsumeStockResult:
    """Result of planning a consumption."""

    plan: ConsumptionPlan


class ConsumeStockUseCase:
    """Draw a quantity from warehouse stock, fullest units first."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: ConsumeStockRequest) -> ConsumeStockResult:
        """
        Execute consume stock use case.

        Raises:
            InvalidQuantityError: If quantity is zero or negative.
            InsufficientStockError: In strict mode when stock runs out.
        """
        logger.info(
            "consume_stock_started",
            item_name=request.item_name,
            brand=request.brand,
            quantity=request.quantity,
        )

        units = await self._source.list_units()
        plan = StockLedger().plan_consumption(
            units,
            request.item_name,
            request.brand,
            request.quantity,
            unit=request.unit,
            strict=request.strict,
        )

        logger.info(
            "consume_stock_complete",
            consumed=plan.consumed_total,
            units=len(plan.consumptions),
            shortfall=plan.shortfall,
        )
        return ConsumeStockResult(plan=plan)

    def to_response(self, result: ConsumeStockResult) -> ConsumptionResponse:
        """Convert result to response DTO."""
        plan = result.plan
        return ConsumptionResponse(
            item_name=plan.item_name,
            brand=plan.brand,
            requested=plan.requested,
            consumed=plan.consumed_total,
            shortfall=plan.shortfall,
            unit_ids=[c.unit_id for c in plan.consumptions],
        )
