"""Registration use cases — plan rows, then validate and build units."""

from dataclasses import dataclass, field

from fieldstock.application.dto.requests import PlanRegistrationRequest, RegisterAssetsRequest
from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import InventoryUnit
from fieldstock.core.entities.stock import RegistrationPlan, ValidationIssue
from fieldstock.core.exceptions import RegistrationRejectedError, ValidationError
from fieldstock.core.interfaces.inventory_source import IInventorySource
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.registration import RegistrationPlanner

logger = get_logger(__name__)


@dataclass
class PlanRegistrationResult:
    """Result of planning a registration."""

    plan: RegistrationPlan
    current_stock_count: float = 0


class PlanRegistrationUseCase:
    """Pre-fill registration rows from a request line or for manual entry."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: PlanRegistrationRequest) -> PlanRegistrationResult:
        """Execute plan registration use case."""
        logger.info(
            "plan_registration_started",
            request_id=request.request.id if request.request else None,
            request_item_id=request.request_item_id,
        )

        catalog = StockCatalog(await self._source.list_asset_types())
        planner = RegistrationPlanner(catalog)

        if request.request is not None:
            item = next(
                (i for i in request.request.items if i.id == request.request_item_id),
                None,
            )
            if item is None:
                raise ValidationError(
                    field="request_item_id",
                    message="Item not found on request",
                    value=request.request_item_id,
                )
            plan = planner.plan_from_request(request.request, item)
        else:
            if not request.item_name:
                raise ValidationError(field="item_name", message="Item name is required")
            plan = planner.plan_manual(request.item_name, request.brand)

        units = await self._source.list_units()
        stock = planner.current_stock_count(units, plan.item_name, plan.brand)

        logger.info(
            "plan_registration_complete",
            item_name=plan.item_name,
            rows=len(plan.rows),
            current_stock=stock,
        )
        return PlanRegistrationResult(plan=plan, current_stock_count=stock)


@dataclass
class RegisterAssetsResult:
    """Result of registering assets."""

    units: list[InventoryUnit]
    issues: list[ValidationIssue] = field(default_factory=list)


class RegisterAssetsUseCase:
    """Validate a registration plan and build its inventory units."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: RegisterAssetsRequest) -> RegisterAssetsResult:
        """
        Execute register assets use case.

        Raises:
            RegistrationRejectedError: If the plan has blocking issues.
        """
        logger.info(
            "register_assets_started",
            item_name=request.plan.item_name,
            rows=len(request.plan.rows),
        )

        catalog = StockCatalog(await self._source.list_asset_types())
        planner = RegistrationPlanner(catalog)

        plan = planner.finalize(request.plan)
        issues = planner.validate(plan)
        if issues:
            logger.warning(
                "register_assets_rejected",
                item_name=plan.item_name,
                issues=[issue.code for issue in issues],
            )
            raise RegistrationRejectedError([issue.model_dump() for issue in issues])

        units = planner.build_units(
            plan,
            recorded_by=request.recorded_by,
            po_number=request.po_number,
            purchase_price=request.purchase_price,
        )

        logger.info("register_assets_complete", units=len(units))
        return RegisterAssetsResult(units=units)
