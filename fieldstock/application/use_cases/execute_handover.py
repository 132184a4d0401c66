"""Execute Handover Use Case — plan unit, fragment and source writes."""

from dataclasses import dataclass
from typing import Any

from fieldstock.application.dto.requests import ExecuteHandoverRequest
from fieldstock.application.mappers.backend import (
    source_update_path,
    source_update_to_record,
    unit_to_record,
    unit_update_to_record,
)
from fieldstock.config import get_logger
from fieldstock.core.entities.handover import HandoverExecutionPlan
from fieldstock.core.interfaces.inventory_source import IInventorySource
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.handover.executor import HandoverExecutor

logger = get_logger(__name__)


@dataclass
class ExecuteHandoverResult:
    """Result of planning a handover."""

    plan: HandoverExecutionPlan
    doc_number: str


class ExecuteHandoverUseCase:
    """Compute everything a completed handover must write back."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: ExecuteHandoverRequest) -> ExecuteHandoverResult:
        """Execute handover planning use case."""
        handover = request.handover
        logger.info(
            "execute_handover_started",
            doc_number=handover.doc_number,
            lines=len(handover.items),
            target_status=request.target_status.value,
        )

        units = await self._source.list_units()
        catalog = StockCatalog(await self._source.list_asset_types())
        executor = HandoverExecutor(catalog=catalog)
        plan = executor.plan(
            handover,
            request.target_status,
            units,
            actor=request.actor,
            strict=request.strict,
        )

        logger.info(
            "execute_handover_complete",
            doc_number=handover.doc_number,
            updates=len(plan.unit_updates),
            new_units=len(plan.new_units),
        )
        return ExecuteHandoverResult(plan=plan, doc_number=handover.doc_number)

    def to_records(self, result: ExecuteHandoverResult) -> dict[str, Any]:
        """Backend payloads for the plan, grouped by write kind."""
        plan = result.plan
        records: dict[str, Any] = {
            "updates": {
                update.asset_id: unit_update_to_record(update) for update in plan.unit_updates
            },
            "create": [unit_to_record(unit) for unit in plan.new_units],
            "source": None,
        }
        if plan.source_update is not None:
            records["source"] = {
                "path": source_update_path(plan.source_update),
                "payload": source_update_to_record(plan.source_update),
            }
        return records
