"""Allocate Material Use Case — rank units that can supply a material."""

from dataclasses import dataclass

from fieldstock.application.dto.requests import AllocateMaterialRequest
from fieldstock.application.dto.responses import (
    AllocationCandidateResponse,
    AllocationResponse,
)
from fieldstock.config import get_logger
from fieldstock.core.entities.stock import AllocationQuery, AllocationResult
from fieldstock.core.interfaces.inventory_source import IInventorySource
from fieldstock.core.services.allocation import AllocationSelector

logger = get_logger(__name__)


@dataclass
class AllocateMaterialResult:
    """Result of a material allocation lookup."""

    allocation: AllocationResult

    @property
    def recommended_id(self) -> str | None:
        return self.allocation.recommended_id


class AllocateMaterialUseCase:
    """List custody or warehouse units for a material, FIFO-ranked."""

    def __init__(
        self,
        inventory_source: IInventorySource,
        selector: AllocationSelector | None = None,
    ):
        self._source = inventory_source
        self._selector = selector or AllocationSelector()

    async def execute(self, request: AllocateMaterialRequest) -> AllocateMaterialResult:
        """Execute allocate material use case."""
        logger.info(
            "allocate_material_started",
            item_name=request.item_name,
            brand=request.brand,
            source_mode=request.source_mode.value,
        )

        units = await self._source.list_units()
        query = AllocationQuery(
            item_name=request.item_name,
            brand=request.brand,
            source_mode=request.source_mode,
            owner_name=request.owner_name,
            search=request.search,
        )
        allocation = self._selector.select(units, query, fallback_owner=request.current_user)

        logger.info(
            "allocate_material_complete",
            candidates=len(allocation.candidates),
            recommended_id=allocation.recommended_id,
        )
        return AllocateMaterialResult(allocation=allocation)

    def to_response(self, result: AllocateMaterialResult) -> AllocationResponse:
        """Convert result to response DTO."""
        allocation = result.allocation
        return AllocationResponse(
            candidates=[
                AllocationCandidateResponse(
                    unit_id=c.unit.id,
                    name=c.unit.name,
                    brand=c.unit.brand,
                    location=c.unit.location,
                    serial_number=c.unit.serial_number,
                    balance=c.balance,
                    is_selectable=c.is_selectable,
                    is_recommended=c.is_recommended,
                )
                for c in allocation.candidates
            ],
            recommended_id=allocation.recommended_id,
            suggestion=allocation.suggestion,
            total=len(allocation.candidates),
        )
