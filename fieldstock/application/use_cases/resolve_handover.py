"""Resolve Handover Use Case — pre-fill a handover from a source record."""

from dataclasses import dataclass

from fieldstock.application.dto.requests import ResolveHandoverRequest
from fieldstock.application.mappers.backend import wrap_source_document
from fieldstock.config import get_logger
from fieldstock.core.entities.handover import HandoverInitialState
from fieldstock.core.interfaces.inventory_source import IInventorySource
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.handover.resolver import HandoverStrategyResolver

logger = get_logger(__name__)


@dataclass
class ResolveHandoverResult:
    """Result of resolving a handover source."""

    state: HandoverInitialState | None
    kind: str | None = None

    @property
    def resolved(self) -> bool:
        return self.state is not None


class ResolveHandoverUseCase:
    """Turn a loan, request, installation, dismantle or unit into a handover form."""

    def __init__(
        self,
        inventory_source: IInventorySource,
        resolver: HandoverStrategyResolver | None = None,
    ):
        self._source = inventory_source
        self._resolver = resolver or HandoverStrategyResolver()

    async def execute(self, request: ResolveHandoverRequest) -> ResolveHandoverResult:
        """Execute resolve handover use case."""
        source = wrap_source_document(request.source)
        kind = source.kind if source is not None else None
        logger.info("resolve_handover_started", kind=kind)

        if source is None:
            logger.info("resolve_handover_complete", resolved=False)
            return ResolveHandoverResult(state=None)

        units = await self._source.list_units()
        users = await self._source.list_users()
        catalog = StockCatalog(await self._source.list_asset_types())
        current_user = next(
            (user for user in users if user.id == request.current_user_id),
            None,
        )

        state = self._resolver.resolve(
            source,
            units,
            users=users,
            current_user=current_user,
            catalog=catalog,
        )

        logger.info(
            "resolve_handover_complete",
            resolved=state is not None,
            lines=len(state.items) if state else 0,
        )
        return ResolveHandoverResult(state=state, kind=kind)
