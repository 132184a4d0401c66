"""
Handover strategy resolver.

Routes a source document to the strategy that knows how to turn it into a
handover form's initial state. Routing is by variant type, so adding a
document kind means adding a variant and registering one handler.
"""

from collections.abc import Callable

from fieldstock.config import get_logger
from fieldstock.core.entities.documents import (
    DismantleSource,
    InstallationSource,
    LoanSource,
    NewRequestSource,
    SingleAssetSource,
    SourceDocument,
    User,
)
from fieldstock.core.entities.handover import HandoverInitialState
from fieldstock.core.entities.inventory import InventoryUnit
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.handover.strategies import (
    StrategyContext,
    is_repair_return,
    strategy_from_dismantle,
    strategy_from_installation,
    strategy_from_loan,
    strategy_from_new_request,
    strategy_from_repair,
    strategy_from_single_asset,
)

logger = get_logger(__name__)

Handler = Callable[[SourceDocument, StrategyContext], HandoverInitialState]


def _single_asset(source: SingleAssetSource, ctx: StrategyContext) -> HandoverInitialState:
    unit = source.document
    if is_repair_return(unit):
        return strategy_from_repair(unit, ctx)
    return strategy_from_single_asset(unit, ctx)


class HandoverStrategyResolver:
    """
    Resolves source documents into HandoverInitialState.

    Resolution is a pure function of (source, snapshot): resolving the same
    document against the same snapshot twice yields equal states.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, Handler] = {
            NewRequestSource: lambda s, ctx: strategy_from_new_request(s.document, ctx),
            LoanSource: lambda s, ctx: strategy_from_loan(s.document, ctx),
            InstallationSource: lambda s, ctx: strategy_from_installation(s.document, ctx),
            DismantleSource: lambda s, ctx: strategy_from_dismantle(s.document, ctx),
            SingleAssetSource: _single_asset,
        }

    def register(self, variant: type, handler: Handler) -> None:
        """Register (or replace) the handler for a source variant."""
        if variant in self._handlers:
            logger.warning("handover_handler_replaced", variant=variant.__name__)
        self._handlers[variant] = handler

    def resolve(
        self,
        source: SourceDocument | None,
        units: list[InventoryUnit],
        users: list[User] | None = None,
        current_user: User | None = None,
        catalog: StockCatalog | None = None,
    ) -> HandoverInitialState | None:
        """
        Build the initial handover state for a source document.

        Args:
            source: Tagged source document, or None when nothing was passed.
            units: Inventory snapshot.
            users: Known users, for division lookup.
            current_user: Logged-in user; receives dismantled units.
            catalog: Catalog used for measurement detection and unit labels.

        Returns:
            The initial state, or None when there is no source or no
            handler for its kind.
        """
        if source is None:
            return None

        handler = self._handlers.get(type(source))
        if handler is None:
            logger.warning("handover_source_unhandled", kind=getattr(source, "kind", None))
            return None

        ctx = StrategyContext(
            units=units,
            users=users or [],
            current_user=current_user,
            catalog=catalog or StockCatalog(),
        )
        state = handler(source, ctx)

        logger.debug(
            "handover_resolved",
            kind=source.kind,
            reference_number=state.reference_number,
            lines=len(state.items),
            shortfall_lines=sum(1 for line in state.items if line.is_shortfall),
        )
        return state
