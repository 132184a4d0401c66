"""Per-source handover strategies."""

from fieldstock.core.services.handover.strategies.common import StrategyContext
from fieldstock.core.services.handover.strategies.dismantle import strategy_from_dismantle
from fieldstock.core.services.handover.strategies.installation import (
    strategy_from_installation,
)
from fieldstock.core.services.handover.strategies.loan import strategy_from_loan
from fieldstock.core.services.handover.strategies.new_request import (
    LineResolution,
    resolve_request_line,
    resolve_request_lines,
    strategy_from_new_request,
)
from fieldstock.core.services.handover.strategies.single_asset import (
    is_repair_return,
    strategy_from_repair,
    strategy_from_single_asset,
)

__all__ = [
    "StrategyContext",
    "LineResolution",
    "resolve_request_line",
    "resolve_request_lines",
    "strategy_from_new_request",
    "strategy_from_loan",
    "strategy_from_installation",
    "strategy_from_dismantle",
    "strategy_from_repair",
    "strategy_from_single_asset",
    "is_repair_return",
]
