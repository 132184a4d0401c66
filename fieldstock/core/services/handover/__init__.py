"""Handover resolution and execution."""

from fieldstock.core.services.handover.executor import HandoverExecutor
from fieldstock.core.services.handover.resolver import HandoverStrategyResolver
from fieldstock.core.services.handover.strategies import (
    LineResolution,
    StrategyContext,
    resolve_request_line,
    resolve_request_lines,
)

__all__ = [
    "HandoverExecutor",
    "HandoverStrategyResolver",
    "LineResolution",
    "StrategyContext",
    "resolve_request_line",
    "resolve_request_lines",
]
