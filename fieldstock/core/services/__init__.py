"""
Core business logic services.

Layer-pure services that depend only on:
- fieldstock/core/entities/*
- fieldstock/core/exceptions.py
- fieldstock/config (settings and logging)

No I/O. Every service works on the snapshot it is handed.
"""

from fieldstock.core.services.allocation import AllocationSelector
from fieldstock.core.services.balance import (
    BalanceSource,
    absorb_drift,
    resolve_balance,
    resolve_balance_with_source,
    resolve_threshold,
    resolve_unit,
    safe_round,
    threshold_key,
)
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.handover import (
    HandoverExecutor,
    HandoverStrategyResolver,
    LineResolution,
    StrategyContext,
)
from fieldstock.core.services.ledger import StockLedger
from fieldstock.core.services.registration import RegistrationPlanner
from fieldstock.core.services.stock_analyzer import StockAnalyzer

__all__ = [
    # Allocation
    "AllocationSelector",
    # Stock alerts
    "StockAnalyzer",
    # Handover
    "HandoverStrategyResolver",
    "HandoverExecutor",
    "LineResolution",
    "StrategyContext",
    # Ledger
    "StockLedger",
    # Registration
    "RegistrationPlanner",
    # Catalog
    "StockCatalog",
    # Fallback resolution
    "BalanceSource",
    "resolve_balance",
    "resolve_balance_with_source",
    "resolve_threshold",
    "resolve_unit",
    "threshold_key",
    "absorb_drift",
    "safe_round",
]
