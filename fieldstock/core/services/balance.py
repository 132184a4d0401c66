"""
Fallback resolution for balances, thresholds and unit labels.

Each resolver walks a fixed precedence and returns the first level that
has a value:

    balance:    EXPLICIT (current_balance) > CAPACITY (initial_balance) > DEFAULT
    threshold:  OVERRIDE ("name|brand" entry) > DEFAULT
    unit label: EXPLICIT > MODEL > TYPE > DEFAULT
"""

from collections.abc import Mapping
from enum import Enum

from fieldstock.core.entities.inventory import InventoryUnit


class BalanceSource(str, Enum):
    """Which precedence level a resolved balance came from."""

    EXPLICIT = "explicit"
    CAPACITY = "capacity"
    DEFAULT = "default"


def resolve_balance_with_source(
    unit: InventoryUnit, default: float = 0.0
) -> tuple[float, BalanceSource]:
    """Resolve a unit's usable balance and report where it came from."""
    if unit.current_balance is not None:
        return unit.current_balance, BalanceSource.EXPLICIT
    if unit.initial_balance is not None:
        return unit.initial_balance, BalanceSource.CAPACITY
    return default, BalanceSource.DEFAULT


def resolve_balance(unit: InventoryUnit, default: float = 0.0) -> float:
    """Resolve a unit's usable balance."""
    return resolve_balance_with_source(unit, default)[0]


def threshold_key(name: str, brand: str) -> str:
    """Key format used by the dashboard threshold settings."""
    return f"{name}|{brand}"


def resolve_threshold(
    name: str,
    brand: str,
    thresholds: Mapping[str, int],
    default: int,
) -> int:
    """Resolve the low-stock threshold for a model."""
    override = thresholds.get(threshold_key(name, brand))
    if override is not None:
        return override
    return default


def resolve_unit(*candidates: str | None, default: str) -> str:
    """Return the first non-empty unit label, in precedence order."""
    for candidate in candidates:
        if candidate:
            return candidate
    return default


def absorb_drift(value: float, epsilon: float) -> float:
    """Collapse floating-point residue below epsilon to zero."""
    if value < epsilon:
        return 0.0
    return value


def safe_round(value: float, digits: int = 4) -> float:
    """Round balance arithmetic to a stable number of decimals."""
    return round(value, digits)
