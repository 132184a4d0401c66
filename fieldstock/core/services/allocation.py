"""
Material allocation service.

Picks which physical units can satisfy a requested (item, brand) from a
technician's custody or from the warehouse, ranked for FIFO consumption.
Pure service: works on the snapshot passed in, never mutates it.
"""

from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import AssetStatus, InventoryUnit
from fieldstock.core.entities.stock import (
    AllocationCandidate,
    AllocationQuery,
    AllocationResult,
    SourceMode,
)
from fieldstock.core.services.balance import resolve_balance

logger = get_logger(__name__)

PERSONAL_STATUSES = frozenset({AssetStatus.IN_CUSTODY, AssetStatus.IN_USE})


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


def matches_item(unit: InventoryUnit, item_name: str, brand: str = "") -> bool:
    """
    Loose name/brand match.

    Names match when either contains the other (case-insensitive). The
    brand filter only applies when a brand is given, and then the target
    brand must appear inside the unit's brand.
    """
    target_name = _norm(item_name)
    unit_name = _norm(unit.name)
    if not (target_name in unit_name or unit_name in target_name):
        return False
    target_brand = _norm(brand)
    return not target_brand or target_brand in _norm(unit.brand)


def matches_source(unit: InventoryUnit, source_mode: SourceMode, owner: str) -> bool:
    if source_mode == SourceMode.PERSONAL:
        return _norm(unit.current_user) == owner and unit.status in PERSONAL_STATUSES
    return unit.status == AssetStatus.IN_STORAGE


def matches_search(unit: InventoryUnit, search: str) -> bool:
    """Free-text filter over id, location and serial number."""
    q = _norm(search)
    if not q:
        return True
    return (
        q in unit.id.lower()
        or q in _norm(unit.location)
        or q in _norm(unit.serial_number)
    )


def fifo_key(unit: InventoryUnit) -> tuple[int, float, str]:
    """
    Sort key: units with stock first, then oldest registration, then id.

    The id component makes same-date ordering deterministic.
    """
    has_stock = resolve_balance(unit) > 0
    return (0 if has_stock else 1, unit.registration_date.timestamp(), unit.id)


class AllocationSelector:
    """
    Ranks candidate units for a material request.

    The first candidate after filtering and ranking is the recommendation.
    Exhausted units stay in the list so the user can see them, but they
    are never selectable.
    """

    def select(
        self,
        units: list[InventoryUnit],
        query: AllocationQuery,
        fallback_owner: str = "",
    ) -> AllocationResult:
        """
        Filter and rank units for a query.

        Args:
            units: Full inventory snapshot.
            query: Item, brand, source mode and optional free-text search.
            fallback_owner: Logged-in user, used when the query has no owner.

        Returns:
            AllocationResult; an empty candidate list is a valid outcome.
        """
        owner = _norm(query.owner_name or fallback_owner)

        matched = [
            unit
            for unit in units
            if matches_item(unit, query.item_name, query.brand)
            and matches_source(unit, query.source_mode, owner)
            and matches_search(unit, query.search)
        ]
        matched.sort(key=fifo_key)

        recommended_id = matched[0].id if matched else None
        candidates = []
        for unit in matched:
            # Count and individual units report 1 when no balance is recorded
            balance = resolve_balance(unit, default=1.0)
            candidates.append(
                AllocationCandidate(
                    unit=unit,
                    balance=balance,
                    is_selectable=balance > 0,
                    is_recommended=unit.id == recommended_id,
                )
            )

        suggestion = None
        if not candidates:
            suggestion = self._suggest(query)
            logger.info(
                "allocation_no_stock",
                item_name=query.item_name,
                brand=query.brand,
                source_mode=query.source_mode.value,
            )

        return AllocationResult(
            query=query,
            candidates=candidates,
            recommended_id=recommended_id,
            suggestion=suggestion,
        )

    def choose(self, result: AllocationResult, unit_id: str) -> InventoryUnit | None:
        """Resolve a user's pick; exhausted or unknown units resolve to None."""
        for candidate in result.candidates:
            if candidate.unit.id == unit_id:
                return candidate.unit if candidate.is_selectable else None
        return None

    @staticmethod
    def _suggest(query: AllocationQuery) -> str:
        if query.source_mode == SourceMode.PERSONAL:
            return (
                f"No stock of {query.item_name} found in custody. "
                "Try the warehouse source instead."
            )
        return (
            f"No stock of {query.item_name} found in the warehouse. "
            "Try the technician's personal stock instead."
        )
