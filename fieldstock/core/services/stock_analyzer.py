"""
Stock alert analysis.

Groups in-storage units per (name, brand) and sorts each group into the
"critical" (nothing left) or "low" (at or under threshold) bucket.
"""

from collections.abc import Mapping

from fieldstock.config import get_logger, get_settings
from fieldstock.core.entities.inventory import AssetStatus, InventoryUnit
from fieldstock.core.entities.stock import (
    RestockDraft,
    RestockLine,
    StockAlerts,
    StockLevel,
)
from fieldstock.core.services.balance import resolve_threshold

logger = get_logger(__name__)


class StockAnalyzer:
    """
    Classifies inventory into dashboard alert buckets.

    Fragments (remnants split off a measurement unit) are left out so
    they never count toward container-level stock.
    """

    def __init__(self, default_threshold: int | None = None) -> None:
        self._default_threshold = (
            default_threshold
            if default_threshold is not None
            else get_settings().stock.default_low_stock_threshold
        )

    @property
    def default_threshold(self) -> int:
        return self._default_threshold

    def levels(self, units: list[InventoryUnit]) -> list[StockLevel]:
        """In-storage counts per model, in first-seen order."""
        levels: dict[tuple[str, str], StockLevel] = {}
        for unit in units:
            if unit.is_fragment:
                continue
            level = levels.get(unit.model_key)
            if level is None:
                level = StockLevel(
                    name=unit.name,
                    brand=unit.brand,
                    category=unit.category,
                )
                levels[unit.model_key] = level
            if unit.status == AssetStatus.IN_STORAGE:
                level.count += 1
        return list(levels.values())

    def analyze(
        self,
        units: list[InventoryUnit],
        thresholds: Mapping[str, int] | None = None,
    ) -> StockAlerts:
        """
        Split models into critical and low buckets.

        Args:
            units: Full inventory snapshot.
            thresholds: Overrides keyed by "name|brand".

        Returns:
            StockAlerts; healthy models appear in neither bucket.
        """
        thresholds = thresholds or {}
        alerts = StockAlerts()

        for level in self.levels(units):
            level.threshold = resolve_threshold(
                level.name, level.brand, thresholds, self._default_threshold
            )
            if level.count == 0:
                alerts.critical.append(level)
            elif level.count <= level.threshold:
                alerts.low.append(level)

        logger.debug(
            "stock_alerts_computed",
            critical=alerts.total_critical,
            low=alerts.total_low,
        )
        return alerts

    @staticmethod
    def build_restock_draft(levels: list[StockLevel]) -> RestockDraft:
        """Pre-fill a restock request; restocks always target the warehouse."""
        return RestockDraft(
            items=[
                RestockLine(
                    name=level.name,
                    brand=level.brand,
                    current_stock=level.count,
                    threshold=level.threshold,
                )
                for level in levels
            ]
        )
