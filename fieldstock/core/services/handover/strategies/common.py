"""Shared inputs for handover strategies."""

from dataclasses import dataclass, field

from fieldstock.config import HandoverSettings, StockSettings, get_settings
from fieldstock.core.entities.documents import User
from fieldstock.core.entities.inventory import InventoryUnit
from fieldstock.core.services.catalog import StockCatalog


@dataclass
class StrategyContext:
    """Snapshot and lookups every strategy may read. Never mutated."""

    units: list[InventoryUnit]
    users: list[User] = field(default_factory=list)
    current_user: User | None = None
    catalog: StockCatalog = field(default_factory=StockCatalog)
    handover_settings: HandoverSettings = field(
        default_factory=lambda: get_settings().handover
    )
    stock_settings: StockSettings = field(default_factory=lambda: get_settings().stock)

    def find_unit(self, unit_id: str) -> InventoryUnit | None:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None

    def division_of(self, user_name: str) -> str:
        """Division id of a named user as a string, '' when unknown."""
        for user in self.users:
            if user.name == user_name:
                return str(user.division_id) if user.division_id is not None else ""
        return ""
