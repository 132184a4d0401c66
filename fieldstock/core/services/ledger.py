"""
Stock ledger: availability, consumption and overview aggregation.

Works on an inventory snapshot; consumption is returned as a plan of
balance changes rather than applied.
"""

from collections.abc import Iterable

from fieldstock.config import get_logger, get_settings
from fieldstock.core.entities.documents import Installation, Maintenance, UsedMaterial
from fieldstock.core.entities.inventory import AssetStatus, InventoryUnit, TrackingMethod
from fieldstock.core.entities.stock import (
    Consumption,
    ConsumptionPlan,
    StockAvailability,
    StockOverviewRow,
    StockSummary,
)
from fieldstock.core.exceptions import InsufficientStockError, InvalidQuantityError
from fieldstock.core.services.balance import absorb_drift, resolve_balance, safe_round
from fieldstock.core.services.catalog import StockCatalog

logger = get_logger(__name__)

IN_USE_STATUSES = frozenset({AssetStatus.IN_USE, AssetStatus.IN_CUSTODY})
DAMAGED_STATUSES = frozenset(
    {AssetStatus.DAMAGED, AssetStatus.UNDER_REPAIR, AssetStatus.OUT_FOR_REPAIR}
)

# Usage documents kept per overview row
MAX_USAGE_DOCUMENTS = 5


def _same_model(unit: InventoryUnit, item_name: str, brand: str) -> bool:
    return (
        unit.name.lower() == item_name.lower()
        and unit.brand.lower() == brand.lower()
    )


def stock_contribution(unit: InventoryUnit) -> float:
    """What one unit adds to available stock: its balance, or 1 for discrete units."""
    if unit.is_measurement:
        return resolve_balance(unit)
    if unit.is_count:
        return resolve_balance(unit, default=1.0)
    return 1.0


class StockLedger:
    """Warehouse-side stock arithmetic over a snapshot."""

    def __init__(self, catalog: StockCatalog | None = None) -> None:
        self._catalog = catalog or StockCatalog()
        self._settings = get_settings().stock

    def in_storage(
        self, units: Iterable[InventoryUnit], item_name: str, brand: str
    ) -> list[InventoryUnit]:
        return [
            unit
            for unit in units
            if unit.status == AssetStatus.IN_STORAGE and _same_model(unit, item_name, brand)
        ]

    def check_availability(
        self,
        units: list[InventoryUnit],
        item_name: str,
        brand: str,
        quantity: float,
    ) -> StockAvailability:
        """
        Check whether the warehouse can cover a quantity of one model.

        Raises:
            InvalidQuantityError: If quantity is zero or negative.
        """
        if quantity <= 0:
            raise InvalidQuantityError(quantity)

        matched = self.in_storage(units, item_name, brand)
        available = safe_round(
            sum(stock_contribution(unit) for unit in matched),
            self._settings.balance_round_digits,
        )
        deficit = absorb_drift(quantity - available, self._settings.balance_epsilon)

        return StockAvailability(
            is_sufficient=deficit == 0,
            available=available,
            requested=quantity,
            deficit=deficit,
            unit_ids=[unit.id for unit in matched],
            is_fragmented=len(matched) > 1,
        )

    def plan_consumption(
        self,
        units: list[InventoryUnit],
        item_name: str,
        brand: str,
        quantity: float,
        unit: str | None = None,
        strict: bool = True,
    ) -> ConsumptionPlan:
        """
        Draw a quantity from in-storage units, fullest first.

        Args:
            units: Inventory snapshot.
            item_name: Model name.
            brand: Model brand.
            quantity: Amount to consume, in the model's base unit.
            unit: Label recorded on the plan.
            strict: Raise when stock cannot cover the full quantity;
                otherwise record the shortfall on the plan.

        Raises:
            InvalidQuantityError: If quantity is zero or negative.
            InsufficientStockError: In strict mode, when stock runs out.
        """
        if quantity <= 0:
            raise InvalidQuantityError(quantity)

        digits = self._settings.balance_round_digits
        epsilon = self._settings.balance_epsilon
        matched = self.in_storage(units, item_name, brand)
        matched.sort(key=lambda u: (-stock_contribution(u), u.id))

        plan = ConsumptionPlan(item_name=item_name, brand=brand, requested=quantity, unit=unit)
        remaining = quantity
        for candidate in matched:
            if remaining <= 0:
                break
            balance = stock_contribution(candidate)
            if balance <= 0:
                continue
            take = min(balance, remaining)
            plan.consumptions.append(
                Consumption(
                    unit_id=candidate.id,
                    consumed=safe_round(take, digits),
                    previous_balance=balance,
                    new_balance=safe_round(balance - take, digits),
                )
            )
            remaining = absorb_drift(safe_round(remaining - take, digits), epsilon)

        plan.shortfall = remaining
        if remaining > 0:
            if strict:
                raise InsufficientStockError(
                    item_name=item_name,
                    brand=brand,
                    requested=quantity,
                    available=safe_round(quantity - remaining, digits),
                    unit=unit,
                )
            logger.warning(
                "consumption_shortfall",
                item_name=item_name,
                brand=brand,
                requested=quantity,
                shortfall=remaining,
            )
        return plan

    def summarize(self, units: list[InventoryUnit]) -> list[StockSummary]:
        """In-storage totals per model."""
        summaries: dict[tuple[str, str], StockSummary] = {}
        for unit in units:
            if unit.status != AssetStatus.IN_STORAGE:
                continue
            summary = summaries.setdefault(
                unit.model_key, StockSummary(name=unit.name, brand=unit.brand)
            )
            summary.total += stock_contribution(unit)
            summary.count += 1
        return list(summaries.values())

    def overview(
        self,
        units: list[InventoryUnit],
        installations: list[Installation] | None = None,
        maintenances: list[Maintenance] | None = None,
    ) -> list[StockOverviewRow]:
        """
        Per-model overview across storage, use and damage.

        Fragments merge into their parent model's row but never add to the
        grand total, which counts container capacity only. Material used at
        customer sites is added to the in-use balance of bulk models.
        """
        rows: dict[tuple[str, str], StockOverviewRow] = {}

        for unit in units:
            if unit.status == AssetStatus.DECOMMISSIONED:
                continue
            row = rows.get(unit.model_key)
            if row is None:
                row = self._new_row(unit)
                rows[unit.model_key] = row

            row.total += 1
            content = resolve_balance(unit)
            if row.is_measurement and not unit.is_fragment:
                row.grand_total_balance += unit.initial_balance or 0

            if unit.status == AssetStatus.IN_STORAGE:
                row.in_storage += 1
                if unit.purchase_price:
                    row.value_in_storage += unit.purchase_price
                if row.is_measurement:
                    row.storage_balance += content
            elif unit.status in IN_USE_STATUSES:
                row.in_use += 1
                if row.is_measurement:
                    row.in_use_balance += content
            elif unit.status in DAMAGED_STATUSES:
                row.damaged += 1
                if row.is_measurement:
                    row.damaged_balance += content

        usage = self._usage(installations or [], maintenances or [])
        for key, row in rows.items():
            if key not in usage or not (row.is_measurement or row.is_bulk):
                continue
            total, documents = usage[key]
            row.in_use_balance += total
            row.usage_documents = documents

        return [row for row in rows.values() if row.total > 0 or row.in_use_balance > 0]

    def _new_row(self, unit: InventoryUnit) -> StockOverviewRow:
        catalog = self._catalog
        is_measurement = unit.is_measurement or catalog.is_measurement(unit.name, unit.brand)
        tracking = catalog.tracking_method_for(unit.name, unit.brand)
        model = catalog.find_model(unit.name, unit.brand)
        asset_type = catalog.find_type(unit.name, unit.brand)
        return StockOverviewRow(
            name=unit.name,
            brand=unit.brand,
            category=unit.category,
            unit_of_measure=(
                (model.unit_of_measure if model else None)
                or (asset_type.unit_of_measure if asset_type else None)
                or self._settings.default_unit
            ),
            base_unit=catalog.base_unit_for(unit.name, unit.brand) if is_measurement else None,
            is_measurement=is_measurement,
            is_bulk=(
                unit.tracking_method == TrackingMethod.BULK or tracking == TrackingMethod.BULK
            ),
        )

    @staticmethod
    def _usage(
        installations: list[Installation], maintenances: list[Maintenance]
    ) -> dict[tuple[str, str], tuple[float, list[str]]]:
        usage: dict[tuple[str, str], tuple[float, list[str]]] = {}

        def record(material: UsedMaterial, doc_number: str) -> None:
            key = (material.item_name, material.brand)
            total, documents = usage.get(key, (0.0, []))
            if len(documents) < MAX_USAGE_DOCUMENTS:
                documents.append(doc_number)
            usage[key] = (total + material.quantity, documents)

        for installation in installations:
            for material in installation.materials_used:
                record(material, installation.doc_number)
        for maintenance in maintenances:
            for material in maintenance.materials_used:
                record(material, maintenance.doc_number)
        return usage
