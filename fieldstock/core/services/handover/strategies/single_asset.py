"""Handover of one unit, either back from repair or standalone."""

from fieldstock.core.entities.handover import HandoverInitialState, HandoverLineItem
from fieldstock.core.entities.inventory import AssetStatus, InventoryUnit
from fieldstock.core.services.handover.strategies.common import StrategyContext

REPAIR_STATUSES = frozenset({AssetStatus.UNDER_REPAIR, AssetStatus.OUT_FOR_REPAIR})


def is_repair_return(unit: InventoryUnit) -> bool:
    return unit.status in REPAIR_STATUSES


def strategy_from_repair(unit: InventoryUnit, ctx: StrategyContext) -> HandoverInitialState:
    """A repaired unit goes back to whoever held it before the repair."""
    recipient = unit.current_user or ""
    return HandoverInitialState(
        recipient=recipient,
        division_id=ctx.division_of(recipient) if recipient else "",
        reference_number=f"REPAIR-{unit.id}",
        items=[
            HandoverLineItem(
                asset_id=unit.id,
                item_name=unit.name,
                brand=unit.brand,
                condition_notes=ctx.handover_settings.repaired_condition,
                quantity=1,
                unit=ctx.stock_settings.default_unit,
                is_locked=True,
            )
        ],
        notes=f"Pengembalian aset {unit.name} ({unit.id}) setelah perbaikan.",
        is_locked=False,
        target_asset_status=AssetStatus.IN_USE,
    )


def strategy_from_single_asset(
    unit: InventoryUnit, ctx: StrategyContext
) -> HandoverInitialState:
    """Recipient is left blank for the user to fill in."""
    return HandoverInitialState(
        recipient="",
        division_id="",
        reference_number="",
        items=[
            HandoverLineItem(
                asset_id=unit.id,
                item_name=unit.name,
                brand=unit.brand,
                condition_notes=unit.condition.value,
                quantity=1,
                unit=ctx.stock_settings.default_unit,
                is_locked=True,
            )
        ],
        is_locked=False,
        target_asset_status=AssetStatus.IN_USE,
    )
