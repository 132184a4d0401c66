"""Handover of a unit retrieved from a customer site back to the warehouse."""

from fieldstock.core.entities.documents import Dismantle
from fieldstock.core.entities.handover import HandoverInitialState, HandoverLineItem
from fieldstock.core.entities.inventory import AssetStatus
from fieldstock.core.services.handover.strategies.common import StrategyContext


def strategy_from_dismantle(
    dismantle: Dismantle, ctx: StrategyContext
) -> HandoverInitialState:
    """The receiving user is whoever is logged in; the unit returns to storage."""
    current = ctx.current_user
    unit = ctx.find_unit(dismantle.asset_id)
    line = HandoverLineItem(
        asset_id=dismantle.asset_id,
        item_name=dismantle.asset_name,
        brand=unit.brand if unit else "",
        condition_notes=dismantle.retrieved_condition.value,
        quantity=1,
        unit=ctx.stock_settings.default_unit,
    )
    division = ""
    if current is not None and current.division_id is not None:
        division = str(current.division_id)

    return HandoverInitialState(
        recipient=current.name if current else "",
        division_id=division,
        reference_number=dismantle.doc_number,
        items=[line],
        notes=dismantle.notes
        or f"Pengembalian aset dari dismantle pelanggan {dismantle.customer_name}.",
        is_locked=True,
        target_asset_status=AssetStatus.IN_STORAGE,
    )
