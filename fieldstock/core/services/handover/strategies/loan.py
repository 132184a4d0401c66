"""Handover from an approved loan request."""

from fieldstock.core.entities.documents import LoanRequest
from fieldstock.core.entities.handover import HandoverInitialState, HandoverLineItem
from fieldstock.core.entities.inventory import AssetStatus
from fieldstock.core.services.handover.strategies.common import StrategyContext


def strategy_from_loan(loan: LoanRequest, ctx: StrategyContext) -> HandoverInitialState:
    """
    Units picked during approval become locked lines. A loan with nothing
    assigned yet falls back to one unlocked line per requested item.
    """
    hs = ctx.handover_settings
    lines: list[HandoverLineItem] = []

    assigned = loan.assigned_unit_ids
    if assigned:
        for unit_id in assigned:
            unit = ctx.find_unit(unit_id)
            if unit is None:
                continue
            lines.append(
                HandoverLineItem(
                    asset_id=unit.id,
                    item_name=unit.name,
                    brand=unit.brand,
                    condition_notes=unit.condition.value,
                    quantity=1,
                    unit=ctx.stock_settings.default_unit,
                    is_locked=True,
                )
            )
    else:
        for item in loan.items:
            lines.append(
                HandoverLineItem(
                    item_name=item.item_name,
                    brand=item.brand,
                    condition_notes=hs.loan_default_condition,
                    quantity=item.quantity,
                    unit=item.unit or ctx.stock_settings.default_unit,
                    is_locked=False,
                )
            )

    return HandoverInitialState(
        recipient=loan.requester,
        division_id=ctx.division_of(loan.requester),
        reference_number=loan.id,
        items=lines,
        notes=loan.notes or f"Serah terima aset untuk Pinjaman #{loan.id}.",
        is_locked=True,
        target_asset_status=AssetStatus.IN_USE,
    )
