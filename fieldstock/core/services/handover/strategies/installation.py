"""Handover from an installation record."""

from fieldstock.core.entities.documents import Installation
from fieldstock.core.entities.handover import HandoverInitialState, HandoverLineItem
from fieldstock.core.entities.inventory import AssetStatus
from fieldstock.core.services.handover.strategies.common import StrategyContext


def strategy_from_installation(
    installation: Installation, ctx: StrategyContext
) -> HandoverInitialState:
    hs = ctx.handover_settings
    lines: list[HandoverLineItem] = []

    for installed in installation.assets_installed:
        unit = ctx.find_unit(installed.asset_id)
        lines.append(
            HandoverLineItem(
                asset_id=installed.asset_id,
                item_name=installed.asset_name,
                brand=unit.brand if unit else "",
                condition_notes=unit.condition.value if unit else hs.default_condition,
                quantity=1,
                unit=ctx.stock_settings.default_unit,
            )
        )

    for material in installation.materials_used:
        lines.append(
            HandoverLineItem(
                asset_id=material.material_asset_id or "",
                item_name=material.item_name,
                brand=material.brand,
                condition_notes=hs.installation_material_condition,
                quantity=material.quantity,
                unit=material.unit or ctx.stock_settings.default_unit,
            )
        )

    return HandoverInitialState(
        recipient=installation.technician,
        division_id=ctx.division_of(installation.technician),
        reference_number=installation.doc_number,
        items=lines,
        notes=installation.notes
        or f"Serah terima barang untuk instalasi pelanggan {installation.customer_name}.",
        is_locked=False,
        target_asset_status=AssetStatus.IN_USE,
    )
