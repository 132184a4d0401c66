"""
Handover from a new procurement request.

Every non-rejected request line is matched against units procured for this
request. Matched units become locked lines; whatever they do not cover is
emitted as unlocked shortfall lines to be picked from existing stock.
"""

import math
from dataclasses import dataclass, field

from fieldstock.core.entities.documents import ProcurementRequest, RequestItem
from fieldstock.core.entities.handover import HandoverInitialState, HandoverLineItem
from fieldstock.core.entities.inventory import AssetStatus, BulkType, InventoryUnit
from fieldstock.core.services.balance import absorb_drift, resolve_balance
from fieldstock.core.services.handover.strategies.common import StrategyContext


@dataclass
class LineResolution:
    """Outcome of resolving one request line."""

    item: RequestItem
    target_quantity: float
    fulfilled: float
    remaining: float
    is_measurement: bool
    lines: list[HandoverLineItem] = field(default_factory=list)


def procured_units(request: ProcurementRequest, units: list[InventoryUnit]) -> list[InventoryUnit]:
    """In-storage units tagged with this request by reference or PO number."""
    return [
        unit
        for unit in units
        if (unit.reference_number == request.id or unit.po_number == request.id)
        and unit.status == AssetStatus.IN_STORAGE
    ]


def _same_model(unit: InventoryUnit, item: RequestItem) -> bool:
    return (
        unit.name.lower() == item.item_name.lower()
        and unit.brand.lower() == item.brand.lower()
    )


def _detect_measurement(
    item: RequestItem,
    matched: list[InventoryUnit],
    ctx: StrategyContext,
) -> bool:
    """
    Measurement detection: a matched procured unit decides; with none yet,
    the catalog decides; with no catalog entry, any existing unit of the
    same model decides.
    """
    if matched:
        return matched[0].is_measurement
    if ctx.catalog.find_model(item.item_name, item.brand) is not None:
        return ctx.catalog.is_measurement(item.item_name, item.brand)
    for unit in ctx.units:
        if unit.name == item.item_name and unit.brand == item.brand:
            return unit.bulk_type == BulkType.MEASUREMENT
    return False


def resolve_request_line(
    request: ProcurementRequest,
    item: RequestItem,
    procured: list[InventoryUnit],
    used: frozenset[str],
    ctx: StrategyContext,
) -> tuple[LineResolution, frozenset[str]]:
    """
    Resolve one request line against procured units not yet used.

    Returns the resolution and the used-unit set extended with the units
    this line consumed. A unit is used by at most one line.
    """
    hs = ctx.handover_settings
    epsilon = ctx.stock_settings.balance_epsilon
    target = request.target_quantity(item)
    requested_unit = item.unit or ctx.stock_settings.default_unit

    matched = [u for u in procured if _same_model(u, item) and u.id not in used]
    is_measurement = _detect_measurement(item, matched, ctx)
    container_unit = ctx.catalog.container_unit_for(item.item_name, item.brand)
    base_unit = ctx.catalog.base_unit_for(item.item_name, item.brand)
    # Measurement lines asked for in anything but the base unit count containers
    counts_containers = is_measurement and requested_unit != base_unit

    lines: list[HandoverLineItem] = []
    taken: list[InventoryUnit] = []
    contributed = 0.0
    for unit in matched:
        # Count units past the target stay free for later lines
        if not is_measurement and contributed >= target - epsilon:
            break
        taken.append(unit)
        if is_measurement:
            contributed += 1.0 if counts_containers else resolve_balance(unit)
            unit_label = container_unit
        else:
            contributed += 1.0
            unit_label = requested_unit
        lines.append(
            HandoverLineItem(
                asset_id=unit.id,
                item_name=unit.name,
                brand=unit.brand,
                condition_notes=hs.procured_condition,
                quantity=1,
                unit=unit_label,
                is_locked=True,
            )
        )

    fulfilled = min(contributed, target)
    remaining = absorb_drift(target - fulfilled, epsilon)

    if remaining > 0:
        if is_measurement:
            lines.append(
                HandoverLineItem(
                    item_name=item.item_name,
                    brand=item.brand,
                    condition_notes=hs.shortfall_condition,
                    quantity=remaining,
                    unit=requested_unit,
                    is_locked=False,
                )
            )
        else:
            # One line per unit so each can be assigned individually
            for _ in range(math.ceil(remaining)):
                lines.append(
                    HandoverLineItem(
                        item_name=item.item_name,
                        brand=item.brand,
                        condition_notes=hs.shortfall_condition,
                        quantity=1,
                        unit=requested_unit,
                        is_locked=False,
                    )
                )

    resolution = LineResolution(
        item=item,
        target_quantity=target,
        fulfilled=fulfilled,
        remaining=remaining,
        is_measurement=is_measurement,
        lines=lines,
    )
    return resolution, used | {u.id for u in taken}


def resolve_request_lines(
    request: ProcurementRequest, ctx: StrategyContext
) -> list[LineResolution]:
    """Fold every non-rejected line, threading the used-unit set through."""
    procured = procured_units(request, ctx.units)
    used: frozenset[str] = frozenset()
    resolutions = []
    for item in request.items:
        if request.is_rejected(item):
            continue
        resolution, used = resolve_request_line(request, item, procured, used, ctx)
        resolutions.append(resolution)
    return resolutions


def strategy_from_new_request(
    request: ProcurementRequest, ctx: StrategyContext
) -> HandoverInitialState:
    resolutions = resolve_request_lines(request, ctx)
    return HandoverInitialState(
        recipient=request.requester,
        division_id=ctx.division_of(request.requester),
        reference_number=request.id,
        items=[line for r in resolutions for line in r.lines],
        notes=f"Serah terima aset untuk Request #{request.id}.",
        is_locked=False,
        target_asset_status=AssetStatus.IN_USE,
    )
