"""
Handover execution planning.

Turns a submitted handover into the unit updates, new fragment units,
stock movements and source-document transition the persistence layer has
to write. The plan is computed against a snapshot and never mutates it.
"""

import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from fieldstock.config import get_logger, get_settings
from fieldstock.core.entities.handover import (
    AssetUpdate,
    Handover,
    HandoverExecutionPlan,
    HandoverLineItem,
    MovementType,
    SourceDocumentKind,
    SourceStatusUpdate,
    StockMovement,
)
from fieldstock.core.entities.inventory import AssetStatus, InventoryUnit
from fieldstock.core.exceptions import InventoryUnitNotFoundError
from fieldstock.core.services.balance import resolve_balance, safe_round
from fieldstock.core.services.catalog import StockCatalog

logger = get_logger(__name__)

LOAN_ON_LOAN = "on_loan"
REQUEST_COMPLETED = "completed"


def _short_suffix() -> str:
    return uuid.uuid4().hex[:6].upper()


class HandoverExecutor:
    """
    Plans the side effects of a completed handover.

    Measurement lines expressed in a unit other than the container unit are
    partial takes: the parent keeps its place with a reduced balance and a
    fragment unit carrying the taken amount goes to the recipient. Every
    other line moves its unit as a whole.
    """

    def __init__(
        self,
        catalog: StockCatalog | None = None,
        suffix_factory: Callable[[], str] = _short_suffix,
    ) -> None:
        self._catalog = catalog or StockCatalog()
        self._suffix_factory = suffix_factory
        settings = get_settings()
        self._stock = settings.stock
        self._handover = settings.handover

    def location_for(self, target_status: AssetStatus, recipient: str) -> str:
        if target_status == AssetStatus.IN_STORAGE:
            return self._handover.warehouse_location
        if target_status == AssetStatus.IN_CUSTODY:
            return f"Dipegang oleh {recipient} (Custody)"
        return f"Digunakan oleh {recipient}"

    def plan(
        self,
        handover: Handover,
        target_status: AssetStatus,
        units: list[InventoryUnit],
        actor: str = "",
        strict: bool = False,
    ) -> HandoverExecutionPlan:
        """
        Compute the write set for a handover.

        Args:
            handover: Submitted handover document.
            target_status: Status moved units take on.
            units: Inventory snapshot.
            actor: User performing the handover, recorded on movements.
            strict: Raise InventoryUnitNotFoundError for unknown unit ids
                instead of skipping them.

        Returns:
            HandoverExecutionPlan describing every write.
        """
        by_id = {unit.id: unit for unit in units}
        plan = HandoverExecutionPlan()
        moved: list[str] = []
        # Running balances of parents drawn from more than once
        balances: dict[str, float] = {}

        for line in handover.items:
            if not line.asset_id or not line.checked:
                continue
            unit = by_id.get(line.asset_id)
            if unit is None:
                if strict:
                    raise InventoryUnitNotFoundError(line.asset_id)
                logger.warning("handover_unit_missing", asset_id=line.asset_id)
                plan.skipped_asset_ids.append(line.asset_id)
                continue

            if self._is_partial_take(unit, line):
                self._plan_partial_take(
                    plan, unit, line, handover, target_status, actor, balances
                )
            else:
                moved.append(unit.id)

        for parent_id, balance in balances.items():
            plan.unit_updates.append(AssetUpdate(asset_id=parent_id, current_balance=balance))

        location = self.location_for(target_status, handover.recipient)
        for unit_id in moved:
            to_storage = target_status == AssetStatus.IN_STORAGE
            plan.unit_updates.append(
                AssetUpdate(
                    asset_id=unit_id,
                    status=target_status,
                    current_user=None if to_storage else handover.recipient,
                    clear_current_user=to_storage,
                    location=location,
                )
            )

        plan.source_update = self.source_update_for(handover)

        logger.info(
            "handover_planned",
            doc_number=handover.doc_number,
            moved=len(moved),
            fragments=len(plan.new_units),
            skipped=len(plan.skipped_asset_ids),
        )
        return plan

    def source_update_for(self, handover: Handover) -> SourceStatusUpdate | None:
        """Transition for the loan or request this handover fulfils, if any."""
        ref = handover.reference_number
        if not ref:
            return None
        if ref.startswith(tuple(self._handover.loan_reference_prefixes)):
            return SourceStatusUpdate(
                kind=SourceDocumentKind.LOAN_REQUEST,
                reference_number=ref,
                new_status=LOAN_ON_LOAN,
                handover_id=handover.id or None,
            )
        if ref.startswith(tuple(self._handover.request_reference_prefixes)):
            return SourceStatusUpdate(
                kind=SourceDocumentKind.PROCUREMENT_REQUEST,
                reference_number=ref,
                new_status=REQUEST_COMPLETED,
                handover_id=handover.id or None,
            )
        return None

    def _is_partial_take(self, unit: InventoryUnit, line: HandoverLineItem) -> bool:
        if not unit.is_measurement:
            return False
        container_unit = self._catalog.container_unit_for(unit.name, unit.brand)
        return (line.unit or container_unit) != container_unit

    def _plan_partial_take(
        self,
        plan: HandoverExecutionPlan,
        parent: InventoryUnit,
        line: HandoverLineItem,
        handover: Handover,
        target_status: AssetStatus,
        actor: str,
        balances: dict[str, float],
    ) -> None:
        current = balances.get(parent.id, resolve_balance(parent))
        taken = line.quantity
        if taken > current:
            logger.warning(
                "handover_take_capped",
                asset_id=parent.id,
                requested=taken,
                available=current,
            )
            taken = current
        digits = self._stock.balance_round_digits
        remaining = max(0.0, safe_round(current - taken, digits))

        balances[parent.id] = remaining

        root_id = parent.parent_id if parent.is_fragment and parent.parent_id else parent.id
        fragment_id = f"{root_id}{self._stock.fragment_id_marker}{self._suffix_factory()}"
        fragment = parent.model_copy(
            update={
                "id": fragment_id,
                "serial_number": None,
                "mac_address": None,
                "initial_balance": taken,
                "current_balance": taken,
                "status": target_status,
                "current_user": handover.recipient,
                "location": f"Dipegang: {handover.recipient}",
                "location_detail": f"Pecahan dari {parent.id}",
                "registration_date": datetime.now(UTC),
                "recorded_by": actor,
                "is_fragment": True,
                "parent_id": root_id,
            }
        )
        plan.new_units.append(fragment)

        base_unit = self._catalog.base_unit_for(parent.name, parent.brand)
        plan.movements.append(
            StockMovement(
                asset_name=parent.name,
                brand=parent.brand,
                movement_type=MovementType.OUT_HANDOVER,
                quantity=taken,
                reference_id=handover.doc_number,
                actor=actor,
                notes=(
                    f"Handover parsial (Child ID: {fragment_id}) ke {handover.recipient}. "
                    f"Sisa induk: {remaining:g} {base_unit}."
                ),
                related_asset_id=fragment_id,
            )
        )
