"""
Registration planning.

Works out which rows to register for a model, optionally pre-filled from
an approved procurement request line, validates them and turns them into
inventory units. Measurement models ordered in container units expand to
one row per container at the catalog capacity; ordered in base units they
collapse into a single row holding the whole quantity.
"""

import math
import uuid
from collections.abc import Callable

from fieldstock.config import get_logger, get_settings
from fieldstock.core.entities.documents import ProcurementRequest, RequestItem
from fieldstock.core.entities.inventory import (
    AssetCondition,
    AssetStatus,
    BulkType,
    InventoryUnit,
    TrackingMethod,
)
from fieldstock.core.entities.stock import RegistrationPlan, RegistrationRow, ValidationIssue
from fieldstock.core.exceptions import MissingInitialBalanceError
from fieldstock.core.services.catalog import StockCatalog

logger = get_logger(__name__)


def _batch_tag() -> str:
    return uuid.uuid4().hex[:5].upper()


def _unit_id() -> str:
    return f"AST-{uuid.uuid4().hex[:8].upper()}"


def _balance_in_range(row: RegistrationRow) -> bool:
    """0 <= current <= initial, for whichever balances the row carries."""
    if row.initial_balance is not None and row.initial_balance < 0:
        return False
    if row.current_balance is None:
        return True
    if row.current_balance < 0:
        return False
    return row.initial_balance is None or row.current_balance <= row.initial_balance


class RegistrationPlanner:
    """Plans, validates and materializes asset registrations."""

    def __init__(
        self,
        catalog: StockCatalog | None = None,
        tag_factory: Callable[[], str] = _batch_tag,
    ) -> None:
        self._catalog = catalog or StockCatalog()
        self._tag_factory = tag_factory
        self._settings = get_settings().stock

    @staticmethod
    def remaining_quantity(request: ProcurementRequest, item: RequestItem) -> float:
        """Approved (or requested) quantity not yet registered, floored at zero."""
        registered = request.partially_registered.get(item.id, 0)
        return max(0.0, request.target_quantity(item) - registered)

    def plan_from_request(
        self, request: ProcurementRequest, item: RequestItem
    ) -> RegistrationPlan:
        """Pre-fill registration rows for one request line."""
        remaining = self.remaining_quantity(request, item)
        plan = self._blank_plan(item.item_name, item.brand)
        plan.unit = item.unit
        plan.request_id = request.id
        plan.request_item_id = item.id
        plan.remaining_quantity = remaining

        count = int(remaining)
        if plan.is_measurement:
            container_unit = self._catalog.container_unit_for(item.item_name, item.brand)
            tag = self._tag_factory()
            if item.unit == container_unit:
                capacity = self._catalog.capacity_for(item.item_name, item.brand)
                plan.quantity = count
                plan.rows = [
                    RegistrationRow(
                        serial_number=f"AUTO-BATCH-{tag}-{i + 1}",
                        initial_balance=capacity,
                        current_balance=capacity,
                    )
                    for i in range(count)
                ]
            else:
                plan.quantity = 1
                plan.rows = [
                    RegistrationRow(
                        serial_number=f"AUTO-BATCH-{tag}",
                        initial_balance=remaining,
                        current_balance=remaining,
                    )
                ]
        else:
            plan.quantity = count
            plan.rows = [RegistrationRow() for _ in range(count)]

        if not plan.rows:
            plan.rows = [RegistrationRow()]

        logger.debug(
            "registration_prefilled",
            request_id=request.id,
            item_id=item.id,
            remaining=remaining,
            rows=len(plan.rows),
            is_measurement=plan.is_measurement,
        )
        return plan

    def plan_manual(self, item_name: str, brand: str) -> RegistrationPlan:
        """
        Start a manual registration.

        Measurement models start with one row at the catalog capacity.
        """
        plan = self._blank_plan(item_name, brand)
        plan.quantity = 1
        if plan.is_measurement:
            capacity = self._catalog.capacity_for(item_name, brand)
            plan.rows = [
                RegistrationRow(
                    serial_number=f"BATCH-{self._tag_factory()}",
                    initial_balance=capacity,
                    current_balance=capacity,
                )
            ]
        else:
            plan.rows = [RegistrationRow()]
        return plan

    def generate_measurement_rows(
        self, plan: RegistrationPlan, quantity: int, capacity: float
    ) -> RegistrationPlan:
        """Replace the rows with `quantity` containers of `capacity` each."""
        tag = self._tag_factory()
        rows = [
            RegistrationRow(
                serial_number=f"BATCH-{tag}-{i + 1}",
                initial_balance=capacity,
                current_balance=capacity,
            )
            for i in range(quantity)
        ]
        return plan.model_copy(update={"rows": rows, "quantity": quantity})

    def add_row(
        self, plan: RegistrationPlan
    ) -> tuple[RegistrationPlan, ValidationIssue | None]:
        """
        Append an empty row.

        Plans tied to a request cannot grow past the remaining quantity; in
        that case the plan comes back unchanged with an issue.
        """
        if plan.remaining_quantity is not None and len(plan.rows) >= plan.remaining_quantity:
            return plan, ValidationIssue(
                code="ROW_LIMIT_REACHED",
                field="rows",
                message="Row count already matches the remaining quantity",
            )
        rows = [*plan.rows, RegistrationRow()]
        return plan.model_copy(update={"rows": rows, "quantity": plan.quantity + 1}), None

    def remove_row(self, plan: RegistrationPlan, index: int) -> RegistrationPlan:
        if not 0 <= index < len(plan.rows):
            return plan
        rows = [row for i, row in enumerate(plan.rows) if i != index]
        return plan.model_copy(update={"rows": rows, "quantity": len(rows)})

    def current_stock_count(self, units: list[InventoryUnit], item_name: str, brand: str) -> float:
        """In-storage stock of a count model; 0 for anything else."""
        if self._catalog.bulk_type_for(item_name, brand) != BulkType.COUNT:
            return 0
        return sum(
            unit.current_balance or 1
            for unit in units
            if unit.name == item_name
            and unit.brand == brand
            and unit.status == AssetStatus.IN_STORAGE
        )

    def finalize(self, plan: RegistrationPlan) -> RegistrationPlan:
        """
        Normalize rows before validation: empty measurement plans get one
        container at capacity, and count rows are pinned to a balance of 1.
        """
        rows = list(plan.rows)
        if plan.is_measurement and not rows:
            capacity = self._catalog.capacity_for(plan.item_name, plan.brand)
            rows = [
                RegistrationRow(
                    serial_number=f"AUTO-{self._tag_factory()}",
                    initial_balance=capacity,
                    current_balance=capacity,
                )
            ]
        elif plan.is_count:
            rows = [
                row.model_copy(update={"initial_balance": 1, "current_balance": 1})
                for row in rows
            ] or [RegistrationRow(initial_balance=1, current_balance=1)]
        return plan.model_copy(update={"rows": rows})

    def validate(self, plan: RegistrationPlan) -> list[ValidationIssue]:
        """Collect every problem that should stop a registration."""
        issues: list[ValidationIssue] = []

        if not plan.quantity or plan.quantity <= 0 or math.isnan(plan.quantity):
            issues.append(
                ValidationIssue(
                    code="INVALID_QUANTITY",
                    field="quantity",
                    message="Quantity must be greater than 0",
                )
            )

        if plan.remaining_quantity is not None and len(plan.rows) > math.ceil(
            plan.remaining_quantity
        ):
            issues.append(
                ValidationIssue(
                    code="ROW_LIMIT_EXCEEDED",
                    field="rows",
                    message="More rows than the request has left to register",
                )
            )

        for index, row in enumerate(plan.rows):
            if plan.is_measurement and not (row.initial_balance and row.initial_balance > 0):
                issues.append(
                    ValidationIssue(
                        code="MISSING_INITIAL_BALANCE",
                        field="initial_balance",
                        message="Measurement rows need a positive initial balance",
                        row_index=index,
                    )
                )
            if plan.is_bulk and not _balance_in_range(row):
                issues.append(
                    ValidationIssue(
                        code="BALANCE_OUT_OF_RANGE",
                        field="current_balance",
                        message="Current balance must be between 0 and the initial balance",
                        row_index=index,
                    )
                )
            if not plan.is_count and not row.serial_number.strip():
                issues.append(
                    ValidationIssue(
                        code="MISSING_SERIAL_NUMBER",
                        field="serial_number",
                        message="Serial number is required for non-count items",
                        row_index=index,
                    )
                )
        return issues

    def build_units(
        self,
        plan: RegistrationPlan,
        recorded_by: str = "",
        po_number: str | None = None,
        purchase_price: float | None = None,
        id_factory: Callable[[], str] = _unit_id,
    ) -> list[InventoryUnit]:
        """
        Materialize a validated plan into in-storage units.

        Raises:
            MissingInitialBalanceError: If a measurement row has no capacity.
        """
        if plan.is_measurement:
            bulk_type: BulkType | None = BulkType.MEASUREMENT
        elif plan.is_bulk:
            bulk_type = BulkType.COUNT
        else:
            bulk_type = None

        units = []
        for index, row in enumerate(plan.rows):
            initial = row.initial_balance
            current = row.current_balance
            if plan.is_measurement:
                if not initial or initial <= 0:
                    raise MissingInitialBalanceError(index)
                current = initial if current is None else current
            elif not plan.is_bulk:
                initial = current = None

            units.append(
                InventoryUnit(
                    id=id_factory(),
                    name=plan.item_name,
                    brand=plan.brand,
                    category=plan.category,
                    type=plan.type,
                    tracking_method=TrackingMethod.BULK if plan.is_bulk else TrackingMethod.INDIVIDUAL,
                    bulk_type=bulk_type,
                    status=AssetStatus.IN_STORAGE,
                    condition=AssetCondition.BRAND_NEW,
                    location=get_settings().handover.warehouse_location,
                    serial_number=row.serial_number or None,
                    mac_address=row.mac_address or None,
                    po_number=po_number,
                    reference_number=plan.request_id,
                    purchase_price=purchase_price,
                    recorded_by=recorded_by,
                    initial_balance=initial,
                    current_balance=current,
                )
            )

        logger.info(
            "registration_units_built",
            item_name=plan.item_name,
            brand=plan.brand,
            units=len(units),
        )
        return units

    def _blank_plan(self, item_name: str, brand: str) -> RegistrationPlan:
        asset_type = self._catalog.find_type(item_name, brand)
        bulk_type = self._catalog.bulk_type_for(item_name, brand)
        return RegistrationPlan(
            item_name=item_name,
            brand=brand,
            category=asset_type.category if asset_type else "",
            type=asset_type.name if asset_type else "",
            is_bulk=bulk_type is not None,
            is_measurement=bulk_type == BulkType.MEASUREMENT,
        )
