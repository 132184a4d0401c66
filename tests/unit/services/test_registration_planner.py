"""Unit tests for RegistrationPlanner."""

import pytest

from fieldstock.core.entities.documents import (
    ApprovalDecision,
    ItemApproval,
    ProcurementRequest,
    RequestItem,
)
from fieldstock.core.entities.inventory import (
    AssetCondition,
    AssetStatus,
    BulkType,
    TrackingMethod,
)
from fieldstock.core.entities.stock import RegistrationRow
from fieldstock.core.exceptions import MissingInitialBalanceError
from fieldstock.core.services.registration import RegistrationPlanner


@pytest.fixture
def planner(catalog):
    return RegistrationPlanner(catalog, tag_factory=lambda: "TAG01")


def _request(item: RequestItem, **kwargs) -> ProcurementRequest:
    return ProcurementRequest(id="REQ-9", requester="Budi", items=[item], **kwargs)


class TestPlanFromRequest:
    def test_container_units_expand_to_rows(self, planner):
        item = RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=3, unit="Drum")
        plan = planner.plan_from_request(_request(item), item)

        assert plan.is_measurement
        assert plan.quantity == 3
        assert [row.serial_number for row in plan.rows] == [
            "AUTO-BATCH-TAG01-1",
            "AUTO-BATCH-TAG01-2",
            "AUTO-BATCH-TAG01-3",
        ]
        assert all(row.initial_balance == 2000 for row in plan.rows)
        assert plan.request_id == "REQ-9"
        assert plan.category == "Material"
        assert plan.type == "Kabel"

    def test_base_units_collapse_to_one_row(self, planner):
        item = RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=750, unit="Meter")
        plan = planner.plan_from_request(_request(item), item)

        [row] = plan.rows
        assert plan.quantity == 1
        assert row.initial_balance == row.current_balance == 750

    def test_already_registered_quantity_subtracted(self, planner):
        item = RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=5)
        request = _request(item, partially_registered={1: 3})
        plan = planner.plan_from_request(request, item)
        assert len(plan.rows) == 2
        assert plan.remaining_quantity == 2

    def test_approved_quantity_wins(self, planner):
        item = RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=5)
        request = _request(
            item,
            item_statuses={1: ItemApproval(decision=ApprovalDecision.PARTIAL, approved_quantity=2)},
        )
        assert planner.remaining_quantity(request, item) == 2

    def test_fully_registered_keeps_one_empty_row(self, planner):
        item = RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=2)
        plan = planner.plan_from_request(_request(item, partially_registered={1: 4}), item)
        assert plan.remaining_quantity == 0
        assert len(plan.rows) == 1


class TestManualPlans:
    def test_manual_measurement_starts_at_capacity(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        [row] = plan.rows
        assert row.serial_number == "BATCH-TAG01"
        assert row.initial_balance == 2000

    def test_manual_unknown_model_is_individual(self, planner):
        plan = planner.plan_manual("Laptop", "Lenovo")
        assert not plan.is_bulk
        assert plan.rows == [RegistrationRow()]

    def test_generate_measurement_rows(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        plan = planner.generate_measurement_rows(plan, 2, 500)
        assert plan.quantity == 2
        assert [row.serial_number for row in plan.rows] == ["BATCH-TAG01-1", "BATCH-TAG01-2"]
        assert all(row.current_balance == 500 for row in plan.rows)


class TestRowEditing:
    def test_add_row_blocked_at_remaining_quantity(self, planner):
        item = RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=2)
        plan = planner.plan_from_request(_request(item), item)

        same, issue = planner.add_row(plan)
        assert same is plan
        assert issue.code == "ROW_LIMIT_REACHED"

    def test_add_row_on_manual_plan(self, planner):
        plan, issue = planner.add_row(planner.plan_manual("Router", "Mikrotik"))
        assert issue is None
        assert len(plan.rows) == 2
        assert plan.quantity == 2

    def test_remove_row(self, planner):
        plan, _ = planner.add_row(planner.plan_manual("Router", "Mikrotik"))
        plan = planner.remove_row(plan, 0)
        assert len(plan.rows) == 1

    def test_remove_row_out_of_range_is_noop(self, planner):
        plan = planner.plan_manual("Router", "Mikrotik")
        assert planner.remove_row(plan, 5) is plan


class TestCurrentStockCount:
    def test_counts_count_models_in_storage(self, planner, make_connector):
        units = [
            make_connector("C-1"),
            make_connector("C-2", current_balance=10, initial_balance=10),
            make_connector("C-3", status=AssetStatus.IN_USE),
        ]
        assert planner.current_stock_count(units, "Konektor SC", "Generic") == 11

    def test_non_count_models_report_zero(self, planner, make_drum):
        assert planner.current_stock_count([make_drum("D-1")], "Kabel Fiber", "FiberHome") == 0


class TestFinalizeAndValidate:
    def test_empty_measurement_plan_gets_one_container(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome").model_copy(update={"rows": []})
        [row] = planner.finalize(plan).rows
        assert row.serial_number == "AUTO-TAG01"
        assert row.initial_balance == 2000

    def test_count_rows_pinned_to_one(self, planner):
        plan = planner.plan_manual("Konektor SC", "Generic")
        plan = plan.model_copy(update={"rows": [RegistrationRow(initial_balance=7, current_balance=3)]})
        [row] = planner.finalize(plan).rows
        assert row.initial_balance == row.current_balance == 1

    def test_missing_serial_for_individual(self, planner):
        plan = planner.finalize(planner.plan_manual("Router", "Mikrotik"))
        codes = [issue.code for issue in planner.validate(plan)]
        assert codes == ["MISSING_SERIAL_NUMBER"]

    def test_count_rows_need_no_serial(self, planner):
        plan = planner.finalize(planner.plan_manual("Konektor SC", "Generic"))
        assert planner.validate(plan) == []

    def test_measurement_row_without_balance(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        plan = plan.model_copy(update={"rows": [RegistrationRow(serial_number="B-1")]})
        [issue] = planner.validate(plan)
        assert issue.code == "MISSING_INITIAL_BALANCE"
        assert issue.row_index == 0

    def test_current_balance_above_initial(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        plan = plan.model_copy(
            update={"rows": [RegistrationRow(serial_number="B-1", initial_balance=100, current_balance=150)]}
        )
        [issue] = planner.validate(planner.finalize(plan))
        assert issue.code == "BALANCE_OUT_OF_RANGE"
        assert issue.row_index == 0

    def test_current_balance_within_initial(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        plan = plan.model_copy(
            update={"rows": [RegistrationRow(serial_number="B-1", initial_balance=100, current_balance=40)]}
        )
        assert planner.validate(plan) == []

    def test_zero_quantity(self, planner):
        plan = planner.plan_manual("Konektor SC", "Generic").model_copy(update={"quantity": 0})
        assert [i.code for i in planner.validate(plan)] == ["INVALID_QUANTITY"]


class TestBuildUnits:
    def test_measurement_units(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        ids = iter(["AST-1"])
        [unit] = planner.build_units(
            plan, recorded_by="Sari", po_number="PO-1", purchase_price=500_000, id_factory=lambda: next(ids)
        )
        assert unit.id == "AST-1"
        assert unit.tracking_method == TrackingMethod.BULK
        assert unit.bulk_type == BulkType.MEASUREMENT
        assert unit.initial_balance == unit.current_balance == 2000
        assert unit.status == AssetStatus.IN_STORAGE
        assert unit.condition == AssetCondition.BRAND_NEW
        assert unit.location == "Gudang Inventori"
        assert unit.recorded_by == "Sari"
        assert unit.po_number == "PO-1"

    def test_individual_units_have_no_balance(self, planner):
        plan = planner.plan_manual("Router", "Mikrotik")
        plan = plan.model_copy(update={"rows": [RegistrationRow(serial_number="SN-1", mac_address="AA:BB")]})
        [unit] = planner.build_units(plan)
        assert unit.tracking_method == TrackingMethod.INDIVIDUAL
        assert unit.bulk_type is None
        assert unit.initial_balance is None
        assert unit.serial_number == "SN-1"
        assert unit.mac_address == "AA:BB"

    def test_request_reference_carried(self, planner):
        item = RequestItem(id=1, item_name="Konektor SC", brand="Generic", quantity=2, unit="Pcs")
        plan = planner.finalize(planner.plan_from_request(_request(item), item))
        units = planner.build_units(plan)
        assert len(units) == 2
        assert all(u.reference_number == "REQ-9" for u in units)
        assert all(u.bulk_type == BulkType.COUNT for u in units)

    def test_measurement_row_without_balance_raises(self, planner):
        plan = planner.plan_manual("Kabel Fiber", "FiberHome")
        plan = plan.model_copy(update={"rows": [RegistrationRow(serial_number="B-1")]})
        with pytest.raises(MissingInitialBalanceError):
            planner.build_units(plan)


class TestRowLimit:
    def test_rows_beyond_remaining_rejected(self, planner):
        item = RequestItem(id=1, item_name="Konektor SC", brand="Generic", quantity=2)
        plan = planner.plan_from_request(_request(item), item)
        plan = plan.model_copy(update={"rows": [*plan.rows, RegistrationRow()]})
        codes = [issue.code for issue in planner.validate(planner.finalize(plan))]
        assert codes == ["ROW_LIMIT_EXCEEDED"]

    def test_single_base_unit_row_within_limit(self, planner):
        item = RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=0.5, unit="Meter")
        plan = planner.plan_from_request(_request(item), item)
        assert planner.validate(plan) == []
