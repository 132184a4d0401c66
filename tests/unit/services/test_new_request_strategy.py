"""Unit tests for the new procurement request handover strategy."""

import pytest

from fieldstock.core.entities.documents import (
    ApprovalDecision,
    ItemApproval,
    ProcurementRequest,
    RequestItem,
)
from fieldstock.core.entities.inventory import AssetStatus
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.handover.strategies import (
    StrategyContext,
    resolve_request_line,
    resolve_request_lines,
    strategy_from_new_request,
)
from fieldstock.core.services.handover.strategies.new_request import procured_units


def _request(items, **kwargs) -> ProcurementRequest:
    return ProcurementRequest(id="REQ-100", requester="Budi", items=items, **kwargs)


class TestProcuredUnits:
    def test_matches_reference_or_po_in_storage(self, make_unit):
        request = _request([])
        units = [
            make_unit("R-1", reference_number="REQ-100"),
            make_unit("R-2", po_number="REQ-100"),
            make_unit("R-3", reference_number="REQ-100", status=AssetStatus.IN_USE),
            make_unit("R-4", reference_number="REQ-999"),
        ]
        assert [u.id for u in procured_units(request, units)] == ["R-1", "R-2"]


class TestMeasurementLines:
    def test_container_request_split_per_drum(self, make_drum, catalog, users):
        """Two procured drums cover an approved quantity of 2 Drum exactly."""
        request = _request(
            [RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=3, unit="Drum")],
            item_statuses={1: ItemApproval(decision=ApprovalDecision.PARTIAL, approved_quantity=2)},
        )
        units = [
            make_drum("D-1", balance=2000, capacity=2000, reference_number="REQ-100"),
            make_drum("D-2", balance=2000, capacity=2000, reference_number="REQ-100"),
        ]
        ctx = StrategyContext(units=units, users=users, catalog=catalog)

        state = strategy_from_new_request(request, ctx)

        assert len(state.items) == 2
        assert all(line.is_locked for line in state.items)
        assert all(line.quantity == 1 for line in state.items)
        assert all(line.unit == "Drum" for line in state.items)
        assert [line.asset_id for line in state.items] == ["D-1", "D-2"]
        assert not any(line.is_shortfall for line in state.items)

    def test_container_count_without_catalog(self, make_drum):
        """Two procured drums fill a request for 2 Drum even with no catalog entry."""
        request = _request(
            [RequestItem(id=1, item_name="ADSS 24 Core", brand="Voksel", quantity=2, unit="Drum")]
        )
        units = [
            make_drum("D-1", name="ADSS 24 Core", brand="Voksel", balance=2000, capacity=2000, reference_number="REQ-100"),
            make_drum("D-2", name="ADSS 24 Core", brand="Voksel", balance=2000, capacity=2000, reference_number="REQ-100"),
        ]

        [resolution] = resolve_request_lines(request, StrategyContext(units=units))

        assert resolution.is_measurement
        assert [(line.asset_id, line.quantity, line.unit, line.is_locked) for line in resolution.lines] == [
            ("D-1", 1, "Hasbal", True),
            ("D-2", 1, "Hasbal", True),
        ]
        assert resolution.fulfilled == 2
        assert resolution.remaining == 0

    def test_every_procured_drum_locked_for_base_unit_request(self, make_drum, catalog):
        """Procured drums are all handed over; fulfilled stops at the target."""
        request = _request(
            [RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=500, unit="Meter")]
        )
        units = [
            make_drum("D-1", balance=2000, capacity=2000, reference_number="REQ-100"),
            make_drum("D-2", balance=2000, capacity=2000, reference_number="REQ-100"),
        ]

        [resolution] = resolve_request_lines(request, StrategyContext(units=units, catalog=catalog))

        assert [line.asset_id for line in resolution.lines] == ["D-1", "D-2"]
        assert resolution.fulfilled == 500
        assert resolution.remaining == 0

    def test_base_unit_shortfall_single_line(self, make_drum, catalog):
        """A request in meters beyond procured drums leaves one shortfall line."""
        request = _request(
            [RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=3000, unit="Meter")]
        )
        units = [make_drum("D-1", balance=2000, capacity=2000, reference_number="REQ-100")]
        ctx = StrategyContext(units=units, catalog=catalog)

        [resolution] = resolve_request_lines(request, ctx)

        assert resolution.is_measurement
        assert resolution.fulfilled == 2000
        assert resolution.remaining == 1000
        locked, shortfall = resolution.lines
        assert locked.asset_id == "D-1" and locked.is_locked
        assert shortfall.is_shortfall and not shortfall.is_locked
        assert shortfall.quantity == 1000
        assert shortfall.unit == "Meter"
        assert shortfall.condition_notes == "Ambil dari Stok Gudang"

    def test_drift_absorbed(self, make_drum, catalog):
        request = _request(
            [RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=100.00005, unit="Meter")]
        )
        units = [make_drum("D-1", balance=100, capacity=2000, reference_number="REQ-100")]
        [resolution] = resolve_request_lines(request, StrategyContext(units=units, catalog=catalog))
        assert resolution.remaining == 0
        assert len(resolution.lines) == 1

    def test_measurement_detected_from_catalog_without_procured_units(self, catalog):
        request = _request(
            [RequestItem(id=1, item_name="Kabel Fiber", brand="FiberHome", quantity=500, unit="Meter")]
        )
        [resolution] = resolve_request_lines(request, StrategyContext(units=[], catalog=catalog))
        assert resolution.is_measurement
        assert [line.quantity for line in resolution.lines] == [500]


class TestCountLines:
    def test_count_shortfall_one_line_per_unit(self, make_unit):
        request = _request(
            [RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=5, unit="Unit")],
            item_statuses={1: ItemApproval(decision=ApprovalDecision.APPROVED, approved_quantity=5)},
        )
        units = [
            make_unit("R-1", reference_number="REQ-100"),
            make_unit("R-2", reference_number="REQ-100"),
        ]
        state = strategy_from_new_request(request, StrategyContext(units=units))

        locked = [line for line in state.items if line.is_locked]
        open_lines = [line for line in state.items if not line.is_locked]
        assert [line.asset_id for line in locked] == ["R-1", "R-2"]
        assert len(open_lines) == 3
        assert all(line.quantity == 1 and line.is_shortfall for line in open_lines)

    def test_default_unit_label(self, make_unit):
        request = _request([RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=1)])
        units = [make_unit("R-1", reference_number="REQ-100")]
        state = strategy_from_new_request(request, StrategyContext(units=units))
        assert state.items[0].unit == "Unit"
        assert state.items[0].condition_notes == "Baru (Pengadaan)"

    def test_name_and_brand_match_case_insensitively(self, make_unit):
        request = _request([RequestItem(id=1, item_name="ROUTER", brand="mikrotik", quantity=1)])
        units = [make_unit("R-1", reference_number="REQ-100")]
        state = strategy_from_new_request(request, StrategyContext(units=units))
        assert state.items[0].asset_id == "R-1"


class TestResolutionPass:
    def test_unit_used_by_one_line_only(self, make_unit):
        """Two lines for the same model never share a procured unit."""
        request = _request(
            [
                RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=1),
                RequestItem(id=2, item_name="Router", brand="Mikrotik", quantity=1),
            ]
        )
        units = [
            make_unit("R-1", reference_number="REQ-100"),
            make_unit("R-2", reference_number="REQ-100"),
        ]
        first, second = resolve_request_lines(request, StrategyContext(units=units))
        assert [line.asset_id for line in first.lines] == ["R-1"]
        assert [line.asset_id for line in second.lines] == ["R-2"]

    def test_resolve_line_extends_used_set(self, make_unit):
        request = _request([RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=1)])
        units = [make_unit("R-1", reference_number="REQ-100")]
        ctx = StrategyContext(units=units)
        resolution, used = resolve_request_line(request, request.items[0], units, frozenset(), ctx)
        assert used == frozenset({"R-1"})
        again, used_again = resolve_request_line(request, request.items[0], units, used, ctx)
        assert again.lines[0].is_shortfall
        assert used_again == used

    def test_rejected_lines_skipped(self, make_unit):
        request = _request(
            [
                RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=1),
                RequestItem(id=2, item_name="Switch", brand="TP-Link", quantity=4),
            ],
            item_statuses={2: ItemApproval(decision=ApprovalDecision.REJECTED)},
        )
        resolutions = resolve_request_lines(request, StrategyContext(units=[]))
        assert [r.item.id for r in resolutions] == [1]

    @pytest.mark.parametrize("procured", [0, 1, 3, 6])
    def test_fulfilled_plus_remaining_equals_target(self, make_unit, procured):
        request = _request([RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=4)])
        units = [make_unit(f"R-{i}", reference_number="REQ-100") for i in range(procured)]
        [resolution] = resolve_request_lines(request, StrategyContext(units=units))
        assert resolution.remaining >= 0
        assert resolution.fulfilled + resolution.remaining == pytest.approx(4)

    def test_resolution_is_repeatable(self, make_unit, make_drum, catalog, users):
        request = _request(
            [
                RequestItem(id=1, item_name="Router", brand="Mikrotik", quantity=3),
                RequestItem(id=2, item_name="Kabel Fiber", brand="FiberHome", quantity=2500, unit="Meter"),
            ]
        )
        units = [
            make_unit("R-1", reference_number="REQ-100"),
            make_drum("D-1", balance=2000, capacity=2000, po_number="REQ-100"),
        ]
        ctx = StrategyContext(units=units, users=users, catalog=catalog)
        assert strategy_from_new_request(request, ctx) == strategy_from_new_request(request, ctx)


class TestInitialState:
    def test_header_fields(self, users):
        request = _request([])
        state = strategy_from_new_request(request, StrategyContext(units=[], users=users))
        assert state.recipient == "Budi"
        assert state.division_id == "3"
        assert state.reference_number == "REQ-100"
        assert state.notes == "Serah terima aset untuk Request #REQ-100."
        assert state.is_locked is False
        assert state.target_asset_status == AssetStatus.IN_USE

    def test_unknown_requester_has_blank_division(self):
        state = strategy_from_new_request(_request([]), StrategyContext(units=[], catalog=StockCatalog()))
        assert state.division_id == ""
