"""Tests for ResolveHandoverUseCase and ExecuteHandoverUseCase."""

from unittest.mock import AsyncMock

import pytest

from fieldstock.application.dto.requests import ExecuteHandoverRequest, ResolveHandoverRequest
from fieldstock.application.use_cases.execute_handover import ExecuteHandoverUseCase
from fieldstock.application.use_cases.resolve_handover import ResolveHandoverUseCase
from fieldstock.core.entities.handover import Handover, HandoverLineItem
from fieldstock.core.entities.inventory import AssetStatus
from fieldstock.core.exceptions import InventoryUnitNotFoundError


@pytest.fixture
def mock_inventory_source(make_unit, make_drum, users, asset_types):
    source = AsyncMock()
    source.list_units.return_value = [
        make_unit("R-1", status=AssetStatus.IN_USE, current_user="Budi"),
        make_drum("D-1", balance=1000, capacity=2000),
    ]
    source.list_users.return_value = users
    source.list_asset_types.return_value = asset_types
    return source


class TestResolveHandoverUseCase:
    async def test_unrecognized_record(self, mock_inventory_source):
        use_case = ResolveHandoverUseCase(inventory_source=mock_inventory_source)
        result = await use_case.execute(ResolveHandoverRequest(source={"unexpected": True}))

        assert not result.resolved
        assert result.kind is None
        mock_inventory_source.list_units.assert_not_called()

    async def test_no_source(self, mock_inventory_source):
        use_case = ResolveHandoverUseCase(inventory_source=mock_inventory_source)
        result = await use_case.execute(ResolveHandoverRequest())
        assert result.state is None

    async def test_dismantle_goes_to_current_user(self, mock_inventory_source):
        use_case = ResolveHandoverUseCase(inventory_source=mock_inventory_source)
        result = await use_case.execute(
            ResolveHandoverRequest(
                source={
                    "id": "DS-1",
                    "docNumber": "DSM-001",
                    "assetId": "R-1",
                    "assetName": "Router",
                    "dismantleDate": "2024-03-01",
                    "technician": "Andi",
                },
                current_user_id=2,
            )
        )

        assert result.kind == "dismantle"
        assert result.state.recipient == "Sari"
        assert result.state.division_id == "1"
        assert result.state.items[0].brand == "Mikrotik"
        assert result.state.target_asset_status == AssetStatus.IN_STORAGE

    async def test_request_uses_catalog_units(self, mock_inventory_source, make_drum):
        """Drums procured for the request fill the line in container units."""
        mock_inventory_source.list_units.return_value = [
            make_drum("D-5", balance=2000, capacity=2000, reference_number="REQ-3"),
        ]
        use_case = ResolveHandoverUseCase(inventory_source=mock_inventory_source)
        result = await use_case.execute(
            ResolveHandoverRequest(
                source={
                    "id": "REQ-3",
                    "requester": "Budi",
                    "order": {"type": "Regular Stock"},
                    "items": [
                        {"id": 1, "itemName": "Kabel Fiber", "itemTypeBrand": "FiberHome", "quantity": 1, "unit": "Drum"}
                    ],
                }
            )
        )

        [line] = result.state.items
        assert line.asset_id == "D-5"
        assert line.unit == "Drum"
        assert line.is_locked


class TestExecuteHandoverUseCase:
    async def test_records_for_partial_take_and_loan(self, mock_inventory_source):
        handover = Handover(
            id="HO-1",
            doc_number="HO-2024-001",
            recipient="Andi",
            reference_number="RL-4",
            items=[
                HandoverLineItem(asset_id="R-1", item_name="Router"),
                HandoverLineItem(asset_id="D-1", item_name="Kabel Fiber", quantity=250, unit="Meter"),
            ],
        )
        use_case = ExecuteHandoverUseCase(inventory_source=mock_inventory_source)
        result = await use_case.execute(
            ExecuteHandoverRequest(handover=handover, target_status=AssetStatus.IN_CUSTODY, actor="Sari")
        )
        records = use_case.to_records(result)

        assert result.doc_number == "HO-2024-001"
        assert records["updates"]["D-1"] == {"currentBalance": 750}
        assert records["updates"]["R-1"]["status"] == "IN_CUSTODY"
        assert records["updates"]["R-1"]["currentUser"] == "Andi"
        [created] = records["create"]
        assert created["name"] == "Kabel Fiber (Potongan)"
        assert created["currentBalance"] == 250
        assert records["source"] == {
            "path": "/loan-requests/RL-4",
            "payload": {"status": "ON_LOAN", "handoverId": "HO-1"},
        }

    async def test_strict_unknown_unit(self, mock_inventory_source):
        handover = Handover(
            doc_number="HO-2024-002",
            recipient="Andi",
            items=[HandoverLineItem(asset_id="NOPE", item_name="Router")],
        )
        use_case = ExecuteHandoverUseCase(inventory_source=mock_inventory_source)
        with pytest.raises(InventoryUnitNotFoundError):
            await use_case.execute(ExecuteHandoverRequest(handover=handover, strict=True))
