"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from fieldstock.config import reset_settings
from fieldstock.core.entities import (
    AssetStatus,
    AssetType,
    BulkType,
    InventoryUnit,
    StandardItem,
    TrackingMethod,
    User,
)
from fieldstock.core.services.catalog import StockCatalog

BASE_DATE = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test sees settings rebuilt from the current environment."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_unit() -> Callable[..., InventoryUnit]:
    """Factory for individually tracked units, registered `days` after a base date."""

    def _make(unit_id: str, name: str = "Router", brand: str = "Mikrotik", days: int = 0, **kwargs):
        kwargs.setdefault("category", "Perangkat")
        return InventoryUnit(
            id=unit_id,
            name=name,
            brand=brand,
            registration_date=BASE_DATE + timedelta(days=days),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_drum() -> Callable[..., InventoryUnit]:
    """Factory for measured cable drums."""

    def _make(
        unit_id: str,
        balance: float | None = 1000.0,
        capacity: float | None = 1000.0,
        days: int = 0,
        **kwargs,
    ):
        kwargs.setdefault("name", "Kabel Fiber")
        kwargs.setdefault("brand", "FiberHome")
        kwargs.setdefault("category", "Material")
        kwargs.setdefault("status", AssetStatus.IN_STORAGE)
        return InventoryUnit(
            id=unit_id,
            tracking_method=TrackingMethod.BULK,
            bulk_type=BulkType.MEASUREMENT,
            initial_balance=capacity,
            current_balance=balance,
            registration_date=BASE_DATE + timedelta(days=days),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_connector() -> Callable[..., InventoryUnit]:
    """Factory for counted connectors."""

    def _make(unit_id: str, days: int = 0, **kwargs):
        kwargs.setdefault("name", "Konektor SC")
        kwargs.setdefault("brand", "Generic")
        kwargs.setdefault("category", "Material")
        return InventoryUnit(
            id=unit_id,
            tracking_method=TrackingMethod.BULK,
            bulk_type=BulkType.COUNT,
            registration_date=BASE_DATE + timedelta(days=days),
            **kwargs,
        )

    return _make


@pytest.fixture
def asset_types() -> list[AssetType]:
    """Catalog with one measured, one counted and one individual model."""
    return [
        AssetType(
            id=1,
            name="Kabel",
            category="Material",
            tracking_method=TrackingMethod.BULK,
            standard_items=[
                StandardItem(
                    id=10,
                    name="Kabel Fiber",
                    brand="FiberHome",
                    bulk_type=BulkType.MEASUREMENT,
                    unit_of_measure="Drum",
                    base_unit_of_measure="Meter",
                    quantity_per_unit=2000,
                ),
            ],
        ),
        AssetType(
            id=2,
            name="Konektor",
            category="Material",
            tracking_method=TrackingMethod.BULK,
            unit_of_measure="Pcs",
            standard_items=[
                StandardItem(id=20, name="Konektor SC", brand="Generic", bulk_type=BulkType.COUNT),
            ],
        ),
        AssetType(
            id=3,
            name="Router",
            category="Perangkat",
            tracking_method=TrackingMethod.INDIVIDUAL,
            standard_items=[StandardItem(id=30, name="Router", brand="Mikrotik")],
        ),
    ]


@pytest.fixture
def catalog(asset_types) -> StockCatalog:
    return StockCatalog(asset_types)


@pytest.fixture
def users() -> list[User]:
    return [
        User(id=1, name="Budi", role="Staff", division_id=3),
        User(id=2, name="Sari", role="Admin Logistik", division_id=1),
        User(id=3, name="Andi", role="Staff", division_id=None),
    ]
