"""
Standard item catalog lookups.

Answers "how does this (name, brand) behave" from catalog types and
their standard items, with safe defaults when the catalog is silent.
"""

from fieldstock.config import get_settings
from fieldstock.core.entities.inventory import (
    AssetType,
    BulkType,
    StandardItem,
    TrackingMethod,
)
from fieldstock.core.services.balance import resolve_unit


class StockCatalog:
    """
    In-memory index over catalog types.

    Lookups are exact on (name, brand), matching how standard items are
    chosen on the registration form.
    """

    def __init__(self, asset_types: list[AssetType] | None = None) -> None:
        self._types = asset_types or []
        self._index: dict[tuple[str, str], tuple[AssetType, StandardItem]] = {}
        for asset_type in self._types:
            for model in asset_type.standard_items:
                self._index.setdefault(model.model_key, (asset_type, model))
        self._settings = get_settings().stock

    @property
    def asset_types(self) -> list[AssetType]:
        return list(self._types)

    def find_model(self, name: str, brand: str) -> StandardItem | None:
        entry = self._index.get((name, brand))
        return entry[1] if entry else None

    def find_type(self, name: str, brand: str) -> AssetType | None:
        entry = self._index.get((name, brand))
        return entry[0] if entry else None

    def find_type_by_name(self, type_name: str) -> AssetType | None:
        for asset_type in self._types:
            if asset_type.name == type_name:
                return asset_type
        return None

    def tracking_method_for(self, name: str, brand: str) -> TrackingMethod:
        asset_type = self.find_type(name, brand)
        if asset_type is None:
            return TrackingMethod.INDIVIDUAL
        return asset_type.tracking_method

    def bulk_type_for(self, name: str, brand: str) -> BulkType | None:
        """
        Bulk behaviour of a model.

        None for individual (or unknown) models; bulk models without an
        explicit bulk_type are treated as count.
        """
        if self.tracking_method_for(name, brand) != TrackingMethod.BULK:
            return None
        model = self.find_model(name, brand)
        if model is None or model.bulk_type is None:
            return BulkType.COUNT
        return model.bulk_type

    def is_measurement(self, name: str, brand: str) -> bool:
        return self.bulk_type_for(name, brand) == BulkType.MEASUREMENT

    def container_unit_for(self, name: str, brand: str) -> str:
        model = self.find_model(name, brand)
        return resolve_unit(
            model.unit_of_measure if model else None,
            default=self._settings.default_container_unit,
        )

    def base_unit_for(self, name: str, brand: str) -> str:
        model = self.find_model(name, brand)
        return resolve_unit(
            model.base_unit_of_measure if model else None,
            default=self._settings.default_base_unit,
        )

    def capacity_for(self, name: str, brand: str) -> float:
        model = self.find_model(name, brand)
        if model is not None and model.quantity_per_unit:
            return model.quantity_per_unit
        return self._settings.default_measurement_capacity

    def display_unit_for(self, name: str, brand: str) -> str:
        """Unit shown next to a balance: base unit for measurement models."""
        model = self.find_model(name, brand)
        asset_type = self.find_type(name, brand)
        if model is not None and model.bulk_type == BulkType.MEASUREMENT:
            return resolve_unit(
                model.base_unit_of_measure,
                default=self._settings.default_base_unit,
            )
        return resolve_unit(
            model.unit_of_measure if model else None,
            asset_type.unit_of_measure if asset_type else None,
            default=self._settings.default_unit,
        )
