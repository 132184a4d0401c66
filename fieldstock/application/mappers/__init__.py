"""Translation between backend API records and core entities."""

from fieldstock.application.mappers.backend import (
    asset_types_from_categories,
    from_backend_condition,
    from_backend_movement_type,
    from_backend_status,
    installation_from_record,
    maintenance_from_record,
    source_update_path,
    source_update_to_record,
    to_backend_condition,
    to_backend_movement_type,
    to_backend_status,
    unit_from_record,
    unit_to_record,
    unit_update_to_record,
    user_from_record,
    wrap_source_document,
)

__all__ = [
    "from_backend_status",
    "to_backend_status",
    "from_backend_condition",
    "to_backend_condition",
    "from_backend_movement_type",
    "to_backend_movement_type",
    "unit_from_record",
    "unit_to_record",
    "unit_update_to_record",
    "source_update_to_record",
    "source_update_path",
    "asset_types_from_categories",
    "user_from_record",
    "installation_from_record",
    "maintenance_from_record",
    "wrap_source_document",
]
