"""
Backend record mapping.

The backend API speaks camelCase JSON with its own enum spellings and marks
split measurement remnants by convention (an id marker and a name suffix).
This module is the only place those conventions are read or written; the
core sees typed entities with an explicit is_fragment flag.
"""

from typing import Any

from fieldstock.config import StockSettings, get_logger, get_settings
from fieldstock.core.entities.documents import (
    AllocationTarget,
    ApprovalDecision,
    Dismantle,
    DismantleSource,
    Installation,
    InstallationAsset,
    InstallationSource,
    ItemApproval,
    LoanItem,
    LoanRequest,
    LoanSource,
    Maintenance,
    NewRequestSource,
    ProcurementRequest,
    RequestItem,
    SingleAssetSource,
    SourceDocument,
    UsedMaterial,
    User,
)
from fieldstock.core.entities.handover import (
    AssetUpdate,
    MovementType,
    SourceDocumentKind,
    SourceStatusUpdate,
)
from fieldstock.core.entities.inventory import (
    AssetCondition,
    AssetStatus,
    AssetType,
    BulkType,
    InventoryUnit,
    StandardItem,
    TrackingMethod,
)
from fieldstock.core.services.catalog import StockCatalog

logger = get_logger(__name__)


# --- Enum mappings -----------------------------------------------------------

BACKEND_TO_STATUS: dict[str, AssetStatus] = {
    "IN_STORAGE": AssetStatus.IN_STORAGE,
    "IN_USE": AssetStatus.IN_USE,
    "ON_LOAN": AssetStatus.IN_USE,
    "IN_CUSTODY": AssetStatus.IN_CUSTODY,
    "UNDER_REPAIR": AssetStatus.UNDER_REPAIR,
    "OUT_FOR_SERVICE": AssetStatus.OUT_FOR_REPAIR,
    "DAMAGED": AssetStatus.DAMAGED,
    "AWAITING_RETURN": AssetStatus.AWAITING_RETURN,
    "CONSUMED": AssetStatus.CONSUMED,
    "DISPOSED": AssetStatus.DECOMMISSIONED,
}

STATUS_TO_BACKEND: dict[AssetStatus, str] = {
    AssetStatus.IN_STORAGE: "IN_STORAGE",
    AssetStatus.IN_USE: "IN_USE",
    AssetStatus.IN_CUSTODY: "IN_CUSTODY",
    AssetStatus.UNDER_REPAIR: "UNDER_REPAIR",
    AssetStatus.OUT_FOR_REPAIR: "OUT_FOR_SERVICE",
    AssetStatus.DAMAGED: "DAMAGED",
    AssetStatus.AWAITING_RETURN: "AWAITING_RETURN",
    AssetStatus.CONSUMED: "CONSUMED",
    AssetStatus.DECOMMISSIONED: "DISPOSED",
}

BACKEND_TO_CONDITION: dict[str, AssetCondition] = {
    "BRAND_NEW": AssetCondition.BRAND_NEW,
    "GOOD": AssetCondition.GOOD,
    "USED_OKAY": AssetCondition.USED_OKAY,
    "MINOR_DAMAGE": AssetCondition.MINOR_DAMAGE,
    "MAJOR_DAMAGE": AssetCondition.MAJOR_DAMAGE,
    "BROKEN": AssetCondition.MAJOR_DAMAGE,
    "FOR_PARTS": AssetCondition.FOR_PARTS,
}

BACKEND_TO_MOVEMENT: dict[str, MovementType] = {
    "RECEIVED": MovementType.IN_PURCHASE,
    "ISSUED": MovementType.OUT_HANDOVER,
    "CONSUMED": MovementType.OUT_USAGE_CUSTODY,
    "ADJUSTED": MovementType.OUT_ADJUSTMENT,
    "TRANSFERRED": MovementType.OUT_HANDOVER,
    "RETURNED": MovementType.IN_RETURN,
    "DISPOSED": MovementType.OUT_BROKEN,
}

MOVEMENT_TO_BACKEND: dict[MovementType, str] = {
    MovementType.IN_PURCHASE: "RECEIVED",
    MovementType.IN_RETURN: "RETURNED",
    MovementType.OUT_INSTALLATION: "CONSUMED",
    MovementType.OUT_HANDOVER: "TRANSFERRED",
    MovementType.OUT_BROKEN: "DISPOSED",
    MovementType.OUT_ADJUSTMENT: "ADJUSTED",
    MovementType.OUT_USAGE_CUSTODY: "CONSUMED",
    MovementType.CONSUMED: "CONSUMED",
}

SOURCE_STATUS_TO_BACKEND: dict[str, str] = {
    "on_loan": "ON_LOAN",
    "completed": "COMPLETED",
}


def from_backend_status(value: str | None) -> AssetStatus:
    """Backend asset status; unknown values land in storage."""
    return BACKEND_TO_STATUS.get((value or "").upper(), AssetStatus.IN_STORAGE)


def to_backend_status(status: AssetStatus) -> str:
    return STATUS_TO_BACKEND.get(status, "IN_STORAGE")


def from_backend_condition(value: str | None) -> AssetCondition:
    """Backend condition; lowercase domain spellings are accepted too."""
    if not value:
        return AssetCondition.GOOD
    mapped = BACKEND_TO_CONDITION.get(value.upper())
    if mapped is not None:
        return mapped
    try:
        return AssetCondition(value.lower())
    except ValueError:
        return AssetCondition.GOOD


def to_backend_condition(condition: AssetCondition) -> str:
    return condition.value.upper()


def from_backend_movement_type(value: str | None) -> MovementType:
    return BACKEND_TO_MOVEMENT.get((value or "").upper(), MovementType.OUT_ADJUSTMENT)


def to_backend_movement_type(movement_type: MovementType) -> str:
    return MOVEMENT_TO_BACKEND[movement_type]


# --- Inventory units ---------------------------------------------------------


def _nested(record: dict[str, Any], *path: str) -> Any:
    value: Any = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _tracking(record: dict[str, Any]) -> tuple[TrackingMethod, BulkType | None]:
    raw_tracking = record.get("trackingMethod") or _nested(record, "model", "type", "trackingMethod")
    raw_bulk = record.get("bulkType") or _nested(record, "model", "bulkType")

    bulk_type = BulkType(raw_bulk.lower()) if raw_bulk else None
    if raw_tracking:
        tracking = TrackingMethod(raw_tracking.lower())
    elif bulk_type is not None:
        tracking = TrackingMethod.BULK
    elif record.get("initialBalance") is not None and record.get("currentBalance") is not None:
        # Untyped records carrying both balances are measured stock
        tracking, bulk_type = TrackingMethod.BULK, BulkType.MEASUREMENT
    else:
        tracking = TrackingMethod.INDIVIDUAL

    if tracking == TrackingMethod.INDIVIDUAL:
        bulk_type = None
    return tracking, bulk_type


def unit_from_record(
    record: dict[str, Any],
    settings: StockSettings | None = None,
    catalog: StockCatalog | None = None,
) -> InventoryUnit:
    """
    Build an InventoryUnit from a backend asset record.

    Split remnants are recognised by the id marker or the name suffix and
    come out with is_fragment set, the suffix stripped from the name, and
    parent_id pointing at the root unit. Bulk records without a bulk type
    take it from the catalog when one is given.
    """
    settings = settings or get_settings().stock
    unit_id = str(record["id"])
    name = record.get("name", "")

    is_fragment = (
        settings.fragment_id_marker in unit_id
        or name.endswith(settings.fragment_name_suffix)
    )
    if name.endswith(settings.fragment_name_suffix):
        name = name[: -len(settings.fragment_name_suffix)].strip()
    parent_id = record.get("parentId")
    if is_fragment and not parent_id and settings.fragment_id_marker in unit_id:
        parent_id = unit_id.split(settings.fragment_id_marker)[0]

    tracking, bulk_type = _tracking(record)
    if tracking == TrackingMethod.BULK and bulk_type is None and catalog is not None:
        bulk_type = catalog.bulk_type_for(name, record.get("brand") or "")
    data: dict[str, Any] = {
        "id": unit_id,
        "name": name,
        "brand": record.get("brand") or "",
        "category": record.get("category") or _nested(record, "model", "type", "category", "name") or "",
        "type": record.get("type") or _nested(record, "model", "type", "name") or "",
        "tracking_method": tracking,
        "bulk_type": bulk_type,
        "status": from_backend_status(record.get("status")),
        "condition": from_backend_condition(record.get("condition")),
        "current_user": record.get("currentUser"),
        "location": record.get("location"),
        "location_detail": record.get("locationDetail"),
        "serial_number": record.get("serialNumber"),
        "mac_address": record.get("macAddress"),
        "po_number": record.get("poNumber"),
        "reference_number": record.get("woRoIntNumber") or record.get("referenceNumber"),
        "purchase_price": record.get("purchasePrice"),
        "recorded_by": record.get("recordedBy") or "System",
        "initial_balance": record.get("initialBalance"),
        "current_balance": record.get("currentBalance"),
        "is_fragment": is_fragment,
        "parent_id": parent_id if is_fragment else None,
    }
    registered = record.get("registrationDate") or record.get("createdAt")
    if registered:
        data["registration_date"] = registered
    return InventoryUnit.model_validate(data)


def unit_to_record(unit: InventoryUnit, settings: StockSettings | None = None) -> dict[str, Any]:
    """Serialize a unit for creation; fragments get the legacy name suffix back."""
    settings = settings or get_settings().stock
    name = unit.name
    if unit.is_fragment and not name.endswith(settings.fragment_name_suffix):
        name = f"{name}{settings.fragment_name_suffix}"
    return {
        "id": unit.id,
        "name": name,
        "brand": unit.brand,
        "category": unit.category,
        "type": unit.type,
        "status": to_backend_status(unit.status),
        "condition": to_backend_condition(unit.condition),
        "currentUser": unit.current_user,
        "location": unit.location,
        "locationDetail": unit.location_detail,
        "serialNumber": unit.serial_number,
        "macAddress": unit.mac_address,
        "poNumber": unit.po_number,
        "woRoIntNumber": unit.reference_number,
        "purchasePrice": unit.purchase_price,
        "registrationDate": unit.registration_date.isoformat(),
        "recordedBy": unit.recorded_by,
        "initialBalance": unit.initial_balance,
        "currentBalance": unit.current_balance,
        "parentId": unit.parent_id,
    }


def unit_update_to_record(update: AssetUpdate) -> dict[str, Any]:
    """Partial update payload; only fields the update sets are present."""
    payload: dict[str, Any] = {}
    if update.status is not None:
        payload["status"] = to_backend_status(update.status)
    if update.clear_current_user:
        payload["currentUser"] = None
    elif update.current_user is not None:
        payload["currentUser"] = update.current_user
    if update.location is not None:
        payload["location"] = update.location
    if update.current_balance is not None:
        payload["currentBalance"] = update.current_balance
    return payload


def source_update_to_record(update: SourceStatusUpdate) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "status": SOURCE_STATUS_TO_BACKEND.get(update.new_status, update.new_status.upper()),
    }
    if update.handover_id:
        payload["handoverId"] = update.handover_id
    return payload


def source_update_path(update: SourceStatusUpdate) -> str:
    """Resource path the source status update is sent to."""
    if update.kind == SourceDocumentKind.LOAN_REQUEST:
        return f"/loan-requests/{update.reference_number}"
    return f"/requests/{update.reference_number}"


# --- Catalog and users -------------------------------------------------------


def asset_type_from_record(record: dict[str, Any], category: str = "") -> AssetType:
    tracking = (record.get("trackingMethod") or "individual").lower()
    return AssetType(
        id=record.get("id"),
        name=record["name"],
        category=category or record.get("category") or "",
        tracking_method=TrackingMethod(tracking),
        unit_of_measure=record.get("unitOfMeasure"),
        standard_items=[
            StandardItem(
                id=item.get("id"),
                name=item["name"],
                brand=item.get("brand") or "",
                bulk_type=BulkType(item["bulkType"].lower()) if item.get("bulkType") else None,
                unit_of_measure=item.get("unitOfMeasure"),
                base_unit_of_measure=item.get("baseUnitOfMeasure"),
                quantity_per_unit=item.get("quantityPerUnit"),
            )
            for item in record.get("standardItems") or []
        ],
    )


def asset_types_from_categories(categories: list[dict[str, Any]]) -> list[AssetType]:
    """Flatten backend categories (each with nested types) into AssetTypes."""
    return [
        asset_type_from_record(type_record, category=category.get("name", ""))
        for category in categories
        for type_record in category.get("types") or []
    ]


def user_from_record(record: dict[str, Any]) -> User:
    return User(
        id=record["id"],
        name=record["name"],
        role=record.get("role") or "Staff",
        division_id=record.get("divisionId"),
    )


# --- Source documents --------------------------------------------------------


def _person(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("name") or ""
    return value or ""


def procurement_request_from_record(record: dict[str, Any]) -> ProcurementRequest:
    order = record.get("order") or {}
    target = (order.get("allocationTarget") or "usage").lower()
    statuses = {
        int(item_id): ItemApproval(
            decision=ApprovalDecision(status["status"]),
            approved_quantity=status.get("approvedQuantity"),
            reason=status.get("reason"),
        )
        for item_id, status in (record.get("itemStatuses") or {}).items()
    }
    registered = {
        int(item_id): float(qty)
        for item_id, qty in (record.get("partiallyRegisteredItems") or {}).items()
    }
    return ProcurementRequest(
        id=str(record["id"]),
        doc_number=record.get("docNumber"),
        requester=_person(record.get("requester")),
        division=record.get("division") or "",
        request_date=record.get("requestDate"),
        order_type=order.get("type") or "Regular Stock",
        allocation_target=AllocationTarget(target),
        items=[
            RequestItem(
                id=item["id"],
                item_name=item["itemName"],
                brand=item.get("itemTypeBrand") or item.get("brand") or "",
                quantity=item["quantity"],
                unit=item.get("unit"),
                note=item.get("keterangan") or "",
            )
            for item in record.get("items") or []
        ],
        item_statuses=statuses,
        partially_registered=registered,
    )


def loan_request_from_record(record: dict[str, Any]) -> LoanRequest:
    assigned = record.get("assignedAssetIds")
    return LoanRequest(
        id=str(record["id"]),
        requester=_person(record.get("requester")),
        division=record.get("division") or "",
        items=[
            LoanItem(
                id=item["id"],
                item_name=item["itemName"],
                brand=item.get("brand") or "",
                quantity=item["quantity"],
                unit=item.get("unit"),
                note=item.get("keterangan") or "",
                return_date=item.get("returnDate"),
            )
            for item in record.get("items") or []
        ],
        assigned_asset_ids=(
            {int(k): list(v) for k, v in assigned.items()} if assigned else None
        ),
        notes=record.get("notes"),
    )


def _materials(record: dict[str, Any]) -> list[UsedMaterial]:
    return [
        UsedMaterial(
            material_asset_id=material.get("materialAssetId"),
            item_name=material["itemName"],
            brand=material.get("brand") or "",
            quantity=material["quantity"],
            unit=material.get("unit"),
        )
        for material in record.get("materialsUsed") or []
    ]


def installation_from_record(record: dict[str, Any]) -> Installation:
    return Installation(
        id=str(record["id"]),
        doc_number=record["docNumber"],
        installation_date=record.get("installationDate"),
        technician=_person(record.get("technician")),
        customer_id=str(record.get("customerId") or ""),
        customer_name=record.get("customerName") or "",
        assets_installed=[
            InstallationAsset(
                asset_id=asset["assetId"],
                asset_name=asset["assetName"],
                serial_number=asset.get("serialNumber"),
            )
            for asset in record.get("assetsInstalled") or []
        ],
        materials_used=_materials(record),
        notes=record.get("notes") or "",
    )


def maintenance_from_record(record: dict[str, Any]) -> Maintenance:
    return Maintenance(
        id=str(record["id"]),
        doc_number=record["docNumber"],
        maintenance_date=record.get("maintenanceDate"),
        technician=_person(record.get("technician")),
        customer_id=str(record.get("customerId") or ""),
        customer_name=record.get("customerName") or "",
        materials_used=_materials(record),
    )


def dismantle_from_record(record: dict[str, Any]) -> Dismantle:
    return Dismantle(
        id=str(record["id"]),
        doc_number=record["docNumber"],
        asset_id=record["assetId"],
        asset_name=record["assetName"],
        dismantle_date=record["dismantleDate"][:10],
        technician=_person(record.get("technician")),
        customer_id=str(record.get("customerId") or ""),
        customer_name=record.get("customerName") or "",
        retrieved_condition=from_backend_condition(record.get("retrievedCondition")),
        notes=record.get("notes"),
    )


def wrap_source_document(record: dict[str, Any] | None) -> SourceDocument | None:
    """
    Tag an untyped prefill record with its document kind.

    Backend records carry no kind field, so the kind is inferred from
    characteristic fields, checked in a fixed order. Records that match
    nothing map to None.
    """
    if not record:
        return None
    if "order" in record:
        return NewRequestSource(document=procurement_request_from_record(record))
    if "assignedAssetIds" in record:
        return LoanSource(document=loan_request_from_record(record))
    if "assetsInstalled" in record:
        return InstallationSource(document=installation_from_record(record))
    if "dismantleDate" in record:
        return DismantleSource(document=dismantle_from_record(record))
    if "id" in record and "category" in record:
        return SingleAssetSource(document=unit_from_record(record))

    logger.debug("source_record_unrecognized", keys=sorted(record)[:10])
    return None
