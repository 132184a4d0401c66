"""Core domain entities."""

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
    Handover,
    HandoverExecutionPlan,
    HandoverInitialState,
    HandoverLineItem,
    MovementType,
    SourceDocumentKind,
    SourceStatusUpdate,
    StockMovement,
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
from fieldstock.core.entities.stock import (
    AllocationCandidate,
    AllocationQuery,
    AllocationResult,
    Consumption,
    ConsumptionPlan,
    RegistrationPlan,
    RegistrationRow,
    RestockDraft,
    RestockLine,
    SourceMode,
    StockAlerts,
    StockAvailability,
    StockLevel,
    StockOverviewRow,
    StockSummary,
    ValidationIssue,
)

__all__ = [
    # Inventory entities
    "AssetStatus",
    "AssetCondition",
    "TrackingMethod",
    "BulkType",
    "InventoryUnit",
    "StandardItem",
    "AssetType",
    # Source documents
    "User",
    "ApprovalDecision",
    "AllocationTarget",
    "ItemApproval",
    "RequestItem",
    "ProcurementRequest",
    "LoanItem",
    "LoanRequest",
    "InstallationAsset",
    "UsedMaterial",
    "Installation",
    "Maintenance",
    "Dismantle",
    "NewRequestSource",
    "LoanSource",
    "InstallationSource",
    "DismantleSource",
    "SingleAssetSource",
    "SourceDocument",
    # Handover entities
    "HandoverLineItem",
    "HandoverInitialState",
    "Handover",
    "MovementType",
    "StockMovement",
    "AssetUpdate",
    "SourceDocumentKind",
    "SourceStatusUpdate",
    "HandoverExecutionPlan",
    # Stock views
    "SourceMode",
    "AllocationQuery",
    "AllocationCandidate",
    "AllocationResult",
    "StockLevel",
    "StockAlerts",
    "RestockLine",
    "RestockDraft",
    "StockAvailability",
    "Consumption",
    "ConsumptionPlan",
    "StockSummary",
    "StockOverviewRow",
    "RegistrationRow",
    "RegistrationPlan",
    "ValidationIssue",
]
