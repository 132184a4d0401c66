"""
Domain exceptions for FieldStock.

Most reconciliation paths degrade silently (empty results, None dispatch).
These exceptions cover the cases a caller explicitly asks to hard-stop on.
"""

from typing import Any


class FieldStockError(Exception):
    """Base exception for all FieldStock errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(FieldStockError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidQuantityError(ValidationError):
    """Requested quantity is zero or negative."""

    def __init__(self, quantity: float):
        super().__init__(
            field="quantity",
            message="Quantity must be greater than 0",
            value=quantity,
        )
        self.code = "INVALID_QUANTITY"


class MissingInitialBalanceError(ValidationError):
    """A measurement row was submitted without a positive initial balance."""

    def __init__(self, row_index: int):
        super().__init__(
            field="initial_balance",
            message=f"Measurement row {row_index} needs a positive initial balance",
        )
        self.code = "MISSING_INITIAL_BALANCE"
        self.details["row_index"] = row_index


class RegistrationRejectedError(ValidationError):
    """Registration plan has blocking issues."""

    def __init__(self, issues: list[dict[str, Any]]):
        super().__init__(
            field="registration",
            message=f"{len(issues)} issue(s) block this registration",
        )
        self.code = "REGISTRATION_REJECTED"
        self.details["issues"] = issues


# Stock Exceptions
class StockError(FieldStockError):
    """Base exception for stock operations."""

    pass


class InsufficientStockError(StockError):
    """Not enough warehouse stock to cover a consumption."""

    def __init__(
        self,
        item_name: str,
        brand: str,
        requested: float,
        available: float,
        unit: str | None = None,
    ):
        shortfall = requested - available
        super().__init__(
            f"Insufficient stock for {item_name} {brand}: short by {shortfall:g}"
            + (f" {unit}" if unit else ""),
            code="INSUFFICIENT_STOCK",
            details={
                "item_name": item_name,
                "brand": brand,
                "requested": requested,
                "available": available,
                "unit": unit,
            },
        )


class InventoryUnitNotFoundError(StockError):
    """Inventory unit not present in the snapshot."""

    def __init__(self, unit_id: str):
        super().__init__(
            f"Inventory unit not found: {unit_id}",
            code="UNIT_NOT_FOUND",
            details={"unit_id": unit_id},
        )


class ConfigurationError(FieldStockError):
    """Configuration error."""

    pass
