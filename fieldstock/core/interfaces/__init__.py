"""Core interfaces (abstract contracts for outside collaborators)."""

from fieldstock.core.interfaces.inventory_source import IInventorySource

__all__ = ["IInventorySource"]
