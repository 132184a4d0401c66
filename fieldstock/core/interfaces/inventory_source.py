"""Abstract interface for reading the inventory snapshot."""

from abc import ABC, abstractmethod

from fieldstock.core.entities.documents import Installation, Maintenance, User
from fieldstock.core.entities.inventory import AssetType, InventoryUnit


class IInventorySource(ABC):
    """
    Read-only access to the data the reconciliation core works on.

    Implementations wrap the backend API; the core only ever sees an
    in-memory snapshot returned from these calls.
    """

    @abstractmethod
    async def list_units(self) -> list[InventoryUnit]:
        """List every inventory unit in the snapshot."""
        pass

    @abstractmethod
    async def list_asset_types(self) -> list[AssetType]:
        """List catalog types with their standard items."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List users (recipient and division lookup)."""
        pass

    @abstractmethod
    async def get_thresholds(self) -> dict[str, int]:
        """Low-stock thresholds keyed by 'name|brand'."""
        pass

    @abstractmethod
    async def list_installations(self) -> list[Installation]:
        """List installation records."""
        pass

    @abstractmethod
    async def list_maintenances(self) -> list[Maintenance]:
        """List maintenance records."""
        pass
