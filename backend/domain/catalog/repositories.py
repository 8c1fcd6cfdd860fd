"""
Catalog Domain - Repository Interfaces (Ports).

These are abstract interfaces that define how the domain interacts with persistence.
The actual implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .aggregates import ProductCatalog


@dataclass(frozen=True)
class BackupInfo:
    """One stored backup of the catalog document."""

    filename: str
    timestamp: str
    size: int


class CatalogRepository(ABC):
    """
    Repository interface for the ProductCatalog aggregate.

    The catalog is one document: every mutation is read-modify-write of
    the whole aggregate. Last write wins; there is no locking.
    """

    @abstractmethod
    def read(self) -> ProductCatalog:
        """Load the catalog; an unreadable store yields an empty catalog."""
        pass

    @abstractmethod
    def write(self, catalog: ProductCatalog, updated_by: Optional[str] = None) -> ProductCatalog:
        """Back up the current document, then persist the stamped catalog."""
        pass

    @abstractmethod
    def list_backups(self) -> List[BackupInfo]:
        """Backups, newest first."""
        pass

    @abstractmethod
    def restore(self, filename: str, updated_by: Optional[str] = None) -> ProductCatalog:
        """Replace the catalog with a stored backup."""
        pass

    @abstractmethod
    def export_json(self) -> str:
        """Serialized catalog document."""
        pass

    @abstractmethod
    def import_json(self, data: str, updated_by: Optional[str] = None) -> ProductCatalog:
        """Validate a serialized document and make it the current catalog."""
        pass
