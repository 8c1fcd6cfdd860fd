"""
Base Entity class for all catalog entities.

Catalog entities are identified by a natural key (a model id, a SKU, or for
licenses the pair of SKU and model id) rather than a surrogate UUID.
They are immutable; edits replace the entity inside its aggregate.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import ClassVar, Hashable


class CatalogEntity(ABC):
    """
    Base class for all catalog entities.

    Subclasses are frozen dataclasses, so equality compares every field
    (what a document round trip must preserve), while `key` gives the
    identity used for lookups and uniqueness checks.
    """

    entity_type: ClassVar[str] = "Entity"

    @property
    @abstractmethod
    def key(self) -> Hashable:
        """Natural identity of the entity inside the catalog."""

    def same_identity(self, other: CatalogEntity) -> bool:
        """Check whether two entities denote the same catalog record."""
        return type(self) is type(other) and self.key == other.key
