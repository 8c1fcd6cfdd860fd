"""
Domain Events.

Domain events are records of significant catalog changes.
They are collected by the aggregate and reported when the catalog is written.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened in the domain.
    """

    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


# =============================================================================
# CATALOG EVENTS
# =============================================================================

@dataclass(frozen=True)
class CatalogEntryAdded(DomainEvent):
    """Event raised when a model, module, license or SMS is added."""

    entity_type: str = ""
    key: Any = None


@dataclass(frozen=True)
class CatalogEntryUpdated(DomainEvent):
    """Event raised when a catalog entry is replaced."""

    entity_type: str = ""
    key: Any = None


@dataclass(frozen=True)
class CatalogEntryRemoved(DomainEvent):
    """Event raised when a catalog entry is deleted."""

    entity_type: str = ""
    key: Any = None


def describe_event(event: DomainEvent) -> str:
    """Short human-readable summary used in storage logs."""
    verb = {
        "CatalogEntryAdded": "added",
        "CatalogEntryUpdated": "updated",
        "CatalogEntryRemoved": "removed",
    }.get(event.event_type, event.event_type)
    return f"{verb} {getattr(event, 'entity_type', '')} {getattr(event, 'key', '')}".strip()
