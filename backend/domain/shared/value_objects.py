"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import ValidationException


# =============================================================================
# CONSTANTS
# =============================================================================

MODEL_FAMILY = "ds-tippingpoint-txe-series"
MODEL_SLOT_COUNT = 2
MODULE_CATEGORY = "Network IO Module"
LICENSE_CATEGORY = "License"

# TPNNxxxx: models, IO modules and SMS appliances
HARDWARE_SKU_RE = re.compile(r"^TPNN\d{4}$")
LICENSE_SKU_RE = re.compile(r"^(TPN[NM]\d{4}|LIC-TPS-[A-Z]+-\d+Y-[A-Z0-9]+)$")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_positive(value: Any, field: str, label: str) -> None:
    """Raise ValidationException unless value is a number greater than zero."""
    if not is_number(value) or value <= 0:
        raise ValidationException(f"{label} must be a positive number", field, value)


def require_sku(value: Any, pattern: re.Pattern, field: str = "sku") -> None:
    if not isinstance(value, str) or not pattern.match(value):
        raise ValidationException(f"Invalid SKU format: {value}", field, value)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class LicenseGroup(str, Enum):
    """Group a license belongs to within one configuration."""

    INSPECT = "INSPECT"      # TPS Inspection throughput license
    THREATDV = "THREATDV"    # ThreatDV subscription service

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[LicenseGroup]:
        """Return the group for a raw value, None when unset."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationException(f"Unknown license group '{value}'", "group", value)


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class ThroughputTier:
    """
    One selectable throughput ceiling for a model.

    The label is what users see ("5 Gbps"); gbps is the numeric value
    used for license matching.
    """

    label: str
    gbps: float

    def __post_init__(self):
        if not self.label or not isinstance(self.label, str):
            raise ValidationException("Tier label is required", "label")
        require_positive(self.gbps, "gbps", "Tier gbps")

    def __str__(self) -> str:
        return self.label
