"""
Catalog Domain - Entities.

Entities for TXE chassis models, IO modules, licenses and SMS appliances.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from domain.shared.base_entity import CatalogEntity
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import (
    LicenseGroup,
    ThroughputTier,
    HARDWARE_SKU_RE,
    LICENSE_SKU_RE,
    MODEL_FAMILY,
    MODEL_SLOT_COUNT,
    MODULE_CATEGORY,
    LICENSE_CATEGORY,
    is_number,
    require_positive,
    require_sku,
)


def _check_price(price) -> None:
    if price is not None and (not is_number(price) or price < 0):
        raise ValidationException("Price must be a non-negative number", "price", price)


@dataclass(frozen=True)
class TxeModel(CatalogEntity):
    """
    Hardware chassis with a throughput range split into discrete tiers.

    Every chassis in the family has exactly two module slots.
    """

    entity_type: ClassVar[str] = "Model"

    id: str
    name: str
    base_gbps: float
    tiers: Tuple[ThroughputTier, ...]
    family: str = MODEL_FAMILY
    slots: int = MODEL_SLOT_COUNT
    sku: Optional[str] = None
    price: Optional[float] = None

    def __post_init__(self):
        if not self.id:
            raise ValidationException("Model id is required", "id")
        if not self.name:
            raise ValidationException("Model name is required", "name")
        if self.family != MODEL_FAMILY:
            raise ValidationException(f"Model family must be {MODEL_FAMILY}", "family", self.family)
        if self.slots != MODEL_SLOT_COUNT:
            raise ValidationException(f"Model must have {MODEL_SLOT_COUNT} slots", "slots", self.slots)
        require_positive(self.base_gbps, "baseGbps", "Base throughput")
        if self.sku is not None:
            require_sku(self.sku, HARDWARE_SKU_RE)
        # lists from callers are frozen to keep the entity hashable
        object.__setattr__(self, "tiers", tuple(self.tiers))
        if not self.tiers:
            raise ValidationException("Model needs at least one throughput tier", "tiers")
        if not all(isinstance(tier, ThroughputTier) for tier in self.tiers):
            raise ValidationException("Model tiers must be throughput tiers", "tiers")
        _check_price(self.price)

    @property
    def key(self) -> str:
        return self.id

    @property
    def first_tier_gbps(self) -> float:
        return self.tiers[0].gbps

    @property
    def tier_values(self) -> Tuple[float, ...]:
        return tuple(tier.gbps for tier in self.tiers)

    def has_tier(self, gbps: Optional[float]) -> bool:
        """Check if gbps is one of the model's selectable tiers."""
        return gbps is not None and gbps in self.tier_values

    @property
    def part_number(self) -> str:
        """Part used on quote lines; models without a SKU fall back to their id."""
        return self.sku or self.id


@dataclass(frozen=True)
class IOModule(CatalogEntity):
    """Pluggable network interface card installed into one of the two slots."""

    entity_type: ClassVar[str] = "Module"

    sku: str
    name: str
    ports: str
    port_speed: str
    category: str = MODULE_CATEGORY
    price: Optional[float] = None

    def __post_init__(self):
        if not self.sku:
            raise ValidationException("Module SKU is required", "sku")
        require_sku(self.sku, HARDWARE_SKU_RE)
        if not self.name:
            raise ValidationException("Module name is required", "name")
        if self.category != MODULE_CATEGORY:
            raise ValidationException(f"Module category must be {MODULE_CATEGORY}", "category", self.category)
        _check_price(self.price)

    @property
    def key(self) -> str:
        return self.sku


@dataclass(frozen=True)
class License(CatalogEntity):
    """
    Software entitlement capping inspection throughput (or enabling ThreatDV).

    The same SKU may be listed several times bound to different models,
    so identity is the (sku, model_id) pair.
    """

    entity_type: ClassVar[str] = "License"

    sku: str
    name: str
    applies_to_gbps_max: float
    group: Optional[LicenseGroup] = None
    model_id: Optional[str] = None
    category: str = LICENSE_CATEGORY
    price: Optional[float] = None

    def __post_init__(self):
        if not self.sku:
            raise ValidationException("License SKU is required", "sku")
        require_sku(self.sku, LICENSE_SKU_RE)
        if not self.name:
            raise ValidationException("License name is required", "name")
        require_positive(self.applies_to_gbps_max, "appliesToGbpsMax", "License throughput ceiling")
        if self.model_id is not None and not isinstance(self.model_id, str):
            raise ValidationException("License model id must be a string", "modelId", self.model_id)
        if self.category != LICENSE_CATEGORY:
            raise ValidationException(f"License category must be {LICENSE_CATEGORY}", "category", self.category)
        _check_price(self.price)
        object.__setattr__(self, "group", LicenseGroup.parse(self.group))

    @property
    def key(self) -> Tuple[str, Optional[str]]:
        return (self.sku, self.model_id)

    @property
    def is_model_bound(self) -> bool:
        return self.model_id is not None

    def matches_tier(self, group: LicenseGroup, model_id: str, gbps: float) -> bool:
        """Exact tier match used by the throughput cascade."""
        return (
            self.group == group
            and self.model_id == model_id
            and self.applies_to_gbps_max == gbps
        )


@dataclass(frozen=True)
class SmsModel(CatalogEntity):
    """Security Management System appliance; usable with any configuration."""

    entity_type: ClassVar[str] = "SMS"

    sku: str
    name: str

    def __post_init__(self):
        if not self.sku:
            raise ValidationException("SMS SKU is required", "sku")
        require_sku(self.sku, HARDWARE_SKU_RE)
        if not self.name:
            raise ValidationException("SMS name is required", "name")

    @property
    def key(self) -> str:
        return self.sku


@dataclass(frozen=True)
class CatalogMetadata:
    """Bookkeeping stored alongside the catalog document."""

    last_updated: str
    version: str = "1.0.0"
    updated_by: Optional[str] = field(default=None)
