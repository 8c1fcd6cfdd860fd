"""
Configurator Domain - Entities.

Configuration is one BOM unit being assembled; QuoteLine is a derived,
flattened record destined for export.
"""

from __future__ import annotations
import secrets
import string
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from domain.shared.value_objects import MODEL_SLOT_COUNT


_ID_ALPHABET = string.ascii_lowercase + string.digits
CONFIGURATION_ID_LENGTH = 8
DEFAULT_CONFIGURATION_NAME = "Configuration"


def new_configuration_id() -> str:
    """Short random identifier for a session-local configuration."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(CONFIGURATION_ID_LENGTH))


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class SlotSelection:
    """Module chosen for one of the chassis slots (1 or 2)."""

    slot: int
    module_sku: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "module_sku", _blank_to_none(self.module_sku))

    @property
    def is_filled(self) -> bool:
        return self.module_sku is not None


@dataclass(frozen=True)
class LicenseSelection:
    """Inspection and ThreatDV picks; each one independently optional."""

    inspect: Optional[str] = None
    dv: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "inspect", _blank_to_none(self.inspect))
        object.__setattr__(self, "dv", _blank_to_none(self.dv))


def empty_slots() -> Tuple[SlotSelection, ...]:
    return tuple(SlotSelection(slot=n) for n in range(1, MODEL_SLOT_COUNT + 1))


@dataclass(frozen=True)
class Configuration:
    """
    A single configuration in a quoting session.

    Always holds exactly two slot selections ordered slot 1 then slot 2.
    Missing or out-of-range slots passed by callers are normalised rather
    than rejected, so a configuration can always be built from client input.
    """

    id: str
    name: str = DEFAULT_CONFIGURATION_NAME
    model_id: Optional[str] = None
    throughput_gbps: Optional[float] = None
    slots: Tuple[SlotSelection, ...] = field(default_factory=empty_slots)
    licenses: LicenseSelection = field(default_factory=LicenseSelection)
    sms_sku: Optional[str] = None

    def __post_init__(self):
        by_slot = {s.slot: s.module_sku for s in self.slots}
        object.__setattr__(
            self,
            "slots",
            tuple(SlotSelection(slot=n, module_sku=by_slot.get(n))
                  for n in range(1, MODEL_SLOT_COUNT + 1)),
        )
        object.__setattr__(self, "model_id", _blank_to_none(self.model_id))
        object.__setattr__(self, "sms_sku", _blank_to_none(self.sms_sku))

    def slot_sku(self, slot: int) -> Optional[str]:
        for selection in self.slots:
            if selection.slot == slot:
                return selection.module_sku
        return None

    def with_slot(self, slot: int, module_sku: Optional[str]) -> Configuration:
        """Copy with one slot replaced; unknown slot numbers are ignored."""
        if slot not in range(1, MODEL_SLOT_COUNT + 1):
            return self
        slots = tuple(
            SlotSelection(slot=s.slot, module_sku=module_sku) if s.slot == slot else s
            for s in self.slots
        )
        return replace(self, slots=slots)

    @property
    def filled_slots(self) -> Tuple[SlotSelection, ...]:
        return tuple(s for s in self.slots if s.is_filled)

    @property
    def is_empty(self) -> bool:
        """Nothing selected that would produce a quote line."""
        return (
            self.model_id is None
            and self.licenses.inspect is None
            and self.licenses.dv is None
            and not self.filled_slots
            and self.sms_sku is None
        )


@dataclass(frozen=True)
class QuoteLine:
    """One flattened BOM line; SMS lines carry no config_id."""

    part: str
    description: str
    qty: int = 1
    config_id: Optional[int] = None
