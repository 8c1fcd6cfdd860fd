"""
Catalog Domain - Compatibility Rules.

Decides which IO modules and licenses are valid for a model/throughput
selection and resolves license SKUs shared between chassis.

All rules live in one declarative table (COMPATIBILITY_TABLE) that is parsed
once into an immutable CompatibilityRules object. Every query here is total:
unmatched input yields an empty collection or False, never an exception.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
)

from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import LicenseGroup

from .entities import IOModule, License

if TYPE_CHECKING:
    from .aggregates import ProductCatalog


COMPATIBILITY_TABLE: Dict[str, Any] = {
    # Bypass IO modules; a set may extend another one
    "bypassModules": {
        "5600": {
            "skus": ["TPNN0410", "TPNN0411", "TPNN0412", "TPNN0413", "TPNN0414"],
        },
        "8600": {
            "extends": "5600",
            "skus": ["TPNN0374", "TPNN0375", "TPNN0408", "TPNN0409"],
        },
        "9200": {
            "skus": ["TPNN0408", "TPNN0409", "TPNN0372", "TPNN0373"],
        },
    },
    "modelBypassSets": {
        "txe-5600": "5600",
        "txe-8600": "8600",
        "txe-9200": "9200",
    },
    # Non-bypass modules fit every known model
    "nonBypassModules": ["TPNN0370", "TPNN0371"],
    # License SKUs intentionally shared between two chassis tiers
    "licenseModelOverrides": {
        "TPNN0276": ["txe-5600", "txe-8600"],
        "TPNN0277": ["txe-5600", "txe-8600"],
        "TPNN0280": ["txe-8600", "txe-9200"],
        "TPNN0286": ["txe-5600", "txe-8600"],
        "TPNN0287": ["txe-5600", "txe-8600"],
        "TPNN0290": ["txe-8600", "txe-9200"],
    },
    # Presentation order of license selection lists
    "licenseDisplayOrder": {
        "txe-5600": {
            "INSPECT": ["TPNM0129", "TPNN0272", "TPNN0273", "TPNN0274",
                        "TPNN0275", "TPNN0276", "TPNN0277"],
            "THREATDV": ["TPNN0281", "TPNN0282", "TPNN0283", "TPNN0284",
                         "TPNN0285", "TPNN0286", "TPNN0287"],
        },
        "txe-8600": {
            "INSPECT": ["TPNN0276", "TPNN0277", "TPNN0278", "TPNN0279",
                        "TPNN0296", "TPNN0280"],
            "THREATDV": ["TPNN0286", "TPNN0287", "TPNN0288", "TPNN0289",
                         "TPNN0297", "TPNN0290"],
        },
        "txe-9200": {
            "INSPECT": ["TPNN0280", "TPNN0397", "TPNN0398", "TPNN0399"],
            "THREATDV": ["TPNN0290", "TPNN0400", "TPNN0401", "TPNN0402"],
        },
    },
}


def _expand_bypass_sets(sets: Mapping[str, Any]) -> Dict[str, Tuple[str, ...]]:
    """Resolve `extends` chains into flat, ordered SKU tuples."""
    resolved: Dict[str, Tuple[str, ...]] = {}

    def resolve(name: str, chain: Tuple[str, ...]) -> Tuple[str, ...]:
        if name in resolved:
            return resolved[name]
        if name in chain:
            raise ValidationException(
                f"Circular module set reference: {' -> '.join(chain + (name,))}",
                "bypassModules",
                name,
            )
        entry = sets.get(name)
        if entry is None:
            raise ValidationException(f"Unknown module set '{name}'", "bypassModules", name)
        skus: List[str] = list(entry.get("skus", []))
        parent = entry.get("extends")
        if parent:
            skus.extend(sku for sku in resolve(parent, chain + (name,)) if sku not in skus)
        resolved[name] = tuple(skus)
        return resolved[name]

    for set_name in sets:
        resolve(set_name, ())
    return resolved


@dataclass(frozen=True)
class ModuleOptions:
    """IO modules offered for one slot, grouped as the selection list shows them."""

    bypass: Tuple[IOModule, ...] = ()
    non_bypass: Tuple[IOModule, ...] = ()


@dataclass(frozen=True)
class CompatibilityRules:
    """
    Parsed compatibility table.

    Built once at startup via from_table(); instances are read-only and
    safe to share.
    """

    bypass_by_model: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    non_bypass: FrozenSet[str] = frozenset()
    license_overrides: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    display_order: Mapping[Tuple[str, LicenseGroup], Tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_table(cls, table: Mapping[str, Any]) -> CompatibilityRules:
        """Parse a declarative table (same layout as COMPATIBILITY_TABLE)."""
        sets = _expand_bypass_sets(table.get("bypassModules", {}))

        bypass_by_model: Dict[str, FrozenSet[str]] = {}
        for model_id, set_name in table.get("modelBypassSets", {}).items():
            if set_name not in sets:
                raise ValidationException(
                    f"Model {model_id} refers to unknown module set '{set_name}'",
                    "modelBypassSets",
                    set_name,
                )
            bypass_by_model[model_id] = frozenset(sets[set_name])

        display_order: Dict[Tuple[str, LicenseGroup], Tuple[str, ...]] = {}
        for model_id, groups in table.get("licenseDisplayOrder", {}).items():
            for group_name, skus in groups.items():
                display_order[(model_id, LicenseGroup.parse(group_name))] = tuple(skus)

        return cls(
            bypass_by_model=bypass_by_model,
            non_bypass=frozenset(table.get("nonBypassModules", [])),
            license_overrides={
                sku: tuple(models)
                for sku, models in table.get("licenseModelOverrides", {}).items()
            },
            display_order=display_order,
        )

    # =========================================================================
    # MODULES
    # =========================================================================

    def is_known_model(self, model_id: Optional[str]) -> bool:
        return model_id is not None and model_id in self.bypass_by_model

    def bypass_modules(self, model_id: Optional[str]) -> FrozenSet[str]:
        """Bypass module SKUs valid for the model; empty for unknown models."""
        if model_id is None:
            return frozenset()
        return self.bypass_by_model.get(model_id, frozenset())

    def non_bypass_modules(self) -> FrozenSet[str]:
        return self.non_bypass

    def compatible_modules(self, model_id: Optional[str]) -> FrozenSet[str]:
        """All module SKUs that may be installed in the model's slots."""
        if not self.is_known_model(model_id):
            return frozenset()
        return self.bypass_modules(model_id) | self.non_bypass

    def is_module_compatible(self, sku: Optional[str], model_id: Optional[str]) -> bool:
        return sku is not None and sku in self.compatible_modules(model_id)

    # =========================================================================
    # LICENSES
    # =========================================================================

    def compatible_models_for(self, sku: Optional[str]) -> List[str]:
        """Override model list for a license SKU; empty means no extra restriction."""
        if sku is None:
            return []
        return list(self.license_overrides.get(sku, ()))

    def is_license_compatible(self, sku: Optional[str], model_id: Optional[str]) -> bool:
        """Check a license SKU against the override table only."""
        models = self.license_overrides.get(sku) if sku is not None else None
        if not models:
            return True
        return model_id in models

    def is_license_admissible(
        self,
        license: License,
        model_id: Optional[str],
        throughput: Optional[float],
    ) -> bool:
        """
        Generic admissibility filter.

        The throughput must not exceed the license ceiling, and the license
        must either be unbound, bound to the target model, or list the target
        model in the override table (which wins over the stored model id).
        """
        gbps = throughput or 0
        if gbps > license.applies_to_gbps_max:
            return False
        overrides = self.license_overrides.get(license.sku)
        if overrides:
            return model_id in overrides
        return license.model_id is None or license.model_id == model_id

    def license_display_order(self, model_id: Optional[str], group: LicenseGroup) -> Tuple[str, ...]:
        if model_id is None:
            return ()
        return self.display_order.get((model_id, group), ())

    def reconcile_license_model(self, sku: Optional[str], model_id: Optional[str]) -> Optional[str]:
        """
        Model id to keep on a license record after its SKU text changed.

        Cleared when the override table restricts the SKU to other models.
        """
        restricted = self.compatible_models_for(sku)
        if restricted and model_id not in restricted:
            return None
        return model_id


DEFAULT_RULES = CompatibilityRules.from_table(COMPATIBILITY_TABLE)


# =============================================================================
# SELECTION LISTS
# =============================================================================

def _in_display_order(
    licenses: Iterable[License],
    order: Tuple[str, ...],
) -> List[License]:
    """Curated SKUs first in their fixed order, anything else after in catalog order."""
    by_sku: Dict[str, License] = {}
    for lic in licenses:
        by_sku.setdefault(lic.sku, lic)
    ordered = [by_sku[sku] for sku in order if sku in by_sku]
    ordered.extend(lic for sku, lic in by_sku.items() if sku not in order)
    return ordered


def module_options(
    catalog: ProductCatalog,
    model_id: Optional[str],
    rules: CompatibilityRules = DEFAULT_RULES,
) -> ModuleOptions:
    """Modules offered for a slot of the given model, in catalog order."""
    if not rules.is_known_model(model_id):
        return ModuleOptions()
    bypass = rules.bypass_modules(model_id)
    return ModuleOptions(
        bypass=tuple(m for m in catalog.io_modules if m.sku in bypass),
        non_bypass=tuple(m for m in catalog.io_modules if m.sku in rules.non_bypass),
    )


def license_options(
    catalog: ProductCatalog,
    model_id: Optional[str],
    throughput: Optional[float],
    group: LicenseGroup,
    rules: CompatibilityRules = DEFAULT_RULES,
) -> List[License]:
    """
    Licenses of one group offered for a model/throughput selection.

    Licenses bound to the model win; a model without bound licenses of the
    group falls back to the generic (unbound) ones.
    """
    admissible = [
        lic for lic in catalog.licenses
        if lic.group == group and rules.is_license_admissible(lic, model_id, throughput)
    ]
    bound = [lic for lic in admissible if model_id is not None and lic.model_id == model_id]
    if bound:
        return _in_display_order(bound, rules.license_display_order(model_id, group))
    return _in_display_order([lic for lic in admissible if lic.model_id is None], ())


def inspect_license_options(
    catalog: ProductCatalog,
    model_id: Optional[str],
    throughput: Optional[float],
    rules: CompatibilityRules = DEFAULT_RULES,
) -> List[License]:
    return license_options(catalog, model_id, throughput, LicenseGroup.INSPECT, rules)


def threatdv_license_options(
    catalog: ProductCatalog,
    model_id: Optional[str],
    throughput: Optional[float],
    inspect_sku: Optional[str] = None,
    rules: CompatibilityRules = DEFAULT_RULES,
) -> List[License]:
    """ThreatDV options; restricted to the selected Inspection license's bandwidth."""
    options = license_options(catalog, model_id, throughput, LicenseGroup.THREATDV, rules)
    if inspect_sku:
        inspection = catalog.find_license(inspect_sku, model_id)
        if inspection is not None:
            ceiling = inspection.applies_to_gbps_max
            options = [lic for lic in options if lic.applies_to_gbps_max == ceiling]
    return options
