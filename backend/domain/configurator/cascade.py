"""
Configurator Domain - Cascade Rules.

Changing one selection can auto-derive or invalidate dependent ones:
model -> throughput (first tier) -> Inspection/ThreatDV (exact tier match).

Every function is pure: it returns a new Configuration and never raises.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Optional

from domain.catalog.aggregates import ProductCatalog
from domain.shared.value_objects import LicenseGroup

from .entities import (
    Configuration,
    LicenseSelection,
    DEFAULT_CONFIGURATION_NAME,
    empty_slots,
    new_configuration_id,
)


COPY_SUFFIX = " (copy)"

CHANGE_FIELDS = ("name", "model", "throughput", "inspect", "dv", "slot", "sms")


def create_empty_configuration(
    catalog: ProductCatalog,
    name: str = DEFAULT_CONFIGURATION_NAME,
) -> Configuration:
    """New configuration on the first catalog model and its first tier."""
    first_model = catalog.models[0] if catalog.models else None
    return Configuration(
        id=new_configuration_id(),
        name=name,
        model_id=first_model.id if first_model else None,
        throughput_gbps=first_model.first_tier_gbps if first_model else None,
        slots=empty_slots(),
        licenses=LicenseSelection(),
    )


def clone_configuration(configuration: Configuration) -> Configuration:
    return replace(
        configuration,
        id=new_configuration_id(),
        name=f"{configuration.name}{COPY_SUFFIX}",
    )


def _as_gbps(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def match_tier_licenses(
    catalog: ProductCatalog,
    model_id: Optional[str],
    throughput: Optional[float],
) -> LicenseSelection:
    """
    Canonical licenses for a tier.

    Exact equality on the ceiling (not "<="), one license per group.
    """
    if model_id is None or throughput is None:
        return LicenseSelection()

    def first_match(group: LicenseGroup) -> Optional[str]:
        for lic in catalog.licenses:
            if lic.matches_tier(group, model_id, throughput):
                return lic.sku
        return None

    return LicenseSelection(
        inspect=first_match(LicenseGroup.INSPECT),
        dv=first_match(LicenseGroup.THREATDV),
    )


def change_model(
    configuration: Configuration,
    catalog: ProductCatalog,
    model_id: Optional[str],
) -> Configuration:
    model = catalog.find_model(model_id)
    if model is None:
        return replace(
            configuration,
            model_id=None,
            throughput_gbps=None,
            licenses=LicenseSelection(),
        )
    throughput = model.first_tier_gbps
    return replace(
        configuration,
        model_id=model.id,
        throughput_gbps=throughput,
        licenses=match_tier_licenses(catalog, model.id, throughput),
    )


def change_throughput(
    configuration: Configuration,
    catalog: ProductCatalog,
    gbps: Any,
) -> Configuration:
    model = catalog.find_model(configuration.model_id)
    throughput = _as_gbps(gbps)
    if model is None or not model.has_tier(throughput):
        return configuration
    return replace(
        configuration,
        throughput_gbps=throughput,
        licenses=match_tier_licenses(catalog, model.id, throughput),
    )


def change_inspect_license(
    configuration: Configuration,
    catalog: ProductCatalog,
    sku: Optional[str],
) -> Configuration:
    """
    Set the Inspection license only.

    The ThreatDV pick is left alone; the ThreatDV option list narrows to
    the new Inspection bandwidth and the client re-validates against it.
    """
    return replace(
        configuration,
        licenses=replace(configuration.licenses, inspect=sku),
    )


def change_threatdv_license(configuration: Configuration, sku: Optional[str]) -> Configuration:
    return replace(
        configuration,
        licenses=replace(configuration.licenses, dv=sku),
    )


def change_slot(configuration: Configuration, slot: Any, module_sku: Optional[str]) -> Configuration:
    try:
        slot_number = int(slot)
    except (TypeError, ValueError):
        return configuration
    return configuration.with_slot(slot_number, module_sku)


def change_sms(configuration: Configuration, sms_sku: Optional[str]) -> Configuration:
    return replace(configuration, sms_sku=sms_sku)


def rename(configuration: Configuration, name: Optional[str]) -> Configuration:
    return replace(configuration, name="" if name is None else str(name))


def apply_change(
    configuration: Configuration,
    catalog: ProductCatalog,
    field: str,
    value: Any,
    slot: Optional[int] = None,
) -> Configuration:
    """Dispatch a single field change; unknown fields leave the configuration unchanged."""
    if field == "name":
        return rename(configuration, value)
    if field == "model":
        return change_model(configuration, catalog, value)
    if field == "throughput":
        return change_throughput(configuration, catalog, value)
    if field == "inspect":
        return change_inspect_license(configuration, catalog, value)
    if field == "dv":
        return change_threatdv_license(configuration, value)
    if field == "slot":
        return change_slot(configuration, slot, value)
    if field == "sms":
        return change_sms(configuration, value)
    return configuration
