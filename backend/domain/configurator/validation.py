"""
Configurator Domain - Configuration Review.

Lists problems with a configuration against the current catalog. The
catalog and a saved configuration can drift apart (an admin may delete a
SKU after a quote was started), so this reports instead of raising.
"""

from __future__ import annotations
from typing import List

from domain.catalog.aggregates import ProductCatalog
from domain.catalog.compatibility import CompatibilityRules, DEFAULT_RULES
from domain.shared.value_objects import LicenseGroup

from .entities import Configuration


def configuration_issues(
    configuration: Configuration,
    catalog: ProductCatalog,
    rules: CompatibilityRules = DEFAULT_RULES,
) -> List[str]:
    issues: List[str] = []
    model = catalog.find_model(configuration.model_id)

    if configuration.model_id and model is None:
        issues.append(f"Model {configuration.model_id} is not in the catalog")
    if model is not None and configuration.throughput_gbps is not None \
            and not model.has_tier(configuration.throughput_gbps):
        issues.append(
            f"Throughput {configuration.throughput_gbps:g} Gbps is not a tier of {model.name}"
        )

    for selection in configuration.filled_slots:
        module = catalog.find_module(selection.module_sku)
        if module is None:
            issues.append(f"Slot {selection.slot}: module {selection.module_sku} is not in the catalog")
        elif model is not None and not rules.is_module_compatible(module.sku, model.id):
            issues.append(f"Slot {selection.slot}: module {module.sku} is not compatible with {model.name}")

    picks = (
        (LicenseGroup.INSPECT, "Inspection", configuration.licenses.inspect),
        (LicenseGroup.THREATDV, "ThreatDV", configuration.licenses.dv),
    )
    for group, label, sku in picks:
        if sku is None:
            continue
        lic = catalog.find_license(sku, configuration.model_id)
        if lic is None:
            issues.append(f"{label} license {sku} is not in the catalog")
            continue
        if lic.group is not None and lic.group != group:
            issues.append(f"{label} license {sku} belongs to the {lic.group.value} group")
        if model is not None and not rules.is_license_admissible(
            lic, model.id, configuration.throughput_gbps
        ):
            issues.append(f"{label} license {sku} is not valid for {model.name} at the selected throughput")

    inspection = catalog.find_license(configuration.licenses.inspect, configuration.model_id)
    threatdv = catalog.find_license(configuration.licenses.dv, configuration.model_id)
    if inspection is not None and threatdv is not None \
            and inspection.applies_to_gbps_max != threatdv.applies_to_gbps_max:
        issues.append(
            f"ThreatDV license {threatdv.sku} does not match the bandwidth "
            f"of Inspection license {inspection.sku}"
        )

    if configuration.sms_sku and catalog.find_sms(configuration.sms_sku) is None:
        issues.append(f"SMS {configuration.sms_sku} is not in the catalog")

    return issues
