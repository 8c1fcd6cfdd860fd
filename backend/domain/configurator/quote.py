"""
Configurator Domain - Quote Flattening.

Turns a list of configurations into an ordered list of quote lines.
Each configuration contributes, in order: hardware, Inspection license,
ThreatDV license, slot 1 module, slot 2 module. SMS lines follow after all
configurations and carry no configuration id.

Selections that no longer resolve against the catalog are skipped.
Identical parts are never merged: every line has qty 1.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from domain.catalog.aggregates import ProductCatalog
from domain.catalog.entities import TxeModel

from .entities import Configuration, QuoteLine


HARDWARE_DESCRIPTIONS: Dict[str, str] = {
    "txe-5600": "TippingPoint 5600TXE HW + Support 1Yr",
    "txe-8600": "TippingPoint 8600TXE HW + Support 1Yr",
    "txe-9200": "TippingPoint 9200TXE HW + Support 1Yr",
}

MISSING_CONFIG_ID = "—"

QUOTE_HEADERS = ("SKU", "Description", "Quantity", "Config ID")


def hardware_description(model: TxeModel) -> str:
    return HARDWARE_DESCRIPTIONS.get(model.id, f"{model.name} + HW Support 1Yr")


def lines_for_configuration(
    configuration: Configuration,
    ordinal: int,
    catalog: ProductCatalog,
) -> List[QuoteLine]:
    """Per-configuration lines; ordinal is the 1-based position used as config_id."""
    lines: List[QuoteLine] = []

    model = catalog.find_model(configuration.model_id)
    if model is not None:
        lines.append(QuoteLine(
            part=model.part_number,
            description=hardware_description(model),
            config_id=ordinal,
        ))

    for sku in (configuration.licenses.inspect, configuration.licenses.dv):
        lic = catalog.find_license(sku, configuration.model_id)
        if lic is not None:
            lines.append(QuoteLine(part=lic.sku, description=lic.name, config_id=ordinal))

    for selection in configuration.slots:
        module = catalog.find_module(selection.module_sku)
        if module is not None:
            lines.append(QuoteLine(part=module.sku, description=module.name, config_id=ordinal))

    return lines


def build_quote_lines(
    configurations: Sequence[Configuration],
    catalog: ProductCatalog,
) -> List[QuoteLine]:
    lines: List[QuoteLine] = []
    for ordinal, configuration in enumerate(configurations, start=1):
        lines.extend(lines_for_configuration(configuration, ordinal, catalog))

    for configuration in configurations:
        sms = catalog.find_sms(configuration.sms_sku)
        if sms is not None:
            lines.append(QuoteLine(part=sms.sku, description=sms.name))

    return lines


def config_id_label(config_id: Optional[int]) -> str:
    return str(config_id) if config_id else MISSING_CONFIG_ID


def format_quote_table(lines: Iterable[QuoteLine]) -> str:
    """
    Plain-text quote table for pasting into e-mail or a ticket.

    SKU and Description are left aligned, Quantity and Config ID right aligned.
    """
    lines = list(lines)
    sku_w = max([len(QUOTE_HEADERS[0])] + [len(l.part) for l in lines])
    desc_w = max([len(QUOTE_HEADERS[1])] + [len(l.description) for l in lines])
    qty_w = max([len(QUOTE_HEADERS[2])] + [len(str(l.qty)) for l in lines])
    cfg_w = max([len(QUOTE_HEADERS[3])] + [len(config_id_label(l.config_id)) for l in lines])

    header = (
        f"{QUOTE_HEADERS[0].ljust(sku_w)} | {QUOTE_HEADERS[1].ljust(desc_w)} | "
        f"{QUOTE_HEADERS[2].rjust(qty_w)} | {QUOTE_HEADERS[3].rjust(cfg_w)}"
    )
    separator = "-+-".join("-" * w for w in (sku_w, desc_w, qty_w, cfg_w))
    rows = [
        f"{l.part.ljust(sku_w)} | {l.description.ljust(desc_w)} | "
        f"{str(l.qty).rjust(qty_w)} | {config_id_label(l.config_id).rjust(cfg_w)}"
        for l in lines
    ]
    return "\n".join([header, separator] + rows)
