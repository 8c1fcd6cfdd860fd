"""
Default TXE catalog.

TXE_CATALOG_DATA is the catalog document the store is seeded with
(see the seed_catalog management command).
"""

from __future__ import annotations
import copy
from typing import Any, Dict, List, Optional

from domain.catalog.aggregates import ProductCatalog, utc_timestamp

from .documents import catalog_from_document


SEED_UPDATED_BY = "seed-catalog"

CRITICAL_SKUS = (
    "TPNN0424",  # 5600 TXE
    "TPNN0425",  # 8600 TXE
    "TPNN0368",  # 9200 TXE
    "TPNN0304",  # vSMS
    "TPNN0410",  # common bypass module
    "TPNM0129",  # 250Mbps license
)


def _tiers(*pairs) -> List[Dict[str, Any]]:
    return [{"label": label, "gbps": gbps} for label, gbps in pairs]


def _module(sku: str, name: str, ports: str, port_speed: str) -> Dict[str, Any]:
    return {
        "sku": sku,
        "name": name,
        "ports": ports,
        "portSpeed": port_speed,
        "category": "Network IO Module",
        "price": 0,
    }


def _license(sku: str, name: str, gbps: float, group: str, model_id: Optional[str] = None) -> Dict[str, Any]:
    doc = {
        "sku": sku,
        "name": name,
        "category": "License",
        "appliesToGbpsMax": gbps,
        "price": 0,
        "group": group,
    }
    if model_id:
        doc["modelId"] = model_id
    return doc


def _inspect(sku: str, label: str, gbps: float, model_id: str) -> Dict[str, Any]:
    return _license(
        sku, f"TippingPoint {label} TPS Inspection License + Support + DV 1Yr",
        gbps, "INSPECT", model_id,
    )


def _threatdv(sku: str, label: str, gbps: float, model_id: str) -> Dict[str, Any]:
    return _license(
        sku, f"TippingPoint {label} TPS ThreatDV Subscription Service 1Yr",
        gbps, "THREATDV", model_id,
    )


TXE_CATALOG_DATA: Dict[str, Any] = {
    "models": [
        {
            "id": "txe-5600",
            "name": "5600 TXE 10Gbps",
            "family": "ds-tippingpoint-txe-series",
            "baseGbps": 10,
            "sku": "TPNN0424",
            "price": 0,
            "tiers": _tiers(
                ("250 Mbps", 0.25), ("500 Mbps", 0.5), ("1 Gbps", 1), ("2 Gbps", 2),
                ("3 Gbps", 3), ("5 Gbps", 5), ("10 Gbps", 10),
            ),
            "slots": 2,
        },
        {
            "id": "txe-8600",
            "name": "8600 TXE 40Gbps",
            "family": "ds-tippingpoint-txe-series",
            "baseGbps": 40,
            "sku": "TPNN0425",
            "price": 0,
            "tiers": _tiers(
                ("5 Gbps", 5), ("10 Gbps", 10), ("15 Gbps", 15),
                ("20 Gbps", 20), ("30 Gbps", 30), ("40 Gbps", 40),
            ),
            "slots": 2,
        },
        {
            "id": "txe-9200",
            "name": "9200 TXE 100Gbps",
            "family": "ds-tippingpoint-txe-series",
            "baseGbps": 100,
            "sku": "TPNN0368",
            "price": 0,
            "tiers": _tiers(("40 Gbps", 40), ("60 Gbps", 60), ("80 Gbps", 80), ("100 Gbps", 100)),
            "slots": 2,
        },
    ],
    "ioModules": [
        # Bypass
        _module("TPNN0410", "TippingPoint TXE IO Module 4-Segment 10GbE SR Bypass", "8 x multi-mode fiber (LC)", "1/10 Gbps"),
        _module("TPNN0411", "TippingPoint TXE IO Module 4-Segment 10GbE LR Bypass", "8 x single-mode fiber (LC)", "1/10 Gbps"),
        _module("TPNN0412", "TippingPoint TXE IO Module 4-Segment 1GbE SR Bypass", "8 x multi-mode fiber (LC)", "1 Gbps"),
        _module("TPNN0413", "TippingPoint TXE IO Module 4-Segment 1GbE LR Bypass", "8 x single-mode fiber (LC)", "1 Gbps"),
        _module("TPNN0414", "TippingPoint TXE IO Module 6-Segment Gig-T Bypass", "12 x copper RJ45", "1 Gbps"),
        _module("TPNN0374", "TippingPoint TXE IO Module 4-Segment 25GbE SR Bypass", "8 x multi-mode fiber (LC)", "25 Gbps"),
        _module("TPNN0375", "TippingPoint TXE IO Module 4-Segment 25GbE LR Bypass", "8 x single-mode fiber (LC)", "25 Gbps"),
        _module("TPNN0408", "TippingPoint TXE IO Module 2-Segment 40GbE SR4 Bypass", "4 x multi-mode fiber (MPO)", "40 Gbps"),
        _module("TPNN0409", "TippingPoint TXE IO Module 2-Segment 40GbE LR4 Bypass", "4 x single-mode fiber (LC)", "40 Gbps"),
        _module("TPNN0372", "TippingPoint TXE IO Module 2-Segment 100GbE SR4 Bypass", "4 x multi-mode fiber (MPO)", "100 Gbps"),
        _module("TPNN0373", "TippingPoint TXE IO Module 2-Segment 100GbE LR4 Bypass", "4 x single-mode fiber (LC)", "100 Gbps"),
        # Non-bypass
        _module("TPNN0370", "6-segment 25 GbE SFP28", "12 x SFP28/SFP+/SFP", "1/10/25 Gbps"),
        _module("TPNN0371", "4-segment 100 GbE QSFP28", "8 x QSFP28/QSFP+", "40/100 Gbps"),
    ],
    "licenses": [
        # Generic
        _license("LIC-TPS-INSPECT-1Y-1G", "TPS Inspection License + Support + DV 1 Year (≤1Gbps)", 1, "INSPECT"),
        _license("LIC-TPS-INSPECT-1Y-10G", "TPS Inspection License + Support + DV 1 Year (≤10Gbps)", 10, "INSPECT"),
        _license("LIC-TPS-INSPECT-1Y-40G", "TPS Inspection License + Support + DV 1 Year (≤40Gbps)", 40, "INSPECT"),
        _license("LIC-TPS-INSPECT-1Y-100G", "TPS Inspection License + Support + DV 1 Year (≤100Gbps)", 100, "INSPECT"),
        _license("LIC-TPS-THREATDV-1Y-1G", "TPS ThreatDV Subscription Service 1 Year (≤1Gbps)", 1, "THREATDV"),
        _license("LIC-TPS-THREATDV-1Y-10G", "TPS ThreatDV Subscription Service 1 Year (≤10Gbps)", 10, "THREATDV"),
        _license("LIC-TPS-THREATDV-1Y-40G", "TPS ThreatDV Subscription Service 1 Year (≤40Gbps)", 40, "THREATDV"),
        _license("LIC-TPS-THREATDV-1Y-100G", "TPS ThreatDV Subscription Service 1 Year (≤100Gbps)", 100, "THREATDV"),

        # Inspection, 5600 TXE
        _inspect("TPNM0129", "250Mbps", 0.25, "txe-5600"),
        _inspect("TPNN0272", "500Mbps", 0.5, "txe-5600"),
        _inspect("TPNN0273", "1Gbps", 1, "txe-5600"),
        _inspect("TPNN0274", "2Gbps", 2, "txe-5600"),
        _inspect("TPNN0275", "3Gbps", 3, "txe-5600"),
        _inspect("TPNN0276", "5Gbps", 5, "txe-5600"),
        _inspect("TPNN0277", "10Gbps", 10, "txe-5600"),

        # Inspection, 8600 TXE
        _inspect("TPNN0276", "5Gbps", 5, "txe-8600"),
        _inspect("TPNN0277", "10Gbps", 10, "txe-8600"),
        _inspect("TPNN0278", "15Gbps", 15, "txe-8600"),
        _inspect("TPNN0279", "20Gbps", 20, "txe-8600"),
        _inspect("TPNN0296", "30Gbps", 30, "txe-8600"),
        _inspect("TPNN0280", "40Gbps", 40, "txe-8600"),

        # Inspection, 9200 TXE
        _inspect("TPNN0280", "40Gbps", 40, "txe-9200"),
        _inspect("TPNN0397", "60Gbps", 60, "txe-9200"),
        _inspect("TPNN0398", "80Gbps", 80, "txe-9200"),
        _inspect("TPNN0399", "100Gbps", 100, "txe-9200"),

        # ThreatDV, 5600 TXE
        _threatdv("TPNN0281", "250Mbps", 0.25, "txe-5600"),
        _threatdv("TPNN0282", "500Mbps", 0.5, "txe-5600"),
        _threatdv("TPNN0283", "1Gbps", 1, "txe-5600"),
        _threatdv("TPNN0284", "2Gbps", 2, "txe-5600"),
        _threatdv("TPNN0285", "3Gbps", 3, "txe-5600"),
        _threatdv("TPNN0286", "5Gbps", 5, "txe-5600"),
        _threatdv("TPNN0287", "10Gbps", 10, "txe-5600"),

        # ThreatDV, 8600 TXE
        _threatdv("TPNN0286", "5Gbps", 5, "txe-8600"),
        _threatdv("TPNN0287", "10Gbps", 10, "txe-8600"),
        _threatdv("TPNN0288", "15Gbps", 15, "txe-8600"),
        _threatdv("TPNN0289", "20Gbps", 20, "txe-8600"),
        _threatdv("TPNN0297", "30Gbps", 30, "txe-8600"),
        _threatdv("TPNN0290", "40Gbps", 40, "txe-8600"),

        # ThreatDV, 9200 TXE
        _threatdv("TPNN0290", "40Gbps", 40, "txe-9200"),
        _threatdv("TPNN0400", "60Gbps", 60, "txe-9200"),
        _threatdv("TPNN0401", "80Gbps", 80, "txe-9200"),
        _threatdv("TPNN0402", "100Gbps", 100, "txe-9200"),
    ],
    "smsModels": [
        {"sku": "TPNN0304", "name": "TippingPoint vSMS Enterprise Virtual Appliance + Support 1Yr"},
        {"sku": "TPNN0431", "name": "TippingPoint SMS H5 HW (Dell) + Support 1Yr"},
        {"sku": "TPNN0432", "name": "TippingPoint SMS H5 XL HW (Dell) + Support 1Yr"},
    ],
}


def build_seed_catalog(updated_by: str = SEED_UPDATED_BY) -> ProductCatalog:
    """Fresh ProductCatalog built from TXE_CATALOG_DATA."""
    document = copy.deepcopy(TXE_CATALOG_DATA)
    document["metadata"] = {
        "lastUpdated": utc_timestamp(),
        "version": "1.0.0",
        "updatedBy": updated_by,
    }
    return catalog_from_document(document)


def validate_seed(catalog: ProductCatalog) -> List[str]:
    """Compare a seeded catalog with TXE_CATALOG_DATA; returns the problems found."""
    errors: List[str] = []
    expected = (
        ("Models", len(TXE_CATALOG_DATA["models"]), len(catalog.models)),
        ("IO modules", len(TXE_CATALOG_DATA["ioModules"]), len(catalog.io_modules)),
        ("Licenses", len(TXE_CATALOG_DATA["licenses"]), len(catalog.licenses)),
        ("SMS models", len(TXE_CATALOG_DATA["smsModels"]), len(catalog.sms_models)),
    )
    for label, want, got in expected:
        if want != got:
            errors.append(f"{label} count mismatch: expected {want}, got {got}")

    all_skus = set(catalog.all_skus())
    for sku in CRITICAL_SKUS:
        if sku not in all_skus:
            errors.append(f"Critical SKU missing: {sku}")
    return errors
