"""
Document mapping between domain objects and the catalog JSON document.

Field names follow the stored document (camelCase). Optional fields are
omitted when unset so a round trip reproduces the original document.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from domain.catalog.aggregates import ProductCatalog, utc_timestamp
from domain.catalog.entities import (
    CatalogMetadata,
    IOModule,
    License,
    SmsModel,
    TxeModel,
)
from domain.configurator.entities import (
    Configuration,
    LicenseSelection,
    QuoteLine,
    SlotSelection,
    new_configuration_id,
)
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import (
    ThroughputTier,
    MODEL_FAMILY,
    MODEL_SLOT_COUNT,
    MODULE_CATEGORY,
    LICENSE_CATEGORY,
)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def _number(value: Any) -> Any:
    """Write whole floats as ints so 10.0 stays 10 in the document."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _require(doc: Dict[str, Any], key: str, section: str) -> Any:
    if not isinstance(doc, dict):
        raise ValidationException(f"{section} entry must be an object", section)
    if key not in doc or doc[key] is None:
        raise ValidationException(f"{section} entry is missing '{key}'", f"{section}.{key}")
    return doc[key]


# =============================================================================
# CATALOG ENTITIES
# =============================================================================

def model_to_document(model: TxeModel) -> Dict[str, Any]:
    return _drop_none({
        "id": model.id,
        "name": model.name,
        "family": model.family,
        "baseGbps": _number(model.base_gbps),
        "tiers": [{"label": t.label, "gbps": _number(t.gbps)} for t in model.tiers],
        "slots": model.slots,
        "sku": model.sku,
        "price": _number(model.price),
    })


def model_from_document(doc: Dict[str, Any]) -> TxeModel:
    tiers = _require(doc, "tiers", "models")
    if not isinstance(tiers, list):
        raise ValidationException("Model tiers must be a list", "models.tiers")
    return TxeModel(
        id=_require(doc, "id", "models"),
        name=_require(doc, "name", "models"),
        family=doc.get("family", MODEL_FAMILY),
        base_gbps=_require(doc, "baseGbps", "models"),
        tiers=tuple(
            ThroughputTier(
                label=_require(t, "label", "tiers"),
                gbps=_require(t, "gbps", "tiers"),
            )
            for t in tiers
        ),
        slots=doc.get("slots", MODEL_SLOT_COUNT),
        sku=doc.get("sku"),
        price=doc.get("price"),
    )


def module_to_document(module: IOModule) -> Dict[str, Any]:
    return _drop_none({
        "sku": module.sku,
        "name": module.name,
        "ports": module.ports,
        "portSpeed": module.port_speed,
        "category": module.category,
        "price": _number(module.price),
    })


def module_from_document(doc: Dict[str, Any]) -> IOModule:
    return IOModule(
        sku=_require(doc, "sku", "ioModules"),
        name=_require(doc, "name", "ioModules"),
        ports=doc.get("ports", ""),
        port_speed=doc.get("portSpeed", ""),
        category=doc.get("category", MODULE_CATEGORY),
        price=doc.get("price"),
    )


def license_to_document(lic: License) -> Dict[str, Any]:
    return _drop_none({
        "sku": lic.sku,
        "name": lic.name,
        "category": lic.category,
        "appliesToGbpsMax": _number(lic.applies_to_gbps_max),
        "group": lic.group.value if lic.group else None,
        "modelId": lic.model_id,
        "price": _number(lic.price),
    })


def license_from_document(doc: Dict[str, Any]) -> License:
    return License(
        sku=_require(doc, "sku", "licenses"),
        name=_require(doc, "name", "licenses"),
        category=doc.get("category", LICENSE_CATEGORY),
        applies_to_gbps_max=_require(doc, "appliesToGbpsMax", "licenses"),
        group=doc.get("group"),
        model_id=doc.get("modelId"),
        price=doc.get("price"),
    )


def sms_to_document(sms: SmsModel) -> Dict[str, Any]:
    return {"sku": sms.sku, "name": sms.name}


def sms_from_document(doc: Dict[str, Any]) -> SmsModel:
    return SmsModel(
        sku=_require(doc, "sku", "smsModels"),
        name=_require(doc, "name", "smsModels"),
    )


# =============================================================================
# CATALOG DOCUMENT
# =============================================================================

def catalog_to_document(catalog: ProductCatalog) -> Dict[str, Any]:
    return {
        "models": [model_to_document(m) for m in catalog.models],
        "ioModules": [module_to_document(m) for m in catalog.io_modules],
        "licenses": [license_to_document(lic) for lic in catalog.licenses],
        "smsModels": [sms_to_document(s) for s in catalog.sms_models],
        "metadata": _drop_none({
            "lastUpdated": catalog.metadata.last_updated,
            "version": catalog.metadata.version,
            "updatedBy": catalog.metadata.updated_by,
        }),
    }


def _section(doc: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    value = doc.get(key, [])
    if not isinstance(value, list):
        raise ValidationException(f"'{key}' must be a list", key)
    return value


def catalog_from_document(doc: Any) -> ProductCatalog:
    """
    Build a ProductCatalog from a document.

    Raises ValidationException for malformed documents; entity invariants
    are enforced by the entity constructors.
    """
    if not isinstance(doc, dict):
        raise ValidationException("Catalog document must be an object")
    try:
        metadata_doc = doc.get("metadata") or {}
        metadata = CatalogMetadata(
            last_updated=metadata_doc.get("lastUpdated") or utc_timestamp(),
            version=metadata_doc.get("version", "1.0.0"),
            updated_by=metadata_doc.get("updatedBy"),
        )
        return ProductCatalog(
            models=[model_from_document(m) for m in _section(doc, "models")],
            io_modules=[module_from_document(m) for m in _section(doc, "ioModules")],
            licenses=[license_from_document(lic) for lic in _section(doc, "licenses")],
            sms_models=[sms_from_document(s) for s in _section(doc, "smsModels")],
            metadata=metadata,
        )
    except (AttributeError, TypeError) as e:
        raise ValidationException(f"Malformed catalog document: {e}")


# =============================================================================
# CONFIGURATIONS AND QUOTES
# =============================================================================

def configuration_to_document(configuration: Configuration) -> Dict[str, Any]:
    doc = {
        "id": configuration.id,
        "name": configuration.name,
        "modelId": configuration.model_id,
        "throughputGbps": _number(configuration.throughput_gbps),
        "slots": [{"slot": s.slot, "moduleSku": s.module_sku} for s in configuration.slots],
        "licenses": {
            "inspect": configuration.licenses.inspect,
            "dv": configuration.licenses.dv,
        },
    }
    if configuration.sms_sku is not None:
        doc["smsSku"] = configuration.sms_sku
    return doc


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationException("throughputGbps must be a number", "throughputGbps", value)


def configuration_from_document(doc: Dict[str, Any]) -> Configuration:
    if not isinstance(doc, dict):
        raise ValidationException("Configuration must be an object", "configuration")
    licenses = doc.get("licenses")
    if not isinstance(licenses, dict):
        licenses = {}
    slots = []
    for entry in doc.get("slots") or []:
        if isinstance(entry, dict) and isinstance(entry.get("slot"), int):
            slots.append(SlotSelection(slot=entry["slot"], module_sku=entry.get("moduleSku")))
    return Configuration(
        id=str(doc.get("id") or new_configuration_id()),
        name=doc.get("name") or "",
        model_id=doc.get("modelId"),
        throughput_gbps=_optional_float(doc.get("throughputGbps")),
        slots=tuple(slots),
        licenses=LicenseSelection(
            inspect=licenses.get("inspect"),
            dv=licenses.get("dv"),
        ),
        sms_sku=doc.get("smsSku"),
    )


def quote_line_to_document(line: QuoteLine) -> Dict[str, Any]:
    return _drop_none({
        "part": line.part,
        "description": line.description,
        "qty": line.qty,
        "configId": line.config_id,
    })
