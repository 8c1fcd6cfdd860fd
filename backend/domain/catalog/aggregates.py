"""
Catalog Domain - Aggregates.

ProductCatalog is the aggregate root for the catalog domain: the whole
document of models, IO modules, licenses and SMS appliances.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Optional

from domain.shared.base_aggregate import AggregateRoot
from domain.shared.events import (
    CatalogEntryAdded,
    CatalogEntryUpdated,
    CatalogEntryRemoved,
)
from domain.shared.exceptions import (
    BusinessRuleViolationException,
    EntityAlreadyExistsException,
    EntityNotFoundException,
    IncompatibleLicenseException,
    ValidationException,
)

from .compatibility import CompatibilityRules, DEFAULT_RULES
from .entities import (
    CatalogMetadata,
    IOModule,
    License,
    SmsModel,
    TxeModel,
)


_UNSET = object()


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class ProductCatalog(AggregateRoot):
    """
    Aggregate root for the product catalog.

    Queries are total and return None or empty lists for unknown keys.
    Commands enforce catalog rules and raise domain exceptions; they are only
    used by the admin side, the configurator reads the catalog as-is.
    """

    models: List[TxeModel] = field(default_factory=list)
    io_modules: List[IOModule] = field(default_factory=list)
    licenses: List[License] = field(default_factory=list)
    sms_models: List[SmsModel] = field(default_factory=list)
    metadata: CatalogMetadata = field(
        default_factory=lambda: CatalogMetadata(last_updated=utc_timestamp(), updated_by="system")
    )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find_model(self, model_id: Optional[str]) -> Optional[TxeModel]:
        if model_id is None:
            return None
        return next((m for m in self.models if m.id == model_id), None)

    def find_module(self, sku: Optional[str]) -> Optional[IOModule]:
        if not sku:
            return None
        return next((m for m in self.io_modules if m.sku == sku), None)

    def find_sms(self, sku: Optional[str]) -> Optional[SmsModel]:
        if not sku:
            return None
        return next((s for s in self.sms_models if s.sku == sku), None)

    def find_license(self, sku: Optional[str], model_id: Optional[str] = None) -> Optional[License]:
        """
        Find a license by SKU.

        An entry bound to model_id wins; otherwise the first entry with the SKU.
        """
        if not sku:
            return None
        candidates = self.licenses_with_sku(sku)
        for lic in candidates:
            if lic.model_id == model_id:
                return lic
        return candidates[0] if candidates else None

    def licenses_with_sku(self, sku: str) -> List[License]:
        return [lic for lic in self.licenses if lic.sku == sku]

    def licenses_for_model(self, model_id: str) -> List[License]:
        return [lic for lic in self.licenses if lic.model_id == model_id]

    def all_skus(self) -> List[str]:
        """Every SKU in the shared namespace, in document order."""
        skus = [m.sku for m in self.models if m.sku]
        skus.extend(m.sku for m in self.io_modules)
        skus.extend(lic.sku for lic in self.licenses)
        skus.extend(s.sku for s in self.sms_models)
        return skus

    def is_sku_available(
        self,
        sku: str,
        exclude_sku: Optional[str] = None,
        license_model_id=_UNSET,
    ) -> bool:
        """
        Check SKU uniqueness across the whole catalog.

        For licenses pass license_model_id: the same license SKU may repeat
        when bound to a different model, but may never collide with a model,
        module or SMS SKU.
        """
        if sku == exclude_sku:
            return True
        non_license = [m.sku for m in self.models if m.sku]
        non_license.extend(m.sku for m in self.io_modules)
        non_license.extend(s.sku for s in self.sms_models)
        if sku in non_license:
            return False
        if license_model_id is _UNSET:
            return not self.licenses_with_sku(sku)
        return all(lic.model_id != license_model_id for lic in self.licenses_with_sku(sku))

    @property
    def is_empty(self) -> bool:
        return not (self.models or self.io_modules or self.licenses or self.sms_models)

    # =========================================================================
    # COMMANDS - MODELS
    # =========================================================================

    def add_model(self, model: TxeModel) -> TxeModel:
        if self.find_model(model.id):
            raise EntityAlreadyExistsException("Model", model.id)
        if model.sku and not self.is_sku_available(model.sku):
            raise EntityAlreadyExistsException("SKU", model.sku)
        self.models.append(model)
        self.add_domain_event(CatalogEntryAdded(entity_type=model.entity_type, key=model.key))
        return model

    def update_model(self, model: TxeModel) -> TxeModel:
        index = self._index_of(self.models, model.key, "Model")
        existing = self.models[index]
        if model.sku and not self.is_sku_available(model.sku, exclude_sku=existing.sku):
            raise EntityAlreadyExistsException("SKU", model.sku)
        self.models[index] = model
        self.add_domain_event(CatalogEntryUpdated(entity_type=model.entity_type, key=model.key))
        return model

    def remove_model(self, model_id: str) -> TxeModel:
        index = self._index_of(self.models, model_id, "Model")
        referencing = self.licenses_for_model(model_id)
        if referencing:
            raise BusinessRuleViolationException(
                "MODEL_REFERENCED_BY_LICENSES",
                f"Cannot delete model {model_id}. "
                f"It is referenced by {len(referencing)} license(s)",
                details={"referencing_licenses": [lic.sku for lic in referencing]},
            )
        removed = self.models.pop(index)
        self.add_domain_event(CatalogEntryRemoved(entity_type=removed.entity_type, key=removed.key))
        return removed

    # =========================================================================
    # COMMANDS - IO MODULES
    # =========================================================================

    def add_module(self, module: IOModule) -> IOModule:
        if not self.is_sku_available(module.sku):
            raise EntityAlreadyExistsException("SKU", module.sku)
        self.io_modules.append(module)
        self.add_domain_event(CatalogEntryAdded(entity_type=module.entity_type, key=module.key))
        return module

    def update_module(self, module: IOModule) -> IOModule:
        index = self._index_of(self.io_modules, module.key, "Module")
        self.io_modules[index] = module
        self.add_domain_event(CatalogEntryUpdated(entity_type=module.entity_type, key=module.key))
        return module

    def remove_module(self, sku: str) -> IOModule:
        index = self._index_of(self.io_modules, sku, "Module")
        removed = self.io_modules.pop(index)
        self.add_domain_event(CatalogEntryRemoved(entity_type=removed.entity_type, key=removed.key))
        return removed

    # =========================================================================
    # COMMANDS - LICENSES
    # =========================================================================

    def add_license(self, license: License, rules: CompatibilityRules = DEFAULT_RULES) -> License:
        if not self.is_sku_available(license.sku, license_model_id=license.model_id):
            raise EntityAlreadyExistsException("SKU", license.sku)
        self._check_license_model(license, rules)
        self.licenses.append(license)
        self.add_domain_event(CatalogEntryAdded(entity_type=license.entity_type, key=license.key))
        return license

    def update_license(
        self,
        license: License,
        original_model_id=_UNSET,
        rules: CompatibilityRules = DEFAULT_RULES,
    ) -> License:
        """
        Replace a license record.

        original_model_id selects which binding of the SKU is edited; when
        omitted the record bound to license.model_id is used, or the only
        record with that SKU.
        """
        index = self._license_index(
            license.sku,
            license.model_id if original_model_id is _UNSET else original_model_id,
            strict=original_model_id is not _UNSET,
        )
        existing = self.licenses[index]
        if license.model_id != existing.model_id and not self.is_sku_available(
            license.sku, license_model_id=license.model_id
        ):
            raise EntityAlreadyExistsException("License", f"{license.sku}@{license.model_id}")
        self._check_license_model(license, rules)
        self.licenses[index] = license
        self.add_domain_event(CatalogEntryUpdated(entity_type=license.entity_type, key=license.key))
        return license

    def remove_license(self, sku: str, model_id=_UNSET) -> License:
        """Remove a license; model_id is required when the SKU has several bindings."""
        if model_id is _UNSET:
            matches = self.licenses_with_sku(sku)
            if len(matches) > 1:
                raise ValidationException(
                    f"License {sku} is bound to {len(matches)} models; specify modelId",
                    "modelId",
                )
            index = self._license_index(sku, None, strict=False)
        else:
            index = self._license_index(sku, model_id, strict=True)
        removed = self.licenses.pop(index)
        self.add_domain_event(CatalogEntryRemoved(entity_type=removed.entity_type, key=removed.key))
        return removed

    def _license_index(self, sku: str, model_id: Optional[str], strict: bool) -> int:
        matches = [i for i, lic in enumerate(self.licenses) if lic.sku == sku]
        for i in matches:
            if self.licenses[i].model_id == model_id:
                return i
        if not strict and len(matches) == 1:
            return matches[0]
        raise EntityNotFoundException("License", sku if not strict else f"{sku}@{model_id}")

    def _check_license_model(self, license: License, rules: CompatibilityRules) -> None:
        if not license.model_id:
            return
        if not self.find_model(license.model_id):
            raise ValidationException(
                f"Model {license.model_id} does not exist", "modelId", license.model_id
            )
        if not rules.is_license_compatible(license.sku, license.model_id):
            names = []
            for model_id in rules.compatible_models_for(license.sku):
                model = self.find_model(model_id)
                names.append(model.name if model else model_id)
            raise IncompatibleLicenseException(license.sku, license.model_id, names)

    # =========================================================================
    # COMMANDS - SMS
    # =========================================================================

    def add_sms(self, sms: SmsModel) -> SmsModel:
        if not self.is_sku_available(sms.sku):
            raise EntityAlreadyExistsException("SKU", sms.sku)
        self.sms_models.append(sms)
        self.add_domain_event(CatalogEntryAdded(entity_type=sms.entity_type, key=sms.key))
        return sms

    def update_sms(self, sms: SmsModel) -> SmsModel:
        index = self._index_of(self.sms_models, sms.key, "SMS")
        self.sms_models[index] = sms
        self.add_domain_event(CatalogEntryUpdated(entity_type=sms.entity_type, key=sms.key))
        return sms

    def remove_sms(self, sku: str) -> SmsModel:
        index = self._index_of(self.sms_models, sku, "SMS")
        removed = self.sms_models.pop(index)
        self.add_domain_event(CatalogEntryRemoved(entity_type=removed.entity_type, key=removed.key))
        return removed

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self) -> None:
        """
        Check whole-document invariants for bulk replacement and import.

        Model ids are unique, SKUs are unique across the shared namespace
        (licenses by SKU and model id), and every model-bound license refers
        to a model in the catalog.
        """
        model_ids = [m.id for m in self.models]
        duplicates = sorted({mid for mid in model_ids if model_ids.count(mid) > 1})
        if duplicates:
            raise ValidationException(f"Duplicate model ids: {', '.join(duplicates)}", "models")

        seen = set()
        clashes = []
        keys = [m.sku for m in self.models if m.sku]
        keys.extend(m.sku for m in self.io_modules)
        keys.extend(s.sku for s in self.sms_models)
        keys.extend(lic.key for lic in self.licenses)
        for key in keys:
            if key in seen:
                clashes.append(key if isinstance(key, str) else key[0])
            seen.add(key)
        license_skus = {lic.sku for lic in self.licenses}
        clashes.extend(k for k in keys if isinstance(k, str) and k in license_skus)
        if clashes:
            raise ValidationException(
                f"Duplicate SKUs: {', '.join(sorted(set(clashes)))}", "sku"
            )

        for lic in self.licenses:
            if lic.model_id and lic.model_id not in model_ids:
                raise ValidationException(
                    f"License {lic.sku} refers to unknown model {lic.model_id}",
                    "modelId",
                    lic.model_id,
                )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _index_of(entries: list, key, entity_type: str) -> int:
        for i, entry in enumerate(entries):
            if entry.key == key:
                return i
        raise EntityNotFoundException(entity_type, key)

    def stamped(self, updated_by: Optional[str] = None) -> ProductCatalog:
        """Copy of the catalog with refreshed metadata, ready to be written."""
        return ProductCatalog(
            models=list(self.models),
            io_modules=list(self.io_modules),
            licenses=list(self.licenses),
            sms_models=list(self.sms_models),
            metadata=replace(
                self.metadata,
                last_updated=utc_timestamp(),
                updated_by=updated_by or "system",
            ),
        )

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def create_empty(cls, updated_by: str = "system") -> ProductCatalog:
        return cls(
            metadata=CatalogMetadata(
                last_updated=utc_timestamp(),
                version="1.0.0",
                updated_by=updated_by,
            )
        )
