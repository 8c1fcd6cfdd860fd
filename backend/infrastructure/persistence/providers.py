"""
Factories for the catalog store and compatibility rules, driven by settings.
"""

from __future__ import annotations
import json
import logging
from functools import lru_cache
from typing import Optional

from django.conf import settings

from domain.catalog.compatibility import CompatibilityRules, DEFAULT_RULES
from domain.catalog.repositories import CatalogRepository

from .catalog_store import DEFAULT_MAX_BACKUPS, JsonFileCatalogRepository

logger = logging.getLogger(__name__)


def get_catalog_repository() -> CatalogRepository:
    return JsonFileCatalogRepository(
        data_dir=settings.CATALOG_DATA_DIR,
        max_backups=getattr(settings, 'CATALOG_MAX_BACKUPS', DEFAULT_MAX_BACKUPS),
    )


@lru_cache(maxsize=None)
def _load_rules(path: Optional[str]) -> CompatibilityRules:
    if not path:
        return DEFAULT_RULES
    with open(path, encoding='utf-8') as f:
        rules = CompatibilityRules.from_table(json.load(f))
    logger.info(f"Compatibility rules loaded from {path}")
    return rules


def get_compatibility_rules() -> CompatibilityRules:
    """Rules from COMPATIBILITY_RULES_FILE when configured, else the built-in table."""
    return _load_rules(getattr(settings, 'COMPATIBILITY_RULES_FILE', None) or None)
