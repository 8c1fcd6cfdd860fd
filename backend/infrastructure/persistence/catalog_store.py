"""
JSON file implementation of the catalog repository.

Layout under the data directory:
    product-catalog.json
    catalog-backups/catalog-<UTC timestamp>.json

Every write backs up the current document first and keeps only the newest
backups. Writes go to a temporary file which then replaces the catalog file.
"""

from __future__ import annotations
import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from domain.catalog.aggregates import ProductCatalog
from domain.catalog.repositories import BackupInfo, CatalogRepository
from domain.shared.events import describe_event
from domain.shared.exceptions import CatalogStorageException, DomainException

from .documents import catalog_from_document, catalog_to_document

logger = logging.getLogger(__name__)

CATALOG_FILENAME = "product-catalog.json"
BACKUPS_DIRNAME = "catalog-backups"
BACKUP_PREFIX = "catalog-"
BACKUP_SUFFIX = ".json"
DEFAULT_MAX_BACKUPS = 10

_BACKUP_NAME_RE = re.compile(r"^catalog-(\d{4}-\d{2}-\d{2})T(\d{2})-(\d{2})-(\d{2})-(\d+)Z\.json$")


def backup_timestamp(moment: Optional[datetime] = None) -> str:
    """Filesystem-safe UTC timestamp: ISO-8601 with ':' and '.' replaced by '-'."""
    moment = moment or datetime.now(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def display_timestamp(filename: str) -> str:
    """Readable timestamp for a backup file name; the bare stem when unparseable."""
    match = _BACKUP_NAME_RE.match(filename)
    if not match:
        return filename[len(BACKUP_PREFIX):-len(BACKUP_SUFFIX)]
    date, hh, mm, ss, _ = match.groups()
    return f"{date} {hh}:{mm}:{ss}"


def is_backup_filename(filename: str) -> bool:
    """Only names produced by backup_timestamp(); anything else is ignored by listing and pruning."""
    return bool(_BACKUP_NAME_RE.match(filename))


def load_catalog_document(doc) -> ProductCatalog:
    """Build and fully validate a catalog from a parsed JSON document."""
    catalog = catalog_from_document(doc)
    catalog.validate()
    return catalog


class JsonFileCatalogRepository(CatalogRepository):
    """Catalog store backed by a single JSON document on disk."""

    def __init__(self, data_dir: Union[str, Path], max_backups: int = DEFAULT_MAX_BACKUPS):
        self.data_dir = Path(data_dir)
        self.catalog_file = self.data_dir / CATALOG_FILENAME
        self.backups_dir = self.data_dir / BACKUPS_DIRNAME
        self.max_backups = max_backups

    def _ensure_directories(self) -> None:
        self.backups_dir.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # READ / WRITE
    # =========================================================================

    def read(self) -> ProductCatalog:
        self._ensure_directories()
        try:
            with open(self.catalog_file, encoding="utf-8") as f:
                return load_catalog_document(json.load(f))
        except FileNotFoundError:
            logger.warning(f"Product catalog file {self.catalog_file} not found, using empty catalog")
        except (ValueError, DomainException) as e:
            logger.warning(f"Product catalog file {self.catalog_file} is invalid ({e}), using empty catalog")
        return ProductCatalog.create_empty()

    def write(self, catalog: ProductCatalog, updated_by: Optional[str] = None) -> ProductCatalog:
        self._ensure_directories()
        stamped = catalog.stamped(updated_by)
        document = catalog_to_document(stamped)
        # validate before touching the file
        load_catalog_document(document)

        if self.catalog_file.exists():
            self._create_backup()

        tmp_file = self.catalog_file.with_name(self.catalog_file.name + ".tmp")
        try:
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_file, self.catalog_file)
        except Exception:
            tmp_file.unlink(missing_ok=True)
            raise

        for event in catalog.clear_domain_events():
            logger.info(f"Catalog {describe_event(event)} by {stamped.metadata.updated_by}")
        logger.info(
            f"Product catalog written by {stamped.metadata.updated_by}: "
            f"{len(stamped.models)} models, {len(stamped.io_modules)} modules, "
            f"{len(stamped.licenses)} licenses, {len(stamped.sms_models)} SMS"
        )
        return stamped

    # =========================================================================
    # BACKUPS
    # =========================================================================

    def _backup_files(self) -> List[str]:
        """Backup file names, newest first."""
        if not self.backups_dir.exists():
            return []
        names = [n for n in os.listdir(self.backups_dir) if is_backup_filename(n)]
        return sorted(names, reverse=True)

    def _create_backup(self) -> Path:
        backup_file = self.backups_dir / f"{BACKUP_PREFIX}{backup_timestamp()}{BACKUP_SUFFIX}"
        with open(self.catalog_file, "rb") as src:
            content = src.read()
        with open(backup_file, "wb") as dst:
            dst.write(content)
        logger.debug(f"Catalog backup created: {backup_file.name}")

        for stale in self._backup_files()[self.max_backups:]:
            try:
                (self.backups_dir / stale).unlink()
                logger.debug(f"Old catalog backup removed: {stale}")
            except OSError as e:
                logger.warning(f"Could not remove old backup {stale}: {e}")
        return backup_file

    def list_backups(self) -> List[BackupInfo]:
        self._ensure_directories()
        return [
            BackupInfo(
                filename=name,
                timestamp=display_timestamp(name),
                size=(self.backups_dir / name).stat().st_size,
            )
            for name in self._backup_files()
        ]

    def restore(self, filename: str, updated_by: Optional[str] = None) -> ProductCatalog:
        operation = f"restore from backup {filename}"
        if not is_backup_filename(filename):
            raise CatalogStorageException(operation, "invalid backup file name")
        backup_path = self.backups_dir / filename
        try:
            with open(backup_path, encoding="utf-8") as f:
                catalog = load_catalog_document(json.load(f))
        except FileNotFoundError:
            raise CatalogStorageException(operation, "backup not found")
        except ValueError as e:
            raise CatalogStorageException(operation, f"invalid JSON: {e}")
        except DomainException as e:
            raise CatalogStorageException(operation, e.message)
        logger.info(f"Restoring product catalog from {filename}")
        return self.write(catalog, updated_by)

    # =========================================================================
    # IMPORT / EXPORT
    # =========================================================================

    def export_json(self) -> str:
        return json.dumps(catalog_to_document(self.read()), indent=2)

    def import_json(self, data: str, updated_by: Optional[str] = None) -> ProductCatalog:
        try:
            catalog = load_catalog_document(json.loads(data))
        except (TypeError, ValueError) as e:
            raise CatalogStorageException("import catalog", f"invalid JSON: {e}")
        except DomainException as e:
            raise CatalogStorageException("import catalog", e.message)
        logger.info(f"Importing product catalog ({len(catalog.models)} models, {len(catalog.licenses)} licenses)")
        return self.write(catalog, updated_by)
