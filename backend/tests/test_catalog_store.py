"""
Tests for the catalog document mapping and the JSON file catalog store
"""
import copy
import json
import os
from unittest import mock

from django.test import SimpleTestCase

from domain.shared.exceptions import CatalogStorageException, ValidationException
from infrastructure.persistence.catalog_store import (
    BACKUPS_DIRNAME,
    CATALOG_FILENAME,
    JsonFileCatalogRepository,
    display_timestamp,
    is_backup_filename,
)
from infrastructure.persistence.documents import (
    catalog_from_document,
    catalog_to_document,
    configuration_from_document,
    configuration_to_document,
)
from infrastructure.persistence.seed import TXE_CATALOG_DATA, validate_seed
from tests.factories import TempCatalogMixin, TestDataFactory


class CatalogDocumentTests(SimpleTestCase):
    """Catalog <-> JSON document"""

    def test_round_trip_preserves_document(self):
        document = catalog_to_document(TestDataFactory.seed_catalog())
        again = catalog_to_document(catalog_from_document(copy.deepcopy(document)))
        self.assertEqual(again, document)

    def test_seed_document_fields(self):
        document = catalog_to_document(TestDataFactory.seed_catalog())
        for key in ('models', 'ioModules', 'licenses', 'smsModels'):
            self.assertEqual(document[key], TXE_CATALOG_DATA[key])
        self.assertEqual(document['metadata']['version'], '1.0.0')

    def test_unbound_license_omits_model_id(self):
        document = catalog_to_document(TestDataFactory.seed_catalog())
        generic = document['licenses'][0]
        self.assertEqual(generic['sku'], 'LIC-TPS-INSPECT-1Y-1G')
        self.assertNotIn('modelId', generic)

    def test_missing_sections_default_to_empty(self):
        catalog = catalog_from_document({'models': []})
        self.assertTrue(catalog.is_empty)
        self.assertIsNotNone(catalog.metadata.last_updated)

    def test_malformed_documents_rejected(self):
        with self.assertRaises(ValidationException):
            catalog_from_document([])
        with self.assertRaises(ValidationException):
            catalog_from_document({'models': 'txe-5600'})
        with self.assertRaises(ValidationException):
            catalog_from_document({'models': [{'id': 'txe-lab', 'name': 'Lab'}]})
        with self.assertRaises(ValidationException):
            catalog_from_document({'ioModules': [{'sku': 'TPNN0991', 'name': 'x', 'category': 'Other'}]})

    def test_configuration_round_trip(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-8600', throughput=10, inspect='TPNN0277', slot2='TPNN0371', sms='TPNN0304'
        )
        document = configuration_to_document(config)
        self.assertEqual(document['slots'], [
            {'slot': 1, 'moduleSku': None},
            {'slot': 2, 'moduleSku': 'TPNN0371'},
        ])
        self.assertEqual(configuration_from_document(document), config)

    def test_configuration_from_sparse_document(self):
        config = configuration_from_document({'modelId': 'txe-5600', 'licenses': 'none'})
        self.assertEqual(len(config.id), 8)
        self.assertEqual(config.model_id, 'txe-5600')
        self.assertIsNone(config.licenses.inspect)
        self.assertEqual(len(config.slots), 2)


class JsonFileCatalogRepositoryTests(TempCatalogMixin, SimpleTestCase):
    """Reading, writing and backups on disk"""

    def backups(self):
        return sorted(os.listdir(os.path.join(self.data_dir, BACKUPS_DIRNAME)))

    def test_missing_file_reads_as_empty_catalog(self):
        catalog = self.repository.read()
        self.assertTrue(catalog.is_empty)
        self.assertTrue(os.path.isdir(os.path.join(self.data_dir, BACKUPS_DIRNAME)))

    def test_invalid_file_reads_as_empty_catalog(self):
        with open(os.path.join(self.data_dir, CATALOG_FILENAME), 'w') as f:
            f.write('{not json')
        self.assertTrue(self.repository.read().is_empty)

    def test_write_then_read(self):
        written = self.repository.write(TestDataFactory.seed_catalog(), 'alice')
        self.assertEqual(written.metadata.updated_by, 'alice')

        catalog = self.repository.read()
        self.assertEqual(catalog_to_document(catalog), catalog_to_document(written))
        self.assertEqual(validate_seed(catalog), [])

    def test_write_defaults_updated_by_to_system(self):
        self.repository.write(TestDataFactory.seed_catalog())
        self.assertEqual(self.repository.read().metadata.updated_by, 'system')

    def test_first_write_creates_no_backup(self):
        self.repository.write(TestDataFactory.seed_catalog())
        self.assertEqual(self.backups(), [])

    def test_each_overwrite_backs_up_previous_document(self):
        self.repository.write(TestDataFactory.seed_catalog(), 'first')
        catalog = self.repository.read()
        catalog.remove_sms('TPNN0432')
        self.repository.write(catalog, 'second')

        backups = self.repository.list_backups()
        self.assertEqual(len(backups), 1)
        self.assertTrue(is_backup_filename(backups[0].filename))
        self.assertGreater(backups[0].size, 0)
        with open(os.path.join(self.data_dir, BACKUPS_DIRNAME, backups[0].filename)) as f:
            self.assertEqual(json.load(f)['metadata']['updatedBy'], 'first')

    def test_backups_pruned_to_max(self):
        repository = JsonFileCatalogRepository(self.data_dir, max_backups=3)
        catalog = TestDataFactory.seed_catalog()
        for _ in range(6):
            repository.write(catalog)
        self.assertEqual(len(self.backups()), 3)
        listed = [b.filename for b in repository.list_backups()]
        self.assertEqual(listed, sorted(listed, reverse=True))

    def test_restore_backup(self):
        self.repository.write(TestDataFactory.seed_catalog())
        catalog = self.repository.read()
        catalog.remove_sms('TPNN0432')
        self.repository.write(catalog)
        self.assertEqual(len(self.repository.read().sms_models), 2)

        backup = self.repository.list_backups()[0]
        restored = self.repository.restore(backup.filename, 'restore')
        self.assertEqual(len(restored.sms_models), 3)
        self.assertEqual(self.repository.read().metadata.updated_by, 'restore')

    def test_restore_rejects_bad_names(self):
        for name in ('../product-catalog.json', 'product-catalog.json', 'catalog-x.txt'):
            with self.assertRaises(CatalogStorageException):
                self.repository.restore(name)

    def test_restore_missing_backup(self):
        with self.assertRaises(CatalogStorageException) as ctx:
            self.repository.restore('catalog-2024-01-01T00-00-00-000Z.json')
        self.assertIn('backup not found', ctx.exception.message)

    def test_export_is_pretty_json(self):
        self.repository.write(TestDataFactory.seed_catalog())
        exported = self.repository.export_json()
        self.assertIn('\n  "models": [', exported)
        self.assertEqual(len(json.loads(exported)['licenses']), 42)

    def test_import_replaces_catalog(self):
        document = copy.deepcopy(TXE_CATALOG_DATA)
        document['smsModels'] = document['smsModels'][:1]
        catalog = self.repository.import_json(json.dumps(document), 'import')
        self.assertEqual(len(catalog.sms_models), 1)
        self.assertEqual(self.repository.read().metadata.updated_by, 'import')

    def test_import_rejects_invalid_json(self):
        with self.assertRaises(CatalogStorageException) as ctx:
            self.repository.import_json('{"models": ')
        self.assertIn('invalid JSON', ctx.exception.message)

    def test_import_rejects_inconsistent_catalog(self):
        document = copy.deepcopy(TXE_CATALOG_DATA)
        document['models'] = document['models'][:1]
        with self.assertRaises(CatalogStorageException):
            self.repository.import_json(json.dumps(document))
        self.assertTrue(self.repository.read().is_empty)

    def mistyped_documents(self):
        """Seed document variants that break field types or formats."""
        ceiling = copy.deepcopy(TXE_CATALOG_DATA)
        for lic in ceiling['licenses']:
            lic['appliesToGbpsMax'] = str(lic['appliesToGbpsMax'])
        sku = copy.deepcopy(TXE_CATALOG_DATA)
        sku['licenses'][0]['sku'] = 'not-a-sku'
        group = copy.deepcopy(TXE_CATALOG_DATA)
        group['licenses'][0]['group'] = 'inspect'
        return [ceiling, sku, group]

    def test_import_rejects_mistyped_documents(self):
        for document in self.mistyped_documents():
            with self.assertRaises(CatalogStorageException):
                self.repository.import_json(json.dumps(document))
        self.assertTrue(self.repository.read().is_empty)

    def test_restore_rejects_mistyped_backup(self):
        self.repository.write(TestDataFactory.seed_catalog())
        for i, document in enumerate(self.mistyped_documents()):
            name = f'catalog-2024-01-01T00-00-0{i}-000000Z.json'
            with open(os.path.join(self.data_dir, BACKUPS_DIRNAME, name), 'w') as f:
                json.dump(document, f)
            with self.assertRaises(CatalogStorageException):
                self.repository.restore(name)
        self.assertEqual(len(self.repository.read().licenses), 42)

    def test_mistyped_file_reads_as_empty_catalog(self):
        with open(os.path.join(self.data_dir, CATALOG_FILENAME), 'w') as f:
            json.dump(self.mistyped_documents()[0], f)
        self.assertTrue(self.repository.read().is_empty)

    def test_failed_write_leaves_no_temp_file(self):
        self.repository.write(TestDataFactory.seed_catalog(), 'first')
        with mock.patch('infrastructure.persistence.catalog_store.json.dump', side_effect=OSError('disk full')):
            with self.assertRaises(OSError):
                self.repository.write(TestDataFactory.seed_catalog(), 'second')
        self.assertNotIn(CATALOG_FILENAME + '.tmp', os.listdir(self.data_dir))
        self.assertEqual(self.repository.read().metadata.updated_by, 'first')

    def test_stray_files_in_backup_directory_ignored(self):
        stray = os.path.join(self.data_dir, BACKUPS_DIRNAME, 'catalog-zz.json')
        os.makedirs(os.path.dirname(stray), exist_ok=True)
        with open(stray, 'w') as f:
            f.write('{}')
        repository = JsonFileCatalogRepository(self.data_dir, max_backups=2)
        for _ in range(4):
            repository.write(TestDataFactory.seed_catalog())
        listed = [b.filename for b in repository.list_backups()]
        self.assertEqual(len(listed), 2)
        self.assertNotIn('catalog-zz.json', listed)
        self.assertEqual(len(self.backups()), 3)


class BackupNameTests(SimpleTestCase):

    def test_display_timestamp(self):
        self.assertEqual(
            display_timestamp('catalog-2024-05-01T13-45-09-123456Z.json'),
            '2024-05-01 13:45:09',
        )
        self.assertEqual(display_timestamp('catalog-manual.json'), 'manual')

    def test_only_timestamped_names_are_backups(self):
        self.assertTrue(is_backup_filename('catalog-2024-05-01T13-45-09-123456Z.json'))
        for name in ('catalog-zz.json', 'catalog-manual.json', '../catalog-2024-05-01T13-45-09-1Z.json'):
            self.assertFalse(is_backup_filename(name))
