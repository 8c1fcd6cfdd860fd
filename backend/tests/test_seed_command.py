"""
Tests for the seed_catalog management command
"""
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

from infrastructure.persistence.seed import CRITICAL_SKUS, validate_seed
from tests.factories import TempCatalogMixin, TestDataFactory


class SeedCatalogCommandTests(TempCatalogMixin, SimpleTestCase):

    def test_seeds_empty_store(self):
        out = StringIO()
        call_command('seed_catalog', stdout=out)

        catalog = self.repository.read()
        self.assertEqual(validate_seed(catalog), [])
        self.assertEqual(catalog.metadata.updated_by, 'seed-catalog')
        self.assertIn('3 models, 13 modules, 42 licenses, 3 SMS models', out.getvalue())
        self.assertIn('seeded and validated', out.getvalue())

    def test_refuses_to_overwrite_without_force(self):
        call_command('seed_catalog', stdout=StringIO())
        with self.assertRaises(CommandError):
            call_command('seed_catalog', stdout=StringIO())

    def test_force_overwrites_and_records_name(self):
        call_command('seed_catalog', stdout=StringIO())
        call_command('seed_catalog', '--force', '--updated-by', 'ops', stdout=StringIO())
        self.assertEqual(self.repository.read().metadata.updated_by, 'ops')
        self.assertEqual(len(self.repository.list_backups()), 1)


class ValidateSeedTests(SimpleTestCase):

    def test_reports_missing_entries(self):
        catalog = TestDataFactory.seed_catalog()
        catalog.sms_models.clear()
        errors = validate_seed(catalog)
        self.assertIn('SMS models count mismatch: expected 3, got 0', errors)
        self.assertIn('Critical SKU missing: TPNN0304', errors)
        self.assertIn('TPNN0304', CRITICAL_SKUS)
