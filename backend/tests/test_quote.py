"""
Tests for quote flattening, the plain-text quote table and configuration review
"""
from django.test import SimpleTestCase

from domain.configurator.quote import (
    MISSING_CONFIG_ID,
    build_quote_lines,
    format_quote_table,
    hardware_description,
)
from domain.configurator.validation import configuration_issues
from tests.factories import TestDataFactory


class QuoteLinesTests(SimpleTestCase):
    """Configurations -> ordered quote lines"""

    def setUp(self):
        self.catalog = TestDataFactory.seed_catalog()
        self.config = TestDataFactory.create_configuration(
            config_id='cfg00001',
            model_id='txe-5600',
            throughput=5,
            inspect='TPNN0276',
            dv='TPNN0286',
            slot1='TPNN0410',
            sms='TPNN0304',
        )

    def test_line_order_within_configuration(self):
        lines = build_quote_lines([self.config], self.catalog)
        self.assertEqual(
            [line.part for line in lines],
            ['TPNN0424', 'TPNN0276', 'TPNN0286', 'TPNN0410', 'TPNN0304'],
        )
        self.assertEqual(lines[0].description, 'TippingPoint 5600TXE HW + Support 1Yr')
        self.assertEqual(
            lines[1].description,
            'TippingPoint 5Gbps TPS Inspection License + Support + DV 1Yr',
        )

    def test_config_ids_are_one_based_positions(self):
        second = TestDataFactory.create_configuration(config_id='cfg00002', model_id='txe-9200')
        lines = build_quote_lines([self.config, second], self.catalog)
        self.assertEqual([line.config_id for line in lines], [1, 1, 1, 1, 2, None])
        self.assertEqual(lines[4].part, 'TPNN0368')

    def test_sms_lines_follow_all_configurations(self):
        second = TestDataFactory.create_configuration(
            config_id='cfg00002', model_id='txe-8600', sms='TPNN0431'
        )
        lines = build_quote_lines([self.config, second], self.catalog)
        self.assertEqual([line.part for line in lines[-2:]], ['TPNN0304', 'TPNN0431'])
        self.assertTrue(all(line.config_id is None for line in lines[-2:]))

    def test_every_line_has_quantity_one(self):
        twin = TestDataFactory.create_configuration(config_id='cfg00002', model_id='txe-5600', slot1='TPNN0410', slot2='TPNN0410')
        lines = build_quote_lines([self.config, twin], self.catalog)
        self.assertTrue(all(line.qty == 1 for line in lines))
        self.assertEqual([line.part for line in lines].count('TPNN0410'), 3)

    def test_unresolved_selections_are_skipped(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-1234', inspect='TPNN9999', slot2='TPNN9998', sms='TPNN9997'
        )
        self.assertEqual(build_quote_lines([config], self.catalog), [])

    def test_empty_configuration_produces_no_lines(self):
        config = TestDataFactory.create_configuration()
        self.assertEqual(build_quote_lines([config], self.catalog), [])
        self.assertEqual(build_quote_lines([], self.catalog), [])

    def test_flattening_is_idempotent(self):
        configs = [self.config]
        first = build_quote_lines(configs, self.catalog)
        second = build_quote_lines(configs, self.catalog)
        self.assertEqual(first, second)
        self.assertEqual(configs, [self.config])

    def test_shared_license_resolves_to_selected_model(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-9200', throughput=40, inspect='TPNN0280'
        )
        lines = build_quote_lines([config], self.catalog)
        self.assertEqual(lines[1].part, 'TPNN0280')
        self.assertEqual(lines[1].description, 'TippingPoint 40Gbps TPS Inspection License + Support + DV 1Yr')

    def test_hardware_description_fallback(self):
        model = TestDataFactory.create_model()
        self.assertEqual(hardware_description(model), 'Lab TXE + HW Support 1Yr')


class QuoteTableTests(SimpleTestCase):
    """Plain-text quote table"""

    def test_table_layout(self):
        catalog = TestDataFactory.seed_catalog()
        config = TestDataFactory.create_configuration(model_id='txe-9200', sms='TPNN0304')
        rows = format_quote_table(build_quote_lines([config], catalog)).split('\n')

        self.assertEqual(len(rows), 4)
        self.assertTrue(rows[0].startswith('SKU      | Description'))
        self.assertTrue(rows[0].endswith('Quantity | Config ID'))
        self.assertEqual(set(rows[1]) - {'-', '+'}, set())
        self.assertTrue(rows[2].startswith('TPNN0368 | TippingPoint 9200TXE HW + Support 1Yr'))
        self.assertTrue(rows[2].endswith('1 |         1'))
        self.assertTrue(rows[3].endswith(f'1 | {MISSING_CONFIG_ID.rjust(9)}'))

    def test_table_with_no_lines_has_header_only(self):
        rows = format_quote_table([]).split('\n')
        self.assertEqual(rows[0], 'SKU | Description | Quantity | Config ID')
        self.assertEqual(len(rows), 2)


class ConfigurationIssuesTests(SimpleTestCase):
    """Review of a configuration against the catalog"""

    def setUp(self):
        self.catalog = TestDataFactory.seed_catalog()

    def test_valid_configuration_has_no_issues(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-8600', throughput=10, inspect='TPNN0277', dv='TPNN0287',
            slot1='TPNN0374', slot2='TPNN0371', sms='TPNN0431',
        )
        self.assertEqual(configuration_issues(config, self.catalog), [])

    def test_incompatible_module_reported(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-5600', throughput=1, slot1='TPNN0372'
        )
        issues = configuration_issues(config, self.catalog)
        self.assertEqual(len(issues), 1)
        self.assertIn('TPNN0372', issues[0])

    def test_bandwidth_mismatch_reported(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-5600', throughput=1, inspect='TPNN0277', dv='TPNN0283',
        )
        issues = configuration_issues(config, self.catalog)
        self.assertEqual(len(issues), 1)
        self.assertIn('bandwidth', issues[0])

    def test_unknown_entries_reported(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-1234', inspect='TPNN9999', slot1='TPNN9998', sms='TPNN9997',
        )
        issues = configuration_issues(config, self.catalog)
        self.assertEqual(len(issues), 4)

    def test_license_below_throughput_reported(self):
        config = TestDataFactory.create_configuration(
            model_id='txe-5600', throughput=10, inspect='TPNN0276',
        )
        issues = configuration_issues(config, self.catalog)
        self.assertEqual(len(issues), 1)
        self.assertIn('not valid for 5600 TXE 10Gbps', issues[0])

    def test_throughput_not_a_tier_reported(self):
        config = TestDataFactory.create_configuration(model_id='txe-9200', throughput=50)
        self.assertEqual(
            configuration_issues(config, self.catalog),
            ['Throughput 50 Gbps is not a tier of 9200 TXE 100Gbps'],
        )
