"""
Tests for configuration cascade rules and the configurator session
"""
from dataclasses import replace

from django.test import SimpleTestCase

from domain.catalog.compatibility import DEFAULT_RULES
from domain.configurator.cascade import (
    COPY_SUFFIX,
    apply_change,
    change_model,
    change_throughput,
    clone_configuration,
    create_empty_configuration,
    match_tier_licenses,
)
from domain.configurator.entities import Configuration, SlotSelection
from domain.configurator.session import ConfiguratorSession
from tests.factories import TestDataFactory


class CascadeTests(SimpleTestCase):
    """Model -> throughput -> license cascade"""

    def setUp(self):
        self.catalog = TestDataFactory.seed_catalog()
        self.config = create_empty_configuration(self.catalog)

    def test_new_configuration_uses_first_model_and_tier(self):
        self.assertEqual(self.config.model_id, 'txe-5600')
        self.assertEqual(self.config.throughput_gbps, 0.25)
        self.assertIsNone(self.config.licenses.inspect)
        self.assertIsNone(self.config.licenses.dv)
        self.assertEqual([s.slot for s in self.config.slots], [1, 2])
        self.assertEqual(len(self.config.id), 8)

    def test_new_configuration_on_empty_catalog(self):
        config = create_empty_configuration(TestDataFactory.empty_catalog())
        self.assertIsNone(config.model_id)
        self.assertIsNone(config.throughput_gbps)

    def test_model_change_selects_first_tier_and_matching_licenses(self):
        config = change_model(self.config, self.catalog, 'txe-9200')
        self.assertEqual(config.throughput_gbps, 40)
        self.assertEqual(config.licenses.inspect, 'TPNN0280')
        self.assertEqual(config.licenses.dv, 'TPNN0290')

    def test_5600_at_5gbps_auto_selects_licenses(self):
        config = change_model(self.config, self.catalog, 'txe-5600')
        self.assertEqual(config.licenses.inspect, 'TPNM0129')
        self.assertEqual(config.licenses.dv, 'TPNN0281')

        config = change_throughput(config, self.catalog, 5)
        self.assertEqual(config.throughput_gbps, 5)
        self.assertEqual(config.licenses.inspect, 'TPNN0276')
        self.assertEqual(config.licenses.dv, 'TPNN0286')

    def test_auto_selected_licenses_match_tier_exactly(self):
        for model in self.catalog.models:
            for tier in model.tiers:
                config = change_throughput(
                    change_model(self.config, self.catalog, model.id), self.catalog, tier.gbps
                )
                for sku in (config.licenses.inspect, config.licenses.dv):
                    if sku is None:
                        continue
                    lic = self.catalog.find_license(sku, model.id)
                    self.assertEqual(lic.applies_to_gbps_max, config.throughput_gbps)
                    self.assertEqual(lic.model_id, model.id)
                    self.assertTrue(DEFAULT_RULES.is_license_compatible(sku, model.id))

    def test_throughput_without_exact_license_clears_selection(self):
        self.catalog.add_model(TestDataFactory.create_model())
        config = change_model(self.config, self.catalog, 'txe-lab')
        self.assertEqual(config.throughput_gbps, 5)
        self.assertIsNone(config.licenses.inspect)
        self.assertIsNone(config.licenses.dv)

    def test_unknown_model_clears_dependent_fields(self):
        config = change_model(self.config, self.catalog, 'txe-1234')
        self.assertIsNone(config.model_id)
        self.assertIsNone(config.throughput_gbps)
        self.assertIsNone(config.licenses.inspect)

    def test_model_change_keeps_slots(self):
        config = self.config.with_slot(1, 'TPNN0410')
        config = change_model(config, self.catalog, 'txe-8600')
        self.assertEqual(config.slot_sku(1), 'TPNN0410')

    def test_throughput_not_a_tier_is_ignored(self):
        config = change_throughput(self.config, self.catalog, 7)
        self.assertEqual(config, self.config)
        config = change_throughput(self.config, self.catalog, 'fast')
        self.assertEqual(config, self.config)

    def test_throughput_accepts_numeric_strings(self):
        config = change_throughput(self.config, self.catalog, '10')
        self.assertEqual(config.throughput_gbps, 10)
        self.assertEqual(config.licenses.inspect, 'TPNN0277')

    def test_match_tier_licenses_without_model(self):
        selection = match_tier_licenses(self.catalog, None, 5)
        self.assertIsNone(selection.inspect)
        self.assertIsNone(selection.dv)

    def test_license_changes_do_not_cascade(self):
        config = change_throughput(self.config, self.catalog, 5)
        config = apply_change(config, self.catalog, 'inspect', 'TPNN0277')
        self.assertEqual(config.licenses.inspect, 'TPNN0277')
        self.assertEqual(config.licenses.dv, 'TPNN0286')
        self.assertEqual(config.throughput_gbps, 5)

        config = apply_change(config, self.catalog, 'dv', '')
        self.assertIsNone(config.licenses.dv)

    def test_slot_and_sms_changes(self):
        config = apply_change(self.config, self.catalog, 'slot', 'TPNN0370', slot=2)
        self.assertEqual(config.slot_sku(2), 'TPNN0370')
        self.assertIsNone(config.slot_sku(1))

        config = apply_change(config, self.catalog, 'slot', 'TPNN0370', slot=3)
        self.assertEqual(config.slot_sku(2), 'TPNN0370')

        config = apply_change(config, self.catalog, 'sms', 'TPNN0304')
        self.assertEqual(config.sms_sku, 'TPNN0304')

    def test_rename_and_unknown_field(self):
        config = apply_change(self.config, self.catalog, 'name', 'Branch office')
        self.assertEqual(config.name, 'Branch office')
        self.assertEqual(apply_change(config, self.catalog, 'colour', 'red'), config)

    def test_rename_stores_text(self):
        self.assertEqual(apply_change(self.config, self.catalog, 'name', 7).name, '7')
        self.assertEqual(apply_change(self.config, self.catalog, 'name', None).name, '')

    def test_changes_never_mutate_input(self):
        before = replace(self.config)
        change_model(self.config, self.catalog, 'txe-9200')
        apply_change(self.config, self.catalog, 'slot', 'TPNN0410', slot=1)
        self.assertEqual(self.config, before)

    def test_clone_gets_new_id_and_copy_suffix(self):
        config = change_throughput(self.config, self.catalog, 5)
        clone = clone_configuration(config)
        self.assertNotEqual(clone.id, config.id)
        self.assertEqual(clone.name, f'{config.name}{COPY_SUFFIX}')
        self.assertEqual(clone.licenses, config.licenses)
        self.assertEqual(clone.slots, config.slots)


class ConfigurationTests(SimpleTestCase):
    """Configuration normalisation"""

    def test_slots_normalised_to_two(self):
        config = Configuration(id='x', slots=(SlotSelection(2, 'TPNN0410'), SlotSelection(7, 'TPNN0411')))
        self.assertEqual([(s.slot, s.module_sku) for s in config.slots], [(1, None), (2, 'TPNN0410')])

    def test_blank_selections_become_none(self):
        config = TestDataFactory.create_configuration(model_id='', inspect=' ', sms='')
        self.assertIsNone(config.model_id)
        self.assertIsNone(config.licenses.inspect)
        self.assertIsNone(config.sms_sku)
        self.assertTrue(config.is_empty)


class ConfiguratorSessionTests(SimpleTestCase):
    """Session owning the configuration list"""

    def setUp(self):
        self.catalog = TestDataFactory.seed_catalog()
        self.session = ConfiguratorSession(self.catalog)

    def test_session_starts_with_one_configuration(self):
        self.assertEqual(len(self.session.configurations), 1)
        self.assertEqual(self.session.selected_index, 0)

    def test_add_selects_new_configuration(self):
        added = self.session.add_configuration('Second')
        self.assertEqual(self.session.current, added)
        self.assertEqual(self.session.selected_index, 1)
        self.assertEqual(added.name, 'Second')

    def test_clone_selected(self):
        self.session.apply('throughput', 5)
        clone = self.session.clone_selected()
        self.assertEqual(len(self.session.configurations), 2)
        self.assertEqual(self.session.current, clone)
        self.assertEqual(clone.licenses.inspect, 'TPNN0276')

    def test_remove_before_selection_shifts_index(self):
        self.session.add_configuration()
        self.session.add_configuration()
        self.session.select(2)
        self.session.remove_configuration(0)
        self.assertEqual(self.session.selected_index, 1)
        self.assertEqual(len(self.session.configurations), 2)

    def test_remove_after_selection_keeps_index(self):
        self.session.add_configuration()
        self.session.select(0)
        self.session.remove_configuration(1)
        self.assertEqual(self.session.selected_index, 0)

    def test_last_configuration_cannot_be_removed(self):
        self.assertIsNone(self.session.remove_configuration(0))
        self.assertEqual(len(self.session.configurations), 1)

    def test_out_of_range_indices_ignored(self):
        self.assertIsNone(self.session.remove_configuration(5))
        current = self.session.current
        self.assertEqual(self.session.select(-1), current)
        self.assertEqual(self.session.selected_index, 0)

    def test_apply_updates_only_current(self):
        first = self.session.current
        self.session.add_configuration()
        self.session.apply('model', 'txe-9200')
        self.assertEqual(self.session.configurations[0], first)
        self.assertEqual(self.session.current.model_id, 'txe-9200')

    def test_quote_lines_cover_all_configurations(self):
        self.session.apply('throughput', 5)
        self.session.add_configuration()
        self.session.apply('model', 'txe-9200')
        lines = self.session.quote_lines()
        self.assertEqual(sorted({line.config_id for line in lines}), [1, 2])
