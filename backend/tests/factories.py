"""
Test utilities and factories for creating test data
"""
import tempfile

from django.test import override_settings

from domain.catalog.aggregates import ProductCatalog
from domain.catalog.entities import IOModule, License, SmsModel, TxeModel
from domain.configurator.entities import (
    Configuration,
    LicenseSelection,
    SlotSelection,
)
from domain.shared.value_objects import LicenseGroup, ThroughputTier
from infrastructure.persistence.catalog_store import JsonFileCatalogRepository
from infrastructure.persistence.seed import build_seed_catalog


class TestDataFactory:
    """Factory class for creating test data"""

    __test__ = False

    @staticmethod
    def seed_catalog():
        """The default TXE catalog"""
        return build_seed_catalog()

    @staticmethod
    def create_model(model_id='txe-lab', name='Lab TXE', sku='TPNN0990', tiers=((5, '5 Gbps'), (10, '10 Gbps'))):
        """Create a chassis model"""
        return TxeModel(
            id=model_id,
            name=name,
            base_gbps=max(gbps for gbps, _ in tiers),
            tiers=tuple(ThroughputTier(label=label, gbps=gbps) for gbps, label in tiers),
            sku=sku,
        )

    @staticmethod
    def create_module(sku='TPNN0991', name='Lab IO Module'):
        """Create an IO module"""
        return IOModule(sku=sku, name=name, ports='4 x RJ45', port_speed='1 Gbps')

    @staticmethod
    def create_license(sku='TPNN0992', gbps=5, group=LicenseGroup.INSPECT, model_id=None, name=None):
        """Create a license, unbound unless model_id is given"""
        return License(
            sku=sku,
            name=name or f'Lab {group.value} license {gbps}G',
            applies_to_gbps_max=gbps,
            group=group,
            model_id=model_id,
        )

    @staticmethod
    def create_sms(sku='TPNN0993', name='Lab SMS'):
        """Create an SMS appliance"""
        return SmsModel(sku=sku, name=name)

    @staticmethod
    def create_configuration(config_id='cfg00001', name='Configuration', model_id=None, throughput=None,
                             inspect=None, dv=None, slot1=None, slot2=None, sms=None):
        """Create a configuration with explicit selections"""
        return Configuration(
            id=config_id,
            name=name,
            model_id=model_id,
            throughput_gbps=throughput,
            slots=(SlotSelection(1, slot1), SlotSelection(2, slot2)),
            licenses=LicenseSelection(inspect=inspect, dv=dv),
            sms_sku=sms,
        )

    @staticmethod
    def empty_catalog():
        """Catalog with no entries"""
        return ProductCatalog.create_empty()


class TempCatalogMixin:
    """
    Points the catalog store at a fresh temporary directory for each test.

    Set `seed = True` on the test class to start from the default catalog.
    """

    seed = False

    def setUp(self):
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.data_dir = tmp.name

        override = override_settings(CATALOG_DATA_DIR=self.data_dir)
        override.enable()
        self.addCleanup(override.disable)

        self.repository = JsonFileCatalogRepository(self.data_dir)
        if self.seed:
            self.repository.write(TestDataFactory.seed_catalog(), 'test-setup')
