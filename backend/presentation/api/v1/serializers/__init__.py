"""
Serializers Package.

All API serializers for the TXE configurator.
"""

from .catalog import (
    ThroughputTierSerializer,
    TxeModelSerializer,
    IOModuleSerializer,
    LicenseSerializer,
    SmsModelSerializer,
    CatalogMetadataSerializer,
    CatalogDocumentSerializer,
    CatalogImportSerializer,
    BackupRestoreSerializer,
    BackupInfoSerializer,
)

from .configurator import (
    SlotSelectionSerializer,
    LicenseSelectionSerializer,
    ConfigurationSerializer,
    NewConfigurationSerializer,
    CascadeRequestSerializer,
    OptionsRequestSerializer,
    QuoteRequestSerializer,
)


__all__ = [
    # Catalog
    'ThroughputTierSerializer',
    'TxeModelSerializer',
    'IOModuleSerializer',
    'LicenseSerializer',
    'SmsModelSerializer',
    'CatalogMetadataSerializer',
    'CatalogDocumentSerializer',
    'CatalogImportSerializer',
    'BackupRestoreSerializer',
    'BackupInfoSerializer',

    # Configurator
    'SlotSelectionSerializer',
    'LicenseSelectionSerializer',
    'ConfigurationSerializer',
    'NewConfigurationSerializer',
    'CascadeRequestSerializer',
    'OptionsRequestSerializer',
    'QuoteRequestSerializer',
]
