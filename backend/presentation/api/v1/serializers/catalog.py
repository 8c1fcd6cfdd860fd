"""
Catalog Serializers.

Input validation for admin catalog edits. Field names are those of the
stored catalog document, so validated data maps straight onto the
document readers in infrastructure.persistence.documents.
"""

from rest_framework import serializers

from domain.shared.value_objects import (
    LicenseGroup,
    MODEL_FAMILY,
    MODEL_SLOT_COUNT,
    MODULE_CATEGORY,
    LICENSE_CATEGORY,
)

from .base import (
    DropNullsMixin,
    HardwareSkuField,
    LicenseSkuField,
    PositiveFloatField,
    PriceField,
)


# =============================================================================
# ENTITIES
# =============================================================================

class ThroughputTierSerializer(serializers.Serializer):
    label = serializers.CharField(max_length=50)
    gbps = PositiveFloatField()


class TxeModelSerializer(DropNullsMixin, serializers.Serializer):
    """Hardware chassis."""

    id = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=200)
    family = serializers.ChoiceField(choices=[MODEL_FAMILY], default=MODEL_FAMILY)
    baseGbps = PositiveFloatField()
    tiers = ThroughputTierSerializer(many=True, allow_empty=False)
    slots = serializers.ChoiceField(choices=[MODEL_SLOT_COUNT], default=MODEL_SLOT_COUNT)
    sku = HardwareSkuField(required=False, allow_null=True)
    price = PriceField()


class IOModuleSerializer(DropNullsMixin, serializers.Serializer):
    """Network IO module."""

    sku = HardwareSkuField()
    name = serializers.CharField(max_length=200)
    ports = serializers.CharField(max_length=200)
    portSpeed = serializers.CharField(max_length=100)
    category = serializers.ChoiceField(choices=[MODULE_CATEGORY], default=MODULE_CATEGORY)
    price = PriceField()


class LicenseSerializer(DropNullsMixin, serializers.Serializer):
    """Inspection or ThreatDV license."""

    sku = LicenseSkuField()
    name = serializers.CharField(max_length=200)
    category = serializers.ChoiceField(choices=[LICENSE_CATEGORY], default=LICENSE_CATEGORY)
    appliesToGbpsMax = PositiveFloatField()
    group = serializers.ChoiceField(
        choices=[g.value for g in LicenseGroup],
        required=False,
        allow_null=True,
    )
    modelId = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    price = PriceField()

    def validate_modelId(self, value):
        return value or None


class SmsModelSerializer(serializers.Serializer):
    """SMS management appliance."""

    sku = HardwareSkuField()
    name = serializers.CharField(max_length=200)


# =============================================================================
# CATALOG DOCUMENT
# =============================================================================

class CatalogMetadataSerializer(DropNullsMixin, serializers.Serializer):
    lastUpdated = serializers.CharField(required=False, allow_null=True)
    version = serializers.CharField(default="1.0.0")
    updatedBy = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class CatalogDocumentSerializer(serializers.Serializer):
    """Whole catalog, used for bulk replacement."""

    models = TxeModelSerializer(many=True)
    ioModules = IOModuleSerializer(many=True)
    licenses = LicenseSerializer(many=True)
    smsModels = SmsModelSerializer(many=True, required=False)
    metadata = CatalogMetadataSerializer(required=False)


class CatalogImportSerializer(serializers.Serializer):
    jsonData = serializers.CharField(trim_whitespace=False)


class BackupRestoreSerializer(serializers.Serializer):
    filename = serializers.CharField(max_length=255)


class BackupInfoSerializer(serializers.Serializer):
    filename = serializers.CharField(read_only=True)
    timestamp = serializers.CharField(read_only=True)
    size = serializers.IntegerField(read_only=True)
