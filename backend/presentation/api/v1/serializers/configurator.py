"""
Configurator Serializers.

Configurations arrive from the client with every request; the server keeps
no session state.
"""

from rest_framework import serializers

from domain.configurator.cascade import CHANGE_FIELDS
from domain.shared.value_objects import MODEL_SLOT_COUNT

from .base import OptionalCharField


class SlotSelectionSerializer(serializers.Serializer):
    slot = serializers.IntegerField(min_value=1, max_value=MODEL_SLOT_COUNT)
    moduleSku = OptionalCharField()


class LicenseSelectionSerializer(serializers.Serializer):
    inspect = OptionalCharField()
    dv = OptionalCharField()


class ConfigurationSerializer(serializers.Serializer):
    """One configuration as held by the client."""

    id = OptionalCharField(max_length=50)
    name = serializers.CharField(max_length=200, allow_blank=True, default="Configuration")
    modelId = OptionalCharField(max_length=50)
    throughputGbps = serializers.FloatField(required=False, allow_null=True)
    slots = SlotSelectionSerializer(many=True, required=False)
    licenses = LicenseSelectionSerializer(required=False)
    smsSku = OptionalCharField()

    def validate_slots(self, value):
        numbers = [s['slot'] for s in value]
        if len(numbers) != len(set(numbers)):
            raise serializers.ValidationError('Each slot may appear only once.')
        return value


class NewConfigurationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)


class CascadeRequestSerializer(serializers.Serializer):
    """A single field change applied to a configuration."""

    configuration = ConfigurationSerializer()
    field = serializers.ChoiceField(choices=CHANGE_FIELDS)
    value = serializers.JSONField(required=False, allow_null=True)
    slot = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs['field'] == 'slot' and attrs.get('slot') is None:
            raise serializers.ValidationError({'slot': 'Slot number is required for slot changes.'})
        return attrs


class OptionsRequestSerializer(serializers.Serializer):
    configuration = ConfigurationSerializer()


class QuoteRequestSerializer(serializers.Serializer):
    configurations = ConfigurationSerializer(many=True)

