"""
Base Serializers.

Common serializer fields and mixins.
"""

from rest_framework import serializers

from domain.shared.value_objects import HARDWARE_SKU_RE, LICENSE_SKU_RE


HARDWARE_SKU_REGEX = HARDWARE_SKU_RE.pattern
LICENSE_SKU_REGEX = LICENSE_SKU_RE.pattern


class HardwareSkuField(serializers.RegexField):
    """SKU of a model, IO module or SMS appliance (TPNNxxxx)."""

    def __init__(self, **kwargs):
        kwargs.setdefault('error_messages', {'invalid': 'SKU must match TPNNxxxx format'})
        super().__init__(HARDWARE_SKU_REGEX, **kwargs)


class LicenseSkuField(serializers.RegexField):
    """License SKU: TPNNxxxx, TPNMxxxx or LIC-TPS-<GROUP>-<N>Y-<TIER>."""

    def __init__(self, **kwargs):
        kwargs.setdefault('error_messages', {'invalid': 'Invalid license SKU format'})
        super().__init__(LICENSE_SKU_REGEX, **kwargs)


class PositiveFloatField(serializers.FloatField):
    """Float strictly greater than zero."""

    default_error_messages = {
        'not_positive': 'Must be greater than 0.',
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value <= 0:
            self.fail('not_positive')
        return value


class PriceField(serializers.FloatField):
    """Optional non-negative price."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('min_value', 0)
        super().__init__(**kwargs)


class OptionalCharField(serializers.CharField):
    """Optional string where blank and null both mean "not selected"."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('allow_blank', True)
        super().__init__(**kwargs)


class DropNullsMixin:
    """Omit unset optional fields from validated data, matching the stored document."""

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        return {k: v for k, v in validated.items() if v is not None}
