"""
Configurator Views.

The configurator is stateless on the server: the client sends its
configurations with each request and gets back the cascaded configuration,
the option lists for it, or the flattened quote.
"""

import logging

from django.conf import settings
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from domain.catalog.compatibility import (
    inspect_license_options,
    module_options,
    threatdv_license_options,
)
from domain.configurator.cascade import apply_change, create_empty_configuration
from domain.configurator.entities import DEFAULT_CONFIGURATION_NAME
from domain.configurator.quote import build_quote_lines, format_quote_table
from domain.configurator.validation import configuration_issues
from infrastructure.export.quote_excel import quote_filename, quote_workbook_bytes
from infrastructure.persistence.documents import (
    catalog_to_document,
    configuration_from_document,
    configuration_to_document,
    license_to_document,
    model_to_document,
    module_to_document,
    quote_line_to_document,
    sms_to_document,
)

from ..serializers.configurator import (
    CascadeRequestSerializer,
    NewConfigurationSerializer,
    OptionsRequestSerializer,
    QuoteRequestSerializer,
)
from .base import CatalogAccessMixin

logger = logging.getLogger(__name__)


XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
EXPORT_FORMATS = ('xlsx', 'text')


def _no_cache(response):
    response['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response['Pragma'] = 'no-cache'
    response['Expires'] = '0'
    return response


class TxeCatalogViewSet(CatalogAccessMixin, viewsets.ViewSet):
    """Read-only catalog for the configurator UI."""

    def list(self, request):
        return Response(catalog_to_document(self.get_catalog()))


class ConfiguratorViewSet(CatalogAccessMixin, viewsets.ViewSet):
    """
    ViewSet for building configurations and quotes.

    Endpoints:
    - POST /configurator/new/ - Empty configuration on the first model
    - POST /configurator/cascade/ - Apply one field change
    - POST /configurator/options/ - Selection lists for a configuration
    - POST /configurator/quote/ - Flattened quote lines plus review issues
    - POST /configurator/export/?format=xlsx|text - Downloadable quote
    """

    def options_for(self, configuration, catalog):
        """Everything the UI offers for the current model/throughput/licenses."""
        rules = self.get_rules()
        model = catalog.find_model(configuration.model_id)
        modules = module_options(catalog, configuration.model_id, rules)
        throughput = configuration.throughput_gbps
        return {
            'models': [model_to_document(m) for m in catalog.models],
            'tiers': [{'label': t.label, 'gbps': t.gbps} for t in model.tiers] if model else [],
            'modules': {
                'bypass': [module_to_document(m) for m in modules.bypass],
                'nonBypass': [module_to_document(m) for m in modules.non_bypass],
            },
            'inspectLicenses': [
                license_to_document(lic)
                for lic in inspect_license_options(catalog, configuration.model_id, throughput, rules)
            ],
            'threatdvLicenses': [
                license_to_document(lic)
                for lic in threatdv_license_options(
                    catalog, configuration.model_id, throughput,
                    inspect_sku=configuration.licenses.inspect, rules=rules,
                )
            ],
            'smsModels': [sms_to_document(s) for s in catalog.sms_models],
        }

    def _configurations(self, request):
        data = self.validated(QuoteRequestSerializer, request.data)
        return [configuration_from_document(doc) for doc in data['configurations']]

    @action(detail=False, methods=['post'])
    def new(self, request):
        data = self.validated(NewConfigurationSerializer, request.data)
        catalog = self.get_catalog()
        configuration = create_empty_configuration(
            catalog, data.get('name') or DEFAULT_CONFIGURATION_NAME
        )
        return Response(
            {
                'configuration': configuration_to_document(configuration),
                'options': self.options_for(configuration, catalog),
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=['post'])
    def cascade(self, request):
        data = self.validated(CascadeRequestSerializer, request.data)
        catalog = self.get_catalog()
        configuration = configuration_from_document(data['configuration'])
        updated = apply_change(
            configuration, catalog, data['field'], data.get('value'), data.get('slot')
        )
        return Response({
            'configuration': configuration_to_document(updated),
            'options': self.options_for(updated, catalog),
        })

    @action(detail=False, methods=['post'], url_path='options')
    def selection_options(self, request):
        data = self.validated(OptionsRequestSerializer, request.data)
        configuration = configuration_from_document(data['configuration'])
        return Response(self.options_for(configuration, self.get_catalog()))

    @action(detail=False, methods=['post'])
    def quote(self, request):
        configurations = self._configurations(request)
        catalog = self.get_catalog()
        rules = self.get_rules()
        issues = {}
        for configuration in configurations:
            found = configuration_issues(configuration, catalog, rules)
            if found:
                issues[configuration.id] = found
        lines = build_quote_lines(configurations, catalog)
        return Response({
            'lines': [quote_line_to_document(line) for line in lines],
            'issues': issues,
        })

    @action(detail=False, methods=['post'])
    def export(self, request):
        export_format = request.query_params.get('format', 'xlsx')
        if export_format not in EXPORT_FORMATS:
            return Response(
                {'error': f"Unsupported export format '{export_format}'", 'code': 'VALIDATION_ERROR'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        lines = build_quote_lines(self._configurations(request), self.get_catalog())

        if export_format == 'text':
            return HttpResponse(format_quote_table(lines), content_type='text/plain; charset=utf-8')

        filename = quote_filename()
        response = HttpResponse(quote_workbook_bytes(lines), content_type=XLSX_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        logger.info(f"Quote exported: {len(lines)} lines to {filename}")
        return response


class CompatibilityViewSet(CatalogAccessMixin, viewsets.ViewSet):
    """
    License compatibility lookups.

    GET /compatibility/licenses/<sku>/?modelId=... returns the models the
    SKU may be bound to and the model id to keep for it.
    """

    lookup_field = 'sku'

    def retrieve(self, request, sku=None):
        rules = self.get_rules()
        model_id = request.query_params.get('modelId') or None
        return Response({
            'sku': sku,
            'compatibleModels': rules.compatible_models_for(sku),
            'modelId': rules.reconcile_license_model(sku, model_id),
        })


class HealthViewSet(CatalogAccessMixin, viewsets.ViewSet):
    """Liveness probe."""

    def list(self, request):
        catalog = self.get_catalog()
        body = {
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'version': settings.APP_VERSION,
            'environment': settings.ENVIRONMENT,
            'checks': {
                'api': 'ok',
                'catalog': 'empty' if catalog.is_empty else 'ok',
            },
        }
        return _no_cache(Response(body))
