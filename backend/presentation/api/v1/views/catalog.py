"""
Catalog Admin Views.

CRUD on the product catalog document plus bulk replacement, import/export
and backup restore. Every mutation is a read-modify-write of the whole
document; the store takes a backup before each write.
"""

import logging

from django.http import HttpResponse
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from domain.catalog.aggregates import ProductCatalog
from domain.shared.exceptions import ValidationException
from infrastructure.persistence.catalog_store import backup_timestamp
from infrastructure.persistence.documents import (
    catalog_from_document,
    catalog_to_document,
    license_from_document,
    license_to_document,
    model_from_document,
    model_to_document,
    module_from_document,
    module_to_document,
    sms_from_document,
    sms_to_document,
)

from ..serializers.catalog import (
    BackupInfoSerializer,
    BackupRestoreSerializer,
    CatalogDocumentSerializer,
    CatalogImportSerializer,
    IOModuleSerializer,
    LicenseSerializer,
    SmsModelSerializer,
    TxeModelSerializer,
)
from .base import CatalogAccessMixin, CatalogEntryMixin

logger = logging.getLogger(__name__)


def _now_iso():
    return timezone.now().isoformat()


def _check_key(url_key, body_key, field):
    if url_key != body_key:
        raise ValidationException(
            f"{field} in the body ({body_key}) does not match the URL ({url_key})",
            field,
            body_key,
        )


class CatalogAdminViewSet(CatalogAccessMixin, viewsets.ViewSet):
    """
    ViewSet for the catalog document as a whole.

    Endpoints:
    - GET  /dev/catalog/ - Full catalog document
    - POST /dev/catalog/ - Replace the whole catalog
    - POST /dev/catalog/import/ - Import from a JSON string ({jsonData})
    - GET  /dev/catalog/export/ - Download the catalog as a JSON file
    - GET  /dev/catalog/backups/ - List backups, newest first
    - POST /dev/catalog/backups/restore/ - Restore a backup ({filename})
    """

    def list(self, request):
        return Response(catalog_to_document(self.get_catalog()))

    def create(self, request):
        data = self.validated(CatalogDocumentSerializer, request.data)
        catalog = catalog_from_document(data)
        catalog.validate()
        updated_by = self.get_updated_by('api')
        logger.info(f"Catalog bulk replace requested by {updated_by}")
        self.get_repository().write(catalog, updated_by)
        return Response({
            'success': True,
            'message': 'Catalog updated successfully',
            'timestamp': _now_iso(),
        })

    @action(detail=False, methods=['post', 'put'], url_path='import')
    def import_catalog(self, request):
        data = self.validated(CatalogImportSerializer, request.data)
        catalog = self.get_repository().import_json(data['jsonData'], self.get_updated_by('import'))
        return Response({
            'success': True,
            'message': 'Catalog imported successfully',
            'catalog': catalog_to_document(catalog),
            'timestamp': _now_iso(),
        })

    @action(detail=False, methods=['get'])
    def export(self, request):
        json_data = self.get_repository().export_json()
        filename = f"tippingpoint-catalog-{backup_timestamp()}.json"
        logger.info(f"Catalog exported as {filename}")
        response = HttpResponse(json_data, content_type='application/json')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        response['Cache-Control'] = 'no-cache'
        return response

    @action(detail=False, methods=['get'])
    def backups(self, request):
        backups = self.get_repository().list_backups()
        return Response({
            'backups': BackupInfoSerializer(backups, many=True).data,
            'count': len(backups),
        })

    @action(detail=False, methods=['post'], url_path='backups/restore')
    def restore(self, request):
        data = self.validated(BackupRestoreSerializer, request.data)
        filename = data['filename']
        catalog = self.get_repository().restore(filename, self.get_updated_by('restore'))
        return Response({
            'success': True,
            'message': f'Catalog restored from backup {filename}',
            'catalog': catalog_to_document(catalog),
            'timestamp': _now_iso(),
        })


class TxeModelAdminViewSet(CatalogEntryMixin, viewsets.ViewSet):
    """ViewSet for TXE chassis models."""

    lookup_field = 'model_id'
    serializer_class = TxeModelSerializer

    def list(self, request):
        return Response([model_to_document(m) for m in self.get_catalog().models])

    def retrieve(self, request, model_id=None):
        model = self.get_catalog().find_model(model_id)
        if model is None:
            return Response({'error': f'Model {model_id} not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(model_to_document(model))

    def create(self, request):
        model = model_from_document(self.validated(TxeModelSerializer, request.data))
        self.mutate(ProductCatalog.add_model, model)
        return Response(
            {'success': True, 'message': 'Model added successfully', 'model': model_to_document(model)},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, model_id=None):
        model = model_from_document(self.validated(TxeModelSerializer, request.data))
        _check_key(model_id, model.id, 'id')
        self.mutate(ProductCatalog.update_model, model)
        return Response({'success': True, 'message': 'Model updated successfully', 'model': model_to_document(model)})

    def destroy(self, request, model_id=None):
        removed = self.mutate(ProductCatalog.remove_model, model_id)
        return Response({'success': True, 'message': 'Model deleted successfully', 'deletedModel': model_to_document(removed)})


class IOModuleAdminViewSet(CatalogEntryMixin, viewsets.ViewSet):
    """ViewSet for network IO modules."""

    lookup_field = 'sku'
    serializer_class = IOModuleSerializer

    def list(self, request):
        return Response([module_to_document(m) for m in self.get_catalog().io_modules])

    def retrieve(self, request, sku=None):
        module = self.get_catalog().find_module(sku)
        if module is None:
            return Response({'error': f'Module {sku} not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(module_to_document(module))

    def create(self, request):
        module = module_from_document(self.validated(IOModuleSerializer, request.data))
        self.mutate(ProductCatalog.add_module, module)
        return Response(
            {'success': True, 'message': 'IO module added successfully', 'module': module_to_document(module)},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, sku=None):
        module = module_from_document(self.validated(IOModuleSerializer, request.data))
        _check_key(sku, module.sku, 'sku')
        self.mutate(ProductCatalog.update_module, module)
        return Response({'success': True, 'message': 'IO module updated successfully', 'module': module_to_document(module)})

    def destroy(self, request, sku=None):
        removed = self.mutate(ProductCatalog.remove_module, sku)
        return Response({'success': True, 'message': 'IO module deleted successfully', 'deletedModule': module_to_document(removed)})


class LicenseAdminViewSet(CatalogEntryMixin, viewsets.ViewSet):
    """
    ViewSet for licenses.

    A license SKU can be bound to several models, so detail routes take
    ?modelId= to pick the binding. Use ?modelId= (empty) for the unbound entry.
    """

    lookup_field = 'sku'
    serializer_class = LicenseSerializer

    def _model_id_param(self):
        """(given, value): whether ?modelId was passed, and its value (blank means unbound)."""
        if 'modelId' not in self.request.query_params:
            return False, None
        return True, self.request.query_params.get('modelId') or None

    def list(self, request):
        licenses = self.get_catalog().licenses
        given, model_id = self._model_id_param()
        if given:
            licenses = [lic for lic in licenses if lic.model_id == model_id]
        return Response([license_to_document(lic) for lic in licenses])

    def retrieve(self, request, sku=None):
        catalog = self.get_catalog()
        given, model_id = self._model_id_param()
        if given:
            matches = [lic for lic in catalog.licenses_with_sku(sku) if lic.model_id == model_id]
        else:
            matches = catalog.licenses_with_sku(sku)
        if not matches:
            return Response({'error': f'License {sku} not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(license_to_document(matches[0]))

    def create(self, request):
        lic = license_from_document(self.validated(LicenseSerializer, request.data))
        self.mutate(ProductCatalog.add_license, lic, rules=self.get_rules())
        return Response(
            {'success': True, 'message': 'License added successfully', 'license': license_to_document(lic)},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, sku=None):
        lic = license_from_document(self.validated(LicenseSerializer, request.data))
        _check_key(sku, lic.sku, 'sku')
        given, original_model_id = self._model_id_param()
        kwargs = {'rules': self.get_rules()}
        if given:
            kwargs['original_model_id'] = original_model_id
        self.mutate(ProductCatalog.update_license, lic, **kwargs)
        return Response({'success': True, 'message': 'License updated successfully', 'license': license_to_document(lic)})

    def destroy(self, request, sku=None):
        given, model_id = self._model_id_param()
        args = (sku, model_id) if given else (sku,)
        removed = self.mutate(ProductCatalog.remove_license, *args)
        return Response({'success': True, 'message': 'License deleted successfully', 'deletedLicense': license_to_document(removed)})


class SmsAdminViewSet(CatalogEntryMixin, viewsets.ViewSet):
    """ViewSet for SMS management appliances."""

    lookup_field = 'sku'
    serializer_class = SmsModelSerializer

    def list(self, request):
        return Response([sms_to_document(s) for s in self.get_catalog().sms_models])

    def retrieve(self, request, sku=None):
        sms = self.get_catalog().find_sms(sku)
        if sms is None:
            return Response({'error': f'SMS {sku} not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(sms_to_document(sms))

    def create(self, request):
        sms = sms_from_document(self.validated(SmsModelSerializer, request.data))
        self.mutate(ProductCatalog.add_sms, sms)
        return Response(
            {'success': True, 'message': 'SMS model added successfully', 'smsModel': sms_to_document(sms)},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, sku=None):
        sms = sms_from_document(self.validated(SmsModelSerializer, request.data))
        _check_key(sku, sms.sku, 'sku')
        self.mutate(ProductCatalog.update_sms, sms)
        return Response({'success': True, 'message': 'SMS model updated successfully', 'smsModel': sms_to_document(sms)})

    def destroy(self, request, sku=None):
        removed = self.mutate(ProductCatalog.remove_sms, sku)
        return Response({'success': True, 'message': 'SMS model deleted successfully', 'deletedSmsModel': sms_to_document(removed)})
