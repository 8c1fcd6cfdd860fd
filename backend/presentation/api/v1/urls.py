"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.catalog import (
    CatalogAdminViewSet,
    TxeModelAdminViewSet,
    IOModuleAdminViewSet,
    LicenseAdminViewSet,
    SmsAdminViewSet,
)
from .views.configurator import (
    TxeCatalogViewSet,
    ConfiguratorViewSet,
    CompatibilityViewSet,
    HealthViewSet,
)

router = DefaultRouter()

# Configurator
router.register(r'txe', TxeCatalogViewSet, basename='txe')
router.register(r'configurator', ConfiguratorViewSet, basename='configurator')
router.register(r'compatibility/licenses', CompatibilityViewSet, basename='compatibility-licenses')
router.register(r'health', HealthViewSet, basename='health')

# Catalog admin (entry routes first so they win over the catalog actions)
router.register(r'dev/catalog/models', TxeModelAdminViewSet, basename='catalog-models')
router.register(r'dev/catalog/modules', IOModuleAdminViewSet, basename='catalog-modules')
router.register(r'dev/catalog/licenses', LicenseAdminViewSet, basename='catalog-licenses')
router.register(r'dev/catalog/sms', SmsAdminViewSet, basename='catalog-sms')
router.register(r'dev/catalog', CatalogAdminViewSet, basename='catalog')

app_name = 'api_v1'

urlpatterns = [
    path('', include(router.urls)),
]
