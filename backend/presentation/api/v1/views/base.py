"""
Base Views.

Common view mixins and base classes.
"""

from rest_framework import serializers

from domain.catalog.aggregates import ProductCatalog
from domain.catalog.compatibility import CompatibilityRules
from domain.catalog.repositories import CatalogRepository
from infrastructure.persistence.providers import (
    get_catalog_repository,
    get_compatibility_rules,
)


UPDATED_BY_HEADER = 'HTTP_X_UPDATED_BY'


class CatalogAccessMixin:
    """
    Mixin giving views access to the catalog store and compatibility rules.

    Views are stateless: every request reads the catalog document afresh.
    """

    def get_repository(self) -> CatalogRepository:
        return get_catalog_repository()

    def get_rules(self) -> CompatibilityRules:
        return get_compatibility_rules()

    def get_catalog(self) -> ProductCatalog:
        return self.get_repository().read()

    def get_updated_by(self, default: str = 'api') -> str:
        """Caller identity recorded in catalog metadata (X-Updated-By header)."""
        return self.request.META.get(UPDATED_BY_HEADER) or default

    @staticmethod
    def validated(serializer_class, data) -> dict:
        serializer = serializer_class(data=data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class CatalogEntryMixin(CatalogAccessMixin):
    """
    Read-modify-write helper for the admin CRUD endpoints.

    Subclasses pass unbound ProductCatalog commands to mutate(); the
    catalog is re-read for every request and written back afterwards.
    """

    serializer_class = serializers.Serializer

    def mutate(self, command, *args, default_by: str = 'api', **kwargs):
        """Run one aggregate command and persist the catalog."""
        repository = self.get_repository()
        catalog = repository.read()
        result = command(catalog, *args, **kwargs)
        repository.write(catalog, self.get_updated_by(default_by))
        return result
