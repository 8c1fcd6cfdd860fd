"""
Seed Catalog Command.

Writes the default TXE catalog to the catalog store and validates the result.
"""

from django.core.management.base import BaseCommand, CommandError

from infrastructure.persistence.providers import get_catalog_repository
from infrastructure.persistence.seed import (
    SEED_UPDATED_BY,
    build_seed_catalog,
    validate_seed,
)


class Command(BaseCommand):
    help = 'Seed the product catalog with the default TippingPoint TXE data'

    def add_arguments(self, parser):
        parser.add_argument(
            '--updated-by',
            type=str,
            default=SEED_UPDATED_BY,
            help='Name recorded in the catalog metadata'
        )
        parser.add_argument(
            '--force',
            action='store_true',
            help='Overwrite a catalog that already has entries'
        )

    def handle(self, *args, **options):
        repository = get_catalog_repository()

        current = repository.read()
        if not current.is_empty and not options['force']:
            raise CommandError(
                'Product catalog already has entries; use --force to overwrite it'
            )

        written = repository.write(build_seed_catalog(options['updated_by']), options['updated_by'])
        self.stdout.write(
            f'Seeded: {len(written.models)} models, {len(written.io_modules)} modules, '
            f'{len(written.licenses)} licenses, {len(written.sms_models)} SMS models'
        )

        errors = validate_seed(repository.read())
        if errors:
            for error in errors:
                self.stderr.write(self.style.ERROR(f'  - {error}'))
            raise CommandError('Catalog seed validation failed')

        self.stdout.write(
            self.style.SUCCESS('Product catalog seeded and validated!')
        )
