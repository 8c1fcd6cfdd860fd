"""
Test settings for the TXE configurator.

Tests point CATALOG_DATA_DIR at a temporary directory via override_settings.
"""

import tempfile

from .base import *

DEBUG = False
ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CATALOG_DATA_DIR = tempfile.mkdtemp(prefix='txe-catalog-')
COMPATIBILITY_RULES_FILE = ''
ENVIRONMENT = 'test'

LOGGING['root']['level'] = 'CRITICAL'
for _name in ('txe', 'infrastructure', 'presentation', 'django'):
    LOGGING['loggers'][_name]['level'] = 'CRITICAL'
