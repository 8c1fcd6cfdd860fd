"""
Django application for the catalog storage layer.

Registered so that the seed_catalog management command is discovered.
"""

import os

from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    name = 'infrastructure.persistence'
    label = 'persistence'
    verbose_name = 'TXE Catalog Storage'
    path = os.path.dirname(os.path.abspath(__file__))
