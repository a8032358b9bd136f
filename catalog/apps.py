"""Django application configuration for the ``catalog`` app.

This module exposes the :class:`CatalogConfig` AppConfig used to
register application metadata with Django.
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Application configuration for the ``catalog`` Django app. """
    default_auto_field = 'django.db.models.BigAutoField' #: The default type for automatically generated primary key fields.
    name = 'catalog' #: The Python path to the application package. Django uses this to look up the module.
    verbose_name = 'Local Library Catalog' #: Human readable application name.
