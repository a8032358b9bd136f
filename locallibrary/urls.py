"""Root URL configuration.

The catalog application is mounted under ``/catalog/`` and the site root
redirects there. Error pages for unknown records and unhandled storage
failures are rendered by :mod:`catalog.views.errors`.
"""

from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(url="/catalog/", permanent=False)),
    path("catalog/", include("catalog.urls")),
]

handler404 = "catalog.views.errors.page_not_found"
handler500 = "catalog.views.errors.server_error"
