"""Project-wide error pages.

``locallibrary.urls`` installs these as ``handler404`` and ``handler500``.
Both render ``error.html`` with the message and HTTP status.
"""

import logging

from django.shortcuts import render

logger = logging.getLogger(__name__)


def page_not_found(request, exception):
    """Render the 404 page for a missing record or an unknown URL."""
    message = "Not Found"
    if exception is not None and exception.args and isinstance(exception.args[0], str):
        message = exception.args[0]
    logger.info("404 %s: %s", request.path, message)
    context = {'title': 'Not Found', 'message': message, 'status': 404}
    return render(request, 'error.html', context, status=404)


def server_error(request):
    """Render the 500 page for an unhandled error, e.g. a failed database call."""
    context = {'title': 'Error', 'message': 'Internal Server Error', 'status': 500}
    return render(request, 'error.html', context, status=500)
