"""URL configuration for the :mod:`catalog` app.

Every record type gets the same set of routes: a list page, a detail page
and create/delete/update pages that accept GET (show the form) and POST
(submit it). Detail URLs have no trailing slash, matching each model's
``get_absolute_url``.
"""

from django.urls import path

from .views import AuthorController, BookController, BookInstanceController, GenreController
from .views.common import route

authors = AuthorController()
books = BookController()
genres = GenreController()
bookinstances = BookInstanceController()


def resource_patterns(name, plural, controller):
    """Return the list/detail/create/delete/update patterns for one record type.

    Parameters
    ----------
    name : str
        Singular path segment and URL-name prefix, e.g. ``'author'``.
    plural : str
        Path segment of the list page, e.g. ``'authors'``.
    controller
        Controller instance providing the handler methods.

    Returns
    -------
    list[django.urls.URLPattern]
    """
    return [
        path(f'{name}/create', route(controller.create_get, controller.create_post), name=f'{name}-create'),
        path(f'{name}/<int:pk>/delete', route(controller.delete_get, controller.delete_post), name=f'{name}-delete'),
        path(f'{name}/<int:pk>/update', route(controller.update_get, controller.update_post), name=f'{name}-update'),
        path(f'{name}/<int:pk>', route(controller.detail), name=f'{name}-detail'),
        path(plural, route(controller.list), name=f'{name}-list'),
    ]


urlpatterns = [
    path('', route(books.index), name='index'),
    *resource_patterns('book', 'books', books),
    *resource_patterns('author', 'authors', authors),
    *resource_patterns('genre', 'genres', genres),
    *resource_patterns('bookinstance', 'bookinstances', bookinstances),
]
