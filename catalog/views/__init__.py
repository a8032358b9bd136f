"""View controllers for the catalog pages.

One controller class per record type. Each is constructed with the
repositories it reads and writes (see :mod:`catalog.repositories`) and
exposes ``async`` handler methods that :mod:`catalog.urls` routes to.
"""

from .authors import AuthorController
from .bookinstances import BookInstanceController
from .books import BookController
from .genres import GenreController

__all__ = [
    'AuthorController',
    'BookController',
    'BookInstanceController',
    'GenreController',
]
