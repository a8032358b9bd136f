"""Genre pages: list, detail and create.

Genre names are unique by value: creating a genre whose name already
exists leads to the existing genre instead of a duplicate. Deleting and
updating genres is not available yet.
"""

import asyncio

from django.shortcuts import redirect, render

from ..forms import GenreForm, validate
from ..repositories import BookRepository, GenreRepository
from ..utils import form_errors, notify
from .common import ensure_found, not_implemented


class GenreController:
    """Request handlers for :class:`catalog.models.Genre` records."""

    def __init__(self, genres=None, books=None):
        self.genres = genres or GenreRepository()
        self.books = books or BookRepository()

    async def list(self, request):
        """Render every genre with the number of books in it.

        Each genre's count is its own query.
        """
        genres = await self.genres.find(order_by=['name'])
        for genre in genres:
            genre.book_count = await self.books.count(genre=genre.pk)

        return render(request, 'catalog/genre_list.html', {
            'title': 'Genre List',
            'genre_list': genres,
        })

    async def detail(self, request, pk):
        """Render one genre and its books.

        Raises
        ------
        django.http.Http404
            If no genre has id ``pk``.
        """
        genre, genre_books = await asyncio.gather(
            self.genres.find_by_id(pk),
            self.books.find({'genre': pk}),
        )
        ensure_found(genre, "Genre not found")

        return render(request, 'catalog/genre_detail.html', {
            'title': 'Genre Detail',
            'genre': genre,
            'genre_books': genre_books,
        })

    async def create_get(self, request):
        return render(request, 'catalog/genre_form.html', {'title': 'Create Genre'})

    async def create_post(self, request):
        """Validate the submitted name, then redirect to the genre of that name.

        The genre is created only when no genre with the same name exists.
        """
        form = GenreForm(request.POST)
        valid = await validate(form)
        genre = form.to_genre()

        if not valid:
            return render(request, 'catalog/genre_form.html', {
                'title': 'Create Genre',
                'genre': genre,
                'errors': form_errors(form),
            })

        existing = await self.genres.find_one(name=genre.name)
        if existing is not None:
            notify(request, msg=f"Genre '{existing.name}' already exists.", level='info')
            return redirect(existing)

        await self.genres.save(genre)
        notify(request, msg=f"Created genre '{genre.name}'.", level='success')
        return redirect(genre)

    async def delete_get(self, request, pk):
        return not_implemented("Genre delete GET")

    async def delete_post(self, request, pk):
        return not_implemented("Genre delete POST")

    async def update_get(self, request, pk):
        return not_implemented("Genre update GET")

    async def update_post(self, request, pk):
        return not_implemented("Genre update POST")
