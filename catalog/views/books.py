"""Book pages and the catalog home page.

The home page shows how many records of each kind the catalog holds.
Books are referenced by their copies (book instances); a book with copies
cannot be deleted from these pages.
"""

import asyncio
import logging

from django.db import DatabaseError
from django.shortcuts import redirect, render

from ..forms import BookForm, validate
from ..models import BookInstance
from ..repositories import (
    AuthorRepository,
    BookInstanceRepository,
    BookRepository,
    GenreRepository,
)
from ..utils import form_errors, mark_checked, normalize_body, notify
from .common import ensure_found

logger = logging.getLogger(__name__)

COUNT_KEYS = (
    'book_count',
    'book_instance_count',
    'book_instance_available_count',
    'author_count',
    'genre_count',
) #: Keys of the counts shown on the home page, in query order.


class BookController:
    """Request handlers for :class:`catalog.models.Book` and the home page.

    Parameters
    ----------
    books, authors, genres, instances : Optional[catalog.repositories.Repository]
        Repositories for each record type; database-backed ones by default.
    """

    def __init__(self, books=None, authors=None, genres=None, instances=None):
        self.books = books or BookRepository()
        self.authors = authors or AuthorRepository()
        self.genres = genres or GenreRepository()
        self.instances = instances or BookInstanceRepository()

    async def _form_choices(self):
        return await asyncio.gather(
            self.authors.find(order_by=['family_name']),
            self.genres.find(order_by=['name']),
        )

    async def index(self, request):
        """Render the record counts. A database failure is shown on the page itself."""
        context = {'title': 'Local Library Home'}
        try:
            counts = await asyncio.gather(
                self.books.count(),
                self.instances.count(),
                self.instances.count(status=BookInstance.Status.AVAILABLE),
                self.authors.count(),
                self.genres.count(),
            )
        except DatabaseError as err:
            logger.exception("Could not count catalog records")
            context['error'] = err
        else:
            context['data'] = dict(zip(COUNT_KEYS, counts))
        return render(request, 'catalog/index.html', context)

    async def list(self, request):
        """Render every book's title and author."""
        books = await self.books.find(fields=['title', 'author'], populate=['author'])
        return render(request, 'catalog/book_list.html', {
            'title': 'Book List',
            'book_list': books,
        })

    async def detail(self, request, pk):
        """Render one book with its author, genres and copies.

        Raises
        ------
        django.http.Http404
            If no book has id ``pk``.
        """
        book, book_instances = await asyncio.gather(
            self.books.find_by_id(pk, populate=['author', 'genre']),
            self.instances.find({'book': pk}),
        )
        ensure_found(book, "Book not found")

        return render(request, 'catalog/book_detail.html', {
            'title': book.title,
            'book': book,
            'book_instances': book_instances,
        })

    async def create_get(self, request):
        """Render an empty book form with every author and genre to choose from."""
        authors, genres = await self._form_choices()
        return render(request, 'catalog/book_form.html', {
            'title': 'Create Book',
            'authors': authors,
            'genres': mark_checked(genres, []),
        })

    async def _invalid(self, request, title, form, book):
        authors, genres = await self._form_choices()
        return render(request, 'catalog/book_form.html', {
            'title': title,
            'authors': authors,
            'genres': mark_checked(genres, form.selected_genres()),
            'book': book,
            'errors': form_errors(form),
        })

    async def create_post(self, request):
        """Validate the submitted book, then save it or show the form again."""
        form = BookForm(normalize_body(request.POST, list_fields=['genre']))
        valid = await validate(form)
        book = form.to_book()

        if not valid:
            return await self._invalid(request, 'Create Book', form, book)

        await self.books.save(book, genre=form.cleaned_data['genre'])
        notify(request, msg=f"Created book '{book.title}'.", level='success')
        return redirect(book)

    async def delete_get(self, request, pk):
        """Render the delete confirmation, listing the book's copies."""
        book, book_instances = await asyncio.gather(
            self.books.find_by_id(pk),
            self.instances.find({'book': pk}),
        )
        if book is None:
            return redirect('book-list')

        return render(request, 'catalog/book_delete.html', {
            'title': 'Delete Book',
            'book': book,
            'book_instances': book_instances,
        })

    async def delete_post(self, request, pk):
        """Delete the book unless copies of it exist.

        When copies exist the confirmation page is rendered again and
        nothing is removed.
        """
        book, book_instances = await asyncio.gather(
            self.books.find_by_id(pk),
            self.instances.find({'book': pk}),
        )

        if book_instances:
            logger.info("Not deleting book %s: %d copies exist", pk, len(book_instances))
            return render(request, 'catalog/book_delete.html', {
                'title': 'Delete Book',
                'book': book,
                'book_instances': book_instances,
            })

        removed = await self.books.find_by_id_and_remove(pk)
        if removed is not None:
            notify(request, msg=f"Deleted book '{removed.title}'.", level='success')
        return redirect('book-list')

    async def update_get(self, request, pk):
        """Render the book form filled in, with the book's genres ticked."""
        book, authors, genres = await asyncio.gather(
            self.books.find_by_id(pk, populate=['author', 'genre']),
            self.authors.find(order_by=['family_name']),
            self.genres.find(order_by=['name']),
        )
        ensure_found(book, "Book not found")

        return render(request, 'catalog/book_form.html', {
            'title': 'Update Book',
            'authors': authors,
            'genres': mark_checked(genres, [genre.pk for genre in book.genre.all()]),
            'book': book,
        })

    async def update_post(self, request, pk):
        """Validate the submitted book, then overwrite record ``pk`` and its genres."""
        form = BookForm(normalize_body(request.POST, list_fields=['genre']))
        valid = await validate(form)
        book = form.to_book(pk=pk)

        if not valid:
            return await self._invalid(request, 'Update Book', form, book)

        updated = ensure_found(
            await self.books.find_by_id_and_update(pk, book, genre=form.cleaned_data['genre']),
            "Book not found",
        )
        notify(request, msg=f"Updated book '{updated.title}'.", level='success')
        return redirect(updated)
