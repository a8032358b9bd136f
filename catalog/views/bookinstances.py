"""Book copy (book instance) pages: list, detail, create and delete.

A copy is only deleted when it is the last copy of its book; otherwise
the confirmation page is shown again with the book's other copies.
Updating copies is not available yet.
"""

import logging

from django.shortcuts import redirect, render

from ..forms import BookInstanceForm, validate
from ..models import BookInstance
from ..repositories import BookInstanceRepository, BookRepository
from ..utils import form_errors, notify
from .common import ensure_found, not_implemented

logger = logging.getLogger(__name__)


class BookInstanceController:
    """Request handlers for :class:`catalog.models.BookInstance` records."""

    def __init__(self, instances=None, books=None):
        self.instances = instances or BookInstanceRepository()
        self.books = books or BookRepository()

    async def list(self, request):
        """Render every copy together with its book."""
        instances = await self.instances.find(populate=['book'])
        return render(request, 'catalog/bookinstance_list.html', {
            'title': 'Book Instance List',
            'bookinstance_list': instances,
        })

    async def detail(self, request, pk):
        """Render one copy.

        Raises
        ------
        django.http.Http404
            If no copy has id ``pk``.
        """
        bookinstance = ensure_found(
            await self.instances.find_by_id(pk, populate=['book']),
            "Book copy not found",
        )
        return render(request, 'catalog/bookinstance_detail.html', {
            'title': f"Copy: {bookinstance.book.title}",
            'bookinstance': bookinstance,
        })

    async def create_get(self, request):
        """Render an empty copy form with every book title to choose from."""
        books = await self.books.find(fields=['title'])
        return render(request, 'catalog/bookinstance_form.html', {
            'title': 'Create BookInstance',
            'book_list': books,
            'statuses': BookInstance.Status.values,
        })

    async def create_post(self, request):
        """Validate the submitted copy, then save it or show the form again."""
        form = BookInstanceForm(request.POST)
        valid = await validate(form)
        bookinstance = form.to_bookinstance()

        if not valid:
            books = await self.books.find(fields=['title'])
            return render(request, 'catalog/bookinstance_form.html', {
                'title': 'Create BookInstance',
                'book_list': books,
                'statuses': BookInstance.Status.values,
                'selected_book': str(bookinstance.book_id or ''),
                'bookinstance': bookinstance,
                'errors': form_errors(form),
            })

        await self.instances.save(bookinstance)
        notify(request, msg=f"Created copy '{bookinstance.imprint}'.", level='success')
        return redirect(bookinstance)

    async def _confirm_delete(self, request, bookinstance, siblings):
        return render(request, 'catalog/bookinstance_delete.html', {
            'title': 'Delete BookInstance',
            'bookinstance': bookinstance,
            'book_instances': siblings,
        })

    async def delete_get(self, request, pk):
        """Render the delete confirmation, listing every copy of the same book."""
        bookinstance = await self.instances.find_by_id(pk, populate=['book'])
        if bookinstance is None:
            return redirect('bookinstance-list')

        siblings = await self.instances.find({'book': bookinstance.book_id})
        return await self._confirm_delete(request, bookinstance, siblings)

    async def delete_post(self, request, pk):
        """Delete the copy if it is the only copy of its book.

        When the book has more than one copy the confirmation page is
        rendered again and nothing is removed.
        """
        bookinstance = await self.instances.find_by_id(pk, populate=['book'])
        if bookinstance is None:
            return redirect('bookinstance-list')

        copies = await self.instances.count(book=bookinstance.book_id)
        if copies > 1:
            logger.info("Not deleting copy %s: its book has %d copies", pk, copies)
            siblings = await self.instances.find({'book': bookinstance.book_id})
            return await self._confirm_delete(request, bookinstance, siblings)

        await self.instances.find_by_id_and_remove(pk)
        notify(request, msg=f"Deleted copy '{bookinstance.imprint}'.", level='success')
        return redirect('bookinstance-list')

    async def update_get(self, request, pk):
        return not_implemented("BookInstance update GET")

    async def update_post(self, request, pk):
        return not_implemented("BookInstance update POST")
