"""Author pages: list, detail, create, delete and update.

Authors are referenced by books. An author cannot be deleted from these
pages while any book still points at them; the delete confirmation is
shown again instead.
"""

import asyncio
import logging

from django.shortcuts import redirect, render

from ..forms import AuthorForm, validate
from ..repositories import AuthorRepository, BookRepository
from ..utils import form_errors, notify
from .common import ensure_found

logger = logging.getLogger(__name__)


class AuthorController:
    """Request handlers for :class:`catalog.models.Author` records.

    Parameters
    ----------
    authors : Optional[catalog.repositories.Repository]
        Author repository; a database-backed one is used by default.
    books : Optional[catalog.repositories.Repository]
        Book repository, used to find an author's books.
    """

    def __init__(self, authors=None, books=None):
        self.authors = authors or AuthorRepository()
        self.books = books or BookRepository()

    async def _author_books(self, pk):
        return await self.books.find({'author': pk}, fields=['title', 'summary'])

    async def list(self, request):
        """Render every author, sorted by family name."""
        authors = await self.authors.find(order_by=['family_name'])
        return render(request, 'catalog/author_list.html', {
            'title': 'Author List',
            'author_list': authors,
        })

    async def detail(self, request, pk):
        """Render one author with the title and summary of each of their books.

        Raises
        ------
        django.http.Http404
            If no author has id ``pk``.
        """
        author, author_books = await asyncio.gather(
            self.authors.find_by_id(pk),
            self._author_books(pk),
        )
        ensure_found(author, "Author not found")

        return render(request, 'catalog/author_detail.html', {
            'title': 'Author Detail',
            'author': author,
            'author_books': author_books,
        })

    async def create_get(self, request):
        """Render an empty author form."""
        return render(request, 'catalog/author_form.html', {'title': 'Create Author'})

    async def create_post(self, request):
        """Validate the submitted author, then save it or show the form again."""
        form = AuthorForm(request.POST)
        valid = await validate(form)
        author = form.to_author()

        if not valid:
            return render(request, 'catalog/author_form.html', {
                'title': 'Create Author',
                'author': author,
                'errors': form_errors(form),
            })

        await self.authors.save(author)
        notify(request, msg=f"Created author '{author.name}'.", level='success')
        return redirect(author)

    async def delete_get(self, request, pk):
        """Render the delete confirmation, listing the author's books."""
        author, author_books = await asyncio.gather(
            self.authors.find_by_id(pk),
            self._author_books(pk),
        )
        if author is None:
            return redirect('author-list')

        return render(request, 'catalog/author_delete.html', {
            'title': 'Delete Author',
            'author': author,
            'author_books': author_books,
        })

    async def delete_post(self, request, pk):
        """Delete the author unless books still reference them.

        When books exist the confirmation page is rendered again and nothing
        is removed.
        """
        author, author_books = await asyncio.gather(
            self.authors.find_by_id(pk),
            self._author_books(pk),
        )

        if author_books:
            logger.info("Not deleting author %s: %d book(s) reference it", pk, len(author_books))
            return render(request, 'catalog/author_delete.html', {
                'title': 'Delete Author',
                'author': author,
                'author_books': author_books,
            })

        removed = await self.authors.find_by_id_and_remove(pk)
        if removed is not None:
            notify(request, msg=f"Deleted author '{removed.name}'.", level='success')
        return redirect('author-list')

    async def update_get(self, request, pk):
        """Render the author form filled in with the stored values."""
        author = ensure_found(await self.authors.find_by_id(pk), "Author not found")
        return render(request, 'catalog/author_form.html', {
            'title': 'Update Author',
            'author': author,
        })

    async def update_post(self, request, pk):
        """Validate the submitted author, then overwrite record ``pk``."""
        form = AuthorForm(request.POST)
        valid = await validate(form)
        author = form.to_author(pk=pk)

        if not valid:
            return render(request, 'catalog/author_form.html', {
                'title': 'Update Author',
                'author': author,
                'errors': form_errors(form),
            })

        updated = ensure_found(
            await self.authors.find_by_id_and_update(pk, author),
            "Author not found",
        )
        notify(request, msg=f"Updated author '{updated.name}'.", level='success')
        return redirect(updated)
