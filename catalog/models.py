"""Database models for the catalog application.

This module defines the records managed through the catalog pages:
- ``Author`` -- a person who wrote one or more books
- ``Genre`` -- a category a book can belong to
- ``Book`` -- a title, written by one author, in any number of genres
- ``BookInstance`` -- a physical copy of a book that can be borrowed

References between records are not owned: a ``Book`` points at its
``Author`` and a ``BookInstance`` at its ``Book``. The catalog pages
refuse to delete a record while anything still points at it.
"""

from auditlog.registry import auditlog
from django.core.validators import MinLengthValidator
from django.db import models
from django.urls import reverse


class Author(models.Model):
    """An author of books in the library."""
    first_name = models.CharField(max_length=100) #: Given name of the author.
    family_name = models.CharField(max_length=100) #: Family name of the author.
    date_of_birth = models.DateField(null=True, blank=True) #: Optional date of birth.
    date_of_death = models.DateField(null=True, blank=True) #: Optional date of death.

    class Meta:
        """Model metadata for :class:`Author`."""
        ordering = ['family_name', 'first_name'] #: Default ordering used when listing authors.

    @property
    def name(self):
        """Return the author's display name as "Family, First".

        Returns
        -------
        str
            The display name, or an empty string when either part is missing.
        """
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self):
        """Return the author's lifespan as ISO dates, e.g. ``"1775-12-16 - 1817-07-18"``.

        Unknown dates are left blank on their side of the dash.
        """
        birth = self.date_of_birth.isoformat() if self.date_of_birth else ""
        death = self.date_of_death.isoformat() if self.date_of_death else ""
        return f"{birth} - {death}"

    def get_absolute_url(self):
        """Return the canonical detail URL, ``/catalog/author/<id>``."""
        return reverse('author-detail', args=[str(self.pk)])

    def __str__(self):
        return self.name


auditlog.register(Author)


class Genre(models.Model):
    """A book genre/category."""
    name = models.CharField(max_length=100, validators=[MinLengthValidator(3)]) #: Name of the genre (3 to 100 characters).

    class Meta:
        """Model metadata for :class:`Genre`."""
        ordering = ['name'] #: Default ordering for querysets (by genre name).

    def get_absolute_url(self):
        """Return the canonical detail URL, ``/catalog/genre/<id>``."""
        return reverse('genre-detail', args=[str(self.pk)])

    def __str__(self):
        return self.name


auditlog.register(Genre)


class Book(models.Model):
    """Represents a book record."""
    title = models.CharField(max_length=200) #: Title of the book.
    author = models.ForeignKey(Author, on_delete=models.PROTECT, related_name='books') #: The book's author.
    summary = models.TextField(max_length=1000) #: Short description of the book.
    isbn = models.CharField('ISBN', max_length=13) #: ISBN as entered by staff.
    genre = models.ManyToManyField(Genre, blank=True, related_name='books') #: Genres the book belongs to.

    class Meta:
        """Model metadata for :class:`Book`."""
        ordering = ['title'] #: Default ordering for books (by title).

    def get_absolute_url(self):
        """Return the canonical detail URL, ``/catalog/book/<id>``."""
        return reverse('book-detail', args=[str(self.pk)])

    def __str__(self):
        return self.title


auditlog.register(Book)


class BookInstance(models.Model):
    """A physical copy of a :class:`Book`."""

    class Status(models.TextChoices):
        """Loan status of a copy."""
        AVAILABLE = 'Available'
        MAINTENANCE = 'Maintenance'
        LOANED = 'Loaned'
        RESERVED = 'Reserved'

    book = models.ForeignKey(Book, on_delete=models.PROTECT, related_name='instances') #: The book this is a copy of.
    imprint = models.CharField(max_length=200) #: Publisher, edition and year of the copy.
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.MAINTENANCE,
    ) #: Current loan status.
    due_back = models.DateField(null=True, blank=True) #: Date the copy is expected back, if on loan.

    class Meta:
        """Model metadata for :class:`BookInstance`."""
        ordering = ['due_back', 'pk'] #: Copies due back soonest first.

    @property
    def due_back_formatted(self):
        """Return ``due_back`` in a human readable form such as ``"Oct 17, 2026"``.

        Returns
        -------
        str
            The formatted date, or an empty string when no date is set.
        """
        if not self.due_back:
            return ""
        return f"{self.due_back:%b} {self.due_back.day}, {self.due_back.year}"

    def get_absolute_url(self):
        """Return the canonical detail URL, ``/catalog/bookinstance/<id>``."""
        return reverse('bookinstance-detail', args=[str(self.pk)])

    def __str__(self):
        return f"{self.imprint} ({self.pk})"


auditlog.register(BookInstance)
