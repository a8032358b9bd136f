"""Validation and sanitization of the catalog's create/update forms.

Each form trims its text fields, checks the rules for its record type and
can rebuild an unsaved model instance from whatever it managed to clean,
so a rejected submission is shown back to the user with their values.

HTML escaping happens on output: the templates auto-escape every value,
so stored text is kept exactly as typed (after trimming).

Forms that reference other records (``ModelChoiceField``) query the
database while validating; async views run :func:`validate` rather than
calling ``is_valid()`` directly.
"""

from asgiref.sync import sync_to_async
from django import forms
from django.core.validators import RegexValidator

from .models import Author, Book, BookInstance, Genre
from .utils import as_list

ISO_DATE_FORMATS = [
    '%Y-%m-%d',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%dT%H:%M:%S',
    '%Y%m%d',
] #: ISO-8601 calendar date inputs accepted by the date fields.


async def validate(form):
    """Run ``form.is_valid()`` off the event loop and return its result."""
    return await sync_to_async(form.is_valid)()


def alphanumeric(message):
    """Return a validator accepting only ASCII letters and digits."""
    return RegexValidator(regex=r'^[0-9A-Za-z]+$', message=message, code='alphanumeric')


class CatalogForm(forms.Form):
    """Base form that can report its partially cleaned values."""

    def values(self):
        """Return the best known value of every field.

        Cleaned values are used where validation succeeded. Text fields
        that failed fall back to the trimmed submitted text so the user
        sees what they typed; other failed fields become ``None``.

        Returns
        -------
        dict
            Mapping of field name to value.
        """
        cleaned = getattr(self, 'cleaned_data', {})
        values = {}
        for name, field in self.fields.items():
            if name in cleaned:
                values[name] = cleaned[name]
            elif isinstance(field, forms.CharField):
                raw = self.data.get(self.add_prefix(name))
                values[name] = raw.strip() if isinstance(raw, str) else ''
            else:
                values[name] = None
        return values

    def raw_value(self, name):
        """Return the trimmed submitted string for ``name`` (``''`` if absent)."""
        raw = self.data.get(self.add_prefix(name))
        return raw.strip() if isinstance(raw, str) else ''


class AuthorForm(CatalogForm):
    """Create/update form for :class:`catalog.models.Author`."""
    first_name = forms.CharField(
        max_length=100,
        error_messages={'required': 'First name must be specified.'},
        validators=[alphanumeric('First name has non-alphanumeric characters.')],
    ) #: Given name: required, letters and digits only.
    family_name = forms.CharField(
        max_length=100,
        error_messages={'required': 'Family name must be specified.'},
        validators=[alphanumeric('Family name has non-alphanumeric characters.')],
    ) #: Family name: required, letters and digits only.
    date_of_birth = forms.DateField(
        required=False,
        input_formats=ISO_DATE_FORMATS,
        error_messages={'invalid': 'Invalid date of birth'},
    ) #: Optional ISO-8601 date.
    date_of_death = forms.DateField(
        required=False,
        input_formats=ISO_DATE_FORMATS,
        error_messages={'invalid': 'Invalid date of death'},
    ) #: Optional ISO-8601 date.

    def to_author(self, pk=None):
        """Build an unsaved :class:`Author` from the form values.

        Parameters
        ----------
        pk : Optional[int]
            Id to give the instance, used when rebuilding an existing author.

        Returns
        -------
        Author
        """
        return Author(pk=pk, **self.values())


class GenreForm(CatalogForm):
    """Create form for :class:`catalog.models.Genre`."""
    name = forms.CharField(
        min_length=3,
        max_length=100,
        error_messages={
            'required': 'Genre name must be a minimum 3 characters long.',
            'min_length': 'Genre name must be a minimum 3 characters long.',
        },
    ) #: Genre name, at least three characters after trimming.

    def to_genre(self):
        """Build an unsaved :class:`Genre` from the form values."""
        return Genre(name=self.values()['name'])


class BookForm(CatalogForm):
    """Create/update form for :class:`catalog.models.Book`.

    ``genre`` must already be a list when the form is bound; see
    :func:`catalog.utils.normalize_body`.
    """
    title = forms.CharField(
        max_length=200,
        error_messages={'required': 'Title must not be empty.'},
    ) #: Book title.
    author = forms.ModelChoiceField(
        queryset=Author.objects.all(),
        error_messages={
            'required': 'Author must not be empty.',
            'invalid_choice': 'Select a valid author.',
        },
    ) #: Id of an existing author.
    summary = forms.CharField(
        max_length=1000,
        error_messages={'required': 'Summary must not be empty.'},
    ) #: Short description.
    isbn = forms.CharField(
        max_length=13,
        error_messages={'required': 'ISBN must not be empty'},
    ) #: ISBN as printed on the book.
    genre = forms.ModelMultipleChoiceField(
        queryset=Genre.objects.all(),
        required=False,
        error_messages={
            'invalid_choice': 'Select valid genres.',
            'invalid_pk_value': 'Select valid genres.',
        },
    ) #: Ids of existing genres (possibly none).

    def to_book(self, pk=None):
        """Build an unsaved :class:`Book` from the form values.

        The author reference is kept as a raw id when it failed validation,
        so the form can re-select it.
        """
        values = self.values()
        author = values['author']
        return Book(
            pk=pk,
            title=values['title'],
            author_id=author.pk if author is not None else (self.raw_value('author') or None),
            summary=values['summary'],
            isbn=values['isbn'],
        )

    def selected_genres(self):
        """Return the ids of the genres ticked on the form.

        Returns
        -------
        list
            Primary keys of the cleaned genres, or the submitted ids when the
            genre field itself failed validation.
        """
        cleaned = getattr(self, 'cleaned_data', {})
        if 'genre' in cleaned:
            return [genre.pk for genre in cleaned['genre']]
        submitted = as_list(self.data.get(self.add_prefix('genre')))
        return [str(pk).strip() for pk in submitted]


class BookInstanceForm(CatalogForm):
    """Create form for :class:`catalog.models.BookInstance`."""
    book = forms.ModelChoiceField(
        queryset=Book.objects.all(),
        error_messages={
            'required': 'Book must be specified',
            'invalid_choice': 'Select a valid book.',
        },
    ) #: Id of the book this is a copy of.
    imprint = forms.CharField(
        max_length=200,
        error_messages={'required': 'Imprint must be specified'},
    ) #: Publisher, edition and year.
    status = forms.TypedChoiceField(
        choices=BookInstance.Status.choices,
        required=False,
        empty_value=BookInstance.Status.MAINTENANCE,
        error_messages={'invalid_choice': 'Invalid status'},
    ) #: Loan status; blank means ``Maintenance``.
    due_back = forms.DateField(
        required=False,
        input_formats=ISO_DATE_FORMATS,
        error_messages={'invalid': 'Invalid date'},
    ) #: Optional ISO-8601 due date.

    def to_bookinstance(self):
        """Build an unsaved :class:`BookInstance` from the form values."""
        values = self.values()
        book = values['book']
        return BookInstance(
            book_id=book.pk if book is not None else (self.raw_value('book') or None),
            imprint=values['imprint'],
            status=values['status'] or BookInstance.Status.MAINTENANCE,
            due_back=values['due_back'],
        )
