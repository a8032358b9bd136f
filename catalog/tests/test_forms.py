"""Tests for the validation rules in :mod:`catalog.forms`."""

from datetime import date

from django.test import SimpleTestCase, TestCase

from catalog.forms import AuthorForm, BookForm, BookInstanceForm, GenreForm
from catalog.models import Author, BookInstance, Genre


class AuthorFormTests(SimpleTestCase):

    def test_values_are_trimmed(self):
        form = AuthorForm({"first_name": "  Jane ", "family_name": "Austen  "})
        self.assertTrue(form.is_valid())
        author = form.to_author()
        self.assertEqual((author.first_name, author.family_name), ("Jane", "Austen"))

    def test_iso_dates_parsed(self):
        form = AuthorForm({"first_name": "Jane", "family_name": "Austen",
                           "date_of_birth": "1775-12-16", "date_of_death": ""})
        self.assertTrue(form.is_valid())
        author = form.to_author()
        self.assertEqual(author.date_of_birth, date(1775, 12, 16))
        self.assertIsNone(author.date_of_death)

    def test_non_iso_date_rejected(self):
        form = AuthorForm({"first_name": "Jane", "family_name": "Austen", "date_of_death": "18/07/1817"})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors["date_of_death"], ["Invalid date of death"])

    def test_rejected_form_keeps_typed_text(self):
        form = AuthorForm({"first_name": " Jane-Marie ", "family_name": "Austen"})
        self.assertFalse(form.is_valid())
        author = form.to_author(pk=5)
        self.assertEqual(author.first_name, "Jane-Marie")
        self.assertEqual(author.pk, 5)


class GenreFormTests(SimpleTestCase):

    def test_minimum_length_after_trim(self):
        form = GenreForm({"name": "  Fi  "})
        self.assertFalse(form.is_valid())
        self.assertIn("minimum 3 characters", form.errors["name"][0])
        self.assertEqual(form.to_genre().name, "Fi")


class BookFormTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.author = Author.objects.create(first_name="Jane", family_name="Austen")
        cls.genre = Genre.objects.create(name="Romance")

    def test_required_fields(self):
        form = BookForm({"title": " ", "author": "", "summary": "", "isbn": "", "genre": []})
        self.assertFalse(form.is_valid())
        self.assertEqual(
            [form.errors[name][0] for name in ("title", "author", "summary", "isbn")],
            ["Title must not be empty.", "Author must not be empty.",
             "Summary must not be empty.", "ISBN must not be empty"],
        )

    def test_unknown_author_rejected_but_kept_for_redisplay(self):
        form = BookForm({"title": "Emma", "author": "9999", "summary": "S", "isbn": "1", "genre": []})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors["author"], ["Select a valid author."])
        self.assertEqual(form.to_book().author_id, "9999")

    def test_selected_genres(self):
        form = BookForm({"title": "", "author": str(self.author.pk), "summary": "S",
                         "isbn": "1", "genre": [str(self.genre.pk)]})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.selected_genres(), [self.genre.pk])


class BookInstanceFormTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        author = Author.objects.create(first_name="Jane", family_name="Austen")
        cls.book = author.books.create(title="Emma", summary="S", isbn="1")

    def test_blank_status_defaults_to_maintenance(self):
        form = BookInstanceForm({"book": str(self.book.pk), "imprint": "Penguin", "status": ""})
        self.assertTrue(form.is_valid())
        self.assertEqual(form.to_bookinstance().status, BookInstance.Status.MAINTENANCE)

    def test_unknown_status_rejected(self):
        form = BookInstanceForm({"book": str(self.book.pk), "imprint": "Penguin", "status": "Lost"})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors["status"], ["Invalid status"])

    def test_book_and_imprint_required(self):
        form = BookInstanceForm({"book": "", "imprint": "  "})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors["book"], ["Book must be specified"])
        self.assertEqual(form.errors["imprint"], ["Imprint must be specified"])
