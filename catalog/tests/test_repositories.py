"""Tests for the async data-access layer in :mod:`catalog.repositories`."""

from django.test import TestCase

from catalog.models import Author, Book, BookInstance, Genre
from catalog.repositories import (
    AuthorRepository,
    BookInstanceRepository,
    BookRepository,
    GenreRepository,
    Repository,
)


class RepositoryTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.austen = Author.objects.create(first_name="Jane", family_name="Austen")
        cls.bronte = Author.objects.create(first_name="Emily", family_name="Bronte")
        cls.romance = Genre.objects.create(name="Romance")
        cls.gothic = Genre.objects.create(name="Gothic")
        cls.emma = Book.objects.create(title="Emma", author=cls.austen, summary="Matchmaking", isbn="1")
        cls.emma.genre.add(cls.romance)
        cls.heights = Book.objects.create(title="Wuthering Heights", author=cls.bronte, summary="Moors", isbn="2")

    def setUp(self):
        self.authors = AuthorRepository()
        self.books = BookRepository()
        self.genres = GenreRepository()
        self.instances = BookInstanceRepository()

    def test_repository_requires_model(self):
        with self.assertRaises(ValueError):
            Repository()

    async def test_find_filters_and_sorts(self):
        authors = await self.authors.find(order_by=['-family_name'])
        self.assertEqual([a.family_name for a in authors], ["Bronte", "Austen"])

        books = await self.books.find({'author': self.austen.pk})
        self.assertEqual([b.title for b in books], ["Emma"])

    async def test_find_populates_references(self):
        books = await self.books.find(fields=['title', 'author'], populate=['author'])
        self.assertEqual([b.author.name for b in books], ["Austen, Jane", "Bronte, Emily"])

    async def test_find_by_id_populates_many_to_many(self):
        book = await self.books.find_by_id(self.emma.pk, populate=['author', 'genre'])
        self.assertEqual(book.author.family_name, "Austen")
        self.assertEqual([g.name for g in book.genre.all()], ["Romance"])

    async def test_find_by_id_missing(self):
        self.assertIsNone(await self.authors.find_by_id(987654))

    async def test_find_one_and_count(self):
        genre = await self.genres.find_one(name="Gothic")
        self.assertEqual(genre.pk, self.gothic.pk)
        self.assertIsNone(await self.genres.find_one(name="Poetry"))
        self.assertEqual(await self.books.count(genre=self.romance.pk), 1)
        self.assertEqual(await self.books.count(), 2)

    async def test_save_sets_relations(self):
        book = Book(title="Persuasion", author_id=self.austen.pk, summary="S", isbn="3")
        await self.books.save(book, genre=[self.romance, self.gothic])
        self.assertIsNotNone(book.pk)
        self.assertEqual(await self.books.count(genre=self.gothic.pk), 1)

    async def test_update_replaces_fields_and_relations(self):
        changed = Book(title="Emma (revised)", author_id=self.bronte.pk, summary="New", isbn="9")
        updated = await self.books.find_by_id_and_update(self.emma.pk, changed, genre=[self.gothic])

        self.assertEqual(updated.pk, self.emma.pk)
        stored = await self.books.find_by_id(self.emma.pk, populate=['genre'])
        self.assertEqual(stored.title, "Emma (revised)")
        self.assertEqual(stored.author_id, self.bronte.pk)
        self.assertEqual([g.name for g in stored.genre.all()], ["Gothic"])

    async def test_update_missing_record(self):
        author = Author(first_name="No", family_name="One")
        self.assertIsNone(await self.authors.find_by_id_and_update(987654, author))
        self.assertEqual(await self.authors.count(), 2)

    async def test_remove(self):
        copy = BookInstance(book_id=self.heights.pk, imprint="Penguin")
        await self.instances.save(copy)
        copy_pk = copy.pk

        removed = await self.instances.find_by_id_and_remove(copy_pk)
        self.assertIsNotNone(removed)
        self.assertIsNone(await self.instances.find_by_id(copy_pk))
        self.assertIsNone(await self.instances.find_by_id_and_remove(copy_pk))
