"""Request tests for the author pages."""

from auditlog.models import LogEntry
from django.test import TestCase
from django.urls import reverse

from catalog.models import Author, Book


class AuthorListDetailTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.wells = Author.objects.create(first_name="Herbert", family_name="Wells")
        cls.austen = Author.objects.create(first_name="Jane", family_name="Austen")
        Book.objects.create(title="Emma", author=cls.austen, summary="Matchmaking", isbn="1")

    def test_list_sorted_by_family_name(self):
        resp = self.client.get(reverse('author-list'))
        self.assertEqual(resp.status_code, 200)
        self.assertTemplateUsed(resp, 'catalog/author_list.html')
        self.assertEqual([a.family_name for a in resp.context['author_list']], ["Austen", "Wells"])

    def test_detail_lists_books(self):
        resp = self.client.get(self.austen.get_absolute_url())
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['author'], self.austen)
        self.assertEqual([b.title for b in resp.context['author_books']], ["Emma"])
        self.assertContains(resp, "Matchmaking")

    def test_detail_missing_author_is_404(self):
        resp = self.client.get('/catalog/author/999999')
        self.assertEqual(resp.status_code, 404)
        self.assertContains(resp, "Author not found", status_code=404)

    def test_unsupported_method(self):
        resp = self.client.put(reverse('author-list'))
        self.assertEqual(resp.status_code, 405)


class AuthorCreateTests(TestCase):

    def test_get_renders_empty_form(self):
        resp = self.client.get(reverse('author-create'))
        self.assertEqual(resp.status_code, 200)
        self.assertTemplateUsed(resp, 'catalog/author_form.html')
        self.assertEqual(resp.context['title'], "Create Author")

    def test_valid_author_is_saved_and_redirected(self):
        resp = self.client.post(reverse('author-create'), {'first_name': "Jane", 'family_name': "Austen"})

        self.assertEqual(Author.objects.count(), 1)
        author = Author.objects.get()
        self.assertRedirects(resp, f"/catalog/author/{author.pk}", fetch_redirect_response=False)
        self.assertTrue(LogEntry.objects.get_for_object(author).exists())

    def test_values_are_trimmed_and_dates_parsed(self):
        self.client.post(reverse('author-create'), {
            'first_name': "  Jane ",
            'family_name': " Austen",
            'date_of_birth': "1775-12-16",
            'date_of_death': "",
        })
        author = Author.objects.get()
        self.assertEqual(author.name, "Austen, Jane")
        self.assertEqual(author.date_of_birth.isoformat(), "1775-12-16")
        self.assertIsNone(author.date_of_death)

    def test_missing_family_name_rerenders_form(self):
        resp = self.client.post(reverse('author-create'), {'first_name': "Jane", 'family_name': "  "})

        self.assertEqual(resp.status_code, 200)
        self.assertTemplateUsed(resp, 'catalog/author_form.html')
        self.assertEqual(Author.objects.count(), 0)
        self.assertEqual(resp.context['errors'],
                         [{'field': 'family_name', 'message': "Family name must be specified."}])
        self.assertEqual(resp.context['author'].first_name, "Jane")

    def test_missing_first_name_rerenders_form(self):
        resp = self.client.post(reverse('author-create'), {'family_name': "Austen"})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context['errors'])
        self.assertEqual(Author.objects.count(), 0)

    def test_non_alphanumeric_name_rejected(self):
        resp = self.client.post(reverse('author-create'), {'first_name': "<b>Jane</b>", 'family_name': "Austen"})
        self.assertContains(resp, "First name has non-alphanumeric characters.")
        self.assertContains(resp, "&lt;b&gt;Jane&lt;/b&gt;")
        self.assertEqual(Author.objects.count(), 0)

    def test_invalid_date_rejected(self):
        resp = self.client.post(reverse('author-create'), {
            'first_name': "Jane", 'family_name': "Austen", 'date_of_birth': "not-a-date",
        })
        self.assertContains(resp, "Invalid date of birth")
        self.assertEqual(Author.objects.count(), 0)


class AuthorDeleteTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.austen = Author.objects.create(first_name="Jane", family_name="Austen")
        cls.book = Book.objects.create(title="Emma", author=cls.austen, summary="S", isbn="1")
        cls.unpublished = Author.objects.create(first_name="Nobody", family_name="Yet")

    def test_get_shows_dependent_books(self):
        resp = self.client.get(reverse('author-delete', args=[self.austen.pk]))
        self.assertEqual(resp.status_code, 200)
        self.assertTemplateUsed(resp, 'catalog/author_delete.html')
        self.assertEqual(len(resp.context['author_books']), 1)

    def test_get_missing_author_redirects_to_list(self):
        resp = self.client.get(reverse('author-delete', args=[999999]))
        self.assertRedirects(resp, '/catalog/authors', fetch_redirect_response=False)

    def test_author_with_books_is_kept(self):
        resp = self.client.post(reverse('author-delete', args=[self.austen.pk]), {'authorid': self.austen.pk})

        self.assertEqual(resp.status_code, 200)
        self.assertTemplateUsed(resp, 'catalog/author_delete.html')
        self.assertTrue(Author.objects.filter(pk=self.austen.pk).exists())

    def test_author_without_books_is_removed(self):
        resp = self.client.post(reverse('author-delete', args=[self.unpublished.pk]))

        self.assertRedirects(resp, '/catalog/authors', fetch_redirect_response=False)
        self.assertFalse(Author.objects.filter(pk=self.unpublished.pk).exists())


class AuthorUpdateTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.author = Author.objects.create(first_name="Jane", family_name="Austin")

    def test_get_prefills_form(self):
        resp = self.client.get(reverse('author-update', args=[self.author.pk]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['title'], "Update Author")
        self.assertContains(resp, 'value="Austin"')

    def test_get_missing_author_is_404(self):
        resp = self.client.get(reverse('author-update', args=[999999]))
        self.assertEqual(resp.status_code, 404)

    def test_valid_update_keeps_id(self):
        resp = self.client.post(reverse('author-update', args=[self.author.pk]), {
            'first_name': "Jane", 'family_name': "Austen", 'date_of_death': "1817-07-18",
        })

        self.assertRedirects(resp, self.author.get_absolute_url(), fetch_redirect_response=False)
        self.author.refresh_from_db()
        self.assertEqual(self.author.family_name, "Austen")
        self.assertEqual(self.author.date_of_death.isoformat(), "1817-07-18")
        self.assertEqual(Author.objects.count(), 1)

    def test_invalid_update_changes_nothing(self):
        resp = self.client.post(reverse('author-update', args=[self.author.pk]), {
            'first_name': "", 'family_name': "Austen",
        })

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['author'].pk, self.author.pk)
        self.author.refresh_from_db()
        self.assertEqual(self.author.family_name, "Austin")

    def test_update_of_missing_author_is_404(self):
        resp = self.client.post(reverse('author-update', args=[999999]), {
            'first_name': "Jane", 'family_name': "Austen",
        })
        self.assertEqual(resp.status_code, 404)
