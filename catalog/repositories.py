"""Asynchronous data-access objects for the catalog models.

The catalog views never query ``Model.objects`` themselves. Each view
controller is handed repository instances, which keeps the views free of
ORM details and lets tests swap in in-memory stand-ins.

Every method materializes its results before returning, so templates
rendered from an async view never trigger a lazy (synchronous) query.
Database errors are not caught here; they propagate to the caller as
:class:`django.db.DatabaseError`.
"""

from typing import Iterable, Optional

from django.db import models

from .models import Author, Book, BookInstance, Genre


class Repository:
    """Generic async CRUD operations over a single model class."""
    model: type[models.Model] | None = None #: Model class the repository reads and writes.

    def __init__(self, model=None):
        if model is not None:
            self.model = model
        if self.model is None:
            raise ValueError(f"{type(self).__name__} has no model configured.")

    def queryset(self, filters=None, fields=None, order_by=None, populate=()):
        """Build (without evaluating) a queryset for the given options.

        Parameters
        ----------
        filters : Optional[dict]
            Field lookups passed to ``QuerySet.filter``.
        fields : Optional[Iterable[str]]
            Projection: only these fields (plus the primary key) are loaded.
        order_by : Optional[Iterable[str]]
            Sort fields, ``-`` prefixed for descending order.
        populate : Iterable[str]
            Reference fields whose records are joined in. Foreign keys use
            ``select_related``; many-to-many fields use ``prefetch_related``.

        Returns
        -------
        django.db.models.query.QuerySet
            The unevaluated queryset.
        """
        qs = self.model.objects.all()
        if filters:
            qs = qs.filter(**filters)
        if fields:
            qs = qs.only(*fields)
        if order_by:
            qs = qs.order_by(*order_by)

        for name in populate:
            field = self.model._meta.get_field(name)
            if field.many_to_many or field.one_to_many:
                qs = qs.prefetch_related(name)
            else:
                qs = qs.select_related(name)
        return qs

    async def find(self, filters=None, fields=None, order_by=None, populate=()) -> list:
        """Return every record matching ``filters`` as a list."""
        qs = self.queryset(filters, fields, order_by, populate)
        return [obj async for obj in qs]

    async def find_by_id(self, pk, populate: Iterable[str] = ()) -> Optional[models.Model]:
        """Return the record with primary key ``pk`` or ``None``."""
        try:
            return await self.queryset(populate=populate).aget(pk=pk)
        except self.model.DoesNotExist:
            return None

    async def find_one(self, **filters) -> Optional[models.Model]:
        """Return the first record matching ``filters`` or ``None``."""
        return await self.model.objects.filter(**filters).afirst()

    async def count(self, **filters) -> int:
        """Return the number of records matching ``filters``."""
        return await self.model.objects.filter(**filters).acount()

    async def save(self, instance, **relations):
        """Insert ``instance`` and set its many-to-many ``relations``.

        Parameters
        ----------
        instance : django.db.models.Model
            Unsaved model instance.
        **relations
            Mapping of many-to-many field name to the related ids/objects.

        Returns
        -------
        django.db.models.Model
            The saved instance, now carrying its primary key.
        """
        await instance.asave()
        for name, values in relations.items():
            await getattr(instance, name).aset(values)
        return instance

    async def find_by_id_and_update(self, pk, instance, **relations) -> Optional[models.Model]:
        """Overwrite the record ``pk`` with the field values of ``instance``.

        Returns ``None`` when no record with that id exists; nothing is
        written in that case.
        """
        current = await self.find_by_id(pk)
        if current is None:
            return None

        for field in self.model._meta.concrete_fields:
            if field.primary_key:
                continue
            setattr(current, field.attname, getattr(instance, field.attname))
        await current.asave()

        for name, values in relations.items():
            await getattr(current, name).aset(values)
        return current

    async def find_by_id_and_remove(self, pk) -> Optional[models.Model]:
        """Delete the record ``pk`` and return it, or ``None`` if it is absent."""
        instance = await self.find_by_id(pk)
        if instance is not None:
            await instance.adelete()
        return instance


class AuthorRepository(Repository):
    model = Author


class GenreRepository(Repository):
    model = Genre


class BookRepository(Repository):
    model = Book


class BookInstanceRepository(Repository):
    model = BookInstance
