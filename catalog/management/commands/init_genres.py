"""Management command to populate the catalog's ``Genre`` table.

Staff run this once on a fresh database so the book form has genres to
offer. Running it again is harmless.
"""
from auditlog.context import set_actor
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import DatabaseError

from catalog.models import Genre
from catalog.utils import notify

GENRES = [
    "Biography",
    "Children's",
    "Crime",
    "Fantasy",
    "Fiction",
    "French Poetry",
    "Historical Fiction",
    "History",
    "Horror",
    "Military History",
    "Mystery",
    "Non-Fiction",
    "Poetry",
    "Romance",
    "Science Fiction",
    "Thriller",
    "Travel",
] #: Genres created by the command.

User = get_user_model()


class Command(BaseCommand):
    """Create each genre of :data:`GENRES` that does not exist yet.

    Existing genres are matched by exact name and left untouched. Audit
    entries for the created rows are attributed to ``--user`` when given.
    """
    help = "Create the default set of genres."

    def add_arguments(self, parser):
        """Register command-line arguments.

        Parameters
        ----------
        parser : argparse.ArgumentParser
            The parser instance provided by Django's management framework.
        """
        parser.add_argument(
            "--user",
            type=str,
            help="Username of the user performing this action (for audit logging).",
        )

    def handle(self, *args, **options):
        """Execute the genre population.

        Parameters
        ----------
        **options
            Keyword args parsed from the CLI. Relevant keys:

            - ``user`` (str, optional): username to set as the audit actor.
        """
        username = options.get("user")
        user = User.objects.filter(username=username).first() if username else None
        if username and user is None:
            notify(command=self, msg=f"Unknown user '{username}', audit entries will have no actor.", level="warning")

        created_count = 0
        for name in GENRES:
            try:
                with set_actor(user):
                    _, created = Genre.objects.get_or_create(name=name)
            except DatabaseError as e:
                notify(command=self, msg=f"Failed to create genre '{name}': {e}", level="error")
                continue

            if created:
                created_count += 1
                notify(command=self, msg=f"Created genre '{name}'", level="success")
            else:
                notify(command=self, msg=f"Genre '{name}' already exists.", level="info")

        notify(command=self, msg=f"{created_count} genre(s) created.", level="success")
