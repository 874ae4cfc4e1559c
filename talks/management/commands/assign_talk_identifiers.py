"""
Management command for deriving the stub and slug of talks that do not have them yet.

Talks get their identifiers on creation or on first read. This command fills them in for talks
imported behind the application's back or whose derivation ran out of candidates earlier.
"""

from typing import Any

from django.core.management.base import BaseCommand, CommandError, CommandParser
from django.db.models import Q, QuerySet

from events.models import Event
from talks.identifiers import IdentifierAssigner
from talks.models import Talk
from talks.services import ensure_identifiers


class Command(BaseCommand):
    """Derive missing talk stubs and slugs."""

    help = "Derive missing talk stubs and slugs."

    def add_arguments(self, parser: CommandParser) -> None:
        """Add command line arguments."""
        parser.add_argument(
            "--event",
            type=str,
            default="",
            help="Only process talks of the event with this slug",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the talks without making database changes",
        )

    def talks_missing_identifiers(self, event_slug: str) -> QuerySet[Talk]:
        """Return the talks with no stub or no slug, optionally limited to one event."""
        talks = Talk.objects.filter(Q(stub__isnull=True) | Q(slug__isnull=True))
        if event_slug:
            if not Event.objects.filter(slug=event_slug).exists():
                msg = f"Event not found: {event_slug}"
                raise CommandError(msg)
            talks = talks.filter(event__slug=event_slug)
        return talks.order_by("pk")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: ARG002
        """Execute the command."""
        dry_run = options.get("dry_run", False)
        talks = self.talks_missing_identifiers(options["event"])
        self.stdout.write(f"Found {talks.count()} talks with missing identifiers")

        if dry_run:
            self.stdout.write(self.style.NOTICE("DRY RUN: No database changes will be made"))
            for talk in talks:
                self.stdout.write(f"Would derive identifiers for talk {talk.pk}: {talk.title}")
            return

        assigner = IdentifierAssigner()
        failed = 0
        for talk in talks:
            ensure_identifiers(talk, assigner)
            if talk.stub and talk.slug:
                self.stdout.write(self.style.NOTICE(f"{talk.pk}: stub={talk.stub} slug={talk.slug}"))
            else:
                failed += 1
                self.stdout.write(
                    self.style.WARNING(f"Could not derive all identifiers for talk {talk.pk}"),
                )

        if failed:
            self.stdout.write(self.style.WARNING(f"{failed} talks still miss identifiers"))
        else:
            self.stdout.write(self.style.SUCCESS("Successfully derived talk identifiers"))
