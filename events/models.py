"""Event and track models: the containers a talk belongs to."""

from typing import TYPE_CHECKING, ClassVar

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


if TYPE_CHECKING:
    from django_stubs_ext.db.models.manager import RelatedManager

    from talks.models import Talk, TalkTrack

MAX_EVENT_NAME_LENGTH = 200
MAX_EVENT_SLUG_LENGTH = 100
MAX_TRACK_NAME_LENGTH = 100


class Event(models.Model):
    """Represents a conference event (e.g., PHP Benelux 2026)."""

    name = models.CharField(
        unique=True,
        max_length=MAX_EVENT_NAME_LENGTH,
        help_text=_("Display name of the event. Include the year if applicable."),
    )

    slug = models.SlugField(
        max_length=MAX_EVENT_SLUG_LENGTH,
        unique=True,
        null=False,
        blank=False,
        help_text=_("Event slug. Name used in URLs."),
    )

    year = models.PositiveSmallIntegerField(
        _("Event year"),
        null=True,
        blank=True,
        validators=[
            MinValueValidator(2000),
            MaxValueValidator(2100),
        ],
    )

    is_active = models.BooleanField(
        default=True,
        help_text=_("Whether this event is currently active and visible"),
    )

    if TYPE_CHECKING:
        talks: RelatedManager[Talk]
        tracks: RelatedManager[Track]

    class Meta:
        """Metadata for the Event model."""

        verbose_name = _("Event")
        verbose_name_plural = _("Events")
        ordering: ClassVar[list[str]] = ["name"]

    def __str__(self) -> str:
        """Return the event name."""
        return self.name


class Track(models.Model):
    """A named track of an event that talks can be grouped into."""

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name="tracks",
        help_text=_("Event this track belongs to"),
    )

    name = models.CharField(
        max_length=MAX_TRACK_NAME_LENGTH,
        help_text=_("Name of the track"),
    )

    description = models.TextField(
        blank=True,
        default="",
        help_text=_("Description of the track"),
    )

    if TYPE_CHECKING:
        talk_tracks: RelatedManager[TalkTrack]

    class Meta:
        """Metadata for the Track model."""

        verbose_name = _("Track")
        verbose_name_plural = _("Tracks")
        ordering: ClassVar[list[str]] = ["event", "name"]
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=["event", "name"], name="unique_track_name_per_event"),
        ]

    def __str__(self) -> str:
        """Return the track name with its event."""
        return f"{self.name} ({self.event.name})"
