"""
Conference talk storage for the talk registry.

This module provides the Talk model and the rows that depend on a talk: speaker associations,
track associations and typed media links. Every dependent row protects its talk, so a talk can
only be removed after its dependents are gone (see talks.deletion).
"""

from datetime import timedelta
from typing import TYPE_CHECKING, ClassVar

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from events.models import Event, Track


if TYPE_CHECKING:
    from django_stubs_ext.db.models.manager import RelatedManager


# Constants
MAX_LANGUAGE_LENGTH = 50
MAX_LINK_TYPE_LENGTH = 50
MAX_SLUG_LENGTH = 300
MAX_SPEAKER_NAME_LENGTH = 200
MAX_STUB_LENGTH = 32
MAX_TALK_TITLE_LENGTH = 250

# Link type also exposed on its own in talk representations
SLIDES_LINK_TYPE = "slides_link"


class Talk(models.Model):
    """
    Represents a conference talk.

    ``stub`` and ``slug`` are derived identifiers. They stay NULL until talks.identifiers
    assigns them. Once set, a stub is unique across all talks and a slug is unique within the
    talk's event.
    """

    class PresentationType(models.TextChoices):
        """Enumeration of presentation types."""

        KEYNOTE = "Keynote", _("Keynote")
        LIGHTNING = "Lightning", _("Lightning Talk")
        PANEL = "Panel", _("Panel")
        TALK = "Talk", _("Talk")
        TUTORIAL = "Tutorial", _("Tutorial")
        WORKSHOP = "Workshop", _("Workshop")

    event = models.ForeignKey(
        Event,
        on_delete=models.PROTECT,
        related_name="talks",
        help_text=_("Event this talk belongs to"),
    )
    title = models.CharField(
        max_length=MAX_TALK_TITLE_LENGTH,
        help_text=_("Title of the talk"),
    )
    description = models.TextField(
        blank=True,
        default="",
        help_text=_("Full description of the talk"),
    )
    language = models.CharField(
        max_length=MAX_LANGUAGE_LENGTH,
        blank=True,
        default="",
        help_text=_("Language the talk is given in"),
    )
    presentation_type = models.CharField(
        max_length=10,
        choices=PresentationType.choices,
        default=PresentationType.TALK,
        help_text=_("Type of the presentation"),
    )
    start_time = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Date and time when the talk is scheduled"),
    )
    duration = models.DurationField(
        blank=True,
        default=timedelta(),
        help_text=_("Duration of the talk"),
    )
    stub = models.CharField(
        max_length=MAX_STUB_LENGTH,
        unique=True,
        null=True,
        blank=True,
        editable=False,
        help_text=_("Short unique token used as a compact external identifier"),
    )
    slug = models.SlugField(
        max_length=MAX_SLUG_LENGTH,
        null=True,
        blank=True,
        editable=False,
        help_text=_("URL-friendly title, unique within the event"),
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        help_text=_("When this talk was added to the system"),
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text=_("When this talk was last modified"),
    )

    if TYPE_CHECKING:
        talk_speakers: RelatedManager[TalkSpeaker]
        talk_tracks: RelatedManager[TalkTrack]
        links: RelatedManager[TalkLink]

    class Meta:
        """Metadata options for the Talk model."""

        ordering: ClassVar[list[str]] = ["start_time"]
        verbose_name = _("Talk")
        verbose_name_plural = _("Talks")
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["event", "start_time"], name="talks_talk_event_start_idx"),
        ]
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=["event", "slug"], name="unique_talk_slug_per_event"),
        ]

    def __str__(self) -> str:
        """Return the talk title."""
        return self.title


class TalkSpeaker(models.Model):
    """
    A speaker attached to a talk.

    The row is either unclaimed (only ``speaker_name`` is known) or claimed by a registered
    ``user``. For a claimed row the user's name wins over the stored name.
    """

    talk = models.ForeignKey(
        Talk,
        on_delete=models.PROTECT,
        related_name="talk_speakers",
        help_text=_("Talk the speaker gives"),
    )
    speaker_name = models.CharField(
        max_length=MAX_SPEAKER_NAME_LENGTH,
        blank=True,
        default="",
        help_text=_("Name of the speaker as entered on the talk"),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="talk_speakers",
        help_text=_("Account that claimed this speaker slot"),
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        help_text=_("When the speaker was attached to the talk"),
    )

    class Meta:
        """Metadata options for the TalkSpeaker model."""

        ordering: ClassVar[list[str]] = ["talk", "pk"]
        verbose_name = _("Talk speaker")
        verbose_name_plural = _("Talk speakers")
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["talk", "speaker_name"], name="talks_speaker_talk_name_idx"),
        ]

    def __str__(self) -> str:
        """Return the speaker name and the talk."""
        return f"{self.display_name} on {self.talk}"

    @property
    def is_claimed(self) -> bool:
        """Return True if a user account claimed this row."""
        return self.user_id is not None

    @property
    def display_name(self) -> str:
        """Return the name this speaker is shown with."""
        if self.user_id is not None:
            return self.user.full_name
        return self.speaker_name


class TalkTrack(models.Model):
    """Link between a talk and one of the tracks of its event."""

    talk = models.ForeignKey(
        Talk,
        on_delete=models.PROTECT,
        related_name="talk_tracks",
        help_text=_("Talk in the track"),
    )
    track = models.ForeignKey(
        Track,
        on_delete=models.CASCADE,
        related_name="talk_tracks",
        help_text=_("Track the talk belongs to"),
    )

    class Meta:
        """Metadata options for the TalkTrack model."""

        verbose_name = _("Talk track")
        verbose_name_plural = _("Talk tracks")
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=["talk", "track"], name="unique_talk_track"),
        ]

    def __str__(self) -> str:
        """Return the talk and track names."""
        return f"{self.talk} in {self.track.name}"


class TalkLinkType(models.Model):
    """Vocabulary entry for the kind of media a talk link points to."""

    display_name = models.CharField(
        max_length=MAX_LINK_TYPE_LENGTH,
        unique=True,
        help_text=_("Name of the link type, e.g. 'slides_link'"),
    )

    class Meta:
        """Metadata options for the TalkLinkType model."""

        ordering: ClassVar[list[str]] = ["display_name"]
        verbose_name = _("Talk link type")
        verbose_name_plural = _("Talk link types")

    def __str__(self) -> str:
        """Return the link type name."""
        return self.display_name


class TalkLink(models.Model):
    """A typed URL attached to a talk (slides, video, code...)."""

    talk = models.ForeignKey(
        Talk,
        on_delete=models.PROTECT,
        related_name="links",
        help_text=_("Talk the link belongs to"),
    )
    link_type = models.ForeignKey(
        TalkLinkType,
        on_delete=models.PROTECT,
        related_name="links",
        help_text=_("Kind of media the link points to"),
    )
    url = models.URLField(
        max_length=500,
        help_text=_("Location of the media"),
    )

    class Meta:
        """Metadata options for the TalkLink model."""

        ordering: ClassVar[list[str]] = ["talk", "pk"]
        verbose_name = _("Talk link")
        verbose_name_plural = _("Talk links")

    def __str__(self) -> str:
        """Return the link type and URL."""
        return f"{self.link_type.display_name}: {self.url}"
