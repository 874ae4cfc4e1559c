"""Tests for the Event and Track models."""

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError
from model_bakery import baker

from events.models import Event, Track
from talks.models import Talk, TalkTrack


@pytest.mark.django_db
class TestEventModel:
    """Tests for Event model CRUD, constraints, and __str__."""

    def test_create_event(self) -> None:
        """Create an event with all fields and verify it is stored correctly."""
        event = Event.objects.create(name="PHP Benelux 2026", slug="phpbnl26", year=2026)

        assert event.pk is not None
        assert event.year == 2026  # noqa: PLR2004
        assert event.is_active is True

    def test_str_returns_name(self) -> None:
        """__str__ returns the event name."""
        assert str(baker.make(Event, name="My Event 2026")) == "My Event 2026"

    def test_slug_unique_constraint(self) -> None:
        """Two events with the same slug raise IntegrityError."""
        Event.objects.create(name="Event A", slug="same-slug", year=2026)
        with pytest.raises(IntegrityError):
            Event.objects.create(name="Event B", slug="same-slug", year=2026)

    def test_event_with_talks_is_protected(self) -> None:
        """An event cannot be deleted while talks belong to it."""
        event = baker.make(Event)
        baker.make(Talk, event=event)

        with pytest.raises(ProtectedError):
            event.delete()


@pytest.mark.django_db
class TestTrackModel:
    """Tests for the Track model."""

    def test_str_includes_event(self) -> None:
        """__str__ shows the track and its event."""
        track = baker.make(Track, name="Security", event__name="PHP Benelux 2026")

        assert str(track) == "Security (PHP Benelux 2026)"

    def test_name_unique_per_event(self) -> None:
        """Two tracks of one event cannot share a name."""
        event = baker.make(Event)
        Track.objects.create(event=event, name="Security")
        with pytest.raises(IntegrityError):
            Track.objects.create(event=event, name="Security")

    def test_same_name_in_other_event(self) -> None:
        """Track names only have to be unique within an event."""
        Track.objects.create(event=baker.make(Event), name="Security")
        Track.objects.create(event=baker.make(Event), name="Security")

        assert Track.objects.filter(name="Security").count() == 2  # noqa: PLR2004

    def test_deleting_track_drops_associations(self) -> None:
        """Removing a track removes its talk associations but not the talks."""
        track = baker.make(Track)
        talk = baker.make(Talk, event=track.event)
        baker.make(TalkTrack, talk=talk, track=track)

        track.delete()

        assert not TalkTrack.objects.filter(talk=talk).exists()
        assert Talk.objects.filter(pk=talk.pk).exists()
