"""Tests for the talk write and read paths."""
# ruff: noqa: PLR2004

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from model_bakery import baker

from events.models import Event, Track
from talks.identifiers import IdentifierAssigner
from talks.links import add_talk_link
from talks.models import Talk, TalkSpeaker
from talks.services import create_talk, edit_talk, ensure_identifiers, get_talk, talk_write_lock
from talks.tests.conftest import TokenSequence
from talks.tracks import add_talk_to_track
from users.models import CustomUser
from utils.url import UriBuilder


if TYPE_CHECKING:
    from pytest_django.fixtures import SettingsWrapper


@pytest.mark.django_db
class TestCreateTalk:
    """Tests for creating talks."""

    def test_derives_identifiers(self, event: Event) -> None:
        """A new talk gets a slug from its title and a stub."""
        assigner = IdentifierAssigner(TokenSequence("abc12"))

        talk = create_talk({"event_id": event.pk, "title": "Hello World"}, assigner)

        talk.refresh_from_db()
        assert talk.slug == "hello-world"
        assert talk.stub == "abc12"

    def test_attaches_speakers(self, event: Event) -> None:
        """Speaker names in the data become unclaimed speakers."""
        talk = create_talk(
            {"event_id": event.pk, "title": "Hello World", "speakers": ["Ada", "Grace"]},
        )

        assert sorted(talk.talk_speakers.values_list("speaker_name", flat=True)) == [
            "Ada",
            "Grace",
        ]

    def test_ignores_unknown_keys(self, event: Event) -> None:
        """Keys that are not talk attributes are not written."""
        talk = create_talk({"event_id": event.pk, "title": "Hello", "stars": 5})

        assert talk.title == "Hello"

    def test_same_title_twice_in_event(self, event: Event) -> None:
        """The second talk with the same title gets its id appended to the slug."""
        create_talk({"event_id": event.pk, "title": "Hello World"})
        second = create_talk({"event_id": event.pk, "title": "Hello World"})

        assert second.slug == f"hello-world-{second.pk}"


@pytest.mark.django_db
class TestEditTalk:
    """Tests for editing talks."""

    def test_title_change_rederives_slug(self, event: Event) -> None:
        """A new title gives a new slug while the stub stays."""
        talk = create_talk({"event_id": event.pk, "title": "Hello World"})
        stub = talk.stub

        edited = edit_talk(talk.pk, {"title": "Goodbye World"})

        assert edited.slug == "goodbye-world"
        assert edited.stub == stub

    def test_other_change_keeps_slug(self, event: Event) -> None:
        """Editing anything but the title keeps the slug."""
        talk = create_talk({"event_id": event.pk, "title": "Hello World"})

        edited = edit_talk(talk.pk, {"description": "Updated", "duration": timedelta(minutes=45)})

        assert edited.slug == "hello-world"
        assert edited.description == "Updated"

    def test_move_to_other_event_rederives_slug(self, event: Event, other_event: Event) -> None:
        """A talk moved into an event that already uses its slug gets a suffixed one."""
        create_talk({"event_id": other_event.pk, "title": "Hello World"})
        talk = create_talk({"event_id": event.pk, "title": "Hello World"})
        assert talk.slug == "hello-world"

        edited = edit_talk(talk.pk, {"event_id": other_event.pk})

        assert edited.event_id == other_event.pk
        assert edited.slug == f"hello-world-{talk.pk}"

    def test_move_to_free_event_keeps_plain_slug(self, event: Event, other_event: Event) -> None:
        """Without a clash in the new event the plain slug is derived again."""
        talk = create_talk({"event_id": event.pk, "title": "Hello World"})

        edited = edit_talk(talk.pk, {"event_id": other_event.pk})

        assert edited.slug == "hello-world"

    def test_reconciles_speakers(self, event: Event, speaker_user: CustomUser) -> None:
        """Speakers are reconciled and claimed rows that stay keep their user."""
        talk = create_talk({"event_id": event.pk, "title": "Hello", "speakers": ["Ada"]})
        TalkSpeaker.objects.filter(talk=talk).update(user=speaker_user)

        edit_talk(talk.pk, {"speakers": ["Ada Lovelace", "Grace Hopper"]})

        assert TalkSpeaker.objects.get(talk=talk, user=speaker_user).speaker_name == "Ada"
        assert talk.talk_speakers.count() == 2

    def test_missing_talk_raises(self) -> None:
        """Editing a talk that does not exist raises DoesNotExist."""
        with pytest.raises(Talk.DoesNotExist):
            edit_talk(999_999, {"title": "Nobody"})


@pytest.mark.django_db
class TestEnsureIdentifiers:
    """Tests for deriving missing identifiers."""

    def test_skips_complete_talk(self, event: Event) -> None:
        """Nothing is written when slug and stub are both set."""
        talk = baker.make(Talk, event=event, slug="set", stub="set01")
        tokens = TokenSequence()

        ensure_identifiers(talk, IdentifierAssigner(tokens))

        assert tokens.calls == 0

    def test_failed_stub_stays_none(self, event: Event, talk: Talk) -> None:
        """When every stub collides the stub stays unset and the slug is still stored."""
        baker.make(Talk, event=event, stub="aaaaa")

        ensure_identifiers(talk, IdentifierAssigner(TokenSequence(*["aaaaa"] * 5)))

        talk.refresh_from_db()
        assert talk.stub is None
        assert talk.slug == "hello-world"

    def test_lock_selects_talk_for_update(
        self,
        talk: Talk,
        settings: SettingsWrapper,
    ) -> None:
        """With TALKS_LOCK_TALK_WRITES the talk row is locked inside a transaction."""
        settings.TALKS_LOCK_TALK_WRITES = True

        with patch("talks.services.Talk.objects.select_for_update") as mock_lock:
            with talk_write_lock(talk.pk):
                pass

        mock_lock.assert_called_once_with()
        mock_lock.return_value.filter.assert_called_once_with(pk=talk.pk)

    def test_no_lock_by_default(self, talk: Talk) -> None:
        """Without the setting no row is locked."""
        with patch("talks.services.Talk.objects.select_for_update") as mock_lock:
            with talk_write_lock(talk.pk):
                pass

        mock_lock.assert_not_called()


@pytest.mark.django_db
class TestGetTalk:
    """Tests for the representation of a talk."""

    def test_full_representation(
        self,
        event: Event,
        track: Track,
        speaker_user: CustomUser,
        uris: UriBuilder,
    ) -> None:
        """Scalars, identifiers, speakers, tracks and links are all included."""
        start = datetime(2026, 1, 30, 10, 0, tzinfo=UTC)
        talk = baker.make(
            Talk,
            event=event,
            title="Hello World",
            description="A talk",
            language="en",
            presentation_type=Talk.PresentationType.KEYNOTE,
            start_time=start,
            duration=timedelta(minutes=50),
        )
        baker.make(TalkSpeaker, talk=talk, speaker_name="Ada", user=speaker_user)
        add_talk_to_track(talk.pk, track.pk)
        add_talk_link(talk.pk, "slides_link", "https://example.com/slides")

        data = get_talk(talk.pk, uris)

        assert data is not None
        assert data["id"] == talk.pk
        assert data["event_id"] == event.pk
        assert data["talk_title"] == "Hello World"
        assert data["url_friendly_talk_title"] == "hello-world"
        assert len(data["stub"]) == 5
        assert data["talk_description"] == "A talk"
        assert data["language"] == "en"
        assert data["type"] == "Keynote"
        assert data["start_date"] == start.isoformat()
        assert data["duration"] == 50
        assert data["uri"] == f"https://api.example.com/v2.1/talks/{talk.pk}"
        assert data["speakers"] == [
            {
                "speaker_name": "Ada Lovelace",
                "speaker_uri": f"https://api.example.com/v2.1/users/{speaker_user.pk}",
            },
        ]
        assert [t["track_name"] for t in data["tracks"]] == ["Frameworks"]
        assert data["talk_media"] == [{"slides_link": "https://example.com/slides"}]
        assert data["slides_link"] == "https://example.com/slides"

    def test_missing_talk(self) -> None:
        """None is returned for an unknown talk."""
        assert get_talk(999_999) is None

    def test_uses_settings_for_uris(self, talk: Talk, settings: SettingsWrapper) -> None:
        """Without an explicit builder the locators use API_BASE_URL and API_VERSION."""
        settings.API_BASE_URL = "https://talks.example.org"
        settings.API_VERSION = "v3"

        data = get_talk(talk.pk)

        assert data is not None
        assert data["uri"] == f"https://talks.example.org/v3/talks/{talk.pk}"
