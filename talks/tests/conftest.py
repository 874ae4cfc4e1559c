"""Shared test fixtures for the talks app."""

import pytest
from model_bakery import baker

from events.models import Event, Track
from talks.models import Talk
from users.models import CustomUser
from utils.url import UriBuilder


@pytest.fixture()
def event() -> Event:
    """Return an event to attach talks to."""
    return baker.make(Event, name="PHP Benelux 2026", slug="phpbnl26", year=2026)


@pytest.fixture()
def other_event() -> Event:
    """Return a second event, for checks that are scoped per event."""
    return baker.make(Event, name="PHP Benelux 2027", slug="phpbnl27", year=2027)


@pytest.fixture()
def talk(event: Event) -> Talk:
    """Return a talk without derived identifiers."""
    return baker.make(Talk, event=event, title="Hello World")


@pytest.fixture()
def track(event: Event) -> Track:
    """Return a track of the event."""
    return baker.make(Track, event=event, name="Frameworks")


@pytest.fixture()
def speaker_user() -> CustomUser:
    """Return a user that can claim a speaker row."""
    return CustomUser.objects.create_user(email="ada@example.com", display_name="Ada Lovelace")


@pytest.fixture()
def uris() -> UriBuilder:
    """Return a URI builder with a fixed base."""
    return UriBuilder(base="https://api.example.com", version="v2.1")


class TokenSequence:
    """Token factory returning predefined stubs in order and counting the calls."""

    def __init__(self, *tokens: str) -> None:
        """Store the tokens to hand out."""
        self.tokens = list(tokens)
        self.calls = 0

    def __call__(self) -> str:
        """Return the next token."""
        token = self.tokens[self.calls]
        self.calls += 1
        return token
