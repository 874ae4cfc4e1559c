"""Unit tests for utils.url."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from utils.url import UriBuilder


if TYPE_CHECKING:
    from pytest_django.fixtures import SettingsWrapper


class TestUriBuilder:
    """Tests for the versioned API locators."""

    @pytest.mark.parametrize(
        ("base", "expected"),
        [
            ("http://localhost", "http://localhost/v2.1/talks/7"),
            ("http://localhost/", "http://localhost/v2.1/talks/7"),
            ("https://api.example.com/joindin", "https://api.example.com/joindin/v2.1/talks/7"),
        ],
    )
    def test_talk_uri(self, base: str, expected: str) -> None:
        """The version and resource path are appended to the base."""
        assert UriBuilder(base=base, version="v2.1").talk_uri(7) == expected

    def test_resource_uris(self) -> None:
        """Tracks, users and talk tracks get their own paths."""
        uris = UriBuilder(base="http://localhost", version="v2.1")

        assert uris.track_uri(3) == "http://localhost/v2.1/tracks/3"
        assert uris.user_uri(5) == "http://localhost/v2.1/users/5"
        assert uris.talk_track_uri(1, 2) == "http://localhost/v2.1/talks/1/tracks/2"

    def test_from_settings(self, settings: SettingsWrapper) -> None:
        """The builder reads API_BASE_URL and API_VERSION."""
        settings.API_BASE_URL = "https://talks.example.org"
        settings.API_VERSION = "v3"

        assert UriBuilder.from_settings().user_uri(1) == "https://talks.example.org/v3/users/1"
