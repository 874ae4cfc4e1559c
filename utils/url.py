"""Resource locators for the API representation of talks."""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from furl import furl


@dataclass(frozen=True)
class UriBuilder:
    """Build resource locators for talks, tracks and users under a versioned API base."""

    base: str
    version: str

    @classmethod
    def from_settings(cls) -> UriBuilder:
        """Return a builder for ``API_BASE_URL`` and ``API_VERSION``."""
        return cls(base=settings.API_BASE_URL, version=settings.API_VERSION)

    def build(self, *segments: str | int) -> str:
        """Join ``segments`` onto the versioned base and return the URL."""
        f = furl(self.base)
        f.add(path=[self.version, *(str(segment) for segment in segments)])
        return f.url

    def talk_uri(self, talk_id: int) -> str:
        """Return the locator of a talk."""
        return self.build("talks", talk_id)

    def track_uri(self, track_id: int) -> str:
        """Return the locator of a track."""
        return self.build("tracks", track_id)

    def user_uri(self, user_id: int) -> str:
        """Return the locator of a user."""
        return self.build("users", user_id)

    def talk_track_uri(self, talk_id: int, track_id: int) -> str:
        """Return the locator of the association between a talk and a track."""
        return self.build("talks", talk_id, "tracks", track_id)
