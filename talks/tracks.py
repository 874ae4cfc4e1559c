"""Track associations of a talk."""

from typing import Any

import structlog
from django.db import IntegrityError, transaction

from utils.url import UriBuilder

from .models import TalkTrack


logger = structlog.get_logger(__name__)


def add_talk_to_track(talk_id: int, track_id: int) -> int:
    """
    Put the talk in the track and return the id of the association.

    Asking twice for the same pair returns the existing association instead of adding a second
    one. When a concurrent request inserts the pair first, its row is returned.
    """
    existing = TalkTrack.objects.filter(talk_id=talk_id, track_id=track_id).values_list(
        "pk",
        flat=True,
    )
    if pk := existing.first():
        return pk

    try:
        with transaction.atomic():
            talk_track = TalkTrack.objects.create(talk_id=talk_id, track_id=track_id)
    except IntegrityError:
        logger.debug("Lost race adding talk to track", talk_id=talk_id, track_id=track_id)
        return TalkTrack.objects.get(talk_id=talk_id, track_id=track_id).pk

    logger.info("Talk added to track", talk_id=talk_id, track_id=track_id)
    return talk_track.pk


def remove_track_from_talk(talk_id: int, track_id: int) -> int:
    """Take the talk out of the track."""
    deleted, _ = TalkTrack.objects.filter(talk_id=talk_id, track_id=track_id).delete()
    return deleted


def remove_talk_from_all_tracks(talk_id: int) -> int:
    """Take the talk out of every track and return how many associations were removed."""
    deleted, _ = TalkTrack.objects.filter(talk_id=talk_id).delete()
    return deleted


def get_tracks(talk_id: int, uris: UriBuilder) -> list[dict[str, Any]]:
    """Return the tracks of the talk as they are shown to API clients."""
    talk_tracks = (
        TalkTrack.objects.filter(talk_id=talk_id).select_related("track").order_by("track__name")
    )
    return [
        {
            "track_name": talk_track.track.name,
            "track_uri": uris.track_uri(talk_track.track_id),
            "remove_track_uri": uris.talk_track_uri(talk_id, talk_track.track_id),
        }
        for talk_track in talk_tracks
    ]
