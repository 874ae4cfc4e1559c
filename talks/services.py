"""
Write and read paths of a talk.

These functions glue the scalar field writes to the consistency-sensitive parts of the talks app:

- creating a talk derives its stub and slug and attaches its speakers
- editing the title of a talk clears the slug and derives it again from the new title
- reading a talk derives any identifier that is still missing

Preconditions: at most one request writes a given talk at a time. Nothing here locks a talk
unless ``TALKS_LOCK_TALK_WRITES`` is enabled, in which case :func:`talk_write_lock` holds the
talk row for the duration of the derivation or reconciliation.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import structlog
from django.conf import settings
from django.db import transaction

from utils.url import UriBuilder

from .identifiers import IdentifierAssigner
from .links import add_talk_media
from .models import Talk
from .speakers import get_speakers, reconcile
from .tracks import get_tracks


logger = structlog.get_logger(__name__)

# Talk attributes that create_talk and edit_talk write as they are
SCALAR_FIELDS = (
    "event_id",
    "title",
    "description",
    "language",
    "presentation_type",
    "start_time",
    "duration",
)
# Changing any of these invalidates the slug
SLUG_SOURCES = frozenset({"event_id", "title"})


@contextmanager
def talk_write_lock(talk_id: int) -> Iterator[None]:
    """
    Serialise writers of one talk when ``TALKS_LOCK_TALK_WRITES`` is enabled.

    Opens a transaction and locks the talk row with ``SELECT ... FOR UPDATE``; other writers
    wait until the block exits. Without the setting the block runs unlocked.
    """
    if not settings.TALKS_LOCK_TALK_WRITES:
        yield
        return

    with transaction.atomic():
        Talk.objects.select_for_update().filter(pk=talk_id).exists()
        yield


def ensure_identifiers(talk: Talk, assigner: IdentifierAssigner | None = None) -> Talk:
    """Derive the slug and stub of the talk if they are missing and store them on the instance."""
    if talk.slug and talk.stub:
        return talk

    assigner = assigner or IdentifierAssigner()
    with talk_write_lock(talk.pk):
        if not talk.slug:
            talk.slug = assigner.assign_slug(talk.title, talk.pk) or None
        if not talk.stub:
            talk.stub = assigner.assign_stub(talk.pk) or None
    return talk


def _scalar_values(data: Mapping[str, Any]) -> dict[str, Any]:
    return {field: data[field] for field in SCALAR_FIELDS if field in data}


def create_talk(data: Mapping[str, Any], assigner: IdentifierAssigner | None = None) -> Talk:
    """
    Create a talk from ``data`` and return it.

    ``data`` holds the scalar attributes (``event_id`` and ``title`` are required) and optionally
    ``speakers``, a list of speaker display names.
    """
    talk = Talk.objects.create(**_scalar_values(data))
    logger.info("Talk created", talk_id=talk.pk, event_id=talk.event_id)

    ensure_identifiers(talk, assigner)

    if "speakers" in data:
        with talk_write_lock(talk.pk):
            reconcile(talk.pk, data["speakers"])
    return talk


def edit_talk(
    talk_id: int,
    data: Mapping[str, Any],
    assigner: IdentifierAssigner | None = None,
) -> Talk:
    """
    Update the talk with the attributes present in ``data`` and return it.

    A new title or a move to another event clears the slug, which is then derived again. The
    stub never changes. When ``speakers`` is present the speakers of the talk are reconciled
    with it.

    Raises:
        Talk.DoesNotExist: If there is no talk with ``talk_id``

    """
    values = _scalar_values(data)
    if SLUG_SOURCES.intersection(values):
        values["slug"] = None
    if values:
        updated = Talk.objects.filter(pk=talk_id).update(**values)
        if not updated:
            msg = f"Talk {talk_id} does not exist"
            raise Talk.DoesNotExist(msg)

    talk = Talk.objects.get(pk=talk_id)
    logger.info("Talk edited", talk_id=talk_id, fields=sorted(values))
    ensure_identifiers(talk, assigner)

    if "speakers" in data:
        with talk_write_lock(talk_id):
            reconcile(talk_id, data["speakers"])
    return talk


def get_talk(talk_id: int, uris: UriBuilder | None = None) -> dict[str, Any] | None:
    """
    Return the representation of a talk, or None if it does not exist.

    Missing identifiers are derived on the way. Speakers, tracks and media links are included.
    """
    talk = Talk.objects.filter(pk=talk_id).first()
    if talk is None:
        return None

    ensure_identifiers(talk)
    uris = uris or UriBuilder.from_settings()
    talk_data: dict[str, Any] = {
        "id": talk.pk,
        "event_id": talk.event_id,
        "talk_title": talk.title,
        "url_friendly_talk_title": talk.slug or "",
        "stub": talk.stub or "",
        "talk_description": talk.description,
        "language": talk.language,
        "type": talk.presentation_type,
        "start_date": talk.start_time.isoformat() if talk.start_time else None,
        "duration": int(talk.duration.total_seconds() // 60),
        "uri": uris.talk_uri(talk.pk),
        "speakers": get_speakers(talk.pk, uris),
        "tracks": get_tracks(talk.pk, uris),
    }
    return add_talk_media(talk_data)
