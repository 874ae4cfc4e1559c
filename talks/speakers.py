"""
Speaker associations of a talk.

The central operation is :func:`reconcile`, which brings the speakers of a talk in line with a
list of display names while leaving untouched every speaker that is still requested. A claimed
speaker row links a talk to a user account, and deleting and re-creating it would lose that link.

Reconciliation reads the current speakers right before writing and takes no application-level
lock. Two concurrent reconciliations of the same talk can interleave; a later reconciliation
converges the talk on its target. Set ``TALKS_LOCK_TALK_WRITES`` to serialise writers per talk
(see talks.services.talk_write_lock).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog
from django.conf import settings

from utils.url import UriBuilder

from .models import TalkSpeaker


logger = structlog.get_logger(__name__)


class RemovalMode(StrEnum):
    """How a name shared by several speaker rows of one talk is removed."""

    # Remove every row showing the name
    ALL = "all"
    # Remove one row: unclaimed rows first, then the oldest
    SINGLE = "single"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a reconciliation: names added and speaker rows removed."""

    added: int = 0
    removed: int = 0

    @property
    def changed(self) -> bool:
        """Return True if any row was written."""
        return bool(self.added or self.removed)


def current_speakers(talk_id: int) -> list[TalkSpeaker]:
    """Return the speaker rows of the talk with their claiming users loaded."""
    return list(TalkSpeaker.objects.filter(talk_id=talk_id).select_related("user").order_by("pk"))


def reconcile(
    talk_id: int,
    target_names: Iterable[str],
    removal_mode: RemovalMode | str | None = None,
) -> ReconcileResult:
    """
    Synchronise the speakers of the talk with ``target_names``.

    - names requested but not present are added as unclaimed speakers
    - speakers whose name is no longer requested are removed
    - speakers whose name is still requested are not touched, claimed or not

    ``target_names`` is treated as a set: two requested speakers sharing a display name cannot
    be told apart and end up as a single row. Which rows go when several share a removed name is
    decided by ``removal_mode`` (defaults to ``TALKS_SPEAKER_REMOVAL_MODE``).
    """
    mode = RemovalMode(removal_mode or settings.TALKS_SPEAKER_REMOVAL_MODE)
    targets = set(target_names)

    rows_by_name: dict[str, list[TalkSpeaker]] = {}
    for row in current_speakers(talk_id):
        rows_by_name.setdefault(row.display_name, []).append(row)
    current = set(rows_by_name)

    to_add = sorted(targets - current)
    if to_add:
        TalkSpeaker.objects.bulk_create(
            TalkSpeaker(talk_id=talk_id, speaker_name=name) for name in to_add
        )

    doomed: list[int] = []
    for name in sorted(current - targets):
        doomed.extend(row.pk for row in _rows_to_remove(rows_by_name[name], mode))
    removed = 0
    if doomed:
        removed, _ = TalkSpeaker.objects.filter(talk_id=talk_id, pk__in=doomed).delete()

    result = ReconcileResult(added=len(to_add), removed=removed)
    if result.changed:
        logger.info(
            "Reconciled talk speakers",
            talk_id=talk_id,
            added=result.added,
            removed=result.removed,
        )
    return result


def _rows_to_remove(rows: list[TalkSpeaker], mode: RemovalMode) -> list[TalkSpeaker]:
    if mode is RemovalMode.ALL:
        return rows
    return [min(rows, key=lambda row: (row.is_claimed, row.pk))]


def get_speakers(talk_id: int, uris: UriBuilder) -> list[dict[str, Any]]:
    """
    Return the speakers of the talk as they are shown to API clients.

    Claimed speakers carry the locator of their user account.
    """
    speakers = []
    for row in current_speakers(talk_id):
        entry: dict[str, Any] = {"speaker_name": row.display_name}
        if row.is_claimed:
            entry["speaker_uri"] = uris.user_uri(row.user_id)
        speakers.append(entry)
    return speakers


def get_speaker_from_talk(talk_id: int | None, display_name: str) -> TalkSpeaker | None:
    """Return the first speaker row of the talk stored under ``display_name``."""
    if talk_id is None:
        return None
    return (
        TalkSpeaker.objects.filter(talk_id=talk_id, speaker_name=display_name)
        .order_by("pk")
        .first()
    )


def is_user_speaker_on_talk(talk_id: int, user_id: int) -> bool:
    """Return True if the user claimed a speaker row of the talk."""
    return TalkSpeaker.objects.filter(talk_id=talk_id, user_id=user_id).exists()


def assign_talk_to_speaker(talk_id: int, claim_id: int, user_id: int, speaker_name: str) -> bool:
    """
    Let a user claim an existing speaker row.

    The row keeps its identity; only the user reference and stored name change. Returns True if
    the row exists on the talk.
    """
    updated = TalkSpeaker.objects.filter(pk=claim_id, talk_id=talk_id).update(
        user_id=user_id,
        speaker_name=speaker_name,
    )
    if updated:
        logger.info("Speaker claimed", talk_id=talk_id, claim_id=claim_id, user_id=user_id)
    return updated == 1


def remove_approved_speaker_from_talk(talk_id: int, user_id: int) -> int:
    """Turn the rows the user claimed on the talk back into unclaimed speakers."""
    updated = TalkSpeaker.objects.filter(talk_id=talk_id, user_id=user_id).update(user=None)
    if updated:
        logger.info("Speaker unassigned", talk_id=talk_id, user_id=user_id, rows=updated)
    return updated


def remove_all_speakers_from_talk(talk_id: int) -> int:
    """Delete every speaker row of the talk and return how many were removed."""
    deleted, _ = TalkSpeaker.objects.filter(talk_id=talk_id).delete()
    return deleted
