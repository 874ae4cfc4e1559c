"""
Derivation of the stub and slug identifiers of a talk.

Both identifiers are persisted under a unique constraint and collisions are resolved by retrying
with a new candidate. Running out of candidates is not an error: the identifier is left unset and
an empty string is returned, so the surrounding write still succeeds and a later read can try
again.

The assigner does not check whether the identifier is already set. Callers only invoke it for
talks whose stub or slug is missing (see talks.services.ensure_identifiers).
"""

import re
import unicodedata
from collections.abc import Callable

import structlog
from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils.crypto import get_random_string

from .models import MAX_SLUG_LENGTH, Talk


logger = structlog.get_logger(__name__)

HEX_DIGITS = "0123456789abcdef"
STUB_MAX_ATTEMPTS = 5
SLUG_SEPARATOR = "-"

TokenFactory = Callable[[], str]


def random_stub() -> str:
    """Return a random hex token of ``TALK_STUB_LENGTH`` characters."""
    return get_random_string(settings.TALK_STUB_LENGTH, allowed_chars=HEX_DIGITS)


def inflect(title: str) -> str:
    """
    Turn a talk title into a lowercase URL-safe token.

    Diacritics are stripped and every run of characters other than ASCII letters and digits
    becomes a single separator, e.g. ``"Café, Crème & PHP!"`` gives ``"cafe-creme-php"``.
    """
    normalized = unicodedata.normalize("NFKD", title)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    collapsed = re.sub(r"[^a-z0-9]+", SLUG_SEPARATOR, ascii_only.lower())
    return collapsed.strip(SLUG_SEPARATOR)


class IdentifierAssigner:
    """Compute and store the stub and slug of talks."""

    def __init__(self, token_factory: TokenFactory | None = None) -> None:
        """
        Initialize the assigner.

        Args:
            token_factory: Callable returning a new stub candidate on every call. Defaults to
                :func:`random_stub`; tests pass deterministic sequences.

        """
        self.token_factory = token_factory or random_stub

    def assign_stub(self, talk_id: int) -> str:
        """
        Generate, store and return a stub for the talk.

        Up to ``STUB_MAX_ATTEMPTS`` random candidates are tried. Returns an empty string when all
        of them collide with existing stubs or the talk no longer exists.
        """
        for attempt in range(1, STUB_MAX_ATTEMPTS + 1):
            stub = self.token_factory()
            try:
                stored = self._store(talk_id, stub=stub)
            except IntegrityError:
                logger.debug("Stub collision", talk_id=talk_id, stub=stub, attempt=attempt)
                continue
            return stub if stored else ""

        logger.warning("Could not assign a unique stub", talk_id=talk_id, attempts=STUB_MAX_ATTEMPTS)
        return ""

    def assign_slug(self, title: str, talk_id: int) -> str:
        """
        Derive, store and return a slug for the talk from its title.

        The plain inflected title is tried first. If another talk of the same event already uses
        it, the talk id is appended and the store is tried once more. There is no third attempt:
        an empty string is returned when the suffixed slug collides too.

        The inflected title is cut so that the suffixed slug still fits in ``MAX_SLUG_LENGTH``.
        """
        suffix = f"{SLUG_SEPARATOR}{talk_id}"
        base = inflect(title)[: MAX_SLUG_LENGTH - len(suffix)].rstrip(SLUG_SEPARATOR)
        if base:
            candidates = [base, f"{base}{suffix}"]
        else:
            candidates = [str(talk_id)]

        for slug in candidates:
            try:
                stored = self._store(talk_id, slug=slug)
            except IntegrityError:
                logger.debug("Slug collision", talk_id=talk_id, slug=slug)
                continue
            return slug if stored else ""

        logger.warning("Could not assign a unique slug", talk_id=talk_id, title=title)
        return ""

    @staticmethod
    def _store(talk_id: int, **values: str) -> bool:
        """
        Write ``values`` onto the talk row and report whether a row was updated.

        Each write runs in its own savepoint, so a unique constraint violation leaves the talk
        untouched and does not break an enclosing transaction.
        """
        with transaction.atomic():
            updated = Talk.objects.filter(pk=talk_id).update(**values)
        return updated == 1


def assign_stub(talk_id: int) -> str:
    """Assign a stub to the talk using the default random source."""
    return IdentifierAssigner().assign_stub(talk_id)


def assign_slug(title: str, talk_id: int) -> str:
    """Assign a slug to the talk from its title."""
    return IdentifierAssigner().assign_slug(title, talk_id)
