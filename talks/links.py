"""
Media links of a talk.

A link is a URL typed by one of the names in :class:`~talks.models.TalkLinkType`. Links are
written directly; there is no reconciliation of the link list.
"""

from typing import Any

import structlog

from .models import SLIDES_LINK_TYPE, TalkLink, TalkLinkType


logger = structlog.get_logger(__name__)


class TalkLinkError(Exception):
    """Raised when a link refers to a link type that does not exist."""

    def __init__(self, display_name: str) -> None:
        """
        Initialize the TalkLinkError.

        Args:
            display_name: The unknown link type name

        """
        self.display_name = display_name
        super().__init__(f"Unknown talk link type: {display_name}")


def _link_type(display_name: str) -> TalkLinkType:
    try:
        return TalkLinkType.objects.get(display_name=display_name)
    except TalkLinkType.DoesNotExist:
        raise TalkLinkError(display_name) from None


def add_talk_link(talk_id: int, display_name: str, url: str) -> int:
    """
    Attach a link of type ``display_name`` to the talk and return its id.

    Raises:
        TalkLinkError: If ``display_name`` is not a known link type

    """
    link = TalkLink.objects.create(talk_id=talk_id, link_type=_link_type(display_name), url=url)
    logger.info("Talk link added", talk_id=talk_id, link_id=link.pk, link_type=display_name)
    return link.pk


def update_talk_link(talk_id: int, link_id: int, display_name: str, url: str) -> bool:
    """
    Change the type and URL of a link of the talk.

    Returns True if exactly one link was changed. An unknown link type changes nothing.
    """
    link_type = TalkLinkType.objects.filter(display_name=display_name).first()
    if link_type is None:
        return False
    updated = TalkLink.objects.filter(pk=link_id, talk_id=talk_id).update(
        link_type=link_type,
        url=url,
    )
    return updated == 1


def remove_talk_link(talk_id: int, link_id: int) -> bool:
    """Delete one link of the talk. Returns True if exactly one link was removed."""
    deleted, _ = TalkLink.objects.filter(pk=link_id, talk_id=talk_id).delete()
    return deleted == 1


def remove_all_talk_links(talk_id: int) -> int:
    """Delete every link of the talk and return how many were removed."""
    deleted, _ = TalkLink.objects.filter(talk_id=talk_id).delete()
    return deleted


def get_talk_media_links(talk_id: int | None, link_id: int | None = None) -> list[dict[str, Any]]:
    """Return the links of the talk, or only ``link_id`` when given."""
    if talk_id is None:
        return []
    links = TalkLink.objects.filter(talk_id=talk_id)
    if link_id is not None:
        links = links.filter(pk=link_id)
    return [
        {"id": link["pk"], "display_name": link["link_type__display_name"], "url": link["url"]}
        for link in links.order_by("pk").values("pk", "link_type__display_name", "url")
    ]


def add_talk_media(talk_data: dict[str, Any]) -> dict[str, Any]:
    """
    Add the links of a talk to its representation.

    Every link is listed under ``talk_media`` as ``{type: url}``. A slides link is also exposed
    as a top-level ``slides_link`` key for clients that predate typed links.
    """
    media = talk_data.setdefault("talk_media", [])
    for link in get_talk_media_links(talk_data["id"]):
        if link["display_name"] == SLIDES_LINK_TYPE:
            talk_data[SLIDES_LINK_TYPE] = link["url"]
        media.append({link["display_name"]: link["url"]})
    return talk_data
