"""
Admin configuration for talk management.

This module defines the Django admin interfaces for talks, their speaker, track and link rows,
and the link type vocabulary. Talks are deleted through talks.deletion so that dependents are
removed in the same transaction.
"""

from collections.abc import Sequence
from typing import Any, ClassVar

from django.contrib import admin, messages
from django.db.models import Count, QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .deletion import delete_talk
from .models import Talk, TalkLink, TalkLinkType, TalkSpeaker, TalkTrack


# Request attribute listing the talks whose deletion was rolled back
FAILED_DELETES_ATTR = "_talks_not_deleted"


class TalkSpeakerInline(admin.TabularInline):
    """Inline editor for the speakers of a talk."""

    model = TalkSpeaker
    extra = 0
    fields = ("speaker_name", "user")
    raw_id_fields = ("user",)


class TalkTrackInline(admin.TabularInline):
    """Inline editor for the tracks of a talk."""

    model = TalkTrack
    extra = 0
    fields = ("track",)


class TalkLinkInline(admin.TabularInline):
    """Inline editor for the media links of a talk."""

    model = TalkLink
    extra = 0
    fields = ("link_type", "url")


@admin.register(Talk)
class TalkAdmin(admin.ModelAdmin):
    """Admin configuration for the Talk model."""

    list_display = (
        "title",
        "event",
        "presentation_type",
        "start_time",
        "speaker_count",
        "stub",
        "slug",
    )
    list_filter = ("event", "presentation_type")
    search_fields = ("title", "stub", "slug", "talk_speakers__speaker_name")
    readonly_fields = ("stub", "slug", "created_at", "updated_at")
    date_hierarchy = "start_time"
    inlines: ClassVar[list[type[admin.TabularInline]]] = [
        TalkSpeakerInline,
        TalkTrackInline,
        TalkLinkInline,
    ]

    fieldsets = (
        (
            None,
            {
                "fields": ("event", "title", "description", "language", "presentation_type"),
            },
        ),
        (
            _("Schedule"),
            {
                "fields": ("start_time", "duration"),
            },
        ),
        (
            _("Identifiers"),
            {
                "fields": ("stub", "slug", "created_at", "updated_at"),
            },
        ),
    )

    def get_queryset(self, request: HttpRequest) -> QuerySet[Talk]:
        """Annotate talks with their number of speakers."""
        return (
            super()
            .get_queryset(request)
            .select_related("event")
            .annotate(_speaker_count=Count("talk_speakers", distinct=True))
        )

    @admin.display(description=_("Speakers"), ordering="_speaker_count")
    def speaker_count(self, obj: Talk) -> int:
        """Display the number of speakers of the talk."""
        return obj._speaker_count  # type: ignore[attr-defined]  # noqa: SLF001

    def get_deleted_objects(
        self,
        objs: Sequence[Talk] | QuerySet[Talk],
        request: HttpRequest,
    ) -> tuple[list[Any], dict[str, int], set[str], list[Any]]:
        """Report no protected objects: the rows protecting a talk are deleted with it."""
        deleted_objects, model_count, perms_needed, _protected = super().get_deleted_objects(
            objs,
            request,
        )
        return deleted_objects, model_count, perms_needed, []

    def delete_model(self, request: HttpRequest, obj: Talk) -> None:
        """Delete the talk together with its links, tracks and speakers."""
        if not delete_talk(obj.pk):
            setattr(request, FAILED_DELETES_ATTR, [obj])
            self.message_user(request, _("The talk could not be deleted."), messages.ERROR)

    def delete_queryset(self, request: HttpRequest, queryset: QuerySet[Talk]) -> None:
        """Delete every selected talk, each in its own transaction."""
        failed = [talk for talk in queryset if not delete_talk(talk.pk)]
        if failed:
            setattr(request, FAILED_DELETES_ATTR, failed)
            self.message_user(
                request,
                _("Could not delete: %(titles)s") % {"titles": ", ".join(t.title for t in failed)},
                messages.ERROR,
            )

    def message_user(
        self,
        request: HttpRequest,
        message: str,
        level: int = messages.INFO,
        extra_tags: str = "",
        fail_silently: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Drop the generic success message after a talk deletion was rolled back."""
        if level == messages.SUCCESS and getattr(request, FAILED_DELETES_ATTR, None):
            return
        super().message_user(request, message, level, extra_tags, fail_silently)


@admin.register(TalkLinkType)
class TalkLinkTypeAdmin(admin.ModelAdmin):
    """Admin configuration for the TalkLinkType model."""

    list_display = ("display_name", "link_count")
    search_fields = ("display_name",)

    def get_queryset(self, request: HttpRequest) -> QuerySet[TalkLinkType]:
        """Annotate link types with the number of links using them."""
        return super().get_queryset(request).annotate(_link_count=Count("links"))

    @admin.display(description=_("Links"), ordering="_link_count")
    def link_count(self, obj: TalkLinkType) -> int:
        """Display how many links use this type."""
        return obj._link_count  # type: ignore[attr-defined]  # noqa: SLF001
