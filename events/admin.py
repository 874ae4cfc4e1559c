"""Admin interface for events and their tracks."""

from collections.abc import Sequence
from typing import ClassVar

from django.contrib import admin
from django.db.models import Count, QuerySet
from django.http import HttpRequest

from .models import Event, Track


class TrackInline(admin.TabularInline):
    """Inline editor for the tracks of an event."""

    model = Track
    extra = 0
    fields = ("name", "description")


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin configuration for the Event model."""

    list_display = (
        "name",
        "slug",
        "year",
        "is_active",
        "talk_count",
    )
    list_filter = ("is_active",)
    search_fields = ("name", "slug")
    prepopulated_fields: ClassVar[dict[str, Sequence[str]]] = {"slug": ("name",)}
    inlines: ClassVar[list[type[admin.TabularInline]]] = [TrackInline]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Event]:
        """Annotate events with the number of talks."""
        return super().get_queryset(request).annotate(_talk_count=Count("talks", distinct=True))

    @admin.display(description="Talks", ordering="_talk_count")
    def talk_count(self, obj: Event) -> int:
        """Display the number of talks of the event."""
        return obj._talk_count  # type: ignore[attr-defined]  # noqa: SLF001


@admin.register(Track)
class TrackAdmin(admin.ModelAdmin):
    """Admin configuration for the Track model."""

    list_display = ("name", "event")
    list_filter = ("event",)
    search_fields = ("name", "event__name")
