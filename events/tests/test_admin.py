"""Tests for the event admin."""

import pytest
from django.contrib.admin.sites import AdminSite
from django.test import RequestFactory
from model_bakery import baker

from events.admin import EventAdmin
from events.models import Event
from talks.models import Talk
from users.models import CustomUser


@pytest.mark.django_db
class TestEventAdmin:
    """Verify EventAdmin computed columns."""

    def test_talk_count(self) -> None:
        """Annotated talk_count column returns the number of talks of an event."""
        event = baker.make(Event)
        baker.make(Talk, event=event, _quantity=2)
        admin = EventAdmin(Event, AdminSite())
        request = RequestFactory().get("/")
        request.user = CustomUser.objects.create_superuser(
            email="admin@admin.com",
            password="admin123!",
        )

        assert admin.talk_count(admin.get_queryset(request).get(pk=event.pk)) == 2  # noqa: PLR2004
