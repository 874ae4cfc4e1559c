"""Admin interface for users."""

from typing import ClassVar

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.contrib.auth.forms import UserCreationForm
from django.db.models import Count, QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


class CustomUserCreationForm(UserCreationForm):
    """Creation form keyed on email instead of username."""

    class Meta(UserCreationForm.Meta):
        """Meta class for CustomUserCreationForm."""

        model = CustomUser
        fields = ("email",)


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    """Admin configuration for the CustomUser model using UserAdmin."""

    add_form = CustomUserCreationForm

    # Override UserAdmin username handling
    username_field = "email"

    list_display = (
        "email",
        "full_name",
        "claimed_talk_count",
        "is_active",
        "is_staff",
        "is_superuser",
    )
    list_filter = ("is_staff", "is_superuser", "is_active")
    search_fields = ("email", "display_name", "first_name", "last_name")
    ordering = ("-date_joined",)

    # Override UserAdmin fieldsets to use email instead of username
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {"fields": ("display_name", "first_name", "last_name")}),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )
    readonly_fields: ClassVar[list[str]] = ["last_login", "date_joined"]

    def get_queryset(self, request: HttpRequest) -> QuerySet[CustomUser]:
        """Annotate users with the number of talks they claimed."""
        return super().get_queryset(request).annotate(_claimed_talks=Count("talk_speakers"))

    @admin.display(description=_("Claimed talks"), ordering="_claimed_talks")
    def claimed_talk_count(self, obj: CustomUser) -> int:
        """Display how many talk speaker rows this user claimed."""
        return obj._claimed_talks  # type: ignore[attr-defined]  # noqa: SLF001
