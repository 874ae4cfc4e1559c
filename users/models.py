"""
User management module.

This module provides:
- CustomUserManager: Manager class for user operations
- CustomUser: User model with email-based authentication
- InvalidEmailError: Exception for email validation errors

A user account is what a speaker claims a talk with.
"""

from __future__ import annotations

from typing import Any, ClassVar

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


MAX_DISPLAY_NAME_LENGTH = 100


class InvalidEmailError(Exception):
    """Exception raised when an invalid email is provided."""

    def __init__(self, email: str) -> None:
        """
        Initialize the InvalidEmailError.

        Args:
            email: The invalid email that caused the error

        """
        self.email = email
        super().__init__(f"Invalid email address: {email}")


class CustomUserManager(BaseUserManager):
    """Manage user operations with email-based authentication."""

    def create_user(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> CustomUser:
        """
        Create and save a new user.

        Args:
            email: The email address for the new user
            password: Optional password for the new user
            **extra_fields: Additional fields to be saved on the user model

        Returns:
            CustomUser: The newly created user instance

        Raises:
            InvalidEmailError: If the email is invalid or not provided

        """
        if not email:
            raise InvalidEmailError(email) from None

        try:
            email = self.normalize_email(email).lower()
            user = self.model(email=email, **extra_fields)
            if password:
                user.set_password(password)
            else:
                user.set_unusable_password()
            user.full_clean()
        except ValidationError as exc:
            raise InvalidEmailError(email) from exc

        user.save(using=self._db)
        return user

    def create_superuser(
        self,
        email: str,
        password: str,
        **extra_fields: Any,
    ) -> CustomUser:
        """
        Create and save a new superuser.

        Raises:
            ValueError: If no password is given
            ValidationError: If superuser flags are not properly set

        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if not extra_fields.get("is_staff"):
            msg = "Superuser must have is_staff=True"
            raise ValidationError(msg)

        if not extra_fields.get("is_superuser"):
            msg = "Superuser must have is_superuser=True"
            raise ValidationError(msg)

        if not password:
            msg = "Superuser must have a password"
            raise ValueError(msg)

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Custom user model using email-based authentication instead of username."""

    username = None
    email = models.EmailField(
        "email address",
        unique=True,
        error_messages={
            "unique": "A user with that email already exists.",
        },
    )
    display_name = models.CharField(
        max_length=MAX_DISPLAY_NAME_LENGTH,
        blank=True,
        help_text=_(
            "Public name shown as speaker name on claimed talks (optional). "
            "If blank, we'll use your full name or email.",
        ),
    )
    date_joined = models.DateTimeField(default=timezone.now)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: ClassVar[list] = []

    objects = CustomUserManager()

    class Meta:
        """Metadata for CustomUser model."""

        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self) -> str:
        """Return string representation of the user."""
        return self.email

    @property
    def full_name(self) -> str:
        """Name shown for this user wherever they appear as a speaker."""
        return self.display_name or self.get_full_name() or self.email

    def clean(self) -> None:
        """
        Validate the user model.

        Ensures email is lowercase before saving.
        """
        super().clean()
        self.email = self.email.lower()
