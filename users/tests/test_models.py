"""Tests for the custom user model and its manager class."""

from typing import Any

import pytest
from django.core.exceptions import ValidationError

from users.models import CustomUser, InvalidEmailError


@pytest.fixture()
def superuser_data() -> dict[str, Any]:
    """Return test data for creating a superuser."""
    return {
        "email": "admin@example.com",
        "password": "hunter2",
    }


@pytest.mark.django_db
def test_create_user() -> None:
    """
    Test creating a regular user with the CustomUserManager.

    Verifies that:
    - User is created with a lowercased email
    - User has no usable password
    - User has default permissions set correctly
    """
    user = CustomUser.objects.create_user(email="Ada@Example.COM")
    assert user.email == "ada@example.com"
    assert not user.has_usable_password()
    assert user.is_active
    assert not user.is_staff
    assert not user.is_superuser


@pytest.mark.django_db
@pytest.mark.parametrize("email", ["", "not-an-email"])
def test_create_user_invalid_email(email: str) -> None:
    """Test that a missing or malformed email raises InvalidEmailError."""
    with pytest.raises(InvalidEmailError):
        CustomUser.objects.create_user(email=email)


@pytest.mark.django_db
def test_create_superuser(superuser_data: dict[str, Any]) -> None:
    """Test creating a superuser sets the staff flags and the password."""
    user = CustomUser.objects.create_superuser(**superuser_data)
    assert user.is_staff
    assert user.is_superuser
    assert user.check_password("hunter2")


@pytest.mark.django_db
def test_create_superuser_requires_password() -> None:
    """Test that a superuser without password is rejected."""
    with pytest.raises(ValueError, match="password"):
        CustomUser.objects.create_superuser(email="admin@example.com", password="")


@pytest.mark.django_db
def test_create_superuser_requires_flags(superuser_data: dict[str, Any]) -> None:
    """Test that a superuser must keep is_staff set."""
    with pytest.raises(ValidationError):
        CustomUser.objects.create_superuser(**superuser_data, is_staff=False)


@pytest.mark.django_db
@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"display_name": "Ada", "first_name": "Augusta", "last_name": "King"}, "Ada"),
        ({"first_name": "Augusta", "last_name": "King"}, "Augusta King"),
        ({}, "ada@example.com"),
    ],
)
def test_full_name(fields: dict[str, str], expected: str) -> None:
    """Test the speaker name falls back from display name to full name to email."""
    user = CustomUser.objects.create_user(email="ada@example.com", **fields)
    assert user.full_name == expected
