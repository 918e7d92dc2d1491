"""User schemas: signup validation and profile patch semantics."""

import pytest
from pydantic import ValidationError

from finledger.schemas.user import (
    PasswordUpdate, ProfileUpdate, UserCreate, UserResponse,
)


def test_signup_preserves_email_case_and_strips_whitespace():
    data = UserCreate(email="  Alice@Example.com ", password="long-enough")
    assert data.email == "Alice@Example.com"


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com"])
def test_signup_rejects_malformed_email(email):
    with pytest.raises(ValidationError):
        UserCreate(email=email, password="long-enough")


def test_signup_rejects_short_password():
    with pytest.raises(ValidationError):
        UserCreate(email="a@example.com", password="short")


def test_profile_patch_reports_only_sent_fields():
    assert ProfileUpdate.model_validate({"first_name": "Al"}).changes() == {
        "first_name": "Al",
    }


def test_profile_patch_null_name_clears_it():
    assert ProfileUpdate.model_validate({"last_name": None}).changes() == {
        "last_name": None,
    }


def test_profile_patch_rejects_null_email():
    with pytest.raises(ValidationError):
        ProfileUpdate.model_validate({"email": None})


def test_user_response_has_no_password_field():
    assert "password_hash" not in UserResponse.model_fields
    assert "password" not in UserResponse.model_fields


def test_signup_rejects_password_over_72_utf8_bytes():
    """40 "é" characters pass the character limit but are 80 bytes."""
    with pytest.raises(ValidationError):
        UserCreate(email="a@example.com", password="é" * 40)


def test_signup_accepts_password_of_exactly_72_bytes():
    data = UserCreate(email="a@example.com", password="é" * 36)
    assert len(data.password.encode("utf-8")) == 72


def test_password_update_rejects_new_password_over_72_bytes():
    with pytest.raises(ValidationError):
        PasswordUpdate(current_password="whatever", new_password="é" * 40)
