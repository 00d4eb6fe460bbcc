"""Unit tests for the guest contact form."""

import pytest

from src.models.booking import GuestContact
from src.rules import GuestContactValidator


class TestGuestContactValidator:
    """Tests for GuestContactValidator."""

    def test_valid_contact(self, contact):
        assert GuestContactValidator.validate(contact) == []
        assert GuestContactValidator.is_valid(contact)

    def test_missing_fields(self):
        errors = GuestContactValidator.validate(GuestContact())

        assert {error.field for error in errors} == {"first_name", "last_name", "email", "phone"}
        assert {error.code for error in errors} == {"required"}

    def test_short_name(self, contact):
        errors = GuestContactValidator.validate(contact.model_copy(update={"first_name": " A "}))

        assert [(error.field, error.code) for error in errors] == [("first_name", "too_short")]

    @pytest.mark.parametrize("email", ["linh", "linh@example", "linh @example.com", "@example.com"])
    def test_invalid_email(self, contact, email):
        errors = GuestContactValidator.validate(contact.model_copy(update={"email": email}))

        assert [(error.field, error.code) for error in errors] == [("email", "invalid_format")]

    @pytest.mark.parametrize("phone", ["0912 345 678", "(028) 3822-1234", "+849123456789"])
    def test_valid_phones(self, contact, phone):
        assert GuestContactValidator.is_valid(contact.model_copy(update={"phone": phone}))

    @pytest.mark.parametrize("phone", ["12345", "+84 912 345 678 901 23", "0912-ABC-678"])
    def test_invalid_phones(self, contact, phone):
        errors = GuestContactValidator.validate(contact.model_copy(update={"phone": phone}))

        assert [error.code for error in errors] == ["invalid_format"]
