"""Lead guest contact form validation."""

import re

from src.models.booking.payment import GuestContact
from src.models.field_error import FieldError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\-()]{10,15}$")
WHITESPACE = re.compile(r"\s+")

MIN_NAME_LENGTH = 2


class GuestContactValidator:
    """Field-level checks of the guest information form."""

    @staticmethod
    def validate(contact: GuestContact) -> list[FieldError]:
        """Validate every contact field.

        Returns:
            One FieldError per offending field, empty when the contact is valid
        """
        errors = []

        for field, label, value in (
            ("first_name", "First name", contact.first_name),
            ("last_name", "Last name", contact.last_name),
        ):
            stripped = value.strip()
            if not stripped:
                errors.append(FieldError.rejected(field, "required", f"{label} is required."))
            elif len(stripped) < MIN_NAME_LENGTH:
                errors.append(
                    FieldError.rejected(
                        field,
                        "too_short",
                        f"{label} must be at least {MIN_NAME_LENGTH} characters.",
                    )
                )

        email = contact.email.strip()
        if not email:
            errors.append(FieldError.rejected("email", "required", "Email is required."))
        elif not EMAIL_PATTERN.match(email):
            errors.append(FieldError.rejected("email", "invalid_format", "Email is not valid."))

        phone = WHITESPACE.sub("", contact.phone)
        if not phone:
            errors.append(FieldError.rejected("phone", "required", "Phone number is required."))
        elif not PHONE_PATTERN.match(phone):
            errors.append(
                FieldError.rejected("phone", "invalid_format", "Phone number is not valid.")
            )

        return errors

    @staticmethod
    def is_valid(contact: GuestContact) -> bool:
        return not GuestContactValidator.validate(contact)
