"""
Validation of generated fixture records against the target apps' rules
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from e2e_support import constants
from e2e_support.data_factory import BookingRecord, GenerationConfig, Title, UserRecord

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _digits(value) -> Optional[str]:
    """Digit-only text of a form field value, or None."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    text = str(value)
    return text if text.isdigit() else None


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class DataValidator:
    """Checks records; reports problems instead of raising."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()

    def validate_booking(self, booking: BookingRecord) -> ValidationResult:
        """
        Validate a booking.

        Args:
            booking: Record to check

        Returns:
            ValidationResult: errors for rule violations, a warning for long stays
        """
        result = ValidationResult()

        # Names
        self._check_name(result, "first_name", booking.first_name)
        self._check_name(result, "last_name", booking.last_name)

        # Price
        if not isinstance(booking.total_price, int) or isinstance(booking.total_price, bool):
            result.errors.append("Booking total_price must be an integer")
        elif not self.config.price_min <= booking.total_price <= self.config.price_max:
            result.errors.append(
                f"Booking total_price must be between {self.config.price_min} and {self.config.price_max}"
            )

        if not isinstance(booking.deposit_paid, bool):
            result.errors.append("Booking deposit_paid must be a boolean")

        # Dates
        if not (isinstance(booking.checkin, date) and isinstance(booking.checkout, date)):
            result.errors.append("Booking checkin and checkout must be dates")
        elif booking.checkout <= booking.checkin:
            result.errors.append("Booking checkout date must be after checkin date")
        else:
            nights = (booking.checkout - booking.checkin).days
            if nights > self.config.checkout_window_days:
                result.warnings.append(
                    f"Booking checkout is {nights} days after checkin "
                    f"(typically max {self.config.checkout_window_days} days)"
                )

        if booking.additional_needs is not None and not isinstance(booking.additional_needs, str):
            result.errors.append("Booking additional_needs must be text")
        elif booking.additional_needs and len(booking.additional_needs) > constants.NAME_MAX_LENGTH:
            result.errors.append(
                f"Booking additional_needs exceeds max length of {constants.NAME_MAX_LENGTH}"
            )

        return result

    def validate_user(self, user: UserRecord) -> ValidationResult:
        """Validate a registration profile."""
        result = ValidationResult()

        if user.title not in (Title.MR, Title.MRS):
            result.errors.append(f"User title must be Mr. or Mrs., got {user.title!r}")

        self._check_name(result, "first_name", user.first_name)
        self._check_name(result, "last_name", user.last_name)

        if not (isinstance(user.email, str) and EMAIL_PATTERN.match(user.email)):
            result.errors.append(f"User email is not well-formed: {user.email!r}")

        if isinstance(user.password, str):
            for problem in self.password_problems(user.password):
                result.errors.append(f"User password {problem}")
        else:
            result.errors.append("User password must be text")

        # Date of birth
        day = _digits(user.day_of_birth)
        if day is None or not 1 <= int(day) <= 31:
            result.errors.append("User day_of_birth must be between 1 and 31")
        elif int(day) > self.config.birth_day_max:
            result.warnings.append(f"User day_of_birth {day} is not valid in every month")
        if user.month_of_birth not in constants.MONTHS:
            result.errors.append(f"User month_of_birth is not a month name: {user.month_of_birth!r}")
        year = _digits(user.year_of_birth)
        if year is None or not self.config.birth_year_min <= int(year) <= self.config.birth_year_max:
            result.errors.append(
                f"User year_of_birth must be between {self.config.birth_year_min} "
                f"and {self.config.birth_year_max}"
            )

        zipcode = _digits(user.zipcode)
        if zipcode is None or len(zipcode) != 5:
            result.errors.append("User zipcode must be exactly 5 digits")
        mobile_number = _digits(user.mobile_number)
        if mobile_number is None or len(mobile_number) != 10:
            result.errors.append("User mobile_number must be exactly 10 digits")

        if user.country not in constants.COUNTRIES:
            result.warnings.append(f"User country {user.country!r} is not offered by the storefront")

        return result

    def password_problems(self, password: str) -> List[str]:
        """List the composition rules a password breaks."""
        problems = []
        if len(password) < self.config.password_min_length:
            problems.append(f"must be at least {self.config.password_min_length} characters")
        if not any(c in constants.UPPERCASE for c in password):
            problems.append("needs an uppercase letter")
        if not any(c in constants.LOWERCASE for c in password):
            problems.append("needs a lowercase letter")
        if not any(c in constants.DIGITS for c in password):
            problems.append("needs a digit")
        if not any(c in constants.SYMBOLS for c in password):
            problems.append("needs a symbol")
        return problems

    @staticmethod
    def _check_name(result: ValidationResult, field_name: str, value: str) -> None:
        if not isinstance(value, str) or not value.strip():
            result.errors.append(f"{field_name} is required")
        elif len(value) > constants.NAME_MAX_LENGTH:
            result.errors.append(f"{field_name} exceeds max length of {constants.NAME_MAX_LENGTH}")
