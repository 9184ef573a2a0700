"""
Ready-made fixture records for common scenarios
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from e2e_support.config import Settings
from e2e_support.data_factory import BookingRecord, DataGenerator, UserRecord


class BookingDataProvider:
    def __init__(self, generator: Optional[DataGenerator] = None):
        self.generator = generator or DataGenerator()

    def standard(self) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="John", last_name="Doe", total_price=500, deposit_paid=True
        )

    def minimal(self) -> BookingRecord:
        return self.generator.generate_minimal_booking()

    def high_value(self) -> BookingRecord:
        """Expensive booking for financial checks."""
        return self.generator.generate_booking(
            first_name="Premium", last_name="Guest", total_price=4500, deposit_paid=True,
            additional_needs="Luxury suite with concierge",
        )

    def low_value(self) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="Budget", last_name="Traveler", total_price=75, deposit_paid=False,
            additional_needs=None,
        )

    def special_needs(self) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="Special", last_name="Request", total_price=200, deposit_paid=True,
            additional_needs="Wheelchair accessible room, pet allowed",
        )

    def for_date_range(self, checkin: date, checkout: date) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="Date", last_name="Specific", checkin=checkin, checkout=checkout
        )

    def with_price(self, price: int) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="Price", last_name="Specific", total_price=price
        )

    def max_price(self) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="Max", last_name="Price",
            total_price=self.generator.config.price_max, deposit_paid=True,
        )

    def min_price(self) -> BookingRecord:
        return self.generator.generate_booking(
            first_name="Min", last_name="Price",
            total_price=self.generator.config.price_min, deposit_paid=False,
        )

    def long_stay(self, nights: int = 29) -> BookingRecord:
        """Booking starting tomorrow that runs for the given number of nights."""
        checkin = date.today() + timedelta(days=1)
        return self.generator.generate_booking(
            first_name="Long", last_name="Stay",
            checkin=checkin, checkout=checkin + timedelta(days=nights),
        )

    def lifecycle(self) -> Tuple[BookingRecord, Dict[str, Any]]:
        """
        Booking to create plus the field changes for a follow-up update.

        Returns:
            tuple: (initial booking, update fields keyed like the record)
        """
        initial = self.generator.generate_booking(first_name="John", last_name="Doe", total_price=500)
        update = {"first_name": "Jane", "last_name": "Smith", "total_price": 750}
        return initial, update

    def batch(self, count: int = 3) -> List[BookingRecord]:
        return self.generator.generate_batch(count, self.generator.generate_booking)


class UserDataProvider:
    def __init__(self, generator: Optional[DataGenerator] = None, settings: Optional[Settings] = None):
        self.generator = generator or DataGenerator()
        self.settings = settings or Settings()

    def standard(self) -> UserRecord:
        return self.generator.generate_user()

    def minimal(self) -> UserRecord:
        return self.generator.generate_minimal_user()

    def invalid(self) -> UserRecord:
        """Profile the signup form must reject."""
        return self.generator.generate_invalid_user()

    def with_preferences(self) -> UserRecord:
        return self.generator.generate_user(newsletter=True, special_offers=True)

    def without_preferences(self) -> UserRecord:
        return self.generator.generate_user(newsletter=False, special_offers=False)

    def default_location(self) -> UserRecord:
        """User in the configured default country and city."""
        return self.generator.generate_user(
            first_name="Raj", last_name="Patel",
            country=self.settings.default_country, city=self.settings.default_city,
        )

    def from_country(self, country: str) -> UserRecord:
        return self.generator.generate_user(country=country)

    def with_email_domain(self, domain: str) -> UserRecord:
        email = self.generator.unique_email("Test", "User", domain=domain)
        return self.generator.generate_user(first_name="Test", last_name="User", email=email)

    def with_password(self, password: str) -> UserRecord:
        return self.generator.generate_user(password=password)

    def corporate(self) -> UserRecord:
        return self.generator.generate_user(company="Acme Corporation", address2="Suite 100")

    def batch(self, count: int = 3) -> List[UserRecord]:
        return self.generator.generate_batch(count, self.generator.generate_user)

    def mixed_preferences(self, count: int = 3) -> List[UserRecord]:
        """Users alternating between newsletter-only and offers-only."""
        return [
            self.generator.generate_user(newsletter=i % 2 == 0, special_offers=i % 2 != 0)
            for i in range(count)
        ]
