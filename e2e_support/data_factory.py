"""
Data Factory - Randomized fixture records for API and UI tests
Generates booking, user and payment records that satisfy the target
applications' input rules, with per-call overrides for pinned fields.

Records are built with factory_boy. Each factory takes the active
GenerationConfig as a ``config`` parameter; every other keyword is a
field override applied verbatim.
"""

import itertools
import logging
import os
import re
import time
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

import factory
import factory.random
from factory import LazyAttribute, LazyFunction, SelfAttribute, Trait
from factory.fuzzy import FuzzyChoice
from faker import Faker

from e2e_support import constants
from e2e_support.exceptions import GenerationConstraintViolation

logger = logging.getLogger(__name__)

R = TypeVar("R")

DATE_FORMAT = "%Y-%m-%d"

# Shares factory_boy's random source, so reseed_random() replays it too
fake = Faker("en_US")

# Shared by every generator in the process; next() on a count is atomic
_EMAIL_SEQUENCE = itertools.count(1)


@dataclass(frozen=True)
class GenerationConfig:
    """Ranges the generator draws from. All bounds are inclusive."""

    price_min: int = constants.PRICE_MIN
    price_max: int = constants.PRICE_MAX
    min_future_days: int = constants.MIN_FUTURE_DAYS
    max_future_days: int = constants.MAX_FUTURE_DAYS
    checkout_window_days: int = constants.CHECKOUT_WINDOW_DAYS
    password_min_length: int = constants.PASSWORD_MIN_LENGTH
    birth_year_min: int = constants.BIRTH_YEAR_MIN
    birth_year_max: int = constants.BIRTH_YEAR_MAX
    birth_day_max: int = constants.BIRTH_DAY_MAX
    zipcode_min: int = constants.ZIPCODE_MIN
    zipcode_max: int = constants.ZIPCODE_MAX
    email_domains: Tuple[str, ...] = constants.EMAIL_DOMAINS

    def __post_init__(self):
        self._check_range("price", self.price_min, self.price_max)
        self._check_range("future days", self.min_future_days, self.max_future_days)
        self._check_range("birth year", self.birth_year_min, self.birth_year_max)
        self._check_range("zipcode", self.zipcode_min, self.zipcode_max)

        if self.min_future_days < 0:
            raise GenerationConstraintViolation("min_future_days must not be negative")
        if self.checkout_window_days < 1:
            raise GenerationConstraintViolation("checkout_window_days must be at least 1")
        # One character from each of the four required classes
        if self.password_min_length < 4:
            raise GenerationConstraintViolation("password_min_length must be at least 4")
        if not 1 <= self.birth_day_max <= 28:
            raise GenerationConstraintViolation("birth_day_max must be between 1 and 28")
        if self.zipcode_min < 10000 or self.zipcode_max > 99999:
            raise GenerationConstraintViolation("zipcodes must have exactly 5 digits")
        if not self.email_domains:
            raise GenerationConstraintViolation("at least one email domain is required")

    @staticmethod
    def _check_range(name: str, low: int, high: int) -> None:
        if low > high:
            raise GenerationConstraintViolation(f"Empty {name} range: min {low} > max {high}")

    @classmethod
    def from_settings(cls, settings, **overrides) -> "GenerationConfig":
        """Build a config that draws email domains from the session settings."""
        values = {"email_domains": tuple(settings.email_domains)}
        values.update(overrides)
        return cls(**values)


class Title(str, Enum):
    MR = "Mr."
    MRS = "Mrs."


@dataclass(frozen=True)
class BookingRecord:
    first_name: str
    last_name: str
    total_price: int
    deposit_paid: bool
    checkin: date
    checkout: date
    additional_needs: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Render the booking API request body."""
        payload = {
            "firstname": self.first_name,
            "lastname": self.last_name,
            "totalprice": self.total_price,
            "depositpaid": self.deposit_paid,
            "bookingdates": {
                "checkin": self.checkin.strftime(DATE_FORMAT),
                "checkout": self.checkout.strftime(DATE_FORMAT),
            },
        }
        if self.additional_needs:
            payload["additionalneeds"] = self.additional_needs
        return payload


@dataclass(frozen=True)
class UserRecord:
    title: Title
    name: str
    email: str
    password: str
    day_of_birth: str
    month_of_birth: str
    year_of_birth: str
    newsletter: bool
    special_offers: bool
    first_name: str
    last_name: str
    company: str
    address1: str
    address2: str
    country: str
    state: str
    city: str
    zipcode: str
    mobile_number: str

    def to_form(self) -> Dict[str, str]:
        """Render the account creation form fields."""
        title = self.title.value if isinstance(self.title, Title) else str(self.title)
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "title": title.rstrip("."),
            "birth_date": self.day_of_birth,
            "birth_month": self.month_of_birth,
            "birth_year": self.year_of_birth,
            "firstname": self.first_name,
            "lastname": self.last_name,
            "company": self.company,
            "address1": self.address1,
            "address2": self.address2,
            "country": self.country,
            "zipcode": self.zipcode,
            "state": self.state,
            "city": self.city,
            "mobile_number": self.mobile_number,
        }


@dataclass(frozen=True)
class PaymentRecord:
    name_on_card: str
    card_number: str
    cvc: str
    expiry_month: str
    expiry_year: str


# --- Draw helpers ---

def _between(low: int, high: int) -> int:
    return fake.random_int(min=low, max=high)


def _email_part(value: Any) -> str:
    cleaned = re.sub(r"[^a-z0-9]", "", str(value).lower())
    return cleaned or "user"


def unique_email(first_name: str, last_name: str, domain: str) -> str:
    """
    Build an address no other call can produce.

    Addresses carry a millisecond timestamp, the process id of the
    worker and a sequence number shared by every generator in the process.
    """
    stamp = int(time.time() * 1000)
    serial = next(_EMAIL_SEQUENCE)
    return (f"{_email_part(first_name)}.{_email_part(last_name)}"
            f".{stamp}.{os.getpid()}.{serial}@{domain}")


def build_password(min_length: int) -> str:
    """Random password with an uppercase, lowercase, digit and symbol in unpredictable positions."""
    chars = [
        fake.random_element(tuple(constants.UPPERCASE)),
        fake.random_element(tuple(constants.LOWERCASE)),
        fake.random_element(tuple(constants.DIGITS)),
        fake.random_element(tuple(constants.SYMBOLS)),
    ]
    pool = tuple(constants.UPPERCASE + constants.LOWERCASE + constants.DIGITS + constants.SYMBOLS)
    while len(chars) < min_length:
        chars.append(fake.random_element(pool))
    factory.random.randgen.shuffle(chars)
    return "".join(chars)


def _full_name(first_name: Any, last_name: Any) -> str:
    return " ".join(str(part) for part in (first_name, last_name) if part)


# --- Factories ---

class BookingFactory(factory.Factory):
    """
    Booking with future dates and a price inside the configured range.

    Checkout follows the generated checkin; overriding only one of the
    two dates leaves the other as generated.
    """

    class Meta:
        model = BookingRecord

    class Params:
        config = GenerationConfig()
        generated_checkin = LazyAttribute(
            lambda o: date.today() + timedelta(days=_between(o.config.min_future_days,
                                                             o.config.max_future_days))
        )
        minimal = Trait(deposit_paid=False, additional_needs=None)

    first_name = FuzzyChoice(constants.FIRST_NAMES)
    last_name = FuzzyChoice(constants.LAST_NAMES)
    total_price = LazyAttribute(lambda o: _between(o.config.price_min, o.config.price_max))
    deposit_paid = FuzzyChoice((True, False))
    checkin = SelfAttribute("generated_checkin")
    checkout = LazyAttribute(
        lambda o: o.generated_checkin + timedelta(days=_between(1, o.config.checkout_window_days))
    )
    additional_needs = FuzzyChoice(constants.ADDITIONAL_NEEDS)


class UserFactory(factory.Factory):
    """Registration profile; name and email follow the final first and last name."""

    class Meta:
        model = UserRecord

    class Params:
        config = GenerationConfig()
        domain = LazyAttribute(lambda o: fake.random_element(o.config.email_domains))
        minimal = Trait(
            title=Title.MR,
            password="Test@12345",
            day_of_birth="15",
            month_of_birth="March",
            year_of_birth="1990",
            newsletter=False,
            special_offers=False,
            company="",
            address1="123 Test Street",
            address2="",
            country="India",
            state="State1",
            city="New York",
            zipcode="10001",
            mobile_number="9876543210",
        )
        # Breaks the email, password, name and phone rules
        invalid = Trait(
            name="",
            email="invalid-email-format",
            password="123",
            mobile_number="invalid-phone",
        )

    title = FuzzyChoice((Title.MR, Title.MRS))
    first_name = FuzzyChoice(constants.FIRST_NAMES)
    last_name = FuzzyChoice(constants.LAST_NAMES)
    name = LazyAttribute(lambda o: _full_name(o.first_name, o.last_name))
    email = LazyAttribute(lambda o: unique_email(o.first_name, o.last_name, o.domain))
    password = LazyAttribute(lambda o: build_password(o.config.password_min_length))
    day_of_birth = LazyAttribute(lambda o: str(_between(1, o.config.birth_day_max)))
    month_of_birth = FuzzyChoice(constants.MONTHS)
    year_of_birth = LazyAttribute(
        lambda o: str(_between(o.config.birth_year_min, o.config.birth_year_max))
    )
    newsletter = FuzzyChoice((True, False))
    special_offers = FuzzyChoice((True, False))
    company = factory.Faker("company")
    address1 = factory.Faker("street_address")
    address2 = factory.Faker("secondary_address")
    country = FuzzyChoice(constants.COUNTRIES)
    state = factory.Faker("state")
    city = FuzzyChoice(constants.CITIES)
    zipcode = LazyAttribute(lambda o: str(_between(o.config.zipcode_min, o.config.zipcode_max)))
    mobile_number = LazyFunction(lambda: fake.numerify("%#########"))


class PaymentFactory(factory.Factory):
    """Payment details the storefront accepts; the card expires two years from now."""

    class Meta:
        model = PaymentRecord

    class Params:
        invalid = Trait(
            name_on_card="",
            card_number="1234",
            cvc="12",
            expiry_month="13",
            expiry_year="2020",
        )

    name_on_card = LazyFunction(
        lambda: _full_name(fake.random_element(constants.FIRST_NAMES),
                           fake.random_element(constants.LAST_NAMES))
    )
    card_number = constants.TEST_CARD_NUMBER
    cvc = LazyFunction(lambda: str(_between(100, 999)))
    expiry_month = LazyFunction(lambda: f"{_between(1, 12):02d}")
    expiry_year = LazyFunction(lambda: str(date.today().year + 2))


class DataGenerator:
    """
    Produces independent fixture records.

    Pass a seed to reseed factory_boy's shared random source: the records
    built afterwards replay the same sequence. Emails still get a fresh
    disambiguator on every call, so replays never collide with accounts
    created by an earlier run.
    """

    def __init__(self, config: Optional[GenerationConfig] = None, seed: Optional[int] = None):
        self.config = config or GenerationConfig()
        self.seed = seed
        if seed is not None:
            factory.random.reseed_random(seed)

    # --- Bookings ---

    def generate_booking(self, overrides: Optional[Mapping[str, Any]] = None,
                         **fields: Any) -> BookingRecord:
        """
        Generate a booking with future dates and a price inside the configured range.

        Args:
            overrides: Field values applied verbatim
            **fields: Same as overrides; keywords win

        Returns:
            BookingRecord: checkout strictly after checkin unless overridden
        """
        return self._build(BookingFactory, overrides, fields)

    def generate_minimal_booking(self, overrides: Optional[Mapping[str, Any]] = None,
                                 **fields: Any) -> BookingRecord:
        """Booking with only the required fields and no deposit."""
        return self._build(BookingFactory, overrides, fields, minimal=True)

    # --- Users ---

    def generate_user(self, overrides: Optional[Mapping[str, Any]] = None,
                      **fields: Any) -> UserRecord:
        """
        Generate a registration profile with a unique email and a strong password.

        First and last name overrides are used when building the email and
        full name. Every override is applied verbatim, so an overridden
        password or email is returned exactly as given.

        Args:
            overrides: Field values applied verbatim
            **fields: Same as overrides; keywords win

        Returns:
            UserRecord: the generated profile
        """
        return self._build(UserFactory, overrides, fields)

    def generate_minimal_user(self, overrides: Optional[Mapping[str, Any]] = None,
                              **fields: Any) -> UserRecord:
        """User with fixed, well-known values apart from the name and a unique email."""
        return self._build(UserFactory, overrides, fields, minimal=True)

    def generate_invalid_user(self, overrides: Optional[Mapping[str, Any]] = None,
                              **fields: Any) -> UserRecord:
        """User whose email, password, name and mobile number fail validation."""
        return self._build(UserFactory, overrides, fields, invalid=True)

    def unique_email(self, first_name: str, last_name: str, domain: Optional[str] = None) -> str:
        """Unique address; the domain defaults to one from the configured allow-list."""
        if domain is None:
            domain = fake.random_element(self.config.email_domains)
        return unique_email(first_name, last_name, domain)

    def password(self) -> str:
        return build_password(self.config.password_min_length)

    # --- Payments ---

    def generate_payment(self, name_on_card: Optional[str] = None) -> PaymentRecord:
        if name_on_card is None:
            return PaymentFactory.build()
        return PaymentFactory.build(name_on_card=name_on_card)

    @staticmethod
    def generate_invalid_payment() -> PaymentRecord:
        """Payment details that break every field rule, for negative tests."""
        return PaymentFactory.build(invalid=True)

    # --- Batches ---

    def generate_batch(self, count: int, generator: Optional[Callable[[], R]] = None) -> List[R]:
        """
        Call a single-record generator count times.

        Args:
            count: Number of records (0 gives an empty list)
            generator: Zero-argument callable; defaults to generate_booking

        Raises:
            GenerationConstraintViolation: count is negative
        """
        if count < 0:
            raise GenerationConstraintViolation(f"Batch size must not be negative, got {count}")
        if generator is None:
            return BookingFactory.build_batch(count, config=self.config)
        return [generator() for _ in range(count)]

    # --- Helpers ---

    def _build(self, record_factory, overrides: Optional[Mapping[str, Any]],
               fields: Dict[str, Any], **params: Any):
        merged = dict(overrides or {})
        merged.update(fields)
        if merged:
            logger.debug("Applying overrides to %s: %s",
                         record_factory._meta.model.__name__, sorted(merged))
        kwargs = dict(params, config=self.config)
        kwargs.update(merged)
        return record_factory.build(**kwargs)
