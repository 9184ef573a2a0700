"""
E2E Support - helpers shared by the storefront and booking API test suites
Overlay dismissal, randomized fixture data, validation and test-user cleanup
"""

from e2e_support.cleanup import CleanupRegistry, TrackedUser
from e2e_support.config import Settings, configure_logging
from e2e_support.data_factory import (
    BookingFactory, BookingRecord, DataGenerator, GenerationConfig, PaymentFactory,
    PaymentRecord, Title, UserFactory, UserRecord
)
from e2e_support.exceptions import (
    ConfigurationError, E2ESupportError, FallbackFailure,
    GenerationConstraintViolation, TransientInteractionFailure
)
from e2e_support.modal_handler import (
    COOKIE_BANNER, FUNNY_CONSENT, DismissalState, DismissStrategy,
    ModalHandler, OverlayDescriptor, save_consent_state
)
from e2e_support.validator import DataValidator, ValidationResult

__all__ = [
    "BookingFactory",
    "BookingRecord",
    "CleanupRegistry",
    "ConfigurationError",
    "COOKIE_BANNER",
    "DataGenerator",
    "DataValidator",
    "DismissalState",
    "DismissStrategy",
    "E2ESupportError",
    "FallbackFailure",
    "FUNNY_CONSENT",
    "GenerationConfig",
    "GenerationConstraintViolation",
    "ModalHandler",
    "OverlayDescriptor",
    "PaymentFactory",
    "PaymentRecord",
    "Settings",
    "Title",
    "TrackedUser",
    "TransientInteractionFailure",
    "UserFactory",
    "UserRecord",
    "ValidationResult",
    "configure_logging",
    "save_consent_state",
]
