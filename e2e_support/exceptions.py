"""
Exception hierarchy for the e2e support helpers.

Environmental failures (overlay detection and dismissal) are raised and
caught inside ModalHandler; only configuration errors reach the caller.
"""


class E2ESupportError(Exception):
    """Base class for all e2e support errors."""


class ConfigurationError(E2ESupportError, ValueError):
    """An environment value could not be parsed."""


class GenerationConstraintViolation(E2ESupportError, ValueError):
    """A generation range is empty or inverted, or a batch size is negative."""


class TransientInteractionFailure(E2ESupportError):
    """A dismissal attempt did not clear the overlay."""


class FallbackFailure(E2ESupportError):
    """Forcible removal left the overlay attached to the document."""
