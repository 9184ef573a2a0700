"""
Environment configuration for the test suites.

Values come from the process environment, optionally seeded from a
``.env`` file in the working directory. Anything unset falls back to
the public demo targets.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from e2e_support.constants import EMAIL_DOMAINS
from e2e_support.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Keys the suites expect to be set explicitly in CI
REQUIRED_KEYS = ("API_BASE_URL", "UI_BASE_URL", "API_AUTH_USERNAME", "API_AUTH_PASSWORD")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_str(key: str, default: str) -> str:
    value = os.getenv(key)
    return value if value else default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"Environment variable {key} must be an integer, got {value!r}")


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_list(key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(key)
    if not value:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one test session."""

    api_base_url: str = "https://restful-booker.herokuapp.com"
    ui_base_url: str = "https://automationexercise.com"
    api_auth_username: str = "admin"
    api_auth_password: str = "password123"
    action_timeout_ms: int = 15000
    navigation_timeout_ms: int = 60000
    storage_state_path: str = ".auth/cookie-consent-state.json"
    default_country: str = "India"
    default_city: str = "New York"
    email_domains: Tuple[str, ...] = EMAIL_DOMAINS
    ci: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            dotenv_path: Optional explicit .env file; the default lookup
                searches from the working directory upwards.

        Returns:
            Settings: resolved values

        Raises:
            ConfigurationError: an integer key holds a non-integer value
        """
        # Real environment variables take precedence over the file
        load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)

        settings = cls(
            api_base_url=_env_str("API_BASE_URL", cls.api_base_url),
            ui_base_url=_env_str("UI_BASE_URL", cls.ui_base_url),
            api_auth_username=_env_str("API_AUTH_USERNAME", cls.api_auth_username),
            api_auth_password=_env_str("API_AUTH_PASSWORD", cls.api_auth_password),
            action_timeout_ms=_env_int("ACTION_TIMEOUT", cls.action_timeout_ms),
            navigation_timeout_ms=_env_int("NAVIGATION_TIMEOUT", cls.navigation_timeout_ms),
            storage_state_path=_env_str("STORAGE_STATE_PATH", cls.storage_state_path),
            default_country=_env_str("DEFAULT_COUNTRY", cls.default_country),
            default_city=_env_str("DEFAULT_CITY", cls.default_city),
            email_domains=_env_list("EMAIL_DOMAINS", EMAIL_DOMAINS),
            ci=_env_bool("CI", cls.ci),
            log_level=_env_str("LOG_LEVEL", cls.log_level).upper(),
        )

        missing = settings.missing_required()
        if missing:
            logger.warning("Missing environment variables: %s. Using defaults.", ", ".join(missing))
        return settings

    @staticmethod
    def missing_required() -> List[str]:
        """Return the required keys that are not set in the environment."""
        return [key for key in REQUIRED_KEYS if not os.getenv(key)]


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for a test run.

    Args:
        level: Level name; defaults to LOG_LEVEL from the environment
    """
    if level is None:
        level = _env_str("LOG_LEVEL", Settings.log_level)
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
