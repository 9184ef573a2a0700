"""
Pytest fixtures for the storefront and booking suites.

Load with ``pytest_plugins = ["e2e_support.fixtures"]`` in a conftest.
Browser fixtures build on pytest-playwright's ``page``.
"""

import logging
import os

import pytest

from e2e_support.cleanup import CleanupRegistry
from e2e_support.config import Settings
from e2e_support.data_factory import DataGenerator, GenerationConfig
from e2e_support.modal_handler import FUNNY_CONSENT, ModalHandler

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def settings():
    return Settings.from_env()


@pytest.fixture
def generation_config(settings):
    return GenerationConfig.from_settings(settings)


@pytest.fixture
def data_generator(generation_config):
    """Generator seeded from E2E_SEED when it is set, so a failing run can be replayed."""
    seed = os.getenv("E2E_SEED")
    if seed:
        logger.info("Generating fixture data with seed %s", seed)
        return DataGenerator(generation_config, seed=int(seed))
    return DataGenerator(generation_config)


@pytest.fixture(scope="session")
def cleanup_registry():
    """Session-wide account registry; suites drain it with their own API client."""
    registry = CleanupRegistry()
    yield registry
    leftover = registry.tracked()
    if leftover:
        logger.warning("%d tracked users were never cleaned up", len(leftover))


@pytest.fixture
def overlay_descriptor():
    return FUNNY_CONSENT


@pytest.fixture
def modal_handler(page):
    return ModalHandler(page)


@pytest.fixture
def page_with_modal_handling(page, modal_handler, overlay_descriptor):
    """
    Page that clears the consent overlay whenever it blocks an action.

    Playwright runs the handler before any action the overlay would
    intercept, then waits for the overlay to be gone.
    """
    overlay = page.locator(overlay_descriptor.root_selector)

    def clear_overlay(_locator=None):
        modal_handler.dismiss(overlay_descriptor)

    page.add_locator_handler(overlay, clear_overlay)
    yield page
    page.remove_locator_handler(overlay)
