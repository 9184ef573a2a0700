"""
Shared test doubles for the overlay tests.

FakeOverlayPage stands in for a Playwright page holding a single overlay
and records every interaction-layer call (click, key press, script).
"""

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from e2e_support.modal_handler import OverlayDescriptor

ROOT = "#overlay"
CLOSE = "#overlay-close"
CONSENT = ".consent-button"


class FakeKeyboard:
    def __init__(self, page):
        self.page = page

    def press(self, key):
        self.page.calls.append(("press", key))
        if key == "Escape" and self.page.escape_clears:
            self.page.overlay_present = False


class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    @property
    def first(self):
        return self

    def locator(self, selector):
        return FakeLocator(self.page, selector)

    def is_visible(self):
        if self.page.visibility_error:
            raise self.page.visibility_error
        return self.page.overlay_present

    def wait_for(self, state="visible", timeout=None):
        if self.page.detect_error and state == "visible":
            raise self.page.detect_error
        if state == "visible" and not self.page.overlay_present:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")
        if state == "hidden" and self.page.overlay_present:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector} to hide")

    def click(self, force=False, timeout=None):
        self.page.calls.append(("click", self.selector))
        if self.page.click_error:
            raise self.page.click_error
        if self.selector in self.page.clears_on_click:
            self.page.overlay_present = False


class FakeOverlayPage:
    def __init__(self, overlay_present=True, clears_on_click=(), escape_clears=False,
                 removable=True, click_error=None, detect_error=None,
                 evaluate_error=None, visibility_error=None):
        self.overlay_present = overlay_present
        self.clears_on_click = set(clears_on_click)
        self.escape_clears = escape_clears
        self.removable = removable
        self.click_error = click_error
        self.detect_error = detect_error
        self.evaluate_error = evaluate_error
        self.visibility_error = visibility_error
        self.calls = []
        self.keyboard = FakeKeyboard(self)

    def locator(self, selector):
        return FakeLocator(self, selector)

    def evaluate(self, script, arg=None):
        self.calls.append(("evaluate", arg))
        if self.evaluate_error:
            raise self.evaluate_error
        if self.removable:
            self.overlay_present = False
        return not self.overlay_present


@pytest.fixture
def fake_page():
    """Factory for FakeOverlayPage instances."""
    return FakeOverlayPage


@pytest.fixture
def descriptor():
    """Overlay with short timeouts and three attempts on the close button."""
    return OverlayDescriptor(
        root_selector=ROOT,
        dismiss_selector=CLOSE,
        detection_timeout_ms=100,
        max_retries=3,
        attempt_timeout_ms=100,
        grace_ms=100,
        backoff_ms=200,
        consent_button_selector=CONSENT,
    )
