"""
Modal Handler - Consent overlay dismissal for browser tests
Detects a blocking overlay and clears it with bounded retries, falling
back to removing the overlay node from the document.

The overlay is third-party markup, so every failure from the page layer
is absorbed: dismiss() reports a boolean and never raises.
"""

import logging
import re
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from playwright.sync_api import Locator, Page

from e2e_support.exceptions import FallbackFailure, TransientInteractionFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONSENT_BUTTON_SELECTOR = '.fc-cta-consent, [data-qa="accept-consent"], .fc-button'

# Removes every matching node; returns true once nothing matches
REMOVE_OVERLAY_SCRIPT = """
(selector) => {
    document.querySelectorAll(selector).forEach((node) => node.remove());
    return document.querySelector(selector) === null;
}
"""


class DismissStrategy(Enum):
    DISMISS_CONTROL = "dismiss-control"
    CONSENT_BUTTON = "consent-button"
    ESCAPE = "escape"


class DismissalState(Enum):
    IDLE = "idle"
    DETECTING = "detecting"
    DISMISSING = "dismissing"
    FALLBACK = "fallback"
    DONE = "done"


@dataclass(frozen=True)
class OverlayDescriptor:
    """
    Describes one dismissible overlay.

    Attempt n (0-based) uses strategies[n % len(strategies)]; forcible
    removal runs once every attempt has failed.
    """

    root_selector: str
    dismiss_selector: str
    detection_timeout_ms: int = 2000
    max_retries: int = 3
    attempt_timeout_ms: int = 2000
    grace_ms: int = 2000
    backoff_ms: int = 200
    strategies: Tuple[DismissStrategy, ...] = (DismissStrategy.DISMISS_CONTROL,)
    consent_button_selector: str = CONSENT_BUTTON_SELECTOR

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")
        for name in ("detection_timeout_ms", "attempt_timeout_ms", "grace_ms", "backoff_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if not self.strategies:
            raise ValueError("at least one dismiss strategy is required")

    def strategy_for(self, attempt: int) -> DismissStrategy:
        return self.strategies[attempt % len(self.strategies)]


FUNNY_CONSENT = OverlayDescriptor(
    root_selector=".fc-dialog-container",
    dismiss_selector=".fc-cta-consent",
    max_retries=3,
    strategies=(
        DismissStrategy.DISMISS_CONTROL,
        DismissStrategy.CONSENT_BUTTON,
        DismissStrategy.ESCAPE,
    ),
)

COOKIE_BANNER = OverlayDescriptor(
    root_selector='[data-testid="cookie-banner"]',
    dismiss_selector='[data-testid="cookie-close"]',
    max_retries=2,
)


def _short(exc: BaseException) -> str:
    return str(exc)[:100]


class ModalHandler:
    """Dismisses overlays on a single Playwright page."""

    def __init__(self, page: Page, sleep: Callable[[float], None] = time.sleep):
        self.page = page
        self._sleep = sleep
        self.transitions: List[DismissalState] = []

    # --- Lookups ---

    def get_modal(self, descriptor: OverlayDescriptor = FUNNY_CONSENT) -> Locator:
        return self.page.locator(descriptor.root_selector)

    def get_close_button(self, descriptor: OverlayDescriptor = FUNNY_CONSENT) -> Locator:
        return self.get_modal(descriptor).locator(descriptor.dismiss_selector).first

    def is_modal_visible(self, descriptor: OverlayDescriptor = FUNNY_CONSENT) -> bool:
        """Immediate visibility check; any page error counts as not visible."""
        try:
            return self.get_modal(descriptor).first.is_visible()
        except Exception as exc:
            logger.debug("Visibility check for %s failed: %s", descriptor.root_selector, _short(exc))
            return False

    def wait_for_modal(self, descriptor: OverlayDescriptor = FUNNY_CONSENT) -> bool:
        """
        Wait for the overlay to become visible.

        Returns:
            bool: True if it appeared within the detection timeout
        """
        try:
            self.get_modal(descriptor).first.wait_for(
                state="visible", timeout=descriptor.detection_timeout_ms
            )
            return True
        except Exception:
            return False

    def wait_for_modal_to_close(self, descriptor: OverlayDescriptor = FUNNY_CONSENT,
                                timeout_ms: Optional[int] = None) -> bool:
        """
        Wait for the overlay to be hidden or detached.

        Returns:
            bool: True if it was gone within the timeout (grace window by default)
        """
        if timeout_ms is None:
            timeout_ms = descriptor.grace_ms
        try:
            self.get_modal(descriptor).first.wait_for(state="hidden", timeout=timeout_ms)
            return True
        except Exception:
            return False

    def click_modal_button(self, button_text: str,
                           descriptor: OverlayDescriptor = FUNNY_CONSENT) -> bool:
        """
        Force-click a button inside the overlay by its accessible name.

        Args:
            button_text: Text matched case-insensitively against the button name
            descriptor: Overlay to search in

        Returns:
            bool: True if the click went through
        """
        try:
            button = self.get_modal(descriptor).get_by_role(
                "button", name=re.compile(re.escape(button_text), re.IGNORECASE)
            )
            button.first.click(force=True, timeout=descriptor.attempt_timeout_ms)
            return True
        except Exception as exc:
            logger.info("Could not click %r in %s: %s", button_text, descriptor.root_selector, _short(exc))
            return False

    # --- State machine ---

    def dismiss(self, descriptor: OverlayDescriptor = FUNNY_CONSENT) -> bool:
        """
        Make sure the overlay is not blocking the page.

        Args:
            descriptor: Overlay to look for

        Returns:
            bool: True if the overlay is confirmed gone or was never present
        """
        self.transitions = []
        self._enter(DismissalState.IDLE, descriptor)

        state = DismissalState.DETECTING
        attempt = 0
        success = False

        while state is not DismissalState.DONE:
            self._enter(state, descriptor)

            if state is DismissalState.DETECTING:
                if self._detect(descriptor):
                    state = DismissalState.DISMISSING
                else:
                    success = True
                    state = DismissalState.DONE

            elif state is DismissalState.DISMISSING:
                try:
                    self._attempt(descriptor, attempt)
                except Exception as exc:
                    attempt += 1
                    logger.info(
                        "Dismiss attempt %d/%d for %s failed: %s",
                        attempt, descriptor.max_retries, descriptor.root_selector, _short(exc),
                    )
                    if attempt < descriptor.max_retries:
                        self._sleep(descriptor.backoff_ms * attempt / 1000.0)
                    else:
                        logger.warning(
                            "Failed to dismiss %s after %d attempts, removing it from the DOM",
                            descriptor.root_selector, descriptor.max_retries,
                        )
                        state = DismissalState.FALLBACK
                else:
                    logger.info(
                        "Overlay %s dismissed (attempt %d/%d)",
                        descriptor.root_selector, attempt + 1, descriptor.max_retries,
                    )
                    success = True
                    state = DismissalState.DONE

            elif state is DismissalState.FALLBACK:
                success = self._remove(descriptor)
                state = DismissalState.DONE

        self._enter(DismissalState.DONE, descriptor)
        return success

    def execute_with_guard(self, action: Callable[[], T],
                           descriptor: OverlayDescriptor = FUNNY_CONSENT) -> T:
        """
        Run an action with the overlay dismissed before and after it.

        Only the action's own exception propagates; it is re-raised after
        the overlay has been dealt with.
        """
        self.dismiss(descriptor)
        try:
            result = action()
        except Exception:
            self.dismiss(descriptor)
            raise
        self.dismiss(descriptor)
        return result

    def _enter(self, state: DismissalState, descriptor: OverlayDescriptor) -> None:
        self.transitions.append(state)
        logger.debug("%s -> %s", descriptor.root_selector, state.value)

    def _detect(self, descriptor: OverlayDescriptor) -> bool:
        try:
            self.get_modal(descriptor).first.wait_for(
                state="visible", timeout=descriptor.detection_timeout_ms
            )
        except Exception as exc:
            logger.debug("No overlay %s: %s", descriptor.root_selector, _short(exc))
            return False
        return True

    def _attempt(self, descriptor: OverlayDescriptor, attempt: int) -> None:
        strategy = descriptor.strategy_for(attempt)
        timeout = descriptor.attempt_timeout_ms

        if strategy is DismissStrategy.DISMISS_CONTROL:
            self.get_close_button(descriptor).click(force=True, timeout=timeout)
        elif strategy is DismissStrategy.CONSENT_BUTTON:
            self.page.locator(descriptor.consent_button_selector).first.click(force=True, timeout=timeout)
        elif strategy is DismissStrategy.ESCAPE:
            self.page.keyboard.press("Escape")

        if not self.wait_for_modal_to_close(descriptor):
            raise TransientInteractionFailure(
                f"{descriptor.root_selector} still visible after {strategy.value}"
            )

    def _remove(self, descriptor: OverlayDescriptor) -> bool:
        try:
            removed = self.page.evaluate(REMOVE_OVERLAY_SCRIPT, descriptor.root_selector)
            if not removed:
                raise FallbackFailure(f"{descriptor.root_selector} still attached after removal")
        except Exception as exc:
            logger.warning("Forcible removal of %s failed: %s", descriptor.root_selector, _short(exc))
            return False
        logger.info("Overlay %s removed from the DOM", descriptor.root_selector)
        return True


def save_consent_state(page: Page, path: str,
                       descriptor: OverlayDescriptor = FUNNY_CONSENT) -> bool:
    """
    Accept the consent overlay and store the browser state for reuse.

    Args:
        page: Page already navigated to the site
        path: Where the storage state JSON is written
        descriptor: Overlay to accept

    Returns:
        bool: the dismissal result
    """
    dismissed = ModalHandler(page).dismiss(descriptor)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    page.context.storage_state(path=str(target))
    logger.info("Storage state saved to %s (overlay dismissed: %s)", target, dismissed)
    return dismissed
