"""
Top-level navigation for a browsing session.

go_to / refresh / back / forward are thin pass-throughs: they do not wait
for any element, callers follow them with element waits. Each of them
returns lookups to the top-level document, like a WebDriver navigation.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .browser_manager import BrowserSession
from .config_loader import WAIT_UNTIL_EVENTS, ConfigLoader
from .errors import DriverError
from .probe import ProbeResult
from .wait_policy import WaitPolicy


class NavigationFacade:
    """URL navigation, history traversal and URL assertions."""

    def __init__(
        self,
        session: BrowserSession,
        waits: WaitPolicy,
        wait_until: Optional[str] = None,
    ):
        """
        Args:
            session: Browsing session to navigate
            waits: WaitPolicy used by is_on_url
            wait_until: Playwright load event for go_to/refresh/back/forward
        """
        self.session = session
        self.waits = waits
        self.wait_until = wait_until or ConfigLoader().get_choice(
            "navigation.wait_until", WAIT_UNTIL_EVENTS, "domcontentloaded"
        )

    def _navigate(self, action: str, operation: Callable[[], Any]) -> None:
        try:
            operation()
        except PlaywrightError as e:
            logger.error(f"{action} failed: {e}")
            raise DriverError(action, f"{action} failed: {e}", details={"url": self.session.page.url}, cause=e) from e
        finally:
            self.session.reset_frames()

    @allure.step("Navigate to {url}")
    def go_to(self, url: str) -> None:
        page = self.session.page
        self._navigate("go_to", lambda: page.goto(url, wait_until=self.wait_until))
        logger.debug(f"Navigated to: {url}")

    @allure.step("Refresh page")
    def refresh(self) -> None:
        page = self.session.page
        self._navigate("refresh", lambda: page.reload(wait_until=self.wait_until))

    @allure.step("Navigate back")
    def back(self) -> None:
        page = self.session.page
        self._navigate("back", lambda: page.go_back(wait_until=self.wait_until))

    @allure.step("Navigate forward")
    def forward(self) -> None:
        page = self.session.page
        self._navigate("forward", lambda: page.go_forward(wait_until=self.wait_until))

    def current_url(self) -> str:
        return self.session.page.url

    def title(self) -> str:
        return self.session.page.title()

    def scroll_to_top(self) -> None:
        self.session.page.evaluate("window.scrollTo(0, 0)")

    @allure.step("Verify URL is {expected}")
    def is_on_url(self, expected: str, timeout: Optional[float] = None) -> ProbeResult:
        """
        Wait for the current URL to equal ``expected`` exactly.

        Never raises for a mismatch: the result carries the expected and
        actual URLs verbatim in ``details``.
        """
        if self.waits.await_url(expected, timeout):
            return ProbeResult.yes("is_on_url", expected=expected, actual=expected)

        actual = self.session.page.url
        logger.warning(f"URL check failed. Expected URL: {expected} | Actual URL: {actual}")
        return ProbeResult.no(
            "is_on_url",
            "URL did not match the expected URL within the timeout",
            expected=expected,
            actual=actual,
        )


__all__ = ["NavigationFacade"]
