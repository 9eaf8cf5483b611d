# ================================================================================
# Wait Policy Module
# ================================================================================
#
# Bounded, polling waits for UI elements and page state.
#
# Key Features:
#   - Fixed-interval polling with a hard timeout
#   - Fresh locator resolution on every poll (handles are never cached)
#   - Exactly one retry when a resolved element goes stale
#   - Non-raising WaitOutcome for probes, raising helpers for commands
#
# Usage:
#   waits = WaitPolicy(session)
#   handle = waits.await_visible(Locator.by_id("userName"))
#   outcome = waits.wait_for(locator, "clickable", timeout=2)
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError

from .browser_manager import BrowserSession
from .config_loader import ConfigLoader
from .errors import DriverError, StaleElementError, WaitTimeoutError
from .locator import Locator


# Fragments of the driver's message for a handle detached from the document
STALE_MESSAGES = (
    "not attached to the dom",
    "element is detached",
)


def is_stale_error(error: BaseException) -> bool:
    """Return True if ``error`` means a resolved element went stale."""
    if isinstance(error, StaleElementError):
        return True
    if isinstance(error, PlaywrightError):
        message = str(error).lower()
        return any(fragment in message for fragment in STALE_MESSAGES)
    return False


def _is_visible(handle: ElementHandle) -> bool:
    return handle.is_visible()


def _is_clickable(handle: ElementHandle) -> bool:
    return handle.is_visible() and handle.is_enabled()


CONDITIONS: Dict[str, Callable[[ElementHandle], bool]] = {
    "visible": _is_visible,
    "clickable": _is_clickable,
}


@dataclass
class WaitSettings:
    """
    Configuration for wait operations.

    Attributes:
        timeout: Default bound for a single wait, in seconds
        poll_interval: Pause between polls, in seconds
    """
    timeout: float = 10.0
    poll_interval: float = 0.25

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "WaitSettings":
        config = config or ConfigLoader()
        return cls(
            timeout=config.get_float("wait.timeout", cls.timeout, positive=True),
            poll_interval=config.get_float("wait.poll_interval", cls.poll_interval, positive=True),
        )


@dataclass(frozen=True)
class WaitOutcome:
    """
    Result of a bounded element wait.

    Either ``handle`` holds the resolved element, or the wait timed out
    after ``elapsed`` seconds (``stale`` tells whether it gave up because
    the element went stale a second time).
    """
    locator: Locator
    condition: str
    elapsed: float
    handle: Optional[ElementHandle] = None
    stale: bool = False

    @property
    def resolved(self) -> bool:
        return self.handle is not None

    def unwrap(self) -> ElementHandle:
        """Return the handle or raise WaitTimeoutError."""
        if self.handle is None:
            raise WaitTimeoutError(self.locator, self.condition, self.elapsed, stale=self.stale)
        return self.handle


class WaitPolicy:
    """
    Polls the session's current browsing context until a condition holds.

    Staleness rule: if the element resolved during a poll is detached
    before the condition check completes, a warning is logged and the whole
    wait is retried once with a fresh resolution. A second stale reference
    ends the wait as a timeout.

    Example:
        waits = WaitPolicy(session, WaitSettings(timeout=5))
        waits.await_clickable(submit_locator).click()
    """

    def __init__(
        self,
        session: BrowserSession,
        settings: Optional[WaitSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize WaitPolicy.

        Args:
            session: Browsing session to poll
            settings: Timeout / poll interval (defaults to config)
            clock: Monotonic clock in seconds
            sleep: Pause function in seconds (defaults to session.pause)
        """
        self.session = session
        self.settings = settings or WaitSettings.from_config()
        self._clock = clock
        self._sleep = sleep or session.pause

    # =========================================================================
    # Element waits
    # =========================================================================

    def await_visible(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """
        Wait until the element is visible.

        Raises:
            WaitTimeoutError: When the element is not visible in time
        """
        return self.wait_for(locator, "visible", timeout).unwrap()

    def await_clickable(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """
        Wait until the element is visible and enabled.

        Raises:
            WaitTimeoutError: When the element is not clickable in time
        """
        return self.wait_for(locator, "clickable", timeout).unwrap()

    def await_all_visible(
        self,
        locators: Sequence[Locator],
        timeout: Optional[float] = None,
    ) -> List[ElementHandle]:
        """
        Wait until every locator is visible within one and the same poll.

        The returned handles are resolved back to back with no pause in
        between, so none of them is held across a sleep. A stale element
        only costs the current poll; the next poll resolves everything again.

        Returns:
            One handle per locator, in order

        Raises:
            WaitTimeoutError: Naming the first locator that was not visible
                in the last poll
        """
        check = CONDITIONS["visible"]
        timeout = self.settings.timeout if timeout is None else timeout
        started = self._clock()
        deadline = started + timeout
        while True:
            handles: List[ElementHandle] = []
            missing: Optional[Locator] = None
            stale = False
            for locator in locators:
                try:
                    handle = self._resolve(locator, "visible", check)
                except StaleElementError:
                    logger.warning(f"Stale element reference for {locator}. Re-resolving on the next poll...")
                    handle, stale = None, True
                if handle is None:
                    missing = locator
                    break
                handles.append(handle)

            if missing is None:
                return handles

            remaining = deadline - self._clock()
            if remaining <= 0:
                elapsed = self._clock() - started
                logger.warning(f"Wait for {missing} to be visible timed out after {elapsed:.2f}s")
                raise WaitTimeoutError(missing, "visible", elapsed, stale=stale)
            self._sleep(min(self.settings.poll_interval, remaining))

    def wait_for(
        self,
        locator: Locator,
        condition: str = "visible",
        timeout: Optional[float] = None,
    ) -> WaitOutcome:
        """
        Wait for ``condition`` without raising on timeout.

        Args:
            locator: Element to resolve on every poll
            condition: Key of CONDITIONS ("visible" or "clickable")
            timeout: Seconds per attempt (defaults to settings.timeout)

        Returns:
            WaitOutcome with the handle, or an unresolved outcome on timeout

        Raises:
            DriverError: On a driver failure other than staleness
        """
        check = CONDITIONS[condition]
        timeout = self.settings.timeout if timeout is None else timeout
        started = self._clock()

        handle, stale = self._attempt(locator, condition, check, timeout)
        if stale:
            logger.warning(
                f"Stale element reference for {locator} while waiting to be "
                f"{condition}. Re-resolving and retrying once..."
            )
            handle, stale = self._attempt(locator, condition, check, timeout)

        outcome = WaitOutcome(
            locator=locator,
            condition=condition,
            elapsed=self._clock() - started,
            handle=handle,
            stale=stale,
        )
        if not outcome.resolved:
            cause = "went stale again" if stale else "timed out"
            logger.warning(
                f"Wait for {locator} to be {condition} {cause} "
                f"after {outcome.elapsed:.2f}s"
            )
        return outcome

    def _attempt(
        self,
        locator: Locator,
        condition: str,
        check: Callable[[ElementHandle], bool],
        timeout: float,
    ) -> Tuple[Optional[ElementHandle], bool]:
        """
        One polling attempt.

        Returns:
            (handle, False) on success, (None, False) on timeout,
            (None, True) when the resolved element went stale
        """
        deadline = self._clock() + timeout
        while True:
            try:
                handle = self._resolve(locator, condition, check)
            except StaleElementError:
                return None, True
            if handle is not None:
                return handle, False

            remaining = deadline - self._clock()
            if remaining <= 0:
                return None, False
            self._sleep(min(self.settings.poll_interval, remaining))

    def _resolve(
        self,
        locator: Locator,
        condition: str,
        check: Callable[[ElementHandle], bool],
    ) -> Optional[ElementHandle]:
        """Resolve the locator in the current frame and test the condition once."""
        try:
            handle = self.session.frame.query_selector(locator.selector)
            if handle is not None and check(handle):
                return handle
            return None
        except PlaywrightError as e:
            if is_stale_error(e):
                raise StaleElementError(str(e)) from e
            logger.error(f"Driver failure while waiting for {locator} to be {condition}: {e}")
            raise DriverError(
                f"wait_{condition}",
                f"Driver failure while waiting: {e}",
                locator=locator,
                cause=e,
            ) from e

    # =========================================================================
    # Page-state waits
    # =========================================================================

    def until(
        self,
        predicate: Callable[[], bool],
        timeout: Optional[float] = None,
        description: str = "condition",
    ) -> bool:
        """
        Poll ``predicate`` until it returns True or the timeout elapses.

        Returns:
            True if the predicate held in time, False otherwise
        """
        timeout = self.settings.timeout if timeout is None else timeout
        deadline = self._clock() + timeout
        while True:
            if predicate():
                return True
            remaining = deadline - self._clock()
            if remaining <= 0:
                logger.debug(f"Gave up waiting for {description} after {timeout:.2f}s")
                return False
            self._sleep(min(self.settings.poll_interval, remaining))

    def await_url(self, expected: str, timeout: Optional[float] = None) -> bool:
        """
        Wait for the top-level page URL to equal ``expected`` exactly.

        Returns:
            True if the URL matched in time, False otherwise
        """
        return self.until(
            lambda: self.session.page.url == expected,
            timeout=timeout,
            description=f"URL to be {expected}",
        )


__all__ = [
    "WaitPolicy",
    "WaitSettings",
    "WaitOutcome",
    "CONDITIONS",
    "is_stale_error",
]
