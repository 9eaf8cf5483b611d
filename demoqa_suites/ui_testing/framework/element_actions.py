# ================================================================================
# Element Actions Module
# ================================================================================
#
# Safe UI element interactions built on WaitPolicy.
#
# Key Features:
#   - Every action waits for visibility (clickability for click) first
#   - Elements are resolved fresh for every action, never cached
#   - Driver failures wrapped into typed errors and logged where detected
#   - Boolean probes return ProbeResult instead of raising on "no"
#   - Keyboard and mouse gestures (hover, chord, drag and drop)
#   - Allure step integration
#
# ================================================================================

from __future__ import annotations

from typing import Callable, Optional, TypeVar

import allure
from loguru import logger
from playwright.sync_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from .browser_manager import BrowserSession
from .errors import ActionTimeoutError, DriverError, ElementNotInteractableError
from .locator import Locator
from .probe import ProbeResult
from .wait_policy import WaitOutcome, WaitPolicy


T = TypeVar("T")

# Value for form fields, rendered text for everything else
READ_TEXT_SCRIPT = (
    "el => (el.tagName === 'INPUT' || el.tagName === 'TEXTAREA')"
    " ? el.value : el.innerText"
)

IS_SELECTED_SCRIPT = "el => Boolean(el.checked || el.selected)"

SUBMIT_SCRIPT = """el => {
    const form = el.tagName === 'FORM' ? el : (el.form || el.closest('form'));
    if (!form) { throw new Error('Element is not inside a form'); }
    if (form.requestSubmit) { form.requestSubmit(); } else { form.submit(); }
}"""


# A native dialog opened inside a synchronous click would block the driver call
DEFERRED_CLICK_SCRIPT = "el => { setTimeout(() => el.click(), 0); }"


class ElementActions:
    """
    Element interaction facade over a single BrowserSession.

    Commands (click, send_keys, ...) raise on failure so a broken
    interaction can never be silently stepped over. Probes (is_enabled,
    is_clickable, ...) return a ProbeResult.

    Example:
        actions = ElementActions(session, waits)
        actions.send_keys(Locator.by_id("userName"), "Jane")
        actions.click(Locator.by_id("submit"))
    """

    def __init__(self, session: BrowserSession, waits: WaitPolicy):
        """
        Initialize ElementActions.

        Args:
            session: Browsing session the actions drive
            waits: WaitPolicy used before every action
        """
        self.session = session
        self.waits = waits

    @property
    def _action_timeout(self) -> int:
        return self.session.action_timeout_ms

    def _perform(self, action: str, locator: Locator, operation: Callable[[], T]) -> T:
        """Run a native driver call, wrapping its failures."""
        try:
            return operation()
        except PlaywrightTimeoutError as e:
            logger.error(f"Driver timed out during {action} on {locator}: {e}")
            raise ActionTimeoutError(
                action, f"Driver timed out during {action}: {e}", locator=locator, cause=e
            ) from e
        except PlaywrightError as e:
            logger.error(f"{action} on {locator} failed: {e}")
            raise DriverError(
                action, f"{action} failed: {e}", locator=locator, cause=e
            ) from e

    # =========================================================================
    # Basic element operations
    # =========================================================================

    @allure.step("Click: {locator}")
    def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """
        Click an element once it is clickable.

        Raises:
            ElementNotInteractableError: Element never became clickable
            ActionTimeoutError: The native click itself timed out
        """
        logger.info(f"Clicking element: {locator}")
        outcome = self.waits.wait_for(locator, "clickable", timeout)
        if not outcome.resolved:
            error = ElementNotInteractableError(
                locator, "clickable", outcome.elapsed, stale=outcome.stale
            )
            logger.error(f"Element is not interactable: {error}")
            raise error

        handle = outcome.handle
        self._perform("click", locator, lambda: handle.click(timeout=self._action_timeout))
        logger.debug(f"Successfully clicked: {locator}")

    @allure.step("Trigger click: {locator}")
    def dispatch_click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """
        Click an element through a deferred DOM click.

        Returns before the page reacts, so controls that open a native
        alert/confirm/prompt do not block the caller. Read the dialog
        afterwards through ContextSwitcher.

        Raises:
            ElementNotInteractableError: Element never became clickable
        """
        logger.info(f"Triggering click on: {locator}")
        outcome = self.waits.wait_for(locator, "clickable", timeout)
        if not outcome.resolved:
            error = ElementNotInteractableError(
                locator, "clickable", outcome.elapsed, stale=outcome.stale
            )
            logger.error(f"Element is not interactable: {error}")
            raise error

        handle = outcome.handle
        self._perform("dispatch_click", locator, lambda: handle.evaluate(DEFERRED_CLICK_SCRIPT))

    @allure.step("Submit form via: {locator}")
    def submit(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Submit the form the element belongs to."""
        handle = self.waits.await_visible(locator, timeout)
        logger.info(f"Submitting form of: {locator}")
        self._perform("submit", locator, lambda: handle.evaluate(SUBMIT_SCRIPT))

    @allure.step("Clear: {locator}")
    def clear(self, locator: Locator, timeout: Optional[float] = None) -> None:
        handle = self.waits.await_visible(locator, timeout)
        logger.info(f"Clearing: {locator}")
        self._perform("clear", locator, lambda: handle.fill("", timeout=self._action_timeout))

    @allure.step("Type into: {locator}")
    def send_keys(self, locator: Locator, text: str, timeout: Optional[float] = None) -> None:
        """
        Type text into an element, keeping any existing content.

        Args:
            locator: Target element
            text: Text to type (special characters are typed literally)
            timeout: Visibility wait in seconds
        """
        handle = self.waits.await_visible(locator, timeout)
        logger.info(f"Typing into {locator}: '{text[:50]}'")
        self._perform(
            "send_keys", locator, lambda: handle.type(text, timeout=self._action_timeout)
        )

    @allure.step("Get text: {locator}")
    def get_text(self, locator: Locator, timeout: Optional[float] = None) -> str:
        """
        Read an element's text.

        Returns:
            The value of <input>/<textarea> elements, the rendered inner
            text of anything else
        """
        handle = self.waits.await_visible(locator, timeout)
        text = self._perform("get_text", locator, lambda: handle.evaluate(READ_TEXT_SCRIPT))
        text = text or ""
        logger.debug(f"Got text from {locator}: '{text}'")
        return text

    def get_attribute(
        self,
        locator: Locator,
        attribute: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        handle = self.waits.await_visible(locator, timeout)
        return self._perform(
            "get_attribute", locator, lambda: handle.get_attribute(attribute)
        )

    @allure.step("Scroll into view: {locator}")
    def scroll_into_view(self, locator: Locator, timeout: Optional[float] = None) -> None:
        handle = self.waits.await_visible(locator, timeout)
        self._perform(
            "scroll_into_view",
            locator,
            lambda: handle.scroll_into_view_if_needed(timeout=self._action_timeout),
        )

    # =========================================================================
    # Pointer and keyboard gestures
    # =========================================================================

    @allure.step("Double click: {locator}")
    def double_click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        handle = self.waits.await_visible(locator, timeout)
        logger.info(f"Double clicking: {locator}")
        self._perform("double_click", locator, lambda: handle.dblclick(timeout=self._action_timeout))

    @allure.step("Right click: {locator}")
    def right_click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        handle = self.waits.await_visible(locator, timeout)
        logger.info(f"Right clicking: {locator}")
        self._perform(
            "right_click",
            locator,
            lambda: handle.click(button="right", timeout=self._action_timeout),
        )

    @allure.step("Hover: {locator}")
    def hover(self, locator: Locator, timeout: Optional[float] = None) -> None:
        handle = self.waits.await_visible(locator, timeout)
        logger.info(f"Hovering over: {locator}")
        self._perform("hover", locator, lambda: handle.hover(timeout=self._action_timeout))

    @allure.step("Click and hold: {locator}")
    def click_and_hold(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Press the primary mouse button over the element without releasing it."""
        handle = self.waits.await_visible(locator, timeout)
        mouse = self.session.page.mouse
        logger.info(f"Clicking and holding: {locator}")

        def press() -> None:
            handle.hover(timeout=self._action_timeout)
            mouse.down()

        self._perform("click_and_hold", locator, press)

    @allure.step("Drag and drop: {source} -> {target}")
    def drag_and_drop(
        self,
        source: Locator,
        target: Locator,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Drag ``source`` onto ``target``.

        Both elements must be visible in the same poll before any pointer
        event is sent; if that never happens nothing is dragged. Once the
        button is pressed it is always released.

        Raises:
            WaitTimeoutError: Source or target not visible in time
        """
        source_handle, target_handle = self.waits.await_all_visible([source, target], timeout)
        mouse = self.session.page.mouse
        logger.info(f"Dragging {source} onto {target}")

        def gesture() -> None:
            source_handle.hover(timeout=self._action_timeout)
            mouse.down()
            try:
                target_handle.hover(timeout=self._action_timeout)
            finally:
                mouse.up()

        self._perform("drag_and_drop", source, gesture)

    @allure.step("Key chord {key}+'{text}' on {locator}")
    def key_chord(
        self,
        locator: Locator,
        key: str,
        text: str,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Hold a modifier key while typing text into an element.

        Args:
            locator: Element to focus
            key: Modifier, e.g. "Control", "Shift", "Meta"
            text: Keys typed while the modifier is held (e.g. "a")
            timeout: Visibility wait in seconds
        """
        handle = self.waits.await_visible(locator, timeout)
        keyboard = self.session.page.keyboard
        logger.info(f"Key chord {key}+'{text}' on {locator}")

        def chord() -> None:
            handle.focus()
            keyboard.down(key)
            try:
                keyboard.type(text)
            finally:
                keyboard.up(key)

        self._perform("key_chord", locator, chord)

    # =========================================================================
    # Probes
    # =========================================================================

    @staticmethod
    def _not_ready(probe: str, outcome: WaitOutcome) -> ProbeResult:
        return ProbeResult.no(
            probe,
            f"{outcome.locator} not {outcome.condition} within {outcome.elapsed:.2f}s",
            locator=str(outcome.locator),
            elapsed=outcome.elapsed,
        )

    def is_enabled(self, locator: Locator, timeout: Optional[float] = None) -> ProbeResult:
        outcome = self.waits.wait_for(locator, "visible", timeout)
        if not outcome.resolved:
            return self._not_ready("is_enabled", outcome)
        enabled = self._perform("is_enabled", locator, outcome.handle.is_enabled)
        if enabled:
            return ProbeResult.yes("is_enabled", locator=str(locator))
        return ProbeResult.no("is_enabled", f"{locator} is disabled", locator=str(locator))

    def is_displayed(self, locator: Locator, timeout: Optional[float] = None) -> ProbeResult:
        outcome = self.waits.wait_for(locator, "visible", timeout)
        if not outcome.resolved:
            return self._not_ready("is_displayed", outcome)
        return ProbeResult.yes("is_displayed", locator=str(locator))

    def is_selected(self, locator: Locator, timeout: Optional[float] = None) -> ProbeResult:
        """Checked state of a checkbox/radio, or selected state of an <option>."""
        outcome = self.waits.wait_for(locator, "visible", timeout)
        if not outcome.resolved:
            return self._not_ready("is_selected", outcome)
        handle = outcome.handle
        selected = self._perform("is_selected", locator, lambda: handle.evaluate(IS_SELECTED_SCRIPT))
        if selected:
            return ProbeResult.yes("is_selected", locator=str(locator))
        return ProbeResult.no("is_selected", f"{locator} is not selected", locator=str(locator))

    @allure.step("Check clickable: {locator}")
    def is_clickable(self, locator: Locator, timeout: Optional[float] = None) -> ProbeResult:
        """
        Check whether the element becomes clickable within the timeout.

        A timeout is an answer ("not clickable"), never an error.
        """
        outcome = self.waits.wait_for(locator, "clickable", timeout)
        if not outcome.resolved:
            return self._not_ready("is_clickable", outcome)
        return ProbeResult.yes("is_clickable", locator=str(locator), elapsed=outcome.elapsed)

    def is_text_present(
        self,
        locator: Locator,
        text: str,
        timeout: Optional[float] = None,
    ) -> ProbeResult:
        """Check whether the element's text contains ``text``."""
        outcome = self.waits.wait_for(locator, "visible", timeout)
        if not outcome.resolved:
            return self._not_ready("is_text_present", outcome)
        handle = outcome.handle
        actual = self._perform("is_text_present", locator, lambda: handle.evaluate(READ_TEXT_SCRIPT)) or ""
        if text in actual:
            return ProbeResult.yes("is_text_present", expected=text, actual=actual)
        return ProbeResult.no(
            "is_text_present",
            f"{locator} text does not contain {text!r}",
            expected=text,
            actual=actual,
        )


__all__ = [
    "ElementActions",
    "READ_TEXT_SCRIPT",
    "IS_SELECTED_SCRIPT",
    "SUBMIT_SCRIPT",
    "DEFERRED_CLICK_SCRIPT",
]
