"""
================================================================================
Context Switcher
================================================================================

Frame and native-dialog context management.

Frames:
    enter_frame_by_index / _by_name / _by_element push the frame onto the
    session's browsing-context stack; return_to_root_context clears it.
    A frame that cannot be found is logged and the context is left as it
    was: callers assert on the page afterwards. There is no "parent frame"
    step, only the reset to the top-level document.

Dialogs (alert / confirm / prompt):
    The session captures dialogs as they open. read/accept/dismiss/type
    expect one to be open; otherwise they log and raise AlertError. Unlike
    frame switching, nothing is swallowed here.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger
from playwright.sync_api import Dialog, Error as PlaywrightError, Frame

from .browser_manager import BrowserSession
from .errors import AlertError, DriverError
from .locator import Locator
from .probe import ProbeResult
from .wait_policy import WaitPolicy


class ContextSwitcher:
    """
    Frame and alert operations for one session.

    Example:
        frames = ContextSwitcher(session, waits)
        frames.enter_frame_by_name("frame1")
        ...
        frames.return_to_root_context()
    """

    def __init__(self, session: BrowserSession, waits: WaitPolicy):
        self.session = session
        self.waits = waits

    # =========================================================================
    # Frames
    # =========================================================================

    def _child_frames(self, action: str) -> List[Frame]:
        try:
            return list(self.session.frame.child_frames)
        except PlaywrightError as e:
            logger.error(f"{action}: could not list child frames: {e}")
            raise DriverError(action, f"Could not list child frames: {e}", cause=e) from e

    def _enter(self, frame: Frame, description: str) -> bool:
        self.session.push_frame(frame)
        logger.info(f"Switched to frame with {description}")
        return True

    @allure.step("Switch to frame #{index}")
    def enter_frame_by_index(self, index: int) -> bool:
        """
        Enter the ``index``-th child frame of the current context.

        Returns:
            True if switched, False (context unchanged) if no such frame
        """
        frames = self._child_frames("enter_frame_by_index")
        if 0 <= index < len(frames):
            return self._enter(frames[index], f"index: {index}")
        logger.error(f"Frame with index {index} not found ({len(frames)} child frames)")
        return False

    @allure.step("Switch to frame '{name}'")
    def enter_frame_by_name(self, name: str) -> bool:
        """
        Enter the child frame whose name (or id, when unnamed) is ``name``.

        Returns:
            True if switched, False (context unchanged) if no such frame
        """
        for frame in self._child_frames("enter_frame_by_name"):
            if frame.name == name:
                return self._enter(frame, f"name: {name}")
        logger.error(f"Frame with name {name} not found")
        return False

    @allure.step("Switch to frame element {locator}")
    def enter_frame_by_element(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """
        Enter the frame owned by a visible <iframe>/<frame> element.

        Returns:
            True if switched, False (context unchanged) if the element is
            not visible in time or does not own a frame
        """
        outcome = self.waits.wait_for(locator, "visible", timeout)
        if not outcome.resolved:
            logger.error(f"Frame element {locator} not found within {outcome.elapsed:.2f}s")
            return False
        try:
            frame = outcome.handle.content_frame()
        except PlaywrightError as e:
            logger.error(f"Could not read frame of element {locator}: {e}")
            raise DriverError(
                "enter_frame_by_element", f"Could not read content frame: {e}", locator=locator, cause=e
            ) from e
        if frame is None:
            logger.error(f"Element {locator} is not a frame")
            return False
        return self._enter(frame, f"element: {locator}")

    @allure.step("Switch to default content")
    def return_to_root_context(self) -> None:
        """Reset lookups to the top-level document."""
        self.session.reset_frames()
        logger.info("Switched to default content")

    @property
    def frame_depth(self) -> int:
        return self.session.frame_depth

    # =========================================================================
    # Dialogs
    # =========================================================================

    def _open_dialog(self, action: str) -> Dialog:
        dialog = self.session.dialog
        if dialog is None:
            logger.error(f"Failed to {action}: no alert is open")
            raise AlertError(action, "No alert is currently open")
        return dialog

    def _release(self, dialog: Dialog) -> None:
        # A dialog that opened during the driver call stays tracked
        if self.session.dialog is dialog:
            self.session.release_dialog()

    def is_alert_present(self, timeout: Optional[float] = None) -> ProbeResult:
        """Wait up to ``timeout`` seconds for a dialog to open."""
        if self.waits.until(lambda: self.session.dialog is not None, timeout, "alert to open"):
            return ProbeResult.yes("is_alert_present", message=self.session.dialog.message)
        return ProbeResult.no("is_alert_present", "no alert opened")

    def read_alert_text(self) -> str:
        """Return the open dialog's message."""
        dialog = self._open_dialog("read alert text")
        try:
            return dialog.message
        except PlaywrightError as e:
            logger.error(f"Failed to retrieve text from alert: {e}")
            raise AlertError("read_alert_text", f"Failed to retrieve text: {e}", cause=e) from e

    @allure.step("Accept alert")
    def accept_alert(self) -> None:
        """Accept the open dialog, sending any text typed into a prompt."""
        dialog = self._open_dialog("accept the alert")
        prompt_text = self.session.prompt_text
        try:
            if prompt_text is None:
                dialog.accept()
            else:
                dialog.accept(prompt_text)
        except PlaywrightError as e:
            logger.error(f"Failed to accept the alert: {e}")
            raise AlertError("accept_alert", f"Failed to accept: {e}", cause=e) from e
        self._release(dialog)
        logger.info("Alert accepted")

    @allure.step("Dismiss alert")
    def dismiss_alert(self) -> None:
        dialog = self._open_dialog("dismiss the alert")
        try:
            dialog.dismiss()
        except PlaywrightError as e:
            logger.error(f"Failed to dismiss the alert: {e}")
            raise AlertError("dismiss_alert", f"Failed to dismiss: {e}", cause=e) from e
        self._release(dialog)
        logger.info("Alert dismissed")

    @allure.step("Type into prompt: {text}")
    def type_into_alert(self, text: str) -> None:
        """
        Type text into an open prompt dialog.

        The text is delivered when the prompt is accepted and discarded if
        it is dismissed.

        Raises:
            AlertError: No dialog open, or the dialog is not a prompt
        """
        dialog = self._open_dialog("send keys to the alert")
        if dialog.type != "prompt":
            logger.error(f"Failed to send keys to the alert: a '{dialog.type}' dialog takes no input")
            raise AlertError(
                "type_into_alert",
                f"Cannot type into a '{dialog.type}' dialog",
                details={"dialog_type": dialog.type},
            )
        self.session.set_prompt_text(text)
        logger.debug(f"Prompt text set: '{text}'")


__all__ = ["ContextSwitcher"]
