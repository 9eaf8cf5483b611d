"""
================================================================================
Dropdown Selection
================================================================================

Select / deselect options of native <select> elements.

Provides:
    - Selection by visible text, value or index
    - Deselection (multi-selects only)
    - Option enumeration and exact-text presence probe
    - One error shape for callers: SelectionError
      (SelectionNotFoundError when the requested option does not exist)

Options are enumerated from the live element before every selection so a
missing option fails immediately with the requested value in the message,
instead of the driver waiting for an option that will never appear.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

import allure
from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError

from .errors import HarnessError, SelectionError, SelectionNotFoundError
from .locator import Locator
from .probe import ProbeResult
from .wait_policy import WaitPolicy


T = TypeVar("T")

DESCRIBE_SELECT_SCRIPT = """el => {
    if (el.tagName !== 'SELECT') { return { tag: el.tagName.toLowerCase(), multiple: false, options: [] }; }
    return {
        tag: 'select',
        multiple: el.multiple,
        options: Array.from(el.options).map(o => ({
            index: o.index, text: o.text, value: o.value, selected: o.selected,
        })),
    };
}"""


@dataclass(frozen=True)
class DropdownOption:
    """One <option> of a dropdown."""
    index: int
    text: str
    value: str
    selected: bool = False


class SelectElement:
    """
    Selection-capable view over a resolved <select> handle.

    Reads the element once on construction; build a new one for every
    operation rather than keeping it around.
    """

    def __init__(self, handle: ElementHandle, locator: Locator):
        self.handle = handle
        self.locator = locator

        info: Dict[str, Any] = handle.evaluate(DESCRIBE_SELECT_SCRIPT)
        if info["tag"] != "select":
            raise SelectionError(
                "select",
                f"Element should be <select> but was <{info['tag']}>",
                locator=locator,
            )
        self.is_multiple: bool = bool(info["multiple"])
        self.options: List[DropdownOption] = [
            DropdownOption(
                index=int(o["index"]),
                text=o["text"],
                value=o["value"],
                selected=bool(o["selected"]),
            )
            for o in info["options"]
        ]

    @property
    def selected_options(self) -> List[DropdownOption]:
        return [o for o in self.options if o.selected]

    def matching(self, by: str, value: Any) -> List[DropdownOption]:
        """Options whose ``by`` field ("visible_text", "value", "index") equals ``value``."""
        field = "text" if by == "visible_text" else by
        return [o for o in self.options if getattr(o, field) == value]

    def select(self, matches: List[DropdownOption]) -> None:
        if self.is_multiple:
            indexes = sorted({o.index for o in self.selected_options} | {o.index for o in matches})
        else:
            indexes = [matches[0].index]
        self.handle.select_option(index=indexes)

    def keep_only(self, indexes: List[int]) -> None:
        self.handle.select_option(index=indexes)


class SelectionController:
    """
    Dropdown operations built on WaitPolicy.

    Example:
        selects = SelectionController(waits)
        selects.select_by_visible_text(Locator.by_id("oldSelectMenu"), "Blue")
        selects.is_option_present(Locator.by_id("oldSelectMenu"), "Purple")
    """

    def __init__(self, waits: WaitPolicy):
        self.waits = waits

    def _run(self, action: str, locator: Locator, operation: Callable[[], T]) -> T:
        """Run a selection step, wrapping every failure as SelectionError."""
        try:
            return operation()
        except SelectionError as e:
            logger.error(f"{action} failed on {locator}: {e}")
            raise
        except (HarnessError, PlaywrightError) as e:
            logger.error(f"Unexpected error during {action} on {locator}: {e}")
            raise SelectionError(action, f"{action} failed: {e}", locator=locator, cause=e) from e

    def _open(self, locator: Locator, timeout: Optional[float]) -> SelectElement:
        handle = self.waits.await_visible(locator, timeout)
        return SelectElement(handle, locator)

    # =========================================================================
    # Selection
    # =========================================================================

    def _select(self, by: str, value: Any, locator: Locator, timeout: Optional[float]) -> None:
        def operation() -> None:
            select = self._open(locator, timeout)
            matches = select.matching(by, value)
            if not matches:
                raise SelectionNotFoundError(value, by, locator)
            select.select(matches)
            logger.info(f"Selected {by.replace('_', ' ')} {value!r} in {locator}")

        self._run(f"select_by_{by}", locator, operation)

    @allure.step("Select '{text}' in {locator}")
    def select_by_visible_text(
        self, locator: Locator, text: str, timeout: Optional[float] = None
    ) -> None:
        """
        Select the option whose visible text equals ``text``.

        Raises:
            SelectionNotFoundError: No option has that text
            SelectionError: Any other failure
        """
        self._select("visible_text", text, locator, timeout)

    @allure.step("Select value '{value}' in {locator}")
    def select_by_value(
        self, locator: Locator, value: str, timeout: Optional[float] = None
    ) -> None:
        self._select("value", value, locator, timeout)

    @allure.step("Select index {index} in {locator}")
    def select_by_index(
        self, locator: Locator, index: int, timeout: Optional[float] = None
    ) -> None:
        self._select("index", index, locator, timeout)

    # =========================================================================
    # Deselection (multi-select only)
    # =========================================================================

    def _deselect(self, by: Optional[str], value: Any, locator: Locator, timeout: Optional[float]) -> None:
        action = f"deselect_by_{by}" if by else "deselect_all"

        def operation() -> None:
            select = self._open(locator, timeout)
            if not select.is_multiple:
                raise SelectionError(
                    action, "You may only deselect options of a multi-select", locator=locator
                )
            if by is None:
                select.keep_only([])
                logger.info(f"Deselected all options in {locator}")
                return
            matches = select.matching(by, value)
            if not matches:
                raise SelectionNotFoundError(value, by, locator)
            dropped = {o.index for o in matches}
            select.keep_only([o.index for o in select.selected_options if o.index not in dropped])
            logger.info(f"Deselected {by.replace('_', ' ')} {value!r} in {locator}")

        self._run(action, locator, operation)

    @allure.step("Deselect all in {locator}")
    def deselect_all(self, locator: Locator, timeout: Optional[float] = None) -> None:
        self._deselect(None, None, locator, timeout)

    def deselect_by_visible_text(
        self, locator: Locator, text: str, timeout: Optional[float] = None
    ) -> None:
        self._deselect("visible_text", text, locator, timeout)

    def deselect_by_value(
        self, locator: Locator, value: str, timeout: Optional[float] = None
    ) -> None:
        self._deselect("value", value, locator, timeout)

    def deselect_by_index(
        self, locator: Locator, index: int, timeout: Optional[float] = None
    ) -> None:
        self._deselect("index", index, locator, timeout)

    # =========================================================================
    # Enumeration and probes
    # =========================================================================

    def get_options(self, locator: Locator, timeout: Optional[float] = None) -> List[DropdownOption]:
        return self._run("get_options", locator, lambda: self._open(locator, timeout).options)

    def get_selected_options(
        self, locator: Locator, timeout: Optional[float] = None
    ) -> List[DropdownOption]:
        return self._run(
            "get_selected_options", locator, lambda: self._open(locator, timeout).selected_options
        )

    def is_option_present(
        self, locator: Locator, text: str, timeout: Optional[float] = None
    ) -> ProbeResult:
        """
        Check whether an option with exactly this visible text exists.

        Matching is exact (no substring or case folding) and stops at the
        first hit. A dropdown that never becomes visible answers "no".
        """
        outcome = self.waits.wait_for(locator, "visible", timeout)
        if not outcome.resolved:
            return ProbeResult.no(
                "is_option_present",
                f"{locator} not visible within {outcome.elapsed:.2f}s",
                expected=text,
            )

        select = self._run("is_option_present", locator, lambda: SelectElement(outcome.handle, locator))
        for option in select.options:
            if option.text == text:
                return ProbeResult.yes("is_option_present", expected=text, index=option.index)
        return ProbeResult.no(
            "is_option_present",
            f"No option with visible text {text!r} in {locator}",
            expected=text,
        )


__all__ = [
    "SelectionController",
    "SelectElement",
    "DropdownOption",
    "DESCRIBE_SELECT_SCRIPT",
]
