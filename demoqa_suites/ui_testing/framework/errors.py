"""
================================================================================
Error Taxonomy
================================================================================

Typed failures raised by the interaction layer.

Hierarchy:
    HarnessError
    ├── WaitTimeoutError             bounded wait exceeded
    │   └── ElementNotInteractableError
    ├── StaleElementError            transient, retried inside waits
    └── DriverError                  unexpected driver failure (wrapped)
        ├── ActionTimeoutError       native action timed out
        ├── SelectionError
        │   └── SelectionNotFoundError
        └── AlertError

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .locator import Locator


class HarnessError(Exception):
    """Base class for all interaction-layer errors."""


class WaitTimeoutError(HarnessError):
    """
    Raised when a bounded wait does not see its condition in time.

    Attributes:
        locator: Locator (or description) the wait was polling
        condition: Condition name, e.g. "visible", "clickable"
        elapsed: Seconds spent waiting, across retries
        stale: True when the wait ended on a second stale reference
    """

    def __init__(
        self,
        locator: Any,
        condition: str,
        elapsed: float,
        stale: bool = False,
    ) -> None:
        self.locator = locator
        self.condition = condition
        self.elapsed = elapsed
        self.stale = stale
        suffix = " (element went stale twice)" if stale else ""
        super().__init__(
            f"Timed out after {elapsed:.2f}s waiting for {locator} "
            f"to be {condition}{suffix}"
        )


class ElementNotInteractableError(WaitTimeoutError):
    """Raised by click when the element never became clickable."""


class StaleElementError(HarnessError):
    """A resolved handle was detached from the document."""


class DriverError(HarnessError):
    """
    Wraps any unexpected failure coming from the browser driver.

    Keeps the action name, locator and original cause together so test
    output reads the same no matter which facade raised it.
    """

    def __init__(
        self,
        action: str,
        message: str,
        *,
        locator: Optional["Locator"] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.action = action
        self.locator = locator
        self.details: Dict[str, Any] = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.action}] {super().__str__()}"]
        if self.locator is not None:
            parts.append(f"locator={self.locator}")
        if self.details:
            kv = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"details={{ {kv} }}")
        return " | ".join(parts)


class ActionTimeoutError(DriverError):
    """The native driver action itself timed out (after the wait succeeded)."""


class SelectionError(DriverError):
    """Any failure while operating a <select> dropdown."""


class SelectionNotFoundError(SelectionError):
    """The requested option does not exist in the dropdown."""

    def __init__(
        self,
        value: Any,
        by: str,
        locator: Optional["Locator"] = None,
    ) -> None:
        self.value = value
        self.by = by
        super().__init__(
            f"select_by_{by}",
            f"No option with {by.replace('_', ' ')} {value!r} in dropdown",
            locator=locator,
            details={"value": value},
        )


class AlertError(DriverError):
    """A native dialog operation failed (e.g. no dialog is open)."""


__all__ = [
    "HarnessError",
    "WaitTimeoutError",
    "ElementNotInteractableError",
    "StaleElementError",
    "DriverError",
    "ActionTimeoutError",
    "SelectionError",
    "SelectionNotFoundError",
    "AlertError",
]
