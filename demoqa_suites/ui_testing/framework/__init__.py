"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based element-interaction layer for the demoqa.com harness.

Components:
    - locator: Immutable locators and the per-page LocatorRegistry
    - browser_manager: Browser lifecycle and per-scenario sessions
    - wait_policy: Bounded polling waits with a single staleness retry
    - element_actions: Click / type / read / gesture commands and probes
    - selection: Native <select> dropdown operations
    - context_switcher: Frame and native dialog handling
    - navigation: URL navigation and URL probes
    - page_base: Base page object wired to a shared Toolkit

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    HarnessError,
    WaitTimeoutError,
    ElementNotInteractableError,
    StaleElementError,
    DriverError,
    ActionTimeoutError,
    SelectionError,
    SelectionNotFoundError,
    AlertError,
)
from .probe import ProbeResult
from .locator import Locator, LocatorRegistry
from .browser_manager import BrowserManager, BrowserSession
from .wait_policy import WaitPolicy, WaitSettings, WaitOutcome
from .element_actions import ElementActions
from .selection import SelectionController, DropdownOption
from .context_switcher import ContextSwitcher
from .navigation import NavigationFacade
from .toolkit import Toolkit
from .page_base import PageBase

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
    "ProbeResult",
    "Locator",
    "LocatorRegistry",
    "BrowserManager",
    "BrowserSession",
    "WaitPolicy",
    "WaitSettings",
    "WaitOutcome",
    "ElementActions",
    "SelectionController",
    "DropdownOption",
    "ContextSwitcher",
    "NavigationFacade",
    "Toolkit",
    "PageBase",
]
