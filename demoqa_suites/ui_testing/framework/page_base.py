"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Per-page LocatorRegistry declared in the constructor
    - Shared facades (elements, selects, frames, nav) by composition
    - URL building from the configured base URL
    - Open / loaded checks

Page Objects expose semantic operations only ("submit the form", "read
the result"); locators and element handles stay inside the page.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Mapping, Optional

import allure
from loguru import logger

from .config_loader import ConfigLoader
from .locator import Locator, LocatorRegistry
from .probe import ProbeResult
from .toolkit import Toolkit


class PageBase:
    """
    Base class for all page objects.

    Usage:
        class TextBoxPage(PageBase):
            URL_PATH = "/text-box"

            def __init__(self, toolkit, base_url=""):
                super().__init__(toolkit, base_url)
                self.locators.register_all({
                    "full_name_input": Locator.by_id("userName"),
                })

            def enter_full_name(self, name):
                self.elements.send_keys(self.locators["full_name_input"], name)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = "DEMOQA"

    def __init__(
        self,
        toolkit: Toolkit,
        base_url: str = "",
        locators: Optional[Mapping[str, Locator]] = None,
    ):
        """
        Initialize page object.

        Args:
            toolkit: Facades shared by every page of the scenario
            base_url: Base URL for the application (defaults to ui.base_url)
            locators: Optional initial name -> Locator mapping
        """
        self.toolkit = toolkit
        self.elements = toolkit.elements
        self.selects = toolkit.selects
        self.frames = toolkit.frames
        self.nav = toolkit.nav

        if not base_url:
            base_url = ConfigLoader().get("ui.base_url", "https://demoqa.com")
        self.base_url = base_url.rstrip("/")
        self.locators = LocatorRegistry(type(self).__name__, locators)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def open(self) -> "PageBase":
        """Navigate to this page."""
        with allure.step(f"Open {type(self).__name__} ({self.URL_PATH})"):
            self.nav.go_to(self.url)
            logger.info(f"Opened {type(self).__name__}: {self.url}")
        return self

    def is_loaded(self, timeout: Optional[float] = None) -> ProbeResult:
        """Check that the browser is on this page's URL."""
        return self.nav.is_on_url(self.url, timeout)

    def get_title(self) -> str:
        return self.nav.title()


__all__ = ["PageBase"]
