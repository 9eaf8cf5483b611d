"""
================================================================================
Home Page Object
================================================================================

The demoqa.com landing page with one card per section (Elements, Forms,
Alerts Frame & Windows, ...).

================================================================================
"""

from typing import Optional

import allure

from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.page_base import PageBase
from demoqa_suites.ui_testing.framework.probe import ProbeResult


class HomePage(PageBase):
    """Page Object for the demoqa home page."""

    URL_PATH = "/"
    CARD_XPATH = "//h5[text()='{title}']"

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "elements_card": Locator.by_xpath(self.CARD_XPATH.format(title="Elements")),
            "forms_card": Locator.by_xpath(self.CARD_XPATH.format(title="Forms")),
            "alerts_card": Locator.by_xpath(
                self.CARD_XPATH.format(title="Alerts, Frame & Windows")
            ),
        })

    @allure.step("Open Elements section")
    def click_elements_card(self) -> None:
        self.elements.click(self.locators["elements_card"])

    @allure.step("Open Forms section")
    def click_forms_card(self) -> None:
        self.elements.click(self.locators["forms_card"])

    @allure.step("Open Alerts, Frame & Windows section")
    def click_alerts_card(self) -> None:
        self.elements.click(self.locators["alerts_card"])

    def is_on_elements_section(self, timeout: Optional[float] = None) -> ProbeResult:
        return self.nav.is_on_url(f"{self.base_url}/elements", timeout)
