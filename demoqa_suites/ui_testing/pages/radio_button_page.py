"""
================================================================================
Radio Button Page Object
================================================================================

Elements > Radio Button: Yes / Impressive / No (disabled) radios and a
"You have selected ..." confirmation.

================================================================================
"""

from typing import Optional

import allure

from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.page_base import PageBase
from demoqa_suites.ui_testing.framework.probe import ProbeResult


class RadioButtonPage(PageBase):
    """Page Object for the Radio Button section."""

    URL_PATH = "/radio-button"

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "menu_link": Locator.by_id("item-2"),
            "yes_label": Locator.by_xpath("//label[@for='yesRadio']"),
            "impressive_label": Locator.by_xpath("//label[@for='impressiveRadio']"),
            "yes_radio": Locator.by_id("yesRadio"),
            "impressive_radio": Locator.by_id("impressiveRadio"),
            "no_radio": Locator.by_xpath("//input[@id='noRadio']"),
            "yes_message": Locator.by_xpath("//span[contains(text(),'Yes')]"),
            "impressive_message": Locator.by_xpath("//span[contains(text(),'Impressive')]"),
        })

    @allure.step("Open Radio Button from the side menu")
    def click_menu_link(self) -> None:
        self.elements.click(self.locators["menu_link"])

    @allure.step("Choose 'Yes'")
    def click_yes(self) -> None:
        self.elements.click(self.locators["yes_label"])

    @allure.step("Choose 'Impressive'")
    def click_impressive(self) -> None:
        self.elements.click(self.locators["impressive_label"])

    def is_no_enabled(self, timeout: Optional[float] = None) -> ProbeResult:
        return self.elements.is_enabled(self.locators["no_radio"], timeout)

    def is_yes_selected(self) -> ProbeResult:
        return self.elements.is_selected(self.locators["yes_radio"])

    def is_impressive_selected(self) -> ProbeResult:
        return self.elements.is_selected(self.locators["impressive_radio"])

    def get_yes_message(self) -> str:
        return self.elements.get_text(self.locators["yes_message"])

    def get_impressive_message(self) -> str:
        return self.elements.get_text(self.locators["impressive_message"])
