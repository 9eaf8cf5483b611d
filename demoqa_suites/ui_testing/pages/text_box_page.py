"""
================================================================================
Text Box Page Object
================================================================================

Elements > Text Box: a four-field form that echoes submitted values into
an output block below the form.

Key Features:
- Field entry, clearing and submission
- Output block readers ("Name:...", "Email:...", ...)
- Invalid-email detection (the field is flagged, no email output shown)

================================================================================
"""

from typing import Dict, Optional

import allure

from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.page_base import PageBase
from demoqa_suites.ui_testing.framework.probe import ProbeResult


class TextBoxPage(PageBase):
    """
    Page Object for the Text Box form.

    Output block format, as rendered by the site:
        Name:<full name>
        Email:<email>
        Current Address :<address>
        Permananet Address :<address>
    """

    URL_PATH = "/text-box"

    # Class the site puts on the email field when validation fails
    INVALID_FIELD_CLASS = "field-error"

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "menu_link": Locator.by_id("item-0"),
            "full_name_input": Locator.by_id("userName"),
            "email_input": Locator.by_id("userEmail"),
            "current_address_input": Locator.by_id("currentAddress"),
            "permanent_address_input": Locator.by_id("permanentAddress"),
            "submit_button": Locator.by_id("submit"),
            "output_block": Locator.by_id("output"),
            "output_name": Locator.by_css("#output #name"),
            "output_email": Locator.by_css("#output #email"),
            "output_current_address": Locator.by_css("#output #currentAddress"),
            "output_permanent_address": Locator.by_css("#output #permanentAddress"),
        })

    # ============================================================
    # Navigation
    # ============================================================

    @allure.step("Open Text Box from the side menu")
    def click_menu_link(self) -> None:
        self.elements.click(self.locators["menu_link"])

    # ============================================================
    # Form entry
    # ============================================================

    @allure.step("Enter full name: {name}")
    def enter_full_name(self, name: str) -> None:
        self.elements.send_keys(self.locators["full_name_input"], name)

    @allure.step("Enter email: {email}")
    def enter_email(self, email: str) -> None:
        self.elements.send_keys(self.locators["email_input"], email)

    @allure.step("Enter current address")
    def enter_current_address(self, address: str) -> None:
        self.elements.send_keys(self.locators["current_address_input"], address)

    @allure.step("Enter permanent address")
    def enter_permanent_address(self, address: str) -> None:
        self.elements.send_keys(self.locators["permanent_address_input"], address)

    def fill_form(self, data: Dict[str, str]) -> None:
        """
        Fill every field present in ``data``.

        Keys: full_name, email, current_address, permanent_address
        (the shape produced by UserDataFactory.text_box_form()).
        """
        entries = {
            "full_name": self.enter_full_name,
            "email": self.enter_email,
            "current_address": self.enter_current_address,
            "permanent_address": self.enter_permanent_address,
        }
        for key, enter in entries.items():
            if key in data:
                enter(data[key])

    def clear_full_name(self) -> None:
        self.elements.clear(self.locators["full_name_input"])

    def clear_email(self) -> None:
        self.elements.clear(self.locators["email_input"])

    def clear_current_address(self) -> None:
        self.elements.clear(self.locators["current_address_input"])

    def clear_permanent_address(self) -> None:
        self.elements.clear(self.locators["permanent_address_input"])

    def get_full_name_value(self) -> str:
        return self.elements.get_text(self.locators["full_name_input"])

    @allure.step("Submit the form")
    def submit(self) -> None:
        self.elements.scroll_into_view(self.locators["submit_button"])
        self.elements.click(self.locators["submit_button"])

    # ============================================================
    # Output block
    # ============================================================

    def is_output_displayed(self, timeout: Optional[float] = None) -> ProbeResult:
        return self.elements.is_displayed(self.locators["output_block"], timeout)

    def scroll_to_output(self) -> None:
        self.elements.scroll_into_view(self.locators["output_block"])

    def get_output_name(self) -> str:
        return self.elements.get_text(self.locators["output_name"])

    def get_output_email(self) -> str:
        return self.elements.get_text(self.locators["output_email"])

    def get_output_current_address(self) -> str:
        return self.elements.get_text(self.locators["output_current_address"])

    def get_output_permanent_address(self) -> str:
        return self.elements.get_text(self.locators["output_permanent_address"])

    def is_email_output_hidden(self, timeout: float = 2.0) -> bool:
        """True when no email line is shown in the output block."""
        return not self.elements.is_displayed(self.locators["output_email"], timeout)

    def is_email_marked_invalid(self) -> bool:
        classes = self.elements.get_attribute(self.locators["email_input"], "class") or ""
        return self.INVALID_FIELD_CLASS in classes.split()
