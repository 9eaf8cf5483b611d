"""
================================================================================
Alerts Page Object
================================================================================

Alerts, Frame & Windows > Alerts: buttons that open an alert, a delayed
alert (5 seconds), a confirm box and a prompt box. Confirm and prompt
answers are echoed on the page.

Buttons are pressed with a deferred click so the native dialog they open
never blocks the driver call.

================================================================================
"""

from typing import Optional

import allure

from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.page_base import PageBase
from demoqa_suites.ui_testing.framework.probe import ProbeResult


class AlertsPage(PageBase):
    """Page Object for the Alerts section."""

    URL_PATH = "/alerts"

    # The timer alert opens 5 seconds after the click
    TIMER_ALERT_TIMEOUT = 8.0

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "alert_button": Locator.by_id("alertButton"),
            "timer_alert_button": Locator.by_id("timerAlertButton"),
            "confirm_button": Locator.by_id("confirmButton"),
            "prompt_button": Locator.by_id("promtButton"),
            "confirm_result": Locator.by_id("confirmResult"),
            "prompt_result": Locator.by_id("promptResult"),
        })

    @allure.step("Open an alert")
    def trigger_alert(self) -> None:
        self.elements.dispatch_click(self.locators["alert_button"])

    @allure.step("Open a delayed alert")
    def trigger_timer_alert(self) -> None:
        self.elements.dispatch_click(self.locators["timer_alert_button"])

    @allure.step("Open a confirm box")
    def trigger_confirm(self) -> None:
        self.elements.dispatch_click(self.locators["confirm_button"])

    @allure.step("Open a prompt box")
    def trigger_prompt(self) -> None:
        self.elements.dispatch_click(self.locators["prompt_button"])

    def wait_for_alert(self, timeout: Optional[float] = None) -> ProbeResult:
        return self.frames.is_alert_present(timeout)

    def get_alert_text(self) -> str:
        return self.frames.read_alert_text()

    def accept_alert(self) -> None:
        self.frames.accept_alert()

    def dismiss_alert(self) -> None:
        self.frames.dismiss_alert()

    @allure.step("Answer prompt with '{text}'")
    def answer_prompt(self, text: str) -> None:
        self.frames.type_into_alert(text)
        self.frames.accept_alert()

    def get_confirm_result(self) -> str:
        return self.elements.get_text(self.locators["confirm_result"])

    def get_prompt_result(self) -> str:
        return self.elements.get_text(self.locators["prompt_result"])
