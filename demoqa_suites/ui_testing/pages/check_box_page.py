"""
================================================================================
Check Box Page Object
================================================================================

Elements > Check Box: an expandable tree of checkboxes (Home > Desktop,
Documents, Downloads, ...) with a result line listing every checked node.

Tree nodes are addressed by their visible title, so their locators are
built per call from XPath templates rather than registered up front.

================================================================================
"""

from typing import Iterable, List, Optional

import allure

from demoqa_suites.ui_testing.framework.locator import Locator, xpath_literal
from demoqa_suites.ui_testing.framework.page_base import PageBase
from demoqa_suites.ui_testing.framework.probe import ProbeResult


class CheckBoxPage(PageBase):
    """Page Object for the Check Box tree."""

    URL_PATH = "/checkbox"

    NODE_TITLE_XPATH = "//span[@class='rct-title' and text()={title}]"
    NODE_TOGGLE_XPATH = NODE_TITLE_XPATH + "/ancestor::span[@class='rct-text']/button"
    NODE_CHECKBOX_XPATH = NODE_TITLE_XPATH + "/preceding-sibling::span[@class='rct-checkbox']"

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "menu_link": Locator.by_id("item-1"),
            "expand_all_button": Locator.by_css("button[title='Expand all']"),
            "collapse_all_button": Locator.by_css("button[title='Collapse all']"),
            "result": Locator.by_id("result"),
        })

    @staticmethod
    def _node(template: str, title: str, kind: str) -> Locator:
        return Locator.by_xpath(template.format(title=xpath_literal(title))).named(f"{kind} '{title}'")

    @allure.step("Open Check Box from the side menu")
    def click_menu_link(self) -> None:
        self.elements.click(self.locators["menu_link"])

    @allure.step("Expand all nodes")
    def expand_all(self) -> None:
        self.elements.click(self.locators["expand_all_button"])

    @allure.step("Collapse all nodes")
    def collapse_all(self) -> None:
        self.elements.click(self.locators["collapse_all_button"])

    @allure.step("Toggle node '{title}'")
    def toggle(self, title: str) -> None:
        self.elements.click(self._node(self.NODE_TOGGLE_XPATH, title, "toggle"))

    @allure.step("Click checkbox '{title}'")
    def click_checkbox(self, title: str) -> None:
        """Check the node (or uncheck it when already checked)."""
        self.elements.click(self._node(self.NODE_CHECKBOX_XPATH, title, "checkbox"))

    def is_node_displayed(self, title: str, timeout: Optional[float] = None) -> ProbeResult:
        return self.elements.is_displayed(self._node(self.NODE_TITLE_XPATH, title, "node"), timeout)

    def hidden_nodes(self, titles: Iterable[str], timeout: float = 1.0) -> List[str]:
        """Titles among ``titles`` that are not displayed."""
        return [t for t in titles if not self.is_node_displayed(t, timeout)]

    def displayed_nodes(self, titles: Iterable[str], timeout: Optional[float] = None) -> List[str]:
        """Titles among ``titles`` that are displayed."""
        return [t for t in titles if self.is_node_displayed(t, timeout)]

    def get_selected_message(self) -> str:
        """Result line with whitespace collapsed, e.g. 'You have selected : home desktop'."""
        return " ".join(self.elements.get_text(self.locators["result"]).split())

    def is_result_hidden(self, timeout: float = 1.0) -> bool:
        return not self.elements.is_displayed(self.locators["result"], timeout)
