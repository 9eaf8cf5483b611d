"""
================================================================================
Select Menu Page Object
================================================================================

Widgets > Select Menu: the native single-select "Old Style Select Menu"
(colors) and the native multi-select "Standard multi select" (cars).

================================================================================
"""

from typing import List, Optional

import allure

from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.page_base import PageBase
from demoqa_suites.ui_testing.framework.probe import ProbeResult


class SelectMenuPage(PageBase):
    """Page Object for the native dropdowns of the Select Menu widget page."""

    URL_PATH = "/select-menu"

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "color_select": Locator.by_id("oldSelectMenu"),
            "cars_select": Locator.by_id("cars"),
        })

    # ============================================================
    # Colors (single select)
    # ============================================================

    @allure.step("Choose color '{color}'")
    def choose_color(self, color: str) -> None:
        self.selects.select_by_visible_text(self.locators["color_select"], color)

    @allure.step("Choose color #{index}")
    def choose_color_by_index(self, index: int) -> None:
        self.selects.select_by_index(self.locators["color_select"], index)

    def choose_color_by_value(self, value: str) -> None:
        self.selects.select_by_value(self.locators["color_select"], value)

    def get_selected_color(self) -> str:
        selected = self.selects.get_selected_options(self.locators["color_select"])
        return selected[0].text if selected else ""

    def get_color_names(self) -> List[str]:
        return [o.text for o in self.selects.get_options(self.locators["color_select"])]

    def has_color(self, color: str, timeout: Optional[float] = None) -> ProbeResult:
        return self.selects.is_option_present(self.locators["color_select"], color, timeout)

    def deselect_colors(self) -> None:
        """Always fails: the color dropdown is a single select."""
        self.selects.deselect_all(self.locators["color_select"])

    # ============================================================
    # Cars (multi select)
    # ============================================================

    @allure.step("Choose cars")
    def choose_cars(self, *cars: str) -> None:
        for car in cars:
            self.selects.select_by_visible_text(self.locators["cars_select"], car)

    @allure.step("Drop car '{car}'")
    def drop_car(self, car: str) -> None:
        self.selects.deselect_by_visible_text(self.locators["cars_select"], car)

    @allure.step("Clear car selection")
    def clear_cars(self) -> None:
        self.selects.deselect_all(self.locators["cars_select"])

    def get_selected_cars(self) -> List[str]:
        return [o.text for o in self.selects.get_selected_options(self.locators["cars_select"])]
