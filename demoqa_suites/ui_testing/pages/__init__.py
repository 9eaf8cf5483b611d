"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for demoqa.com sections.

Each page class encapsulates:
    - Element locators (registered in its constructor)
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .home_page import HomePage
from .text_box_page import TextBoxPage
from .check_box_page import CheckBoxPage
from .radio_button_page import RadioButtonPage
from .select_menu_page import SelectMenuPage
from .alerts_page import AlertsPage
from .frames_page import FramesPage

__all__ = [
    "HomePage",
    "TextBoxPage",
    "CheckBoxPage",
    "RadioButtonPage",
    "SelectMenuPage",
    "AlertsPage",
    "FramesPage",
]
