"""
================================================================================
Frames Page Object
================================================================================

Alerts, Frame & Windows > Frames: two iframes (frame1, frame2) that load
the same sample page with a "This is a sample page" heading.

Every read enters the frame, reads, and returns to the top-level document
so callers never have to track the current browsing context.

================================================================================
"""

import allure

from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.page_base import PageBase


class FramesPage(PageBase):
    """Page Object for the Frames section."""

    URL_PATH = "/frames"

    def __init__(self, toolkit, base_url: str = ""):
        super().__init__(toolkit, base_url)
        self.locators.register_all({
            "large_frame": Locator.by_id("frame1"),
            "small_frame": Locator.by_id("frame2"),
            "sample_heading": Locator.by_id("sampleHeading"),
        })

    @allure.step("Read heading inside frame '{name}'")
    def read_heading_in_frame(self, name: str) -> str:
        """
        Read the sample heading inside the named frame.

        Returns:
            The heading text, or "" when the frame does not exist
        """
        if not self.frames.enter_frame_by_name(name):
            return ""
        try:
            return self.elements.get_text(self.locators["sample_heading"])
        finally:
            self.frames.return_to_root_context()

    @allure.step("Read heading inside the large frame element")
    def read_heading_in_large_frame(self) -> str:
        if not self.frames.enter_frame_by_element(self.locators["large_frame"]):
            return ""
        try:
            return self.elements.get_text(self.locators["sample_heading"])
        finally:
            self.frames.return_to_root_context()

    def is_heading_outside_frames(self, timeout: float = 1.0) -> bool:
        """The sample heading only exists inside the frames."""
        return bool(self.elements.is_displayed(self.locators["sample_heading"], timeout))

    @property
    def frame_depth(self) -> int:
        return self.frames.frame_depth
