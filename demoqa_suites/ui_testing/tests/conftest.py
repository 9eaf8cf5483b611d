"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the live demoqa.com scenarios, providing
fixtures for browser management, page objects, and test setup/teardown.

Key Features:
- One browser per test session, one isolated session per test
- Shared Toolkit handed to every Page Object of a test
- Page Object fixtures for all pages
- Screenshot capture on failure

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger

from demoqa_suites.ui_testing.framework.browser_manager import BrowserManager, BrowserSession
from demoqa_suites.ui_testing.framework.data_factory import UserDataFactory
from demoqa_suites.ui_testing.framework.log_config import init_logger
from demoqa_suites.ui_testing.framework.toolkit import Toolkit
from demoqa_suites.ui_testing.pages import (
    AlertsPage,
    CheckBoxPage,
    FramesPage,
    HomePage,
    RadioButtonPage,
    SelectMenuPage,
    TextBoxPage,
)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def browser_manager() -> Generator[BrowserManager, None, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single browser instance for all tests in the session,
    reducing browser launch overhead.
    """
    init_logger()
    manager = BrowserManager()
    manager.start()
    yield manager
    manager.close()


@pytest.fixture(scope="function")
def browser_session(browser_manager: BrowserManager) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browsing session fixture.

    Creates a new context + page for each test, providing isolation.
    """
    session = browser_manager.new_session()
    yield session
    session.close()


@pytest.fixture(scope="function")
def toolkit(browser_session: BrowserSession) -> Toolkit:
    """Facades shared by every Page Object of the test."""
    return Toolkit.for_session(browser_session)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(toolkit: Toolkit) -> HomePage:
    return HomePage(toolkit)


@pytest.fixture
def text_box_page(toolkit: Toolkit) -> TextBoxPage:
    return TextBoxPage(toolkit)


@pytest.fixture
def check_box_page(toolkit: Toolkit) -> CheckBoxPage:
    return CheckBoxPage(toolkit)


@pytest.fixture
def radio_button_page(toolkit: Toolkit) -> RadioButtonPage:
    return RadioButtonPage(toolkit)


@pytest.fixture
def select_menu_page(toolkit: Toolkit) -> SelectMenuPage:
    return SelectMenuPage(toolkit)


@pytest.fixture
def alerts_page(toolkit: Toolkit) -> AlertsPage:
    return AlertsPage(toolkit)


@pytest.fixture
def frames_page(toolkit: Toolkit) -> FramesPage:
    return FramesPage(toolkit)


# ================================================================================
# Test Data Fixtures
# ================================================================================

@pytest.fixture
def user_data() -> UserDataFactory:
    """
    Provides a random user data factory.
    """
    return UserDataFactory()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Automatically takes a screenshot when a UI test fails and attaches
    it to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "funcargs", {}).get("browser_session")
        if session is not None:
            try:
                screenshot = session.page.screenshot(full_page=True)
                allure.attach(
                    screenshot,
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
                allure.attach(
                    session.page.url,
                    name="failure_url",
                    attachment_type=allure.attachment_type.TEXT,
                )
            except Exception as e:
                # Log but don't fail if screenshot capture fails
                logger.warning(f"Failed to capture screenshot on failure: {e}")
