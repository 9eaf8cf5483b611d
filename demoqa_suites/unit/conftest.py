"""
Fixtures for browser-free unit tests of the interaction layer.

Every facade is wired to a FakePage and a FakeClock, so waits finish
instantly and deterministically.
"""

from typing import Dict, Generator, List

import pytest
from loguru import logger

from demoqa_suites.ui_testing.framework.browser_manager import BrowserSession
from demoqa_suites.ui_testing.framework.config_loader import ConfigLoader
from demoqa_suites.ui_testing.framework.toolkit import Toolkit
from demoqa_suites.ui_testing.framework.wait_policy import WaitPolicy, WaitSettings
from demoqa_suites.unit.fakes import FakeClock, FakePage


@pytest.fixture(autouse=True)
def _fresh_config() -> Generator[None, None, None]:
    """Each test sees the repository config, whatever the previous one loaded."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def page() -> FakePage:
    return FakePage(url="https://demoqa.com/")


@pytest.fixture
def session(page: FakePage) -> BrowserSession:
    return BrowserSession(page, action_timeout_ms=1000)


@pytest.fixture
def settings() -> WaitSettings:
    return WaitSettings(timeout=2.0, poll_interval=0.25)


@pytest.fixture
def waits(session: BrowserSession, settings: WaitSettings, clock: FakeClock) -> WaitPolicy:
    return WaitPolicy(session, settings, clock=clock, sleep=clock.sleep)


@pytest.fixture
def toolkit(session: BrowserSession, waits: WaitPolicy) -> Toolkit:
    return Toolkit.for_session(session, waits=waits)


@pytest.fixture
def log_records() -> Generator[List[Dict], None, None]:
    """Loguru records emitted during the test."""
    records: List[Dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
