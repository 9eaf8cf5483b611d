import pytest
from playwright.sync_api import Error as PlaywrightError

from demoqa_suites.ui_testing.framework.errors import DriverError, WaitTimeoutError
from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.wait_policy import (
    WaitPolicy,
    WaitSettings,
    is_stale_error,
)
from demoqa_suites.unit.fakes import FakeFrame, FakeHandle, messages, stale_error


USER_NAME = Locator.by_id("userName")


@pytest.mark.parametrize(
    "timeout, poll_interval",
    [(2.0, 0.25), (1.0, 0.3), (0.5, 1.0), (3.0, 0.7)],
)
def test_unresolved_locator_times_out_within_one_poll(session, clock, timeout, poll_interval):
    waits = WaitPolicy(
        session,
        WaitSettings(timeout=timeout, poll_interval=poll_interval),
        clock=clock,
        sleep=clock.sleep,
    )

    with pytest.raises(WaitTimeoutError) as exc_info:
        waits.await_visible(USER_NAME)

    error = exc_info.value
    assert timeout <= error.elapsed <= timeout + poll_interval
    assert error.condition == "visible"
    assert error.locator == USER_NAME
    assert not error.stale
    assert all(s <= poll_interval for s in clock.sleeps)


def test_explicit_timeout_overrides_settings(waits, clock):
    with pytest.raises(WaitTimeoutError) as exc_info:
        waits.await_visible(USER_NAME, timeout=0.5)

    assert 0.5 <= exc_info.value.elapsed <= 0.75


def test_element_appearing_later_is_returned(page, waits, clock):
    handle = FakeHandle("userName")
    page.handle(USER_NAME.selector, None, None, handle)

    assert waits.await_visible(USER_NAME) is handle
    assert clock.now == pytest.approx(0.5)


def test_hidden_element_is_not_visible(page, waits):
    page.handle(USER_NAME.selector, FakeHandle(visible=False))

    outcome = waits.wait_for(USER_NAME, "visible")

    assert not outcome.resolved
    assert outcome.handle is None


def test_clickable_requires_enabled(page, waits):
    page.handle(USER_NAME.selector, FakeHandle(enabled=False))

    assert waits.await_visible(USER_NAME) is not None
    with pytest.raises(WaitTimeoutError, match="clickable"):
        waits.await_clickable(USER_NAME)


def test_stale_once_then_success_logs_one_warning(page, waits, log_records):
    fresh = FakeHandle("fresh")
    page.handle(USER_NAME.selector, FakeHandle("old", stale=True), fresh)

    assert waits.await_visible(USER_NAME) is fresh

    warnings = messages(log_records, "WARNING")
    assert len(warnings) == 1
    assert "Stale element reference" in warnings[0]


def test_stale_raised_by_lookup_is_retried(page, waits):
    fresh = FakeHandle("fresh")
    page.handle(USER_NAME.selector, stale_error(), fresh)

    assert waits.await_clickable(USER_NAME) is fresh


def test_stale_twice_raises_timeout(page, waits, log_records):
    page.handle(
        USER_NAME.selector,
        FakeHandle("first", stale=True),
        FakeHandle("second", stale=True),
    )

    with pytest.raises(WaitTimeoutError) as exc_info:
        waits.await_visible(USER_NAME)

    assert exc_info.value.stale
    stale_warnings = [m for m in messages(log_records, "WARNING") if "Stale element reference" in m]
    assert len(stale_warnings) == 1


def test_retry_after_staleness_resolves_again(page, waits):
    page.handle(USER_NAME.selector, FakeHandle(stale=True), FakeHandle())

    waits.await_visible(USER_NAME)

    assert page.main_frame.queries.count(USER_NAME.selector) == 2


def test_other_driver_errors_are_wrapped(page, waits, log_records):
    page.handle(USER_NAME.selector, PlaywrightError("Target page, context or browser has been closed"))

    with pytest.raises(DriverError) as exc_info:
        waits.await_visible(USER_NAME)

    assert exc_info.value.action == "wait_visible"
    assert exc_info.value.locator == USER_NAME
    assert isinstance(exc_info.value.cause, PlaywrightError)
    assert any("has been closed" in m for m in messages(log_records, "ERROR"))


SOURCE = Locator.by_id("draggable")
TARGET = Locator.by_id("droppable")


def test_await_all_visible_resolves_every_handle_in_one_poll(page, session, settings, clock):
    source = FakeHandle("source")
    old_target = FakeHandle("old-target")
    new_target = FakeHandle("new-target")
    page.handle(SOURCE.selector, None, source)
    page.handle(TARGET.selector, old_target, new_target)
    resolved_at = []

    def sleep(seconds):
        clock.sleep(seconds)
        old_target.stale = True

    def query(selector, original=page.main_frame.query_selector):
        resolved_at.append((selector, clock.now))
        return original(selector)

    page.main_frame.query_selector = query
    waits = WaitPolicy(session, settings, clock=clock, sleep=sleep)

    handles = waits.await_all_visible([SOURCE, TARGET])

    assert handles == [source, new_target]
    last_source = max(t for s, t in resolved_at if s == SOURCE.selector)
    last_target = max(t for s, t in resolved_at if s == TARGET.selector)
    assert last_source == last_target


def test_await_all_visible_names_the_missing_locator(page, waits, clock):
    page.handle(SOURCE.selector, FakeHandle("source"))

    with pytest.raises(WaitTimeoutError) as exc_info:
        waits.await_all_visible([SOURCE, TARGET], timeout=1.0)

    assert exc_info.value.locator == TARGET
    assert exc_info.value.elapsed == pytest.approx(1.0)
    assert clock.now == pytest.approx(1.0)


def test_await_all_visible_reports_staleness(page, waits):
    page.handle(SOURCE.selector, FakeHandle("source"))
    page.handle(TARGET.selector, FakeHandle("target", stale=True))

    with pytest.raises(WaitTimeoutError) as exc_info:
        waits.await_all_visible([SOURCE, TARGET], timeout=0.5)

    assert exc_info.value.stale


def test_lookups_follow_the_current_frame(page, session, waits):
    inner = FakeFrame("frame1")
    in_frame = FakeHandle("in-frame")
    inner.set(USER_NAME.selector, in_frame)
    page.handle(USER_NAME.selector, FakeHandle("top-level"))

    session.push_frame(inner)

    assert waits.await_visible(USER_NAME) is in_frame
    assert USER_NAME.selector not in page.main_frame.queries


def test_until_polls_predicate(waits, clock):
    assert waits.until(lambda: clock.now >= 1.0, timeout=2.0)
    assert clock.now == pytest.approx(1.0)


def test_until_gives_up_at_timeout(waits, clock):
    assert not waits.until(lambda: False, timeout=1.0)
    assert clock.now == pytest.approx(1.0)


def test_await_url_sees_url_change(page, session, settings, clock):
    def sleep(seconds):
        clock.sleep(seconds)
        if clock.now >= 0.75:
            page.url = "https://demoqa.com/text-box"

    waits = WaitPolicy(session, settings, clock=clock, sleep=sleep)

    assert waits.await_url("https://demoqa.com/text-box")
    assert not waits.await_url("https://demoqa.com/text-box/", timeout=0.5)


def test_default_sleep_pumps_the_page(page, session, settings, clock):
    def wait_for_timeout(ms):
        page.waited_ms.append(ms)
        clock.sleep(ms / 1000)

    page.wait_for_timeout = wait_for_timeout
    waits = WaitPolicy(session, settings, clock=clock)

    assert not waits.until(lambda: False, timeout=0.5)
    assert page.waited_ms == [250.0, 250.0]


def test_settings_from_config_honor_env(monkeypatch):
    monkeypatch.setenv("WAIT_TIMEOUT", "3.5")

    settings = WaitSettings.from_config()

    assert settings.timeout == 3.5
    assert settings.poll_interval == 0.25


def test_is_stale_error():
    assert is_stale_error(stale_error())
    assert is_stale_error(PlaywrightError("Element is detached from document"))
    assert not is_stale_error(PlaywrightError("net::ERR_CONNECTION_REFUSED"))
    assert not is_stale_error(ValueError("not attached to the DOM"))
