import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from demoqa_suites.ui_testing.framework.data_factory import SPECIAL_CHARACTERS
from demoqa_suites.ui_testing.framework.errors import (
    ActionTimeoutError,
    DriverError,
    ElementNotInteractableError,
    WaitTimeoutError,
)
from demoqa_suites.ui_testing.framework.element_actions import ElementActions
from demoqa_suites.ui_testing.framework.locator import Locator
from demoqa_suites.ui_testing.framework.wait_policy import WaitPolicy
from demoqa_suites.unit.fakes import FakeHandle, messages


SUBMIT = Locator.by_id("submit").named("submit_button")
FULL_NAME = Locator.by_id("userName")
ADDRESS = Locator.by_id("currentAddress")
SOURCE = Locator.by_id("draggable")
TARGET = Locator.by_id("droppable")


@pytest.fixture
def elements(toolkit):
    return toolkit.elements


def add(page, locator, **kwargs):
    handle = FakeHandle(events=page.events, **kwargs)
    page.handle(locator.selector, handle)
    return handle


# =========================================================================
# Commands
# =========================================================================

def test_click(page, elements):
    add(page, SUBMIT, name="submit")

    elements.click(SUBMIT)

    assert page.events == [("click", "submit", "left")]


def test_click_on_disabled_element_is_not_interactable(page, elements, log_records):
    add(page, SUBMIT, name="submit", enabled=False)

    with pytest.raises(ElementNotInteractableError) as exc_info:
        elements.click(SUBMIT)

    assert isinstance(exc_info.value, WaitTimeoutError)
    assert exc_info.value.condition == "clickable"
    assert page.events == []
    assert any("not interactable" in m for m in messages(log_records, "ERROR"))


def test_native_click_timeout_is_an_action_timeout(page, elements, log_records):
    handle = add(page, SUBMIT, name="submit")
    handle.error = PlaywrightTimeoutError("Timeout 1000ms exceeded.")

    with pytest.raises(ActionTimeoutError) as exc_info:
        elements.click(SUBMIT)

    assert not isinstance(exc_info.value, WaitTimeoutError)
    assert exc_info.value.action == "click"
    assert isinstance(exc_info.value.cause, PlaywrightTimeoutError)
    assert any("timed out during click" in m for m in messages(log_records, "ERROR"))


def test_driver_failure_is_wrapped(page, elements):
    handle = add(page, SUBMIT)
    handle.error = PlaywrightError("Element is outside of the viewport")

    with pytest.raises(DriverError) as exc_info:
        elements.double_click(SUBMIT)

    assert not isinstance(exc_info.value, ActionTimeoutError)
    assert "outside of the viewport" in str(exc_info.value)
    assert "'submit_button'" in str(exc_info.value)


def test_send_keys_then_get_text_round_trips_special_characters(page, elements):
    add(page, FULL_NAME, tag="input")

    elements.send_keys(FULL_NAME, SPECIAL_CHARACTERS)

    assert elements.get_text(FULL_NAME) == "!@!&^%%^#$@#$^#!"


def test_textarea_round_trip(page, elements):
    add(page, ADDRESS, tag="textarea")

    elements.send_keys(ADDRESS, "3 MUB 45\nSkopje")

    assert elements.get_text(ADDRESS) == "3 MUB 45\nSkopje"


def test_send_keys_keeps_existing_text(page, elements):
    add(page, FULL_NAME, tag="input", value="Jane")

    elements.send_keys(FULL_NAME, " Doe")

    assert elements.get_text(FULL_NAME) == "Jane Doe"


def test_clear(page, elements):
    add(page, FULL_NAME, tag="input", value="Jane")

    elements.clear(FULL_NAME)

    assert elements.get_text(FULL_NAME) == ""


def test_get_text_of_non_field_is_rendered_text(page, elements):
    add(page, SUBMIT, tag="p", text="Name:Jane", value="ignored")

    assert elements.get_text(SUBMIT) == "Name:Jane"


def test_get_text_of_missing_element_times_out(elements):
    with pytest.raises(WaitTimeoutError):
        elements.get_text(FULL_NAME, timeout=0.5)


def test_get_attribute(page, elements):
    add(page, FULL_NAME, attributes={"placeholder": "Full Name"})

    assert elements.get_attribute(FULL_NAME, "placeholder") == "Full Name"
    assert elements.get_attribute(FULL_NAME, "title") is None


def test_submit_and_dispatch_click(page, elements):
    add(page, SUBMIT, name="submit")

    elements.submit(SUBMIT)
    elements.dispatch_click(SUBMIT)

    assert page.events == [("submit", "submit"), ("dispatch_click", "submit")]


def test_dispatch_click_requires_clickable(page, elements):
    add(page, SUBMIT, enabled=False)

    with pytest.raises(ElementNotInteractableError):
        elements.dispatch_click(SUBMIT)


def test_pointer_gestures(page, elements):
    add(page, SUBMIT, name="submit")

    elements.double_click(SUBMIT)
    elements.right_click(SUBMIT)
    elements.hover(SUBMIT)
    elements.scroll_into_view(SUBMIT)
    elements.click_and_hold(SUBMIT)

    assert page.events == [
        ("dblclick", "submit"),
        ("click", "submit", "right"),
        ("hover", "submit"),
        ("scroll", "submit"),
        ("hover", "submit"),
        ("mouse_down",),
    ]


def test_drag_and_drop(page, elements):
    add(page, SOURCE, name="source")
    add(page, TARGET, name="target")

    elements.drag_and_drop(SOURCE, TARGET)

    assert page.events == [
        ("hover", "source"),
        ("mouse_down",),
        ("hover", "target"),
        ("mouse_up",),
    ]
    assert page.main_frame.queries == [SOURCE.selector, TARGET.selector]


def test_drag_and_drop_without_target_sends_no_pointer_events(page, elements):
    add(page, SOURCE, name="source")

    with pytest.raises(WaitTimeoutError) as exc_info:
        elements.drag_and_drop(SOURCE, TARGET)

    assert exc_info.value.locator == TARGET
    assert page.events == []


def test_drag_and_drop_never_uses_a_handle_held_across_a_pause(page, session, settings, clock):
    source = FakeHandle("source", events=page.events)
    old_target = FakeHandle("old-target", events=page.events)
    new_target = FakeHandle("new-target", events=page.events)
    page.handle(SOURCE.selector, None, source)
    page.handle(TARGET.selector, old_target, new_target)

    def sleep(seconds):
        clock.sleep(seconds)
        # the drop zone re-renders while the source is still missing
        old_target.stale = True

    elements = ElementActions(session, WaitPolicy(session, settings, clock=clock, sleep=sleep))

    elements.drag_and_drop(SOURCE, TARGET)

    assert page.events == [
        ("hover", "source"),
        ("mouse_down",),
        ("hover", "new-target"),
        ("mouse_up",),
    ]


def test_drag_and_drop_releases_mouse_when_drop_fails(page, elements):
    add(page, SOURCE, name="source")
    target = add(page, TARGET, name="target")
    target.error = PlaywrightError("Element is outside of the viewport")

    with pytest.raises(DriverError, match="outside of the viewport"):
        elements.drag_and_drop(SOURCE, TARGET)

    assert page.events == [("hover", "source"), ("mouse_down",), ("mouse_up",)]


def test_key_chord(page, elements):
    add(page, FULL_NAME, name="userName", tag="input")

    elements.key_chord(FULL_NAME, "Control", "a")

    assert page.events == [
        ("focus", "userName"),
        ("key_down", "Control"),
        ("key_type", "a"),
        ("key_up", "Control"),
    ]


def test_key_chord_always_releases_modifier(page, elements, monkeypatch):
    add(page, FULL_NAME, name="userName", tag="input")

    def broken_type(text):
        raise PlaywrightError("Target closed")

    monkeypatch.setattr(page.keyboard, "type", broken_type)

    with pytest.raises(DriverError):
        elements.key_chord(FULL_NAME, "Shift", "x")

    assert page.events[-1] == ("key_up", "Shift")


# =========================================================================
# Probes
# =========================================================================

def test_is_clickable_false_for_disabled_element(page, elements):
    add(page, SUBMIT, enabled=False)

    result = elements.is_clickable(SUBMIT)

    assert not result
    assert result.probe == "is_clickable"
    assert result.details["elapsed"] >= 2.0
    assert "not clickable" in result.reason


def test_is_clickable_false_for_missing_element(elements):
    result = elements.is_clickable(SUBMIT, timeout=0.5)

    assert not result
    assert 0.5 <= result.details["elapsed"] <= 0.75


def test_is_clickable_true(page, elements):
    add(page, SUBMIT)

    assert elements.is_clickable(SUBMIT)


def test_is_enabled(page, elements):
    add(page, SUBMIT, enabled=False)

    result = elements.is_enabled(SUBMIT)

    assert not result
    assert "disabled" in result.reason


def test_is_displayed(page, elements):
    add(page, SUBMIT)

    assert elements.is_displayed(SUBMIT)
    assert not elements.is_displayed(FULL_NAME, timeout=0.25)


def test_is_selected(page, elements):
    add(page, SUBMIT, checked=True)
    add(page, FULL_NAME, checked=False)

    assert elements.is_selected(SUBMIT)
    assert not elements.is_selected(FULL_NAME)


def test_is_text_present(page, elements):
    add(page, SUBMIT, text="You have selected Impressive")

    assert elements.is_text_present(SUBMIT, "Impressive")

    result = elements.is_text_present(SUBMIT, "Yes")
    assert not result
    assert result.details == {"expected": "Yes", "actual": "You have selected Impressive"}


def test_probe_still_raises_on_driver_failure(page, elements):
    handle = add(page, SUBMIT)
    handle.error = PlaywrightError("Execution context was destroyed")

    with pytest.raises(DriverError):
        elements.is_text_present(SUBMIT, "anything")
