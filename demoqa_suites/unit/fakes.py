"""
In-memory stand-ins for the Playwright sync objects the framework touches.

Only the attributes and methods the interaction layer calls are modelled.
Every gesture is appended to a shared ``events`` list so tests can assert
on ordering.
"""

from typing import Any, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError

from demoqa_suites.ui_testing.framework.element_actions import (
    DEFERRED_CLICK_SCRIPT,
    IS_SELECTED_SCRIPT,
    READ_TEXT_SCRIPT,
    SUBMIT_SCRIPT,
)
from demoqa_suites.ui_testing.framework.selection import DESCRIBE_SELECT_SCRIPT


STALE_MESSAGE = "Element is not attached to the DOM"


def stale_error() -> PlaywrightError:
    return PlaywrightError(STALE_MESSAGE)


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeHandle:
    def __init__(
        self,
        name: str = "element",
        tag: str = "div",
        text: str = "",
        value: str = "",
        visible: bool = True,
        enabled: bool = True,
        checked: bool = False,
        stale: bool = False,
        attributes: Optional[Dict[str, str]] = None,
        options: Optional[List[Dict[str, Any]]] = None,
        multiple: bool = False,
        frame: Any = None,
        events: Optional[list] = None,
    ):
        self.name = name
        self.tag = tag
        self.text = text
        self.value = value
        self.visible = visible
        self.enabled = enabled
        self.checked = checked
        self.stale = stale
        self.attributes = attributes or {}
        self.options = [dict(o) for o in (options or [])]
        self.multiple = multiple
        self.frame = frame
        self.events = events if events is not None else []
        self.error: Optional[BaseException] = None
        self.select_calls: List[List[int]] = []

    def _touch(self) -> None:
        if self.stale:
            raise stale_error()
        if self.error is not None:
            raise self.error

    def is_visible(self) -> bool:
        if self.stale:
            raise stale_error()
        return self.visible

    def is_enabled(self) -> bool:
        if self.stale:
            raise stale_error()
        return self.enabled

    def click(self, timeout=None, button="left") -> None:
        self._touch()
        self.events.append(("click", self.name, button))

    def dblclick(self, timeout=None) -> None:
        self._touch()
        self.events.append(("dblclick", self.name))

    def hover(self, timeout=None) -> None:
        self._touch()
        self.events.append(("hover", self.name))

    def focus(self) -> None:
        self._touch()
        self.events.append(("focus", self.name))

    def fill(self, value, timeout=None) -> None:
        self._touch()
        self.value = value

    def type(self, text, timeout=None) -> None:
        self._touch()
        self.value += text

    def scroll_into_view_if_needed(self, timeout=None) -> None:
        self._touch()
        self.events.append(("scroll", self.name))

    def get_attribute(self, name):
        self._touch()
        return self.attributes.get(name)

    def content_frame(self):
        self._touch()
        return self.frame

    def select_option(self, index=None) -> None:
        self._touch()
        indexes = list(index)
        self.select_calls.append(indexes)
        for i, option in enumerate(self.options):
            option["selected"] = i in indexes

    def evaluate(self, script):
        self._touch()
        if script == READ_TEXT_SCRIPT:
            return self.value if self.tag in ("input", "textarea") else self.text
        if script == IS_SELECTED_SCRIPT:
            return self.checked
        if script == SUBMIT_SCRIPT:
            self.events.append(("submit", self.name))
            return None
        if script == DEFERRED_CLICK_SCRIPT:
            self.events.append(("dispatch_click", self.name))
            return None
        if script == DESCRIBE_SELECT_SCRIPT:
            if self.tag != "select":
                return {"tag": self.tag, "multiple": False, "options": []}
            return {
                "tag": "select",
                "multiple": self.multiple,
                "options": [
                    {
                        "index": i,
                        "text": o["text"],
                        "value": o.get("value", o["text"].lower()),
                        "selected": o.get("selected", False),
                    }
                    for i, o in enumerate(self.options)
                ],
            }
        raise AssertionError(f"Unexpected script: {script}")


class FakeFrame:
    """
    Frame whose query_selector answers from a per-selector script.

    ``set(selector, a, b, c)`` answers a, then b, then c for every later
    query. An exception instance in the script is raised instead.
    """

    def __init__(self, name: str = "", child_frames: Optional[list] = None):
        self.name = name
        self.child_frames = list(child_frames or [])
        self.queries: List[str] = []
        self._answers: Dict[str, list] = {}

    def set(self, selector: str, *answers: Any) -> None:
        self._answers[selector] = list(answers)

    def query_selector(self, selector: str):
        self.queries.append(selector)
        answers = self._answers.get(selector)
        if not answers:
            return None
        answer = answers.pop(0) if len(answers) > 1 else answers[0]
        if isinstance(answer, BaseException):
            raise answer
        return answer


class FakeMouse:
    def __init__(self, events: list):
        self.events = events

    def down(self) -> None:
        self.events.append(("mouse_down",))

    def up(self) -> None:
        self.events.append(("mouse_up",))


class FakeKeyboard:
    def __init__(self, events: list):
        self.events = events

    def down(self, key: str) -> None:
        self.events.append(("key_down", key))

    def up(self, key: str) -> None:
        self.events.append(("key_up", key))

    def type(self, text: str) -> None:
        self.events.append(("key_type", text))


class FakeDialog:
    def __init__(self, type: str = "alert", message: str = "", default_value: str = ""):
        self.type = type
        self.message = message
        self.default_value = default_value
        self.accepted = False
        self.dismissed = False
        self.prompt_text: Optional[str] = None

    def accept(self, prompt_text: Optional[str] = None) -> None:
        self.accepted = True
        self.prompt_text = prompt_text

    def dismiss(self) -> None:
        self.dismissed = True


class FakeContext:
    def __init__(self):
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakePage:
    def __init__(self, url: str = "about:blank", title: str = "DEMOQA"):
        self.url = url
        self._title = title
        self.events: list = []
        self.main_frame = FakeFrame("main")
        self.mouse = FakeMouse(self.events)
        self.keyboard = FakeKeyboard(self.events)
        self.listeners: Dict[str, list] = {}
        self.waited_ms: List[float] = []
        self.navigation_error: Optional[BaseException] = None

    def handle(self, selector: str, *answers: Any) -> None:
        """Script the main frame's answers for ``selector``."""
        self.main_frame.set(selector, *answers)

    def on(self, event: str, callback) -> None:
        self.listeners.setdefault(event, []).append(callback)

    def open_dialog(self, dialog: FakeDialog) -> None:
        for callback in self.listeners.get("dialog", []):
            callback(dialog)

    def _navigate(self, event: tuple, url: Optional[str] = None) -> None:
        self.events.append(event)
        if self.navigation_error is not None:
            raise self.navigation_error
        if url is not None:
            self.url = url

    def goto(self, url: str, wait_until=None) -> None:
        self._navigate(("goto", url, wait_until), url)

    def reload(self, wait_until=None) -> None:
        self._navigate(("reload", wait_until))

    def go_back(self, wait_until=None) -> None:
        self._navigate(("go_back", wait_until))

    def go_forward(self, wait_until=None) -> None:
        self._navigate(("go_forward", wait_until))

    def title(self) -> str:
        return self._title

    def evaluate(self, script: str):
        self.events.append(("evaluate", script))

    def wait_for_timeout(self, timeout: float) -> None:
        self.waited_ms.append(timeout)


def messages(records: List[Dict], level: str) -> List[str]:
    """Messages of captured loguru ``records`` logged at ``level``."""
    return [r["message"] for r in records if r["level"].name == level]
