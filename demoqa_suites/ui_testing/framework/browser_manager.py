"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation (Playwright sync API).

Features:
    - One browser process shared by a test session (BrowserManager)
    - One isolated context + page per scenario (BrowserSession)
    - Browsing-context (frame stack) tracking for the interaction layer
    - Native dialog capture so alerts can be read/accepted on demand

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Dialog,
    Frame,
    Page,
    Playwright,
    sync_playwright,
)

from .config_loader import BROWSER_TYPES, ConfigLoader


class BrowserSession:
    """
    One browsing session driven by exactly one caller.

    Owns the mutable per-session state the facades rely on:
        - the frame stack (current browsing context)
        - the currently open native dialog, if any

    Never share a session (or the facades built on it) between parallel
    scenarios; create one per scenario via BrowserManager.new_session().

    Usage:
        session = BrowserSession.attach(page)
        session.frame.query_selector("id=userName")
    """

    def __init__(
        self,
        page: Page,
        context: Optional[BrowserContext] = None,
        action_timeout_ms: int = 10000,
        on_close: Optional[Callable[["BrowserSession"], None]] = None,
    ):
        """
        Initialize session around an existing page.

        Args:
            page: Playwright Page driven by this session
            context: Owning BrowserContext (closed on teardown if given)
            action_timeout_ms: Timeout for native driver actions
            on_close: Called once with this session after it is closed
        """
        self.page = page
        self.context = context
        self.action_timeout_ms = action_timeout_ms
        self._on_close = on_close

        self._frames: List[Frame] = []
        self._dialog: Optional[Dialog] = None
        self._prompt_text: Optional[str] = None
        self._closed = False

        self.page.on("dialog", self._on_dialog)

    @classmethod
    def attach(cls, page: Page, **kwargs: Any) -> "BrowserSession":
        """Wrap a page whose lifecycle is managed elsewhere."""
        return cls(page, **kwargs)

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Browsing context
    # =========================================================================

    @property
    def frame(self) -> Frame:
        """Frame that element lookups currently resolve against."""
        if self._frames:
            return self._frames[-1]
        return self.page.main_frame

    @property
    def frame_depth(self) -> int:
        """Number of frames entered below the top-level document."""
        return len(self._frames)

    def push_frame(self, frame: Frame) -> None:
        self._frames.append(frame)

    def reset_frames(self) -> None:
        self._frames.clear()

    # =========================================================================
    # Native dialogs
    # =========================================================================

    def _on_dialog(self, dialog: Dialog) -> None:
        # Keep the dialog open until a facade accepts or dismisses it.
        logger.info(f"Dialog opened ({dialog.type}): {dialog.message}")
        self._dialog = dialog
        self._prompt_text = None

    @property
    def dialog(self) -> Optional[Dialog]:
        """Currently open dialog, or None."""
        return self._dialog

    @property
    def prompt_text(self) -> Optional[str]:
        """Text typed into the open prompt, sent when it is accepted."""
        return self._prompt_text

    def set_prompt_text(self, text: str) -> None:
        self._prompt_text = text

    def release_dialog(self) -> Optional[str]:
        """Forget the open dialog and return any prompt text typed into it."""
        text = self._prompt_text
        self._dialog = None
        self._prompt_text = None
        return text

    # =========================================================================
    # Timing
    # =========================================================================

    def pause(self, seconds: float) -> None:
        """
        Block for ``seconds`` while letting the driver dispatch events.

        A plain time.sleep() would freeze the sync driver's event loop, so
        URL changes and dialogs would never be observed while polling.
        """
        self.page.wait_for_timeout(seconds * 1000)

    # =========================================================================
    # Teardown
    # =========================================================================

    def close(self) -> None:
        """Close the session's context (and with it the page)."""
        if self._closed:
            return
        self._closed = True
        self.reset_frames()
        if self._dialog is not None:
            logger.warning(f"Closing session with an unhandled dialog: {self._dialog.message}")
            self.release_dialog()
        if self.context is not None:
            self.context.close()
        if self._on_close is not None:
            self._on_close(self)
        logger.debug("Browser session closed")


class BrowserManager:
    """
    Manages the browser process for UI testing.

    Features:
        - Single browser instance for performance
        - Isolated contexts (sessions) for test independence
        - Configurable browser settings via ConfigLoader

    Usage:
        with BrowserManager() as manager:
            with manager.new_session() as session:
                session.page.goto("https://demoqa.com")
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
            "--disable-features=IsolateOrigins,site-per-process",
        ],
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (defaults to config)
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to config)
            config: Configuration source (defaults to the ConfigLoader singleton)
        """
        self.config = config or ConfigLoader()
        self.headless = (
            headless if headless is not None
            else self.config.get_bool("browser.headless", True)
        )
        self.browser_type = browser_type or self.config.get_choice("browser.type", BROWSER_TYPES, "chromium")

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._sessions: List[BrowserSession] = []

    def __enter__(self) -> "BrowserManager":
        """Context manager entry - start browser."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close browser."""
        self.close()

    def start(self) -> None:
        """Start Playwright and launch browser."""
        if self._browser is not None:
            return

        self._playwright = sync_playwright().start()

        # Select browser type
        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }
        # Chromium-only switches
        if self.browser_type in ("firefox", "webkit"):
            launch_options.pop("args")

        self._browser = browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    def new_session(self, **context_options: Any) -> BrowserSession:
        """
        Create a new isolated session (context + page).

        Args:
            **context_options: Extra BrowserContext options

        Returns:
            New BrowserSession
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        action_timeout_ms = self.config.get_int("browser.action_timeout_ms", 10000, positive=True)
        options = {
            "viewport": {
                "width": self.config.get_int("browser.viewport_width", 1920, positive=True),
                "height": self.config.get_int("browser.viewport_height", 1080, positive=True),
            },
            "ignore_https_errors": True,
            **context_options,
        }
        context = self._browser.new_context(**options)
        page = context.new_page()
        session = BrowserSession(
            page,
            context=context,
            action_timeout_ms=action_timeout_ms,
            on_close=self._forget_session,
        )
        self._sessions.append(session)
        return session

    def _forget_session(self, session: BrowserSession) -> None:
        if session in self._sessions:
            self._sessions.remove(session)

    @property
    def open_sessions(self) -> List[BrowserSession]:
        """Sessions created by this manager and not closed yet."""
        return list(self._sessions)

    def close(self) -> None:
        """Close all sessions, the browser and Playwright."""
        for session in list(self._sessions):
            try:
                session.close()
            except Exception as e:
                logger.warning(f"Failed to close session cleanly: {e}")
        self._sessions.clear()

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
    "BrowserSession",
]
