"""
Facade bundle shared by the Page Objects of one session.

Build one Toolkit per BrowserSession and hand the same instance to every
Page Object of that scenario. Pages hold it by reference and use only the
facades they need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .browser_manager import BrowserSession
from .context_switcher import ContextSwitcher
from .element_actions import ElementActions
from .navigation import NavigationFacade
from .selection import SelectionController
from .wait_policy import WaitPolicy, WaitSettings


@dataclass
class Toolkit:
    session: BrowserSession
    waits: WaitPolicy
    elements: ElementActions
    selects: SelectionController
    frames: ContextSwitcher
    nav: NavigationFacade

    @classmethod
    def for_session(
        cls,
        session: BrowserSession,
        settings: Optional[WaitSettings] = None,
        waits: Optional[WaitPolicy] = None,
    ) -> "Toolkit":
        """
        Wire every facade around one session and one WaitPolicy.

        Args:
            session: The scenario's browsing session
            settings: Wait settings (defaults to config)
            waits: Pre-built WaitPolicy (overrides ``settings``)
        """
        waits = waits or WaitPolicy(session, settings)
        return cls(
            session=session,
            waits=waits,
            elements=ElementActions(session, waits),
            selects=SelectionController(waits),
            frames=ContextSwitcher(session, waits),
            nav=NavigationFacade(session, waits),
        )


__all__ = ["Toolkit"]
