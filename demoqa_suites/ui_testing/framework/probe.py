"""
Probe outcomes.

Probe operations (``is_*``, ``is_on_url``, ``is_option_present``) answer a
yes/no question about the page. A "no" is an expected outcome, so they
return a ``ProbeResult`` instead of raising. The result is truthy iff the
answer is yes, and keeps the diagnostics that explain a "no".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of a boolean probe.

    Attributes:
        ok: The probe's answer
        probe: Probe name, e.g. "is_clickable"
        reason: Short explanation when ``ok`` is False
        details: Diagnostic values (expected/actual, elapsed, ...)
    """
    ok: bool
    probe: str
    reason: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def yes(cls, probe: str, **details: Any) -> "ProbeResult":
        return cls(ok=True, probe=probe, details=details)

    @classmethod
    def no(cls, probe: str, reason: str, **details: Any) -> "ProbeResult":
        return cls(ok=False, probe=probe, reason=reason, details=details)


__all__ = ["ProbeResult"]
