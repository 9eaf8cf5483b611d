"""
Repository-level pytest configuration.

Why this exists:
  - Provide defaults for local runs (the public demoqa.com site)
  - Make the repo "plug-and-play" for reviewers cloning it
  - Keep behavior explicit and discoverable

Every value can be overridden from the shell or CI environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "UI_BASE_URL": "https://demoqa.com",
        "BROWSER_TYPE": "chromium",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
