"""Pytest configuration shared by the analytics tests.

Makes the workspace ``packages/`` directory importable, clears ``DA_*``
analyzer overrides so a developer's environment cannot change thresholds
under test, resets the package logger around every test, and exposes the
pinned reference instant as a fixture.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root on sys.path so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from dashboard_analytics import logging_setup  # noqa: E402

from tests.helpers.factories import NOW  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("DA_") or key == "DASHBOARD_ANALYTICS_LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _isolate_package_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # The CLI root callback configures the package logger once per process.
    pkg = logging.getLogger(logging_setup.PACKAGE_LOGGER)
    saved = (list(pkg.handlers), pkg.level, pkg.propagate)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    pkg.handlers[:] = saved[0]
    pkg.setLevel(saved[1])
    pkg.propagate = saved[2]


@pytest.fixture
def now() -> datetime:
    return NOW
