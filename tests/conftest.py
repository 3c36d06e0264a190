"""Pytest setup shared by every test module.

Puts the repository root on ``sys.path`` so ``import lazyhistory`` works from
the console script, and points the config file at a per-test temp path so a
developer's own ``config.json`` never leaks into assertions.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config" / "config.json"
    monkeypatch.setattr("lazyhistory.runtime.config.CONFIG_PATH", config_path)
    return config_path
