"""Shared pytest fixtures for the ycsb-tracer test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from packages.tracer_shared.config import TracerSettings


@pytest.fixture(autouse=True)
def _isolate_settings_sources(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep developer environment and home config out of resolved settings."""
    for name in list(os.environ):
        if name.startswith("TRACER_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(TracerSettings, "_config_path", tmp_path / "missing.yaml")
