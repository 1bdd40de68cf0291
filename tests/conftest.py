"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
import yaml


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the directory containing static test fixtures."""

    return Path(__file__).parent / "fixtures"


@pytest.fixture
def example_config(fixtures_dir: Path) -> Path:
    """Return the path to the general example configuration."""

    return fixtures_dir / "cfg_example.yaml"


@pytest.fixture
def region_config(fixtures_dir: Path) -> Path:
    """Return the path to the per-region example configuration."""

    return fixtures_dir / "cfg_example2.yaml"


@pytest.fixture
def write_yaml():
    """Return a helper that dumps a mapping to a YAML file."""

    def _write(path: Path, data) -> Path:
        path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
        return path

    return _write


class FakeWatcher:
    """Watcher test double that records start/stop and fires on demand."""

    instances: list[FakeWatcher] = []

    def __init__(self, path: Path, callback, interval: float):
        self.path = path
        self.callback = callback
        self.interval = interval
        self.started = False
        self.stopped = False
        FakeWatcher.instances.append(self)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def fire(self) -> None:
        self.callback()


@pytest.fixture
def fake_watcher():
    """Return the FakeWatcher class with a clean instance registry."""

    FakeWatcher.instances = []
    yield FakeWatcher
    FakeWatcher.instances = []
