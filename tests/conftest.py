"""Pytest fixtures for versionpatch tests."""

import json
from pathlib import Path
from typing import Callable, Generator

import pytest


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory for testing."""
    project = tmp_path / "test_project"
    project.mkdir()
    yield project


@pytest.fixture
def write_package(temp_project: Path) -> Callable[..., Path]:
    """Return a helper writing a package.json with the given version."""

    def _write(version: str = "1.2.3", name: str = "package.json", **fields: object) -> Path:
        path = temp_project / name
        data = {
            "name": "test-package",
            "version": version,
            "description": "A test package",
            "author": "Jane Doe",
            "main": "index.js",
        }
        data.update(fields)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def package_json(write_package: Callable[..., Path]) -> Path:
    """Create a package.json at version 1.2.3."""
    return write_package("1.2.3")


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
