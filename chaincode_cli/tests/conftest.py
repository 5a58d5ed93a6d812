"""Shared test fixtures and utilities."""

import io
import json
import pytest
from pathlib import Path
from unittest.mock import patch
from typing import Any, Callable, Dict, Generator, List

from ..config import get_config
from ..context import InitContext


@pytest.fixture(autouse=True)
def block_registry_api() -> Generator[None, None, None]:
    """Block any npm registry call during testing.

    Tests that exercise the registry client patch `requests.get` themselves.
    """

    def raise_on_registry_call(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("The npm registry should not be called during testing!")

    with patch("requests.get", side_effect=raise_on_registry_call):
        yield


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def make_ctx(project_dir: Path) -> Callable[..., InitContext]:
    """Build a context for the project directory with in-memory streams."""

    def _make(**kwargs: Any) -> InitContext:
        kwargs.setdefault("config", get_config())
        kwargs.setdefault("stdin", io.StringIO())
        kwargs.setdefault("stdout", io.StringIO())
        return InitContext(target_path=project_dir, **kwargs)

    return _make


@pytest.fixture
def write_manifest(project_dir: Path) -> Callable[[Dict[str, Any]], Path]:
    def _write(data: Dict[str, Any]) -> Path:
        path = project_dir / "package.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


class FakeLookup:
    """Version lookup that records the packages it was asked about."""

    def __init__(self, versions: Dict[str, Any] | None = None, default: str = "1.2.3"):
        self.versions = versions or {}
        self.default = default
        self.calls: List[str] = []

    async def __call__(self, name: str) -> str:
        self.calls.append(name)
        version = self.versions.get(name, self.default)
        if isinstance(version, Exception):
            raise version
        return version


@pytest.fixture
def lookup() -> FakeLookup:
    return FakeLookup()
