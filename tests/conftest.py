"""Shared test fixtures."""

from pathlib import Path

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply 'smoke' marker to any test not marked 'regression'."""
    smoke = pytest.mark.smoke
    for item in items:
        if not any(m.name == "regression" for m in item.iter_markers()):
            item.add_marker(smoke)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep STACKSCOUT_* variables from the developer's shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("STACKSCOUT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def write_file():
    """Create a file (and its parents) under a root, returning its path."""

    def _write(root: Path, relative: str, content: str = "") -> Path:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    return _write
