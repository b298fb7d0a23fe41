from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes import FakeExecutor


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty directory with no user config visible."""
    start = tmp_path / "start"
    start.mkdir()
    monkeypatch.chdir(start)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.delenv("REPOSTARTER_CONFIG", raising=False)
    return start


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()
