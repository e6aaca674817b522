"""Shared pytest fixtures for the findup test-suite."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from findup import settings  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> Iterator[Path]:
    """Point the per-user settings file at an empty temp directory."""
    user_path = tmp_path_factory.mktemp("user-config") / "findup" / "settings.toml"

    def fake_user_settings_path() -> Path:
        return user_path

    monkeypatch.delenv(settings.CONFIG_ENV, raising=False)
    monkeypatch.setattr(settings, "user_settings_path", fake_user_settings_path)
    yield user_path


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create ``a/b/c`` below a temp directory and return the temp root."""
    (tmp_path / "a" / "b" / "c").mkdir(parents=True)
    return tmp_path
