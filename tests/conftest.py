"""Root pytest fixtures for witcher tests."""

from __future__ import annotations

import pytest

from witcher.config import WITCHER_COLOR, WITCHER_FULLSTACK, RenderOptions


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test without witcher environment overrides."""
    monkeypatch.delenv(WITCHER_COLOR, raising=False)
    monkeypatch.delenv(WITCHER_FULLSTACK, raising=False)


@pytest.fixture
def plain() -> RenderOptions:
    """Colorless, filtered render options."""
    return RenderOptions.plain()


@pytest.fixture
def fullstack() -> RenderOptions:
    """Colorless, unfiltered render options."""
    return RenderOptions(color=False, fullstack=True)
