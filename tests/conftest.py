"""Shared pytest fixtures for the UDBuildings test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from udbuildings.config import Settings
from udbuildings.store import BuildingStore


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in an isolated tmp directory; no seed file exists yet."""
    s = Settings(
        db_path=str(tmp_path / "data" / "udbuildings.db"),
        seed_path=str(tmp_path / "data" / "UDBuildingPositions"),
        log_dir=str(tmp_path / "logs"),
    )
    s.ensure_dirs()
    return s


@pytest.fixture
def write_seed(settings: Settings):
    """Write the given lines to the seed file configured in ``settings``."""
    def _write(*lines: str) -> Path:
        path = Path(settings.seed_path)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def store(settings: Settings):
    """An open, empty store (no seed file)."""
    s = BuildingStore(settings).open()
    yield s
    if s.is_open:
        s.close()
