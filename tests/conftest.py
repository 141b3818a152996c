"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Generator

import pytest
import yaml

from clippie.config.paths import AppPaths
from clippie.database import ClipboardDB
from clippie.services.database_service import DatabaseService
from fakes.clipboard import FakeClipboard, FakePauseFlag


@pytest.fixture
def temp_db() -> Generator[ClipboardDB, None, None]:
    """Create a temporary in-memory database for testing."""
    db = ClipboardDB(":memory:")
    yield db
    db.close()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "clipboard.db"


@pytest.fixture
def db_service() -> Generator[DatabaseService, None, None]:
    service = DatabaseService(":memory:")
    yield service
    service.close()


@pytest.fixture
def populated_db(db_service: DatabaseService) -> DatabaseService:
    """Three entries, "gamma" most recently copied."""
    db_service.insert_or_touch("alpha", timestamp="2026-01-01T10:00:00.000000+00:00")
    db_service.insert_or_touch("beta", timestamp="2026-01-01T11:00:00.000000+00:00")
    db_service.insert_or_touch("gamma", timestamp="2026-01-01T12:00:00.000000+00:00")
    return db_service


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def pause_flag() -> FakePauseFlag:
    return FakePauseFlag()


@pytest.fixture
def app_paths(tmp_path: Path) -> AppPaths:
    return AppPaths(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture
def temp_settings_file(tmp_path: Path) -> Path:
    """Create a temporary settings file."""
    settings_path = tmp_path / "config.yml"
    config_data = {
        "daemon": {"poll_interval": 1.0, "stability_window": 3.0},
        "browser": {"refresh_interval": 5.0},
        "logging": {"level": "debug"},
    }
    settings_path.write_text(yaml.dump(config_data))
    return settings_path


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch) -> AppPaths:
    """Point XDG locations at tmp_path and drop any database override."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CLIPPIE_DB_PATH", raising=False)
    return AppPaths.default()
