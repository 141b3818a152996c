"""Tests for the pause marker."""

from pathlib import Path

import pytest


def test_pause_and_resume(tmp_path: Path):
    from clippie.services.pause_service import PauseService

    service = PauseService(tmp_path / "data" / "paused")
    assert service.is_paused() is False

    service.pause()
    assert service.is_paused() is True

    service.resume()
    assert service.is_paused() is False


def test_pause_and_resume_are_idempotent(tmp_path: Path):
    from clippie.services.pause_service import PauseService

    service = PauseService(tmp_path / "paused")

    service.pause()
    service.pause()
    assert service.is_paused() is True

    service.resume()
    service.resume()
    assert service.is_paused() is False


def test_unwritable_marker_raises_config_error(tmp_path: Path):
    from clippie.exceptions import ConfigError
    from clippie.services.pause_service import PauseService

    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(ConfigError):
        PauseService(blocker / "paused").pause()
