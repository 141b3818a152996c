"""Application paths configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from clippie.exceptions import ConfigError, ValidationError

DB_PATH_ENV = "CLIPPIE_DB_PATH"


@dataclass(frozen=True)
class AppPaths:
    config_dir: Path
    data_dir: Path

    @classmethod
    def default(cls, environ: Optional[Mapping[str, str]] = None) -> "AppPaths":
        """Resolve XDG locations, falling back to ~/.config and ~/.local/share."""
        environ = os.environ if environ is None else environ

        config_home = environ.get("XDG_CONFIG_HOME")
        data_home = environ.get("XDG_DATA_HOME")
        if not config_home or not data_home:
            home = _home_dir()
            config_home = config_home or str(home / ".config")
            data_home = data_home or str(home / ".local" / "share")

        return cls(
            config_dir=Path(config_home) / "clippie",
            data_dir=Path(data_home) / "clippie",
        )

    @property
    def config_path(self) -> Path:
        return self.config_dir / "config.yml"

    @property
    def default_db_path(self) -> Path:
        return self.data_dir / "clipboard.db"

    @property
    def pause_marker_path(self) -> Path:
        return self.data_dir / "paused"

    @property
    def pid_path(self) -> Path:
        return self.data_dir / "daemon.pid"

    @property
    def daemon_log_path(self) -> Path:
        return self.data_dir / "daemon.log"

    @property
    def browser_log_path(self) -> Path:
        return self.data_dir / "browser.log"

    def resolve_db_path(
        self,
        configured: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Path:
        """Database path priority: environment variable, config file, default."""
        environ = os.environ if environ is None else environ
        override = environ.get(DB_PATH_ENV)
        if override:
            return Path(override).expanduser()
        if configured:
            return Path(configured).expanduser()
        return self.default_db_path


def _home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError as e:
        raise ConfigError("Could not determine home directory", e) from e


def normalize_db_path(raw: str, home: Optional[Path] = None) -> Path:
    """
    Turn user input into an absolute database path.

    Absolute paths are kept, "~/x" and bare relative paths are resolved
    against the home directory.
    """
    value = (raw or "").strip()
    if not value:
        raise ValidationError("Database path must not be empty")

    if home is None:
        home = _home_dir()

    if value.startswith("~/") or value == "~":
        path = home / value[2:]
    elif os.path.isabs(value):
        path = Path(value)
    else:
        path = home / value

    if value.endswith(("/", os.sep)) or path.is_dir():
        raise ValidationError(f"Database path must be a file, not a directory: {path}")
    return path
