#!/usr/bin/env python3
"""
Install Service - Registers the daemon with the user's service manager

Linux gets a systemd user unit, macOS a launchd agent.
"""
import logging
import plistlib
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from clippie.exceptions import ConfigError

logger = logging.getLogger(__name__)

SERVICE_NAME = "clippie"
LAUNCHD_LABEL = "no.bechsor.clippie-daemon"


class InstallService:
    """Writes and loads the background service definition"""

    def __init__(
        self,
        home: Path,
        log_path: Path,
        platform: str = sys.platform,
        command: Optional[List[str]] = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.home = Path(home)
        self.log_path = Path(log_path)
        self.platform = platform
        self.command = command or [sys.executable, "-m", "clippie", "daemon"]
        self.runner = runner

    @property
    def is_macos(self) -> bool:
        return self.platform == "darwin"

    def service_path(self) -> Path:
        if self.is_macos:
            return self.home / "Library" / "LaunchAgents" / f"{LAUNCHD_LABEL}.plist"
        if self.platform.startswith("linux"):
            return self.home / ".config" / "systemd" / "user" / f"{SERVICE_NAME}.service"
        raise ConfigError(f"Background service installation is not supported on {self.platform}")

    def render(self) -> str:
        """Service definition text for the current platform"""
        if self.is_macos:
            return self._render_launchd_plist()
        return self._render_systemd_unit()

    def _render_systemd_unit(self) -> str:
        exec_cmd = shlex.join(self.command)
        return f"""[Unit]
Description=Clippie clipboard history daemon
After=graphical-session.target

[Service]
Type=simple
ExecStart={exec_cmd}
Restart=on-failure
RestartSec=5

[Install]
WantedBy=default.target
"""

    def _render_launchd_plist(self) -> str:
        agent = {
            "Label": LAUNCHD_LABEL,
            "ProgramArguments": list(self.command),
            "RunAtLoad": True,
            "KeepAlive": {"SuccessfulExit": False},
            "StandardOutPath": str(self.log_path),
            "StandardErrorPath": str(self.log_path),
        }
        return plistlib.dumps(agent).decode("utf-8")

    def _activation_commands(self, path: Path) -> List[List[str]]:
        if self.is_macos:
            return [["launchctl", "load", str(path)]]
        return [
            ["systemctl", "--user", "daemon-reload"],
            ["systemctl", "--user", "enable", "--now", f"{SERVICE_NAME}.service"],
        ]

    def install(self) -> Path:
        """
        Write the service definition and register it

        Returns:
            Path of the written service file

        Raises:
            ConfigError: unsupported platform or the file cannot be written
        """
        path = self.service_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.render())
        except OSError as e:
            raise ConfigError(f"Cannot write service file {path}", e) from e
        logger.info(f"✓ Created service definition at {path}")

        for cmd in self._activation_commands(path):
            try:
                result = self.runner(cmd, capture_output=True, text=True)
            except FileNotFoundError:
                logger.warning(f"'{cmd[0]}' not found; load {path} manually")
                break
            if result.returncode != 0:
                logger.warning(f"'{' '.join(cmd)}' failed: {result.stderr.strip()}")
                break
        return path
