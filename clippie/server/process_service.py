#!/usr/bin/env python3
"""
Process Service - Starts, stops and inspects the background daemon
"""
import logging
import os
import signal
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class DaemonProcessService:
    """Manages the daemon process through a pid file"""

    def __init__(self, pid_path: Path, log_path: Path, command: Optional[List[str]] = None):
        self.pid_path = Path(pid_path)
        self.log_path = Path(log_path)
        self.command = command or [sys.executable, "-m", "clippie", "daemon"]

    def read_pid(self) -> Optional[int]:
        try:
            return int(self.pid_path.read_text().strip())
        except FileNotFoundError:
            return None
        except ValueError:
            logger.warning(f"Ignoring malformed pid file {self.pid_path}")
            return None

    def write_pid(self, pid: int) -> None:
        self.pid_path.parent.mkdir(parents=True, exist_ok=True)
        self.pid_path.write_text(f"{pid}\n")

    def remove_pid(self, pid: Optional[int] = None) -> None:
        """Remove the pid file, only if it still names `pid` when given"""
        if pid is not None and self.read_pid() != pid:
            return
        self.pid_path.unlink(missing_ok=True)

    @staticmethod
    def is_alive(pid: int) -> bool:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists but owned by someone else
            return True
        return True

    def running_pid(self) -> Optional[int]:
        """PID of the running daemon; a stale pid file is cleaned up"""
        pid = self.read_pid()
        if pid is None:
            return None
        if self.is_alive(pid):
            return pid
        logger.info(f"Removing stale pid file for PID {pid}")
        self.remove_pid(pid)
        return None

    def start(self, timeout: float = 5.0) -> Optional[int]:
        """
        Start the daemon detached from this terminal

        Returns:
            PID of the running daemon, or None if it failed to come up
        """
        existing = self.running_pid()
        if existing:
            logger.info(f"Daemon already running with PID: {existing}")
            return existing

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.log_path, 'a') as log_file:
            process = subprocess.Popen(
                self.command,
                stdout=log_file,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                start_new_session=True  # Detach from parent
            )
        logger.info(f"Daemon process started with PID: {process.pid}")

        # The daemon writes its own pid file once it is initialized
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if process.poll() is not None:
                logger.error(f"Daemon exited early with code {process.returncode}")
                return None
            if self.read_pid() == process.pid:
                return process.pid
            time.sleep(0.1)

        logger.error("Daemon failed to start within timeout")
        return None

    def stop(self, timeout: float = 5.0) -> bool:
        """
        Terminate the daemon

        Returns:
            True if a daemon was running and has exited
        """
        pid = self.running_pid()
        if pid is None:
            return False

        try:
            os.kill(pid, signal.SIGTERM)
        except ProcessLookupError:
            self.remove_pid(pid)
            return True

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if not self.is_alive(pid):
                self.remove_pid(pid)
                logger.info(f"Daemon (PID {pid}) stopped")
                return True
            time.sleep(0.1)

        logger.error(f"Daemon (PID {pid}) did not exit within {timeout}s")
        return False
