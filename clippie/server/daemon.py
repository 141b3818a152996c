#!/usr/bin/env python3
"""
Clippie Daemon Entry Point
Initializes all services with dependency injection and runs the monitor loop
"""
import logging
import os
import signal
import sys
from typing import Optional

from clippie.config.paths import AppPaths
from clippie.core.protocols import ClipboardPort
from clippie.server.monitor_service import MonitorService
from clippie.server.process_service import DaemonProcessService
from clippie.services.clipboard_service import ClipboardService
from clippie.services.database_service import DatabaseService
from clippie.services.pause_service import PauseService
from clippie.settings import SettingsManager

logger = logging.getLogger(__name__)


class ClippieDaemon:
    """Background recorder process with dependency injection"""

    def __init__(
        self,
        paths: AppPaths,
        settings_manager: SettingsManager,
        clipboard: Optional[ClipboardPort] = None,
    ):
        """
        Initialize daemon with all services

        Raises:
            StorageError: the history database cannot be opened
        """
        logger.info("Initializing services...")
        self.paths = paths
        self.settings = settings_manager

        db_path = paths.resolve_db_path(settings_manager.db_path)
        self.database_service = DatabaseService(db_path)
        self.pause_service = PauseService(paths.pause_marker_path)
        self.clipboard_service = clipboard or ClipboardService()
        self.process_service = DaemonProcessService(paths.pid_path, paths.daemon_log_path)
        self.monitor_service = MonitorService(
            self.database_service,
            self.clipboard_service,
            self.pause_service,
            poll_interval=settings_manager.poll_interval,
            stability_window=settings_manager.stability_window,
            min_content_length=settings_manager.min_content_length,
        )

        self._stopped = False
        logger.info(f"All services initialized (database: {db_path})")

    def shutdown(self):
        """Release the pid file and the database connection"""
        if self._stopped:
            return
        self._stopped = True
        self.process_service.remove_pid(os.getpid())
        try:
            self.database_service.close()
        except Exception as e:
            logger.error(f"Error closing database: {e}")
        logger.info("Daemon shutdown complete")

    def signal_handler(self, signum, frame):
        """Handle shutdown signals; cleanup runs in start() once the stack unwinds"""
        logger.info(f"Received signal {signum}, shutting down...")
        # The signal may interrupt a store call holding the service lock
        sys.exit(0)

    def start(self):
        """Run the daemon until it receives SIGTERM or SIGINT"""
        signal.signal(signal.SIGTERM, self.signal_handler)
        signal.signal(signal.SIGINT, self.signal_handler)

        self.process_service.write_pid(os.getpid())
        logger.info(f"Daemon running with PID: {os.getpid()}")
        try:
            self.monitor_service.run_forever()
        finally:
            self.shutdown()
