#!/usr/bin/env python3
"""
Clippie Main Entry Point
Parses the command line and dispatches to the browser, daemon and
maintenance commands
"""
import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt

from clippie import __version__
from clippie.config.paths import AppPaths, normalize_db_path
from clippie.exceptions import ClippieError, ValidationError
from clippie.server.install_service import InstallService
from clippie.server.process_service import DaemonProcessService
from clippie.services.database_service import DatabaseService
from clippie.services.pause_service import PauseService
from clippie.settings import SettingsManager
from clippie.ui.utils.formatting import format_size

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("clippie.CLI")

console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clippie",
        description="A fast, keyboard-driven clipboard history manager",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser("tui", help="Launch the clipboard history browser")
    subparsers.add_parser("setup", help="Configure database location")
    subparsers.add_parser("start", help="Start the clipboard monitoring daemon")
    subparsers.add_parser("stop", help="Stop the clipboard monitoring daemon")
    subparsers.add_parser("status", help="Show daemon status")
    subparsers.add_parser("install", help="Install the daemon as a user service")
    subparsers.add_parser("pause", help="Pause clipboard monitoring")
    subparsers.add_parser("resume", help="Resume clipboard monitoring")

    clear = subparsers.add_parser("clear", help="Clear clipboard history")
    scope = clear.add_mutually_exclusive_group()
    scope.add_argument("--all", action="store_true", help="Delete every entry")
    scope.add_argument("--days", type=int, help="Delete entries first copied more than N days ago")
    clear.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    db = subparsers.add_parser("db", help="Switch the database location")
    db.add_argument("path", help="New database file (absolute, ~/..., or relative to home)")

    # Hidden: the process started by 'start' and by the service manager
    subparsers.add_parser("daemon")
    return parser


def configure_logging(level: str = "INFO", filename: Optional[str] = None):
    """Configure root logging once per process"""
    logging.basicConfig(level=level, format=LOG_FORMAT, filename=filename)


def _open_database(paths: AppPaths, settings: SettingsManager) -> DatabaseService:
    return DatabaseService(paths.resolve_db_path(settings.db_path))


def cmd_tui(paths: AppPaths, settings: SettingsManager) -> int:
    from clippie.services.clipboard_service import ClipboardService
    from clippie.ui.application.browser_app import BrowserApp

    paths.data_dir.mkdir(parents=True, exist_ok=True)
    configure_logging(settings.log_level, filename=str(paths.browser_log_path))

    db_service = _open_database(paths, settings)
    try:
        app = BrowserApp(
            db_service,
            ClipboardService(),
            refresh_interval=settings.refresh_interval,
            input_timeout=settings.input_timeout,
        )
        return app.run()
    finally:
        db_service.close()


def cmd_daemon(paths: AppPaths, settings: SettingsManager) -> int:
    from clippie.server.daemon import ClippieDaemon

    configure_logging(settings.log_level)
    ClippieDaemon(paths, settings).start()
    return 0


def cmd_setup(paths: AppPaths, settings: SettingsManager) -> int:
    console.print("\n[bold]🔧 Clippie Setup Wizard[/bold]\n")

    current = paths.resolve_db_path(settings.db_path)
    answer = Prompt.ask("Database location", default=str(current), console=console)
    db_path = normalize_db_path(answer)

    DatabaseService(db_path).close()
    settings.update_settings(**{"database.path": str(db_path)})
    console.print(f"[green]✓[/green] Database configured at {db_path}")

    if Confirm.ask("\nInstall the clipboard monitoring daemon?", default=False, console=console):
        cmd_install(paths, settings)

    console.print("\nSetup complete! 🎉")
    console.print("\nNext steps:")
    console.print("  1. Run 'clippie start' to start the daemon")
    console.print("  2. Run 'clippie' to launch the browser\n")
    return 0


def _process_service(paths: AppPaths) -> DaemonProcessService:
    return DaemonProcessService(paths.pid_path, paths.daemon_log_path)


def cmd_start(paths: AppPaths, settings: SettingsManager) -> int:
    service = _process_service(paths)
    running = service.running_pid()
    if running:
        console.print(f"Daemon is already running (PID {running})")
        return 0
    pid = service.start()
    if pid is None:
        console.print(f"[red]✗ Daemon failed to start.[/red] See {paths.daemon_log_path}")
        return 1
    console.print(f"[green]✓[/green] Daemon started (PID {pid})")
    return 0


def cmd_stop(paths: AppPaths, settings: SettingsManager) -> int:
    service = _process_service(paths)
    pid = service.running_pid()
    if pid is None:
        console.print("Daemon is not running")
        return 0
    if not service.stop():
        console.print(f"[red]✗ Daemon (PID {pid}) did not stop[/red]")
        return 1
    console.print("[green]✓[/green] Daemon stopped")
    return 0


def cmd_status(paths: AppPaths, settings: SettingsManager) -> int:
    if not settings.exists():
        console.print("Clippie is not configured.")
        console.print("Run 'clippie setup' to get started.\n")
        return 0

    db_path = paths.resolve_db_path(settings.db_path)
    pid = _process_service(paths).running_pid()
    paused = PauseService(paths.pause_marker_path).is_paused()

    console.print("\n[bold]Clipboard History Manager Status[/bold]")
    console.print("================================\n")
    if pid:
        daemon_state = f"[green]✓ Running[/green] (PID {pid})"
    else:
        daemon_state = "[red]✗ Stopped[/red]"
    console.print(f"Daemon Status:   {daemon_state}")
    console.print(f"Monitoring:      {'Paused' if paused else 'Active'}")

    if db_path.exists():
        db_service = DatabaseService(db_path)
        try:
            console.print(f"Entries:         {db_service.count()}")
            console.print(f"Database Size:   {format_size(db_service.size_bytes())}")
        finally:
            db_service.close()

    console.print(f"Database Path:   {db_path}\n")
    return 0


def cmd_install(paths: AppPaths, settings: SettingsManager) -> int:
    service_path = InstallService(Path.home(), paths.daemon_log_path).install()
    console.print(f"[green]✓[/green] Service installed at {service_path}")
    return 0


def cmd_pause(paths: AppPaths, settings: SettingsManager) -> int:
    PauseService(paths.pause_marker_path).pause()
    console.print("Clipboard monitoring paused. Run 'clippie resume' to continue.")
    return 0


def cmd_resume(paths: AppPaths, settings: SettingsManager) -> int:
    PauseService(paths.pause_marker_path).resume()
    console.print("Clipboard monitoring resumed.")
    return 0


def cmd_clear(paths: AppPaths, settings: SettingsManager, args: argparse.Namespace) -> int:
    if args.all:
        if not args.yes and not Confirm.ask(
            "Delete ALL clipboard history? This cannot be undone", default=False, console=console
        ):
            console.print("Cancelled")
            return 0
        db_service = _open_database(paths, settings)
        try:
            deleted = db_service.clear_all()
        finally:
            db_service.close()
        console.print(f"[green]✓[/green] Deleted all {deleted} entries")
        return 0

    days = args.days if args.days is not None else settings.clear_older_than_days
    if days <= 0:
        raise ValidationError(f"--days must be a positive number, got {days}")

    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    db_service = _open_database(paths, settings)
    try:
        deleted = db_service.delete_older_than(cutoff)
    finally:
        db_service.close()
    console.print(f"[green]✓[/green] Deleted {deleted} entries older than {days} days")
    return 0


def cmd_db(paths: AppPaths, settings: SettingsManager, args: argparse.Namespace) -> int:
    db_path = normalize_db_path(args.path)
    DatabaseService(db_path).close()
    settings.update_settings(**{"database.path": str(db_path)})

    console.print(f"[green]✓[/green] Database path switched to: {db_path}")
    console.print("\nYou may need to restart the daemon for changes to take effect.")
    console.print("Run 'clippie stop' and then 'clippie start'.\n")
    return 0


COMMANDS = {
    "tui": cmd_tui,
    "daemon": cmd_daemon,
    "setup": cmd_setup,
    "start": cmd_start,
    "stop": cmd_stop,
    "status": cmd_status,
    "install": cmd_install,
    "pause": cmd_pause,
    "resume": cmd_resume,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command or "tui"

    try:
        paths = AppPaths.default()
        settings = SettingsManager(paths.config_path)
        if command not in ("tui", "daemon"):
            configure_logging("WARNING")

        if command == "clear":
            return cmd_clear(paths, settings, args)
        if command == "db":
            return cmd_db(paths, settings, args)
        return COMMANDS[command](paths, settings)
    except ClippieError as e:
        logger.error(f"{command} failed: {e}")
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
