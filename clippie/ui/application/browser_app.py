"""Interactive history browser application."""

import logging
from typing import Optional

from rich.console import Console
from rich.live import Live

from clippie.core.protocols import ClipboardPort, HistoryStorePort
from clippie.exceptions import ClipboardAccessError, StorageError
from clippie.ui.managers.browser_state import BrowserState
from clippie.ui.managers.event_dispatcher import EventDispatcher
from clippie.ui.managers.viewport_manager import ViewportManager
from clippie.ui.services.event_source import TerminalEventSource
from clippie.ui.windows.browser_window import BrowserWindow

logger = logging.getLogger("clippie.UI")


class BrowserApp:
    """Main application: event source → dispatcher → state → window"""

    def __init__(
        self,
        store: HistoryStorePort,
        clipboard: ClipboardPort,
        refresh_interval: float = 2.0,
        input_timeout: float = 0.1,
        console: Optional[Console] = None,
        event_source: Optional[TerminalEventSource] = None,
    ):
        # The screen is drawn on stderr; stdout only carries the committed value
        self.console = console or Console(stderr=True)
        self.clipboard = clipboard
        self.state = BrowserState(
            store,
            viewport=ViewportManager(self.console.size.height),
            refresh_interval=refresh_interval,
        )
        self.dispatcher = EventDispatcher(self.state)
        self.window = BrowserWindow(self.state)
        self.event_source = event_source or TerminalEventSource(
            timeout=input_timeout,
            size_provider=lambda: tuple(self.console.size),
        )

    def run(self) -> int:
        """
        Run the browser until quit or commit

        Returns:
            Process exit code
        """
        try:
            self.state.load()
        except StorageError as e:
            logger.error(f"Failed to load history: {e}")
            self.console.print(f"[red]Cannot read clipboard history:[/red] {e}")
            return 1

        self._event_loop()
        self._hand_over_selection()
        return 0

    def _event_loop(self) -> None:
        self.event_source.start()
        try:
            with Live(
                self.window.render(self.console.width),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                while True:
                    event = self.event_source.get()
                    if self.dispatcher.handle(event):
                        break
                    live.update(self.window.render(self.console.width), refresh=True)
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self.event_source.stop()
        logger.info("Browser session ended")

    def _hand_over_selection(self) -> None:
        content = self.state.selected_content
        if content is None:
            return
        try:
            self.clipboard.write(content)
        except ClipboardAccessError as e:
            logger.error(f"Failed to copy selection: {e}")
            self.console.print(f"[yellow]Could not copy to clipboard:[/yellow] {e}")
        # Printed for shell integration, e.g. $(clippie)
        print(content)
