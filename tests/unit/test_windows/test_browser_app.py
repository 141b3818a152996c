"""Tests for the browser application loop."""

import io

from rich.console import Console

from clippie.exceptions import StorageError
from clippie.ui.application.browser_app import BrowserApp
from clippie.ui.domain.events import Key, Tick
from fakes.clipboard import FakeClipboard


class ScriptedEvents:
    """Event source replaying a fixed list of events."""

    def __init__(self, *events):
        self.events = list(events)
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def get(self):
        return self.events.pop(0)


def make_app(store, clipboard, *events):
    console = Console(file=io.StringIO(), width=80, height=12)
    source = ScriptedEvents(*events)
    return BrowserApp(store, clipboard, console=console, event_source=source), source


def test_commit_copies_and_prints_selection(populated_db, capsys):
    clipboard = FakeClipboard()
    app, source = make_app(populated_db, clipboard, Tick(), Key("j"), Key("enter"))

    assert app.run() == 0

    assert clipboard.writes == ["beta"]
    assert capsys.readouterr().out == "beta\n"
    assert source.started and source.stopped


def test_quit_leaves_clipboard_alone(populated_db, capsys):
    clipboard = FakeClipboard()
    app, source = make_app(populated_db, clipboard, Key("q"))

    assert app.run() == 0

    assert clipboard.writes == []
    assert capsys.readouterr().out == ""
    assert source.stopped


def test_clipboard_failure_still_prints_selection(populated_db, capsys):
    clipboard = FakeClipboard()
    clipboard.fail = True
    app, _ = make_app(populated_db, clipboard, Key("enter"))

    assert app.run() == 0
    assert capsys.readouterr().out == "gamma\n"


def test_unreadable_store_exits_with_error():
    class BrokenStore:
        def list_all(self):
            raise StorageError("cannot read")

    app, source = make_app(BrokenStore(), FakeClipboard())

    assert app.run() == 1
    assert source.started is False


def test_event_source_follows_the_drawing_console(populated_db):
    console = Console(file=io.StringIO(), width=132, height=50)

    app = BrowserApp(populated_db, FakeClipboard(), console=console)

    assert app.event_source.size_provider() == (132, 50)
    assert app.state.viewport.height == 46
