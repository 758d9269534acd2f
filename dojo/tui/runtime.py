"""Textual host for the orchestrator model.

The host owns no orchestration state. It turns terminal events into
messages, runs commands in thread workers and feeds their results back into
``AppModel.update`` on the app's event loop, one message at a time.
"""

from __future__ import annotations

from functools import partial

from instrukt_ai_logging import get_logger
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Static

from dojo.tui.app import AppModel
from dojo.tui.commands import Cmd, Emit, flatten
from dojo.tui.messages import KeyPressed, Msg, WindowResized
from dojo.tui.types import FocusedPane

logger = get_logger(__name__)


class Pane(Static):
    """Bordered text region; the focused pane gets an accent border."""

    DEFAULT_CSS = """
    Pane {
        border: round $panel;
        height: 100%;
        padding: 0 1;
    }
    Pane.focused {
        border: round $accent;
    }
    """


class DojoApp(App[None]):
    """Two-pane workspace orchestrator."""

    CSS = """
    #panes {
        height: 1fr;
    }
    #diff {
        width: 1fr;
    }
    #confirm {
        dock: bottom;
        height: 3;
        border: heavy $warning;
        content-align: center middle;
        display: none;
    }
    #status {
        dock: bottom;
        height: 1;
        padding: 0 1;
    }
    """

    # Textual binds these keys itself; priority bindings route them to the model first.
    BINDINGS = [
        Binding("escape", "forward_key('escape')", show=False, priority=True),
        Binding("tab", "forward_key('tab')", show=False, priority=True),
        Binding("ctrl+c", "forward_key('ctrl+c')", show=False, priority=True),
    ]

    def __init__(self, model: AppModel) -> None:
        super().__init__()
        self.model = model

    def compose(self) -> ComposeResult:
        with Horizontal(id="panes"):
            yield Pane(id="list")
            yield Pane(id="diff")
        yield Static(id="confirm")
        yield Static(id="status")

    def on_mount(self) -> None:
        self.model.update(WindowResized(width=self.size.width, height=self.size.height))
        self._run(self.model.init())
        self._refresh_view()

    # --- Input ---

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.deliver(KeyPressed(key=event.key, character=event.character))

    def action_forward_key(self, key: str) -> None:
        self.deliver(KeyPressed(key=key))

    def on_resize(self, event: events.Resize) -> None:
        self.deliver(WindowResized(width=event.size.width, height=event.size.height))

    # --- Update loop ---

    def deliver(self, msg: Msg) -> None:
        """Apply one message to the model and schedule the resulting commands."""
        cmd = self.model.update(msg)
        self._run(cmd)
        self._refresh_view()
        if self.model.quitting:
            self.exit()

    def _run(self, cmd: Cmd | None) -> None:
        for command in flatten(cmd):
            if isinstance(command, Emit):
                self.call_later(self.deliver, command.message)
            else:
                self.run_worker(partial(self._execute, command), thread=True, exit_on_error=False, group="commands")

    def _execute(self, command: Cmd) -> None:
        """Worker thread body: run the command and post its message back."""
        msg = command()  # type: ignore[operator]
        if msg is None:
            return
        if not self.is_running:
            logger.debug("Dropping %s: app is shutting down", type(msg).__name__)
            return
        self.call_from_thread(self.deliver, msg)

    # --- Render ---

    def _refresh_view(self) -> None:
        try:
            list_pane = self.query_one("#list", Pane)
        except NoMatches:
            return
        parts = self.model.view_parts()
        focused = self.model.focused

        list_pane.border_title = parts.list_title
        list_pane.styles.width = parts.list_width + 4
        list_pane.set_class(focused is FocusedPane.WORKSPACE_LIST, "focused")
        list_pane.update(Text(parts.list_body))

        diff_pane = self.query_one("#diff", Pane)
        diff_pane.border_title = parts.diff_title
        diff_pane.set_class(focused is FocusedPane.DIFF_VIEW, "focused")
        diff_pane.update(Text.from_ansi(parts.diff_body))

        confirm = self.query_one("#confirm", Static)
        confirm.display = bool(parts.confirm)
        confirm.update(Text(parts.confirm))

        self.query_one("#status", Static).update(Text(parts.status, style="dim"))


def run_tui(model: AppModel) -> None:
    DojoApp(model).run()
