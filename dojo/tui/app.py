"""Top-level orchestrator model composing the list, diff and confirm panes.

Routing rules:
- a visible confirmation consumes every key first;
- while the list is in name entry, keys go to the list only;
- global keys (quit, focus toggle, refresh) are handled here;
- remaining keys go to the focused pane; every other message goes to both
  panes, each of which ignores what it does not handle.
"""

from __future__ import annotations

from dataclasses import dataclass

from instrukt_ai_logging import get_logger

from dojo.constants import DEFAULT_NAME_PREFIX, DEFAULT_WORKSPACE
from dojo.tui.base import Model
from dojo.tui.commands import Cmd, LifecycleCommands, batch, emit
from dojo.tui.confirm import ConfirmModel
from dojo.tui.diff_view import DiffViewModel
from dojo.tui.messages import (
    ConfirmDelete,
    ConfirmResult,
    KeyPressed,
    Msg,
    QuitRequested,
    RefreshRequested,
    WindowResized,
)
from dojo.tui.types import FocusedPane, InputMode
from dojo.tui.workspace_list import WorkspaceListModel

logger = get_logger(__name__)

ACTION_DELETE = "delete"
QUIT_KEYS = frozenset({"q", "ctrl+c"})
HELP_TEXT = "j/k: navigate  enter: select  a: add  d: delete  r: refresh  tab: switch pane  q: quit"
LIST_PANE_MAX_RATIO = 0.4


@dataclass(frozen=True)
class ViewParts:
    """Rendered regions handed to the terminal host."""

    list_title: str
    list_body: str
    diff_title: str
    diff_body: str
    confirm: str
    status: str
    list_width: int


class AppModel:
    """Orchestrator state machine."""

    def __init__(self, commands: LifecycleCommands, name_prefix: str = DEFAULT_NAME_PREFIX) -> None:
        self.commands = commands
        self.workspace_list = WorkspaceListModel(commands, name_prefix=name_prefix)
        self.diff_view = DiffViewModel(commands)
        self.confirm = ConfirmModel()
        self.focused = FocusedPane.WORKSPACE_LIST
        self.quitting = False
        self.width = 0
        self.height = 0
        self._sync_focus()

    def init(self) -> Cmd | None:
        return batch(*(model.init() for model in (*self.panes(), self.confirm)))

    def panes(self) -> tuple[Model, ...]:
        """Sub-models that receive every non-key message."""
        return (self.workspace_list, self.diff_view)

    # --- Update ---

    def update(self, msg: Msg) -> Cmd | None:
        if isinstance(msg, KeyPressed):
            return self._handle_key(msg)

        if isinstance(msg, WindowResized):
            self._resize(msg.width, msg.height)
            return None

        if isinstance(msg, QuitRequested):
            self.quitting = True
            return None

        if isinstance(msg, RefreshRequested):
            logger.debug("Refreshing workspaces")
            return batch(self.workspace_list.reload(), self.diff_view.reload())

        if isinstance(msg, ConfirmDelete):
            if msg.workspace_name == DEFAULT_WORKSPACE:
                return None
            self.confirm.show(
                f"Delete workspace '{msg.workspace_name}'?",
                action=ACTION_DELETE,
                payload=msg.workspace_name,
            )
            return None

        if isinstance(msg, ConfirmResult):
            if msg.confirmed and msg.action == ACTION_DELETE and isinstance(msg.payload, str):
                return self.workspace_list.delete(msg.payload)
            return None

        return batch(*(pane.update(msg) for pane in self.panes()))

    def _handle_key(self, msg: KeyPressed) -> Cmd | None:
        if self.confirm.visible:
            return self.confirm.update(msg)

        if self.workspace_list.input_mode is InputMode.NAME_ENTRY:
            return self.workspace_list.update(msg)

        if msg.key in QUIT_KEYS:
            return emit(QuitRequested())
        if msg.key == "tab":
            self.toggle_focus()
            return None
        if msg.key == "r":
            return emit(RefreshRequested())

        if self.focused is FocusedPane.WORKSPACE_LIST:
            return self.workspace_list.update(msg)
        return self.diff_view.update(msg)

    def toggle_focus(self) -> None:
        if self.focused is FocusedPane.WORKSPACE_LIST:
            self.focused = FocusedPane.DIFF_VIEW
        else:
            self.focused = FocusedPane.WORKSPACE_LIST
        self._sync_focus()

    def _sync_focus(self) -> None:
        self.workspace_list.set_focused(self.focused is FocusedPane.WORKSPACE_LIST)
        self.diff_view.set_focused(self.focused is FocusedPane.DIFF_VIEW)

    def _resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        list_width = self.list_width()
        # Borders and the status line take three rows.
        body_height = max(height - 3, 1)
        self.workspace_list.set_size(list_width, body_height)
        self.diff_view.set_size(max(width - list_width, 1), body_height)

    def list_width(self) -> int:
        wanted = self.workspace_list.min_width()
        if self.width:
            return min(wanted, max(int(self.width * LIST_PANE_MAX_RATIO), 1))
        return wanted

    # --- View ---

    def status_line(self) -> str:
        error = self.workspace_list.last_error
        if error:
            return f"Error: {error}"
        return HELP_TEXT

    def view_parts(self) -> ViewParts:
        return ViewParts(
            list_title="Workspaces",
            list_body=self.workspace_list.view(),
            diff_title=self.diff_view.title(),
            diff_body=self.diff_view.view(),
            confirm=self.confirm.view(),
            status=self.status_line(),
            list_width=self.list_width(),
        )

    def view(self) -> str:
        """Plain-text rendering of the whole screen."""
        parts = self.view_parts()
        sections = [
            f"[{parts.list_title}]",
            parts.list_body,
            f"[{parts.diff_title}]",
            parts.diff_body,
        ]
        if parts.confirm:
            sections.append(parts.confirm)
        sections.append(parts.status)
        return "\n".join(sections)
