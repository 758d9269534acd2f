"""Workspace list pane: navigation, name entry and optimistic create/delete."""

from __future__ import annotations

from instrukt_ai_logging import get_logger

from dojo.agent.state import AgentState
from dojo.constants import DEFAULT_NAME_PREFIX, DEFAULT_WORKSPACE, VALID_NAME_CHARS
from dojo.jj.models import Workspace
from dojo.tui.commands import Cmd, LifecycleCommands, emit
from dojo.tui.messages import (
    ConfirmDelete,
    KeyPressed,
    Msg,
    WorkspaceAdded,
    WorkspaceDeleted,
    WorkspacesLoaded,
    WorkspaceSelected,
)
from dojo.tui.types import InputMode, PendingKind, PendingOperation, WorkspaceItem

logger = get_logger(__name__)

INDICATOR_DEFAULT = "\u25cf"  # ●
INDICATOR_RUNNING = "\u25d0"  # ◐
INDICATOR_IDLE = "\u25cb"  # ○
INDICATOR_CREATING = "+"
INDICATOR_DELETING = "\u2717"  # ✗
SELECTION_MARKER = "\u25b8"  # ▸
INPUT_CURSOR = "\u258c"  # ▌


def is_valid_workspace_char(char: str) -> bool:
    return len(char) == 1 and char in VALID_NAME_CHARS


class WorkspaceListModel:
    """Left pane listing jj workspaces.

    ``items`` is the last confirmed snapshot from jj; ``pending`` holds
    optimistic operations that the next successful load reconciles.
    """

    def __init__(self, commands: LifecycleCommands, name_prefix: str = DEFAULT_NAME_PREFIX) -> None:
        self.commands = commands
        self.name_prefix = name_prefix
        self.items: list[WorkspaceItem] = []
        self.pending: list[PendingOperation] = []
        self.cursor = 0
        self.focused = True
        self.loaded = False
        self.last_error: str | None = None
        self.width = 0
        self.height = 0
        self.input_mode = InputMode.NORMAL
        self.input_buffer = ""
        self.input_cursor = 0

    def init(self) -> Cmd | None:
        return self.reload()

    def reload(self) -> Cmd:
        return self.commands.load_workspaces()

    # --- Update ---

    def update(self, msg: Msg) -> Cmd | None:
        if isinstance(msg, KeyPressed):
            if not self.focused:
                return None
            if self.input_mode is InputMode.NAME_ENTRY:
                return self._handle_name_input(msg)
            return self._handle_key(msg)

        if isinstance(msg, WorkspacesLoaded):
            return self._apply_loaded(msg)

        if isinstance(msg, WorkspaceAdded):
            if msg.error is not None:
                self._drop_pending(PendingKind.CREATE, msg.name)
                self.last_error = f"create {msg.name}: {msg.error}"
                return None
            return self.reload()

        if isinstance(msg, WorkspaceDeleted):
            if msg.error is not None:
                self._drop_pending(PendingKind.DELETE, msg.name)
                self.last_error = f"delete {msg.name}: {msg.error}"
            # Reload either way: a failed delete may still have removed parts.
            return self.reload()

        return None

    def _handle_key(self, msg: KeyPressed) -> Cmd | None:
        key = msg.key
        if key in ("j", "down"):
            if self.cursor < len(self.items) - 1:
                self.cursor += 1
                return self.emit_selected()
        elif key in ("k", "up"):
            if self.cursor > 0:
                self.cursor -= 1
                return self.emit_selected()
        elif key == "enter":
            return self.emit_selected()
        elif key == "a":
            self.start_name_entry()
        elif key == "d":
            target = self.delete_target()
            if target is not None:
                return emit(ConfirmDelete(workspace_name=target))
        return None

    def _apply_loaded(self, msg: WorkspacesLoaded) -> Cmd | None:
        if msg.error is not None:
            self.last_error = msg.error
            return None

        selected = self.selected_name()
        self.items = list(msg.items)
        self.loaded = True
        self.last_error = None
        names = {item.name for item in self.items}
        self.pending = [
            op
            for op in self.pending
            if (op.kind is PendingKind.CREATE and op.name not in names)
            or (op.kind is PendingKind.DELETE and op.name in names)
        ]

        if selected is not None and selected in names:
            self.cursor = next(i for i, item in enumerate(self.items) if item.name == selected)
        elif self.cursor >= len(self.items):
            self.cursor = max(0, len(self.items) - 1)
        return self.emit_selected()

    def _handle_name_input(self, msg: KeyPressed) -> Cmd | None:
        key = msg.key
        if key == "escape":
            self._reset_input()
        elif key == "enter":
            return self.submit_name()
        elif key == "backspace":
            if self.input_cursor > 0:
                self.input_buffer = self.input_buffer[: self.input_cursor - 1] + self.input_buffer[self.input_cursor :]
                self.input_cursor -= 1
        elif key == "left":
            if self.input_cursor > 0:
                self.input_cursor -= 1
        elif key == "right":
            if self.input_cursor < len(self.input_buffer):
                self.input_cursor += 1
        elif key in ("ctrl+a", "home"):
            self.input_cursor = 0
        elif key in ("ctrl+e", "end"):
            self.input_cursor = len(self.input_buffer)
        elif key == "ctrl+u":
            self.input_buffer = ""
            self.input_cursor = 0
        elif msg.character and is_valid_workspace_char(msg.character):
            self.input_buffer = (
                self.input_buffer[: self.input_cursor] + msg.character + self.input_buffer[self.input_cursor :]
            )
            self.input_cursor += 1
        return None

    # --- Name entry ---

    def start_name_entry(self) -> None:
        self.input_mode = InputMode.NAME_ENTRY
        self.input_buffer = self.generate_workspace_name()
        self.input_cursor = len(self.input_buffer)

    def submit_name(self) -> Cmd | None:
        """Dispatch a create for the buffer, or stay in name entry if it is unusable."""
        name = self.input_buffer.strip()
        if not name or name in self._taken_names():
            return None
        if not all(is_valid_workspace_char(char) for char in name):
            return None
        self._reset_input()
        self.pending.append(PendingOperation(PendingKind.CREATE, name))
        logger.info("Creating workspace %s", name)
        return self.commands.add_workspace(name)

    def _reset_input(self) -> None:
        self.input_mode = InputMode.NORMAL
        self.input_buffer = ""
        self.input_cursor = 0

    def _taken_names(self) -> set[str]:
        names = {item.name for item in self.items}
        names.update(op.name for op in self.pending if op.kind is PendingKind.CREATE)
        return names

    def generate_workspace_name(self) -> str:
        """Lowest unused ``<prefix>-<n>`` with n >= 1."""
        existing = self._taken_names()
        index = 1
        while f"{self.name_prefix}-{index}" in existing:
            index += 1
        return f"{self.name_prefix}-{index}"

    # --- Delete ---

    def delete_target(self) -> str | None:
        """Name under the cursor when it may be deleted; never the default workspace."""
        if not self.items or self.cursor >= len(self.items):
            return None
        name = self.items[self.cursor].name
        if name == DEFAULT_WORKSPACE or self._is_pending(PendingKind.DELETE, name):
            return None
        return name

    def delete(self, name: str) -> Cmd | None:
        if name == DEFAULT_WORKSPACE or self._is_pending(PendingKind.DELETE, name):
            return None
        self.pending.append(PendingOperation(PendingKind.DELETE, name))
        logger.info("Deleting workspace %s", name)
        return self.commands.delete_workspace(name)

    def _is_pending(self, kind: PendingKind, name: str) -> bool:
        return PendingOperation(kind, name) in self.pending

    def _drop_pending(self, kind: PendingKind, name: str) -> None:
        self.pending = [op for op in self.pending if op != PendingOperation(kind, name)]

    # --- Selection ---

    def selected_name(self) -> str | None:
        if not self.items or self.cursor >= len(self.items):
            return None
        return self.items[self.cursor].name

    def selected_workspace(self) -> Workspace | None:
        if not self.items or self.cursor >= len(self.items):
            return None
        return self.items[self.cursor].workspace

    def emit_selected(self) -> Cmd | None:
        workspace = self.selected_workspace()
        if workspace is None:
            return None
        return emit(WorkspaceSelected(workspace=workspace))

    # --- View ---

    def visible_names(self) -> list[str]:
        """Names as rendered: confirmed items plus provisional creates."""
        names = [item.name for item in self.items]
        names.extend(op.name for op in self.pending if op.kind is PendingKind.CREATE and op.name not in names)
        return names

    def view(self) -> str:
        if not self.items and not self.pending:
            return "Loading workspaces..." if not self.loaded else "No workspaces"

        lines: list[str] = []
        for i, item in enumerate(self.items):
            marker = SELECTION_MARKER if i == self.cursor else " "
            lines.append(f"{marker}{self._indicator(item)} {item.name}")
        for op in self.pending:
            if op.kind is PendingKind.CREATE and op.name not in {item.name for item in self.items}:
                lines.append(f" {INDICATOR_CREATING} {op.name}")

        if self.input_mode is InputMode.NAME_ENTRY:
            before = self.input_buffer[: self.input_cursor]
            after = self.input_buffer[self.input_cursor :]
            lines.append("─" * max(self.width - 2, 10))
            lines.append(f"+ {before}{INPUT_CURSOR}{after}")
            lines.append("Enter: create  Esc: cancel")
        return "\n".join(lines)

    def _indicator(self, item: WorkspaceItem) -> str:
        if self._is_pending(PendingKind.DELETE, item.name):
            return INDICATOR_DELETING
        if item.name == DEFAULT_WORKSPACE:
            return INDICATOR_DEFAULT
        if item.state is AgentState.RUNNING:
            return INDICATOR_RUNNING
        return INDICATOR_IDLE

    def min_width(self) -> int:
        """Longest name plus indicator, space and padding."""
        longest = max((len(name) for name in self.visible_names()), default=0)
        return longest + 4

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def set_focused(self, focused: bool) -> None:
        self.focused = focused
