"""Diff pane: shows the diff of the selected workspace."""

from __future__ import annotations

from dojo.jj.models import Workspace
from dojo.tui.commands import Cmd, LifecycleCommands
from dojo.tui.messages import DiffLoaded, KeyPressed, Msg, WorkspaceSelected

NO_SELECTION_TEXT = "Select a workspace to view its diff"
EMPTY_DIFF_TEXT = "No changes in this workspace"
PAGE_SCROLL_FALLBACK = 10


class DiffViewModel:
    """Right pane. Only the result for the current selection is ever shown."""

    def __init__(self, commands: LifecycleCommands) -> None:
        self.commands = commands
        self.workspace: Workspace | None = None
        self.content = ""
        self.error: str | None = None
        self.loading = False
        self.offset = 0
        self.focused = False
        self.width = 0
        self.height = 0

    def init(self) -> Cmd | None:
        return None

    def _is_current(self, workspace: Workspace) -> bool:
        return (
            self.workspace is not None
            and self.workspace.name == workspace.name
            and self.workspace.path == workspace.path
        )

    def reload(self) -> Cmd | None:
        """Re-issue the diff load for the shown workspace, if any."""
        if self.workspace is None:
            return None
        self.loading = True
        return self.commands.load_diff(self.workspace)

    def update(self, msg: Msg) -> Cmd | None:
        if isinstance(msg, WorkspaceSelected):
            if self._is_current(msg.workspace):
                # Already shown or in flight; one jj call per workspace at a time.
                self.workspace = msg.workspace
                return None
            self.workspace = msg.workspace
            self.content = ""
            self.error = None
            self.offset = 0
            self.loading = True
            return self.commands.load_diff(msg.workspace)

        if isinstance(msg, DiffLoaded):
            if self.workspace is None or msg.workspace_name != self.workspace.name:
                # Selection moved on while this load was in flight.
                return None
            self.loading = False
            self.error = msg.error
            self.content = msg.content if msg.error is None else ""
            self.offset = min(self.offset, self._max_offset())
            return None

        if isinstance(msg, KeyPressed) and self.focused:
            self._scroll(msg.key)
        return None

    def _scroll(self, key: str) -> None:
        page = max(self.height - 1, 1) if self.height else PAGE_SCROLL_FALLBACK
        if key in ("j", "down"):
            self.offset += 1
        elif key in ("k", "up"):
            self.offset -= 1
        elif key in ("pagedown", "space", "ctrl+d"):
            self.offset += page
        elif key in ("pageup", "ctrl+b", "ctrl+u"):
            self.offset -= page
        elif key in ("g", "home"):
            self.offset = 0
        elif key in ("G", "end"):
            self.offset = self._max_offset()
        self.offset = max(0, min(self.offset, self._max_offset()))

    def _lines(self) -> list[str]:
        return self.content.splitlines()

    def _max_offset(self) -> int:
        visible = self.height if self.height else 1
        return max(len(self._lines()) - visible, 0)

    def body(self) -> str:
        """Text for the pane body, without scrolling applied."""
        if self.workspace is None:
            return NO_SELECTION_TEXT
        if self.error is not None:
            return f"Error loading diff for {self.workspace.name}: {self.error}"
        if self.loading:
            return f"Loading diff for {self.workspace.name}..."
        if not self.content.strip():
            return EMPTY_DIFF_TEXT
        return self.content

    def view(self) -> str:
        if self.workspace is None or self.error is not None or self.loading or not self.content.strip():
            return self.body()
        lines = self._lines()[self.offset :]
        if self.height:
            lines = lines[: self.height]
        return "\n".join(lines)

    def title(self) -> str:
        if self.workspace is None:
            return "Diff"
        return f"Diff: {self.workspace.name}"

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.offset = min(self.offset, self._max_offset())

    def set_focused(self, focused: bool) -> None:
        self.focused = focused
