"""Shared TUI types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dojo.agent.state import AgentState
from dojo.jj.models import Workspace


class FocusedPane(str, Enum):
    WORKSPACE_LIST = "workspace_list"
    DIFF_VIEW = "diff_view"


class InputMode(str, Enum):
    NORMAL = "normal"
    NAME_ENTRY = "name_entry"


class PendingKind(str, Enum):
    CREATE = "create"
    DELETE = "delete"


@dataclass(frozen=True)
class WorkspaceItem:
    """A workspace plus its agent state; rebuilt on every list load."""

    workspace: Workspace
    state: AgentState = AgentState.NONE

    @property
    def name(self) -> str:
        return self.workspace.name


@dataclass(frozen=True)
class PendingOperation:
    """An optimistic create/delete awaiting confirmation by a list load."""

    kind: PendingKind
    name: str
