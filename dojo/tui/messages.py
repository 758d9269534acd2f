"""Messages fed into the TUI update loop.

Every message is a frozen dataclass; ``Msg`` is the closed union the models
dispatch on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from dojo.jj.models import Workspace
from dojo.tui.types import WorkspaceItem

# --- Input ---


@dataclass(frozen=True)
class KeyPressed:
    """A key press. ``key`` is the key name ("j", "down", "ctrl+a"); ``character`` the printable char, if any."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class WindowResized:
    width: int
    height: int


@dataclass(frozen=True)
class RefreshRequested:
    pass


@dataclass(frozen=True)
class QuitRequested:
    pass


# --- Workspace list ---


@dataclass(frozen=True)
class WorkspacesLoaded:
    items: list[WorkspaceItem] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class WorkspaceSelected:
    workspace: Workspace


@dataclass(frozen=True)
class WorkspaceAdded:
    name: str
    error: str | None = None


@dataclass(frozen=True)
class WorkspaceDeleted:
    name: str
    error: str | None = None


# --- Diff view ---


@dataclass(frozen=True)
class DiffLoaded:
    workspace_name: str
    content: str = ""
    error: str | None = None


# --- Confirmation ---


@dataclass(frozen=True)
class ConfirmDelete:
    workspace_name: str


@dataclass(frozen=True)
class ConfirmResult:
    confirmed: bool
    action: str
    payload: object = None


Msg = Union[
    KeyPressed,
    WindowResized,
    RefreshRequested,
    QuitRequested,
    WorkspacesLoaded,
    WorkspaceSelected,
    WorkspaceAdded,
    WorkspaceDeleted,
    DiffLoaded,
    ConfirmDelete,
    ConfirmResult,
]
