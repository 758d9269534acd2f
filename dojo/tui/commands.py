"""Commands: deferred work whose only effect is the message it returns.

A command runs off the update path (a worker thread in the Textual host) and
never touches model state; the host feeds its result back into the update
loop. ``Emit`` and ``Batch`` are recognised by the host so plain messages are
delivered in order without a thread hop.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Optional, Union

from instrukt_ai_logging import get_logger

from dojo.agent.state import agent_state
from dojo.constants import DEFAULT_WORKSPACE
from dojo.errors import DojoError
from dojo.jj.models import Workspace
from dojo.tui.messages import DiffLoaded, Msg, WorkspaceAdded, WorkspaceDeleted, WorkspacesLoaded
from dojo.tui.types import WorkspaceItem
from dojo.workspaces.manager import WorkspaceManager
from dojo.workspaces.stale import StaleRecoveringReader

logger = get_logger(__name__)


@dataclass(frozen=True)
class Emit:
    """Command that immediately yields ``message``."""

    message: Msg

    def __call__(self) -> Msg:
        return self.message


@dataclass(frozen=True)
class Batch:
    """Commands to run independently of each other."""

    commands: tuple["Cmd", ...]


Cmd = Union[Callable[[], Optional[Msg]], Batch]


def emit(message: Msg) -> Emit:
    return Emit(message)


def batch(*commands: Cmd | None) -> Cmd | None:
    """Combine commands, dropping None; returns None when nothing is left."""
    flat: list[Cmd] = []
    for command in commands:
        if command is None:
            continue
        if isinstance(command, Batch):
            flat.extend(command.commands)
        else:
            flat.append(command)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return Batch(tuple(flat))


def flatten(command: Cmd | None) -> list[Cmd]:
    """List the individual commands inside ``command``."""
    if command is None:
        return []
    if isinstance(command, Batch):
        return list(command.commands)
    return [command]


class LifecycleCommands:
    """Builds commands that call into the workspace manager."""

    def __init__(self, manager: WorkspaceManager, reader: StaleRecoveringReader) -> None:
        self.manager = manager
        self.reader = reader

    def load_workspaces(self) -> Cmd:
        def _load() -> Msg:
            try:
                root = self.manager.root
                workspaces = self.manager.client.workspace_list(cwd=root)
                items = [self._to_item(root, ws) for ws in workspaces]
            except (DojoError, OSError) as e:
                logger.warning("Failed to load workspaces: %s", e)
                return WorkspacesLoaded(error=str(e))
            return WorkspacesLoaded(items=items)

        return _load

    def _to_item(self, root: str, workspace: Workspace) -> WorkspaceItem:
        path: str | None
        if workspace.name == DEFAULT_WORKSPACE:
            path = root
        elif self.manager.is_agent_workspace(workspace.name):
            path = self.manager.workspace_path(workspace.name)
        else:
            path = workspace.path
        return WorkspaceItem(
            workspace=dataclasses.replace(workspace, path=path),
            state=agent_state(root, workspace.name),
        )

    def load_diff(self, workspace: Workspace) -> Cmd:
        def _load() -> Msg:
            try:
                if workspace.path:
                    content = self.reader.diff(workspace.path)
                else:
                    content = self.reader.diff(self.manager.root, revision=f"{workspace.name}@")
            except (DojoError, OSError) as e:
                logger.warning("Failed to load diff for %s: %s", workspace.name, e)
                return DiffLoaded(workspace_name=workspace.name, error=str(e))
            return DiffLoaded(workspace_name=workspace.name, content=content)

        return _load

    def add_workspace(self, name: str) -> Cmd:
        def _add() -> Msg:
            try:
                self.manager.create(name, revision="@")
            except (DojoError, OSError) as e:
                logger.warning("Failed to create workspace %s: %s", name, e)
                return WorkspaceAdded(name=name, error=str(e))
            return WorkspaceAdded(name=name)

        return _add

    def delete_workspace(self, name: str) -> Cmd:
        def _delete() -> Msg:
            try:
                self.manager.cleanup(name)
            except (DojoError, OSError) as e:
                logger.warning("Failed to delete workspace %s: %s", name, e)
                return WorkspaceDeleted(name=name, error=str(e))
            return WorkspaceDeleted(name=name)

        return _delete
