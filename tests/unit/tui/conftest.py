"""Fixtures for orchestrator model tests."""

from __future__ import annotations

import pytest

from dojo.agent.state import AgentState
from dojo.jj.models import Workspace
from dojo.tui.commands import Emit, flatten
from dojo.tui.messages import KeyPressed, WorkspacesLoaded
from dojo.tui.types import WorkspaceItem


class FakeCommands:
    """Records requested lifecycle commands instead of running them."""

    def __init__(self) -> None:
        self.issued: list[tuple[str, ...]] = []

    def _command(self, *key: str):
        self.issued.append(key)

        def _run():
            return None

        _run.key = key  # type: ignore[attr-defined]
        return _run

    def load_workspaces(self):
        return self._command("load_workspaces")

    def load_diff(self, workspace: Workspace):
        return self._command("load_diff", workspace.name)

    def add_workspace(self, name: str):
        return self._command("add_workspace", name)

    def delete_workspace(self, name: str):
        return self._command("delete_workspace", name)

    def count(self, *key: str) -> int:
        return self.issued.count(key)


def loaded(*names: str, running: tuple[str, ...] = ()) -> WorkspacesLoaded:
    items = [
        WorkspaceItem(
            workspace=Workspace(name=name, path=f"/repo/.jj/agents/{name}"),
            state=AgentState.RUNNING if name in running else AgentState.IDLE,
        )
        for name in names
    ]
    return WorkspacesLoaded(items=items)


def press(model, *keys: str):
    """Feed key presses through ``model`` and settle emitted messages; returns pending commands."""
    pending = []
    for key in keys:
        character = key if len(key) == 1 else None
        pending.extend(settle(model, model.update(KeyPressed(key=key, character=character))))
    return pending


def settle(model, cmd):
    """Deliver Emit commands back into ``model`` until only worker commands remain."""
    pending = []
    for command in flatten(cmd):
        if isinstance(command, Emit):
            pending.extend(settle(model, model.update(command.message)))
        else:
            pending.append(command)
    return pending


@pytest.fixture
def commands() -> FakeCommands:
    return FakeCommands()


@pytest.fixture(name="loaded")
def loaded_fixture():
    return loaded


@pytest.fixture(name="press")
def press_fixture():
    return press


@pytest.fixture(name="settle")
def settle_fixture():
    return settle
