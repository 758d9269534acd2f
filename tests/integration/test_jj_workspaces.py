"""Workspace lifecycle against a real jj repository."""

import re
import shutil
from pathlib import Path

import pytest

from dojo.jj.client import JJClient
from dojo.jj.errors import CommandError
from dojo.tui.app import AppModel
from dojo.tui.commands import Emit, LifecycleCommands, flatten
from dojo.tui.messages import KeyPressed
from dojo.workspaces.manager import WorkspaceManager

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("jj") is None, reason="jj is not installed"),
]

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _drive(model, cmd):
    """Run commands synchronously until the model settles."""
    queue = flatten(cmd)
    while queue:
        command = queue.pop(0)
        msg = command.message if isinstance(command, Emit) else command()
        if msg is not None:
            queue.extend(flatten(model.update(msg)))


def _press(model, *keys):
    for key in keys:
        _drive(model, model.update(KeyPressed(key=key, character=key if len(key) == 1 else None)))


def test_create_list_cleanup(manager, client, jj_repo):
    workspace = manager.create("alpha")

    assert Path(workspace.path).is_dir()
    assert manager.list() == ["alpha"]
    assert "alpha" in [ws.name for ws in client.workspace_list(cwd=jj_repo)]

    manager.cleanup("alpha")
    manager.cleanup("alpha")

    assert manager.list() == []
    assert not Path(workspace.path).exists()
    assert "alpha" not in [ws.name for ws in client.workspace_list(cwd=jj_repo)]


def test_create_duplicate_reports_existing(manager):
    manager.create("alpha")

    with pytest.raises(CommandError) as excinfo:
        manager.create("alpha")

    assert excinfo.value.already_exists
    assert manager.list() == ["alpha"]


def test_root_resolution_from_agent_workspace(client, jj_repo):
    before = WorkspaceManager(client).find_root(jj_repo)
    workspace = WorkspaceManager(client, root=before).create("alpha")

    from_agent = WorkspaceManager(JJClient(client.jj_path, cwd=workspace.path)).find_root()

    assert from_agent == before


def test_not_a_repository(client, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()

    with pytest.raises(CommandError) as excinfo:
        client.workspace_root(outside)

    assert excinfo.value.is_not_repo


def test_git_is_disabled_inside_agent_workspace(manager):
    workspace = manager.create("alpha")

    shim = Path(workspace.path) / ".jj" / ".dojo-bin" / "git"
    assert shim.exists()
    assert (Path(workspace.path) / ".git").is_file()


def test_stale_diff_recovers_with_one_refresh(manager, client, reader, jj_repo, monkeypatch):
    workspace = manager.create("alpha")
    (Path(workspace.path) / "notes.txt").write_text("agent work\n")
    client.status(cwd=workspace.path)
    client.describe("touched from the root workspace", revision="alpha@", cwd=jj_repo)

    refreshes = []
    original = manager.refresh

    def _refresh(path):
        refreshes.append(path)
        original(path)

    monkeypatch.setattr(manager, "refresh", _refresh)

    output = reader.diff(workspace.path)

    assert "notes.txt" in ANSI.sub("", output)
    assert len(refreshes) == 1


def test_interactive_delete_scenario(manager, reader, jj_repo):
    manager.create("alpha")
    model = AppModel(LifecycleCommands(manager, reader))
    _drive(model, model.init())
    names = [item.name for item in model.workspace_list.items]
    assert sorted(names) == ["alpha", "default"]

    model.workspace_list.cursor = names.index("alpha")
    _press(model, "d", "n")
    assert manager.list() == ["alpha"]

    _press(model, "d", "y")
    assert manager.list() == []
    assert not Path(manager.workspace_path("alpha")).exists()
    assert [item.name for item in model.workspace_list.items] == ["default"]
