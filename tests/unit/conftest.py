"""Shared fixtures for unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from dojo.jj.errors import CommandError, ErrorKind
from dojo.jj.models import Workspace
from dojo.workspaces.manager import WorkspaceManager


class FakeJJClient:
    """In-memory stand-in for JJClient.

    Keeps a workspace registry and creates directories the way
    ``jj workspace add`` does, so manager code runs against a real filesystem.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.cwd = str(root)
        self.registry: dict[str, str] = {"default": str(root)}
        self.calls: list[tuple[str, ...]] = []
        self.failures: dict[str, CommandError] = {}

    def fail(self, operation: str, stderr: str) -> None:
        self.failures[operation] = CommandError(operation.replace("_", " "), stderr=stderr, exit_code=1)

    def _check(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error

    def workspace_root(self, cwd=None) -> str:
        self.calls.append(("workspace_root", str(cwd)))
        self._check("workspace_root")
        directory = Path(cwd) if cwd else self.root
        containing = [
            Path(path) for path in self.registry.values() if directory == Path(path) or Path(path) in directory.parents
        ]
        if not containing:
            raise CommandError(
                "workspace root", stderr='Error: There is no jj repo in "."', kind=ErrorKind.NOT_A_REPOSITORY
            )
        # The innermost workspace wins: agent workspaces live under the root.
        return str(max(containing, key=lambda path: len(path.parts)))

    def workspace_add(self, path, revision=None, name=None, cwd=None) -> None:
        self.calls.append(("workspace_add", str(path), str(revision)))
        self._check("workspace_add")
        workspace_name = name or Path(path).name
        if workspace_name in self.registry:
            raise CommandError(
                "workspace add", stderr=f"Error: Workspace named '{workspace_name}' already exists", exit_code=1
            )
        target = Path(path)
        if target.exists() and any(target.iterdir()):
            raise CommandError("workspace add", stderr="Error: Destination path exists and is not empty", exit_code=1)
        (target / ".jj").mkdir(parents=True, exist_ok=True)
        self.registry[workspace_name] = str(target)

    def workspace_forget(self, name, cwd=None) -> None:
        self.calls.append(("workspace_forget", name))
        self._check("workspace_forget")
        if name not in self.registry:
            raise CommandError("workspace forget", stderr=f"Error: No such workspace: {name}", exit_code=1)
        del self.registry[name]

    def workspace_list(self, cwd=None) -> list[Workspace]:
        self.calls.append(("workspace_list",))
        self._check("workspace_list")
        return [Workspace(name=name, current_change_id="abc123") for name in self.registry]

    def workspace_update_stale(self, cwd=None) -> None:
        self.calls.append(("workspace_update_stale", str(cwd)))
        self._check("workspace_update_stale")


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / ".jj").mkdir(parents=True)
    return root


@pytest.fixture
def fake_client(repo_root: Path) -> FakeJJClient:
    return FakeJJClient(repo_root)


@pytest.fixture
def manager(fake_client: FakeJJClient, repo_root: Path) -> WorkspaceManager:
    return WorkspaceManager(fake_client, root=str(repo_root))  # type: ignore[arg-type]
