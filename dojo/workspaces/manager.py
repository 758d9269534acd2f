"""Workspace lifecycle: create, list, clean up and resolve the root.

Multi-step operations are built only from JJClient calls plus filesystem
work. Creation compensates on failure so callers never see a half-created
workspace; cleanup is idempotent and always removes the directory last.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from instrukt_ai_logging import get_logger

from dojo.constants import DEFAULT_WORKSPACE
from dojo.errors import DojoError
from dojo.jj.client import JJClient
from dojo.jj.errors import CommandError
from dojo.jj.models import Workspace
from dojo.workspaces.errors import ParentNotWritableError
from dojo.workspaces.markers import (
    create_git_scope_marker,
    install_git_shim,
    read_agent_marker,
    remove_isolation_markers,
    write_agent_marker,
)
from dojo.workspaces.paths import (
    check_parent_writable,
    compute_agent_path,
    compute_agents_dir,
    validate_name,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class WorkspaceDrift:
    """Mismatch between agent directories on disk and jj's registry."""

    unregistered_directories: list[str] = field(default_factory=list)
    missing_directories: list[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.unregistered_directories and not self.missing_directories


class WorkspaceManager:
    """Creates and tears down agent workspaces of one repository."""

    def __init__(self, client: JJClient, root: str | None = None) -> None:
        """Initialize manager.

        Args:
            client: jj client used for every repository operation.
            root: Root workspace path. Resolved through find_root() on first
                use when omitted.
        """
        self.client = client
        self._root = root

    @property
    def root(self) -> str:
        if self._root is None:
            self._root = self.find_root()
        return self._root

    def find_root(self, cwd: str | Path | None = None) -> str:
        """Return the root workspace for ``cwd``.

        Inside an agent workspace jj reports the agent workspace itself, so
        the agent marker's root wins when present.

        Raises:
            CommandError: NOT_A_REPOSITORY when ``cwd`` is outside a jj repo.
        """
        workspace_root = self.client.workspace_root(cwd)
        marker = read_agent_marker(workspace_root)
        if marker is not None:
            logger.debug("Resolved root %s via marker in %s", marker.root_workspace, workspace_root)
            return marker.root_workspace
        return workspace_root

    def workspace_path(self, name: str) -> str:
        return compute_agent_path(self.root, name)

    def is_agent_workspace(self, name: str) -> bool:
        return name != DEFAULT_WORKSPACE and Path(self.workspace_path(name)).is_dir()

    def create(self, name: str, revision: str | None = None) -> Workspace:
        """Create agent workspace ``name`` with its markers.

        Raises:
            InvalidWorkspaceNameError: name has characters outside [A-Za-z0-9_-].
            ParentNotWritableError: the agents directory cannot be written.
            CommandError: jj failed (WORKSPACE_EXISTS is passed through as-is).
            OSError: writing a marker failed; the workspace was rolled back.
        """
        validate_name(name)
        root = self.root
        path = compute_agent_path(root, name)
        agents_dir = compute_agents_dir(root)

        try:
            agents_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ParentNotWritableError(str(agents_dir), str(e)) from e
        check_parent_writable(agents_dir)

        self.client.workspace_add(path, revision=revision, cwd=root)
        logger.info("Created workspace %s at %s", name, path)

        try:
            write_agent_marker(path, root, name)
            create_git_scope_marker(path)
            install_git_shim(path)
        except (OSError, DojoError) as e:
            logger.error("Failed to finish workspace %s, rolling back: %s", name, e)
            self._compensate(name, path)
            raise

        return Workspace(name=name, path=path)

    def _compensate(self, name: str, path: str) -> None:
        try:
            self.client.workspace_forget(name, cwd=self.root)
        except CommandError as e:
            logger.warning("Rollback could not forget workspace %s: %s", name, e)
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Rollback could not remove %s: %s", path, e)

    def cleanup(self, name: str, path: str | None = None) -> None:
        """Remove markers, forget the workspace and delete its directory.

        Safe to call repeatedly. The directory is always removed, even when
        forgetting failed; a forget failure other than "no such workspace" is
        re-raised after that.
        """
        workspace_path = Path(path) if path else Path(self.workspace_path(name))
        if workspace_path.exists():
            remove_isolation_markers(workspace_path)

        forget_error: CommandError | None = None
        try:
            self.client.workspace_forget(name, cwd=self.root)
        except CommandError as e:
            if e.is_not_found:
                logger.debug("Workspace %s already forgotten", name)
            else:
                logger.warning("Failed to forget workspace %s: %s", name, e)
                forget_error = e

        if workspace_path.exists():
            try:
                shutil.rmtree(workspace_path)
            except OSError as e:
                logger.error("Failed to remove workspace directory %s: %s", workspace_path, e)
        logger.info("Cleaned up workspace %s", name)

        if forget_error is not None:
            raise forget_error

    def refresh(self, path: str | Path) -> None:
        """Update a stale workspace to the latest repository state."""
        logger.info("Updating stale workspace at %s", path)
        self.client.workspace_update_stale(cwd=path)

    def list(self) -> list[str]:
        """Names of agent workspace directories, sorted; the default is never listed.

        Drift against jj's registry is logged, never raised.
        """
        names = self._agent_directories()
        try:
            drift = self.drift(names)
        except CommandError as e:
            logger.warning("Could not cross-check workspaces with jj: %s", e)
        else:
            if not drift.is_consistent:
                logger.warning(
                    "Workspace drift: unregistered directories=%s, missing directories=%s",
                    drift.unregistered_directories,
                    drift.missing_directories,
                )
        return names

    def drift(self, directories: list[str] | None = None) -> WorkspaceDrift:
        """Compare agent directories with ``jj workspace list``."""
        on_disk = set(self._agent_directories() if directories is None else directories)
        registered = {ws.name for ws in self.client.workspace_list(cwd=self.root)}
        registered.discard(DEFAULT_WORKSPACE)
        return WorkspaceDrift(
            unregistered_directories=sorted(on_disk - registered),
            missing_directories=sorted(registered - on_disk),
        )

    def _agent_directories(self) -> list[str]:
        agents_dir = compute_agents_dir(self.root)
        if not agents_dir.is_dir():
            return []
        return sorted(entry.name for entry in agents_dir.iterdir() if entry.is_dir() and not entry.name.startswith("."))
