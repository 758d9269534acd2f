"""Agent workspace lifecycle on top of the jj client."""

from dojo.workspaces.errors import InvalidWorkspaceNameError, ParentNotWritableError, WorkspaceError
from dojo.workspaces.manager import WorkspaceDrift, WorkspaceManager
from dojo.workspaces.markers import AgentMarker, read_agent_marker
from dojo.workspaces.paths import compute_agent_path, is_valid_name
from dojo.workspaces.stale import StaleRecoveringReader, with_stale_recovery

__all__ = [
    "AgentMarker",
    "InvalidWorkspaceNameError",
    "ParentNotWritableError",
    "StaleRecoveringReader",
    "WorkspaceDrift",
    "WorkspaceError",
    "WorkspaceManager",
    "compute_agent_path",
    "is_valid_name",
    "read_agent_marker",
    "with_stale_recovery",
]
