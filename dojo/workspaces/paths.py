"""Pure placement policy for agent workspaces.

Agent workspaces live at ``<root>/.jj/agents/<name>`` so every caller derives
the same location from ``(root, name)`` without shared state, and jj names the
workspace after the directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from dojo.constants import AGENTS_DIR, PID_CACHE_DIR, VALID_NAME_PATTERN
from dojo.workspaces.errors import InvalidWorkspaceNameError, ParentNotWritableError


def is_valid_name(name: str) -> bool:
    return bool(VALID_NAME_PATTERN.match(name))


def validate_name(name: str) -> None:
    if not is_valid_name(name):
        raise InvalidWorkspaceNameError(name)


def compute_agents_dir(root: str | Path) -> Path:
    return Path(root) / AGENTS_DIR


def compute_agent_path(root: str | Path, name: str) -> str:
    """Return the workspace directory for agent ``name`` under ``root``."""
    return str(compute_agents_dir(root) / name)


def compute_pid_path(root: str | Path, name: str) -> Path:
    return compute_agents_dir(root) / PID_CACHE_DIR / f"{name}.pid"


def check_parent_writable(path: str | Path) -> None:
    """Raise ParentNotWritableError unless ``path`` is a writable directory."""
    directory = Path(path)
    if not directory.is_dir():
        raise ParentNotWritableError(str(directory), "not a directory")
    if not os.access(directory, os.W_OK | os.X_OK):
        raise ParentNotWritableError(str(directory))
