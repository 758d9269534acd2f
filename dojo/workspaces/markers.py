"""Marker files written inside agent workspaces.

- ``.jj/dojo-agent``: JSON provenance record pointing back at the root workspace.
- ``.git``: zero-byte sentinel file that scopes the agent's project detection to the
  workspace boundary.
- ``.jj/.dojo-bin/git``: disabled-command shim placed first on the agent's PATH.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from instrukt_ai_logging import get_logger

from dojo.constants import AGENT_MARKER_FILE, GIT_SCOPE_MARKER, SHIM_COMMAND, SHIM_DIR, SHIM_SCRIPT

logger = get_logger(__name__)


@dataclass(frozen=True)
class AgentMarker:
    """Provenance record of an agent workspace."""

    root_workspace: str
    name: str
    created_at: str


def marker_path(workspace_path: str | Path) -> Path:
    return Path(workspace_path) / AGENT_MARKER_FILE


def shim_dir(workspace_path: str | Path) -> Path:
    return Path(workspace_path) / SHIM_DIR


def write_agent_marker(workspace_path: str | Path, root_workspace: str, name: str) -> AgentMarker:
    """Write the provenance marker and return it."""
    marker = AgentMarker(
        root_workspace=root_workspace,
        name=name,
        created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )
    path = marker_path(workspace_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(marker), indent=2) + "\n", encoding="utf-8")
    return marker


def read_agent_marker(workspace_path: str | Path) -> AgentMarker | None:
    """Return the marker, or None when absent or unreadable."""
    path = marker_path(workspace_path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return AgentMarker(
            root_workspace=str(data["root_workspace"]),
            name=str(data["name"]),
            created_at=str(data.get("created_at", "")),
        )
    except (json.JSONDecodeError, KeyError, TypeError, OSError) as e:
        logger.warning("Ignoring unreadable agent marker %s: %s", path, e)
        return None


def create_git_scope_marker(workspace_path: str | Path) -> Path:
    path = Path(workspace_path) / GIT_SCOPE_MARKER
    path.touch(exist_ok=True)
    return path


def install_git_shim(workspace_path: str | Path) -> Path:
    """Write the disabled-git shim and return the directory to prepend to PATH."""
    directory = shim_dir(workspace_path)
    directory.mkdir(parents=True, exist_ok=True)
    script = directory / SHIM_COMMAND
    script.write_text(SHIM_SCRIPT, encoding="utf-8")
    script.chmod(0o755)
    return directory


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def remove_isolation_markers(workspace_path: str | Path) -> None:
    """Remove the scope marker, shim and provenance marker, in that order.

    The ``.git`` marker must be gone before jj forgets the workspace.
    Failures are logged and skipped.
    """
    workspace = Path(workspace_path)
    for relative in (GIT_SCOPE_MARKER, SHIM_DIR, AGENT_MARKER_FILE):
        target = workspace / relative
        try:
            _remove_path(target)
        except OSError as e:
            logger.warning("Failed to remove marker %s: %s", target, e)
