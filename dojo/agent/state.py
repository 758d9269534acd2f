"""Agent liveness derived from the pid cache under the agents directory."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from instrukt_ai_logging import get_logger

from dojo.constants import DEFAULT_WORKSPACE
from dojo.workspaces.paths import compute_agents_dir, compute_pid_path

logger = get_logger(__name__)


class AgentState(str, Enum):
    NONE = "none"
    IDLE = "idle"
    RUNNING = "running"


def write_pid(pid_path: Path, pid: int) -> None:
    pid_path.parent.mkdir(parents=True, exist_ok=True)
    pid_path.write_text(f"{pid}\n", encoding="utf-8")


def read_pid(pid_path: Path) -> int | None:
    try:
        return int(pid_path.read_text(encoding="utf-8").strip())
    except FileNotFoundError:
        return None
    except (ValueError, OSError) as e:
        logger.warning("Ignoring unreadable pid file %s: %s", pid_path, e)
        return None


def is_pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def agent_state(root: str | Path, name: str) -> AgentState:
    """NONE for the default or unmanaged workspaces, else RUNNING/IDLE by pid."""
    if name == DEFAULT_WORKSPACE or not (compute_agents_dir(root) / name).is_dir():
        return AgentState.NONE
    pid = read_pid(compute_pid_path(root, name))
    if pid is not None and is_pid_alive(pid):
        return AgentState.RUNNING
    return AgentState.IDLE
