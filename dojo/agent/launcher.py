"""Run the coding agent inside a workspace with the git shim on PATH."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Sequence

from instrukt_ai_logging import get_logger

from dojo.agent.state import write_pid
from dojo.constants import AGENT_NOT_FOUND_EXIT_CODE
from dojo.utils import prepend_path

logger = get_logger(__name__)


def build_agent_env(shim_directory: str | Path, base_env: dict[str, str] | None = None) -> dict[str, str]:
    """Environment for the agent: ``base_env`` (default os.environ) with the shim first on PATH."""
    env = dict(os.environ) if base_env is None else dict(base_env)
    return prepend_path(env, str(shim_directory))


def launch_agent(
    workspace_path: str | Path,
    shim_directory: str | Path,
    command: Sequence[str],
    pid_path: Path | None = None,
) -> int:
    """Launch the agent with inherited stdio and wait for it to exit.

    Returns:
        The agent's exit code, or 127 when the executable cannot be started.
    """
    env = build_agent_env(shim_directory)
    logger.info("Launching agent %s in %s", " ".join(command), workspace_path)
    try:
        process = subprocess.Popen(list(command), cwd=str(workspace_path), env=env)
    except OSError as e:
        logger.error("Failed to start agent %s: %s", command[0], e)
        return AGENT_NOT_FOUND_EXIT_CODE

    if pid_path is not None:
        try:
            write_pid(pid_path, process.pid)
        except OSError as e:
            logger.warning("Failed to record agent pid in %s: %s", pid_path, e)

    try:
        while True:
            try:
                exit_code = process.wait()
                break
            except KeyboardInterrupt:
                # The agent shares our terminal and handles Ctrl+C itself.
                continue
    finally:
        if pid_path is not None:
            pid_path.unlink(missing_ok=True)

    logger.info("Agent exited with code %d", exit_code)
    return exit_code
