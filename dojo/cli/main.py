"""dojo: run a coding agent in its own jj workspace."""

from __future__ import annotations

import os
import sys
from typing import NoReturn

from instrukt_ai_logging import get_logger
from pydantic import ValidationError

from dojo import __version__
from dojo.agent.launcher import launch_agent
from dojo.config import DojoConfig, load_config
from dojo.constants import AGENT_NOT_FOUND_EXIT_CODE
from dojo.errors import DojoError
from dojo.jj.client import JJClient
from dojo.jj.errors import CommandError
from dojo.logging_config import setup_logging
from dojo.workspaces.errors import WorkspaceError
from dojo.workspaces.manager import WorkspaceManager
from dojo.workspaces.markers import shim_dir
from dojo.workspaces.paths import compute_pid_path

logger = get_logger(__name__)

KEEP_PROMPT = "\nKeep workspace for inspection? [y/N] "


def _usage() -> str:
    return (
        "Usage:\n"
        "  dojo <name>      # create workspace <name> and launch the agent in it\n"
        "  dojo list        # list agent workspaces\n"
        "  dojo --version   # print the dojo version\n"
        "  dojo-tui         # interactive workspace orchestrator\n"
    )


def _fail(message: str) -> NoReturn:
    sys.stderr.write(f"Error: {message}\n")
    sys.exit(1)


def load_settings() -> DojoConfig:
    """Load config and configure logging; exits 1 on an invalid config file."""
    try:
        config = load_config()
    except ValidationError as exc:
        _fail(f"invalid dojo config: {exc}")
    setup_logging(config.log_level)
    return config


def open_manager(config: DojoConfig) -> WorkspaceManager:
    """Manager bound to the root workspace of the current directory; exits 1 outside a repo."""
    client = JJClient(config.jj_path, cwd=os.getcwd())
    manager = WorkspaceManager(client)
    try:
        root = manager.find_root()
    except CommandError as exc:
        logger.debug("Root resolution failed: %s", exc)
        _fail("not in a jj repository")
    return WorkspaceManager(client, root=root)


def _list_workspaces(manager: WorkspaceManager) -> None:
    for name in manager.list():
        print(name)


def _ask_keep() -> bool:
    sys.stdout.write(KEEP_PROMPT)
    sys.stdout.flush()
    answer = sys.stdin.readline()
    return answer.strip().lower() in ("y", "yes")


def _cleanup(manager: WorkspaceManager, name: str) -> None:
    try:
        manager.cleanup(name)
    except DojoError as exc:
        sys.stderr.write(f"Warning: failed to forget workspace: {exc}\n")


def _run_agent(config: DojoConfig, manager: WorkspaceManager, name: str) -> None:
    try:
        workspace = manager.create(name)
    except CommandError as exc:
        if exc.already_exists:
            sys.stderr.write(f"Error: workspace '{name}' already exists\n")
            sys.stderr.write("Use 'dojo list' to see existing workspaces\n")
            sys.exit(1)
        _fail(f"creating workspace: {exc}")
    except WorkspaceError as exc:
        _fail(str(exc))
    except OSError as exc:
        # Creation already rolled the workspace back.
        _fail(f"preparing workspace: {exc}")

    path = workspace.path or manager.workspace_path(name)
    exit_code = launch_agent(
        path,
        shim_dir(path),
        config.agent_command,
        pid_path=compute_pid_path(manager.root, name),
    )
    if exit_code == AGENT_NOT_FOUND_EXIT_CODE:
        sys.stderr.write(f"\nError running agent: could not start {config.agent_command[0]}\n")
    elif exit_code != 0:
        sys.stderr.write(f"\nAgent exited with code {exit_code}\n")

    if _ask_keep():
        print(f"Workspace kept at: {path}")
        return
    _cleanup(manager, name)
    print(f"Workspace '{name}' removed")


def _main_impl(argv: list[str]) -> None:
    if not argv:
        sys.stderr.write(_usage())
        sys.exit(1)

    command = argv[0]
    if command in ("-h", "--help", "help"):
        sys.stdout.write(_usage())
        return
    if command in ("-V", "--version"):
        print(f"dojo {__version__}")
        return

    config = load_settings()
    manager = open_manager(config)

    if command == "list":
        _list_workspaces(manager)
        return

    _run_agent(config, manager, command)


def main() -> None:
    try:
        _main_impl(sys.argv[1:])
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
