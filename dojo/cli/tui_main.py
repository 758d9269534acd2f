"""dojo-tui: interactive orchestrator for the agent workspaces of a repository."""

from __future__ import annotations

import sys

from dojo.cli.main import load_settings, open_manager
from dojo.tui.app import AppModel
from dojo.tui.commands import LifecycleCommands
from dojo.tui.runtime import run_tui
from dojo.workspaces.stale import StaleRecoveringReader


def _main_impl(argv: list[str]) -> None:
    if argv and argv[0] in ("-h", "--help", "help"):
        sys.stdout.write("Usage: dojo-tui\n")
        return

    config = load_settings()
    manager = open_manager(config)
    reader = StaleRecoveringReader(manager.client, manager)
    model = AppModel(LifecycleCommands(manager, reader), name_prefix=config.default_name_prefix)
    run_tui(model)


def main() -> None:
    try:
        _main_impl(sys.argv[1:])
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
