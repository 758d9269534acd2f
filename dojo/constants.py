"""Constants shared by the jj client, the workspace manager and the TUI.

Paths are relative to a workspace root unless noted otherwise.
"""

import re

# Reserved namespace for agent workspaces, relative to the root workspace
AGENTS_DIR = ".jj/agents"
PID_CACHE_DIR = ".pids"  # Hidden entry inside AGENTS_DIR

# Markers written inside each agent workspace
AGENT_MARKER_FILE = ".jj/dojo-agent"  # Inside .jj so jj never snapshots it
GIT_SCOPE_MARKER = ".git"  # Scopes the agent to the workspace boundary
SHIM_DIR = ".jj/.dojo-bin"
SHIM_COMMAND = "git"
SHIM_MESSAGE = "git disabled for agents; use jj"
SHIM_SCRIPT = f"""#!/bin/sh
echo "{SHIM_MESSAGE}" >&2
exit 1
"""

DEFAULT_WORKSPACE = "default"
DEFAULT_NAME_PREFIX = "agent"
DEFAULT_AGENT_COMMAND = ("claude",)
DEFAULT_JJ_PATH = "jj"

VALID_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
VALID_NAME_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_")

# Exit code reported when the agent binary cannot be started
AGENT_NOT_FOUND_EXIT_CODE = 127
