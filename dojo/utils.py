"""Small helpers shared across dojo modules."""

from __future__ import annotations

import os
import re


def expand_env_vars(config: object) -> object:
    """Recursively expand environment variables in config.

    Replaces ${VAR} patterns with environment variable values. Unknown
    variables are left as-is so the resulting value is still inspectable.
    """
    if isinstance(config, dict):
        return {k: expand_env_vars(v) for k, v in config.items()}  # type: ignore[misc]
    if isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    if isinstance(config, str):

        def replace_env_var(match: re.Match[str]) -> str:
            env_var = match.group(1)
            return os.getenv(env_var, match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    return config


def prepend_path(env: dict[str, str], directory: str) -> dict[str, str]:
    """Return a copy of env with directory first on PATH."""
    updated = dict(env)
    current = updated.get("PATH", "")
    updated["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory
    return updated
