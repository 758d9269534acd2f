"""Configuration management.

Config is loaded on demand rather than at import time so tests and the TUI
can point DOJO_CONFIG at their own file:
    from dojo.config import load_config
"""

from dojo.config.loader import load_config, resolve_config_path
from dojo.config.schema import DojoConfig

__all__ = ["DojoConfig", "load_config", "resolve_config_path"]
