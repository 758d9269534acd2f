import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from instrukt_ai_logging import get_logger

from dojo.config.schema import DojoConfig
from dojo.utils import expand_env_vars

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.dojo/dojo.yml")
DEFAULT_ENV_PATH = Path("~/.dojo/.env")


def _warn_unknown_keys(model: DojoConfig, config_path: Path) -> None:
    if model.model_extra:
        logger.warning("Unknown keys in %s: %s", config_path, list(model.model_extra.keys()))


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Explicit path, then DOJO_CONFIG, then ~/.dojo/dojo.yml."""
    if path is not None:
        return path.expanduser()
    env_path = os.getenv("DOJO_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config(path: Optional[Path] = None) -> DojoConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to dojo.yml. Defaults to DOJO_CONFIG or ~/.dojo/dojo.yml.

    Returns:
        The validated configuration model. A missing or unreadable file yields
        defaults; invalid values raise pydantic.ValidationError.
    """
    env_file = DEFAULT_ENV_PATH.expanduser()
    if env_file.exists():
        load_dotenv(env_file)

    config_path = resolve_config_path(path)
    if not config_path.exists():
        return DojoConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read config file %s: %s", config_path, e)
        return DojoConfig()

    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: expected a mapping, got %s", config_path, type(raw).__name__)
        return DojoConfig()

    model = DojoConfig.model_validate(expand_env_vars(raw))
    _warn_unknown_keys(model, config_path)
    return model
