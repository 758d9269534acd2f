from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dojo.constants import DEFAULT_AGENT_COMMAND, DEFAULT_JJ_PATH, DEFAULT_NAME_PREFIX, VALID_NAME_PATTERN


class DojoConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    jj_path: str = DEFAULT_JJ_PATH
    agent_command: List[str] = Field(default_factory=lambda: list(DEFAULT_AGENT_COMMAND))
    default_name_prefix: str = DEFAULT_NAME_PREFIX
    log_level: Optional[str] = None

    @field_validator("agent_command")
    @classmethod
    def validate_agent_command(cls, v: List[str]) -> List[str]:
        if not v or not v[0].strip():
            raise ValueError("agent_command must name an executable")
        return v

    @field_validator("default_name_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not VALID_NAME_PATTERN.match(v):
            raise ValueError(f"Invalid name prefix: {v}. Use letters, digits, '-' or '_'")
        return v
