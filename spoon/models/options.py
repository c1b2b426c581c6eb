"""Option models for spoon."""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.constants import (
    DEFAULT_BUILDDIR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DOCKER_URL,
    DEFAULT_IMAGE,
    DEFAULT_PREFIX,
)


def _default_docker_url() -> str:
    return os.environ.get("DOCKER_HOST", DEFAULT_DOCKER_URL)


class SpoonOptions(BaseModel):
    """Resolved settings for a single spoon invocation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(default_factory=_default_docker_url)
    image: str = DEFAULT_IMAGE
    prefix: str = DEFAULT_PREFIX
    builddir: Path = DEFAULT_BUILDDIR
    pre_build_commands: List[str] = Field(default_factory=list)
    command: str = ""
    debug: bool = False
    config: Path = DEFAULT_CONFIG_PATH
    wait_timeout: Optional[float] = None
    strict_host_key_checking: bool = False

    @field_validator("pre_build_commands", mode="before")
    @classmethod
    def _single_command_as_list(cls, value):
        # A lone string in the config file means one command
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("builddir", "config")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("wait_timeout")
    @classmethod
    def _positive_timeout(cls, value):
        if value is not None and value <= 0:
            raise ValueError("wait_timeout must be greater than zero")
        return value
