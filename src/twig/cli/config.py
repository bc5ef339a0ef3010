"""Shell configuration for the twig CLI."""

import logging
from typing import Optional

from pydantic import BaseModel, field_validator


class ShellConfig(BaseModel):
    """Settings gathered from the command line before the shell starts."""

    root_data: str
    prompt: str = "> "
    interactive: Optional[bool] = None  # None means detect from the terminal
    verbose_errors: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level
