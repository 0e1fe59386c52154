# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import re

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from frozendict import frozendict
from pydantic import Field, field_validator

from ..helpers.frozendict import FrozenDict
from ..helpers.pydantic_lib import ConfigBaseModel
from .levels import LoggingLevel


# Parsing a reference grammar is chatty at DEBUG
DEFAULT_CUSTOM_LEVELS: dict[str, LoggingLevel] = {
    r"^lark": LoggingLevel.WARNING,
}


class LoggingLevels(ConfigBaseModel):
    file: LoggingLevel = Field(default=LoggingLevel.OFF, description="Log level for log file output")
    tty: LoggingLevel = Field(default=LoggingLevel.NOTSET, description="Log level for TTY output")
    root: LoggingLevel = Field(default=LoggingLevel.NOTSET, description="Log level for the root log handler")
    default: LoggingLevel = Field(default=LoggingLevel.WARNING, description="Default log level for loggers not matched by 'custom'")

    custom: FrozenDict[re.Pattern[str], LoggingLevel] = Field(
        default_factory=dict,
        description="Custom logging levels, keyed by a regex matched against the logger name.",
        validate_default=True,
    )

    @staticmethod
    def _compile(pattern: Any) -> re.Pattern[str]:
        if isinstance(pattern, str):
            pattern = re.compile(pattern, re.IGNORECASE)
        if not isinstance(pattern, re.Pattern):
            msg = f"Custom logging level keys must be str or compiled regex patterns, got {type(pattern)}"
            raise TypeError(msg)
        return pattern

    @field_validator("custom", mode="before")
    @classmethod
    def _compile_custom_levels(cls, value: Any) -> frozendict[re.Pattern[str], Any]:
        if not isinstance(value, Mapping):
            msg = f"Custom logging levels must be a mapping, got {type(value)}"
            raise TypeError(msg)

        levels = {cls._compile(name): level for name, level in DEFAULT_CUSTOM_LEVELS.items()}
        levels.update((cls._compile(name), level) for name, level in value.items())
        return frozendict(levels)


class LoggingConfig(ConfigBaseModel):
    dir: Path = Field(default_factory=Path.cwd, description="Log file directory")
    levels: LoggingLevels = Field(default_factory=LoggingLevels, description="Logging levels configuration")
    rich: bool = Field(default=True, description="Use rich for TTY output")
