# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

from .config import LoggingConfig, LoggingLevels
from .levels import LoggingLevel
from .logger import Logger, getLogger
from .manager import LoggingManager


__all__ = [
    "Logger",
    "LoggingConfig",
    "LoggingLevel",
    "LoggingLevels",
    "LoggingManager",
    "getLogger",
]
