# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Process-wide logging setup.

Configures the optional log file and the TTY handler (plain or rich), and applies
per-logger levels from :class:`~typeresolve.util.logging.config.LoggingLevels`.
"""

import logging
import re
import sys

from typing import Any, ClassVar, Self
from typing import cast as typing_cast

from ..helpers import script_info
from .config import LoggingConfig
from .formatters import ConditionalFormatter, HandlerFilter


# MARK: Constants
LOG_FILE_NAME: str = f"{script_info.get_script_name()}.log"


# MARK: Logging Manager
class LoggingManager:
    _instance: ClassVar[LoggingManager | None] = None

    initialized: bool
    fh: logging.Handler | None
    ch: logging.Handler | None

    def __new__(cls) -> Self:
        if (instance := cls._instance) is None:
            instance = cls._instance = super().__new__(cls)
            instance.initialized = False
            instance.fh = None
            instance.ch = None
        return typing_cast("Self", instance)

    def initialize(self, config: LoggingConfig | dict[str, Any]) -> None:
        if not isinstance(config, LoggingConfig):
            config = LoggingConfig.model_validate(config)

        if self.initialized:
            msg = f"Must not initialise {type(self).__name__} twice"
            raise RuntimeError(msg)
        self.initialized = True

        self.config = config
        self.log_file_path = config.dir / LOG_FILE_NAME

        logging.captureWarnings(capture=True)
        logging.root.setLevel(config.levels.root.value)

        self._configure_file_handler()
        self._configure_tty_handler()
        self._configure_custom_logger_levels()

    def _configure_file_handler(self) -> None:
        self.fh = None
        if not self.config.levels.file.enabled:
            return

        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        self.fh = logging.FileHandler(self.log_file_path, mode="w", encoding="UTF-8")
        self.fh.setLevel(self.config.levels.file.value)
        self.fh.setFormatter(ConditionalFormatter("%(asctime)s [%(levelname)s:%(name)s] %(message)s"))
        self.fh.addFilter(HandlerFilter("file"))
        logging.root.addHandler(self.fh)

    def _configure_tty_handler(self) -> None:
        self.ch = None
        if not self.config.levels.tty.enabled:
            return

        if self.config.rich:
            from rich.console import Console
            from rich.logging import RichHandler

            self.ch = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False, markup=False)
        else:
            self.ch = logging.StreamHandler(sys.stderr)
            self.ch.setFormatter(ConditionalFormatter("[%(levelname).1s:%(name)s] %(message)s"))

        self.ch.setLevel(self.config.levels.tty.value)
        self.ch.addFilter(HandlerFilter("tty"))

        # pytest captures log records on its own
        if not script_info.is_unit_test():
            logging.root.addHandler(self.ch)

    def apply_logging_level(self, logger: logging.Logger) -> None:
        """Set the level of *logger* from the most specific matching custom level, or the default."""
        # Explicit levels win
        if logger.level != logging.NOTSET:
            return

        levels = self.config.levels
        level = levels.default
        matched = 0

        for pattern, custom in levels.custom.items():
            assert isinstance(pattern, re.Pattern), f"Custom logging level keys must be compiled regex patterns, got {type(pattern)}"
            if (match := pattern.match(logger.name)) is not None and len(match.group(0)) > matched:
                level = custom
                matched = len(match.group(0))

        if level == logging.NOTSET:
            return
        logger.setLevel(level.value if level.enabled else logging.CRITICAL + 1)

    def _configure_custom_logger_levels(self) -> None:
        for name, logger in list(logging.root.manager.loggerDict.items()):
            if isinstance(logger, logging.Logger) and name:
                self.apply_logging_level(logger)
