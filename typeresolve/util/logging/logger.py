# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import logging

from typing import Any, override


class Logger(logging.Logger):
    @override
    def isEnabledFor(self, level: int, *, handler: str | None = None) -> bool:
        if handler is None:
            return super().isEnabledFor(level)
        elif handler == "tty":
            return self.isEnabledForTty(level)
        elif handler == "file":
            return self.isEnabledForFile(level)
        else:
            msg = f"Unknown handler: {handler}. Expected 'tty' or 'file'."
            raise ValueError(msg)

    def _isEnabledForHandler(self, handler: logging.Handler | None, level: int) -> bool:  # noqa: N802 which matches isEnabledFor
        if handler is None or handler.level > level:
            return False
        return super().isEnabledFor(level)

    def isEnabledForTty(self, level: int) -> bool:  # noqa: N802 which matches isEnabledFor
        from .manager import LoggingManager

        return self._isEnabledForHandler(LoggingManager().ch, level)

    def isEnabledForFile(self, level: int) -> bool:  # noqa: N802 which matches isEnabledFor
        from .manager import LoggingManager

        return self._isEnabledForHandler(LoggingManager().fh, level)


logging.setLoggerClass(Logger)


def getLogger(obj: object, parent: Any = None, name: str | None = None) -> Logger:  # noqa: N802
    """Return the logger for *obj*.

    *obj* is either a logger name or an object whose class name is used. When *parent*
    is a logger, or exposes one as ``parent.log``, the new logger is its child.
    """
    if name is None:
        name = obj if isinstance(obj, str) else type(obj).__name__

    if isinstance(parent, logging.Logger):
        logger = parent.getChild(name)
    elif isinstance(getattr(parent, "log", None), logging.Logger):
        logger = parent.log.getChild(name)
    else:
        logger = logging.getLogger(name)

    from .manager import LoggingManager

    manager = LoggingManager()
    if manager.initialized:
        manager.apply_logging_level(logger)

    if not isinstance(logger, Logger):
        msg = f"Expected a Logger instance, got: {type(logger)}"
        raise TypeError(msg)
    return logger
