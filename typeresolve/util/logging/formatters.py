# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import logging

from typing import override


class HandlerFilter(logging.Filter):
    """Drop records addressed to another handler through ``extra={"handler": ...}``."""

    def __init__(self, handler_name: str) -> None:
        super().__init__()
        self.handler_name = handler_name

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        target = getattr(record, "handler", None)
        return target is None or target == self.handler_name


class ConditionalFormatter(logging.Formatter):
    """Format records normally, except those logged with ``extra={"simple": True}``."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "simple", False):
            return record.getMessage()
        return super().format(record)
