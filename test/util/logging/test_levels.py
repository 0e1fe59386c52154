# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import logging
import re

import pytest

from pydantic import ValidationError

from typeresolve.util.logging import LoggingConfig, LoggingLevel, LoggingLevels


@pytest.mark.logging
class TestLoggingLevel:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10, logging.DEBUG),
            ("info", logging.INFO),
            (" Warning ", logging.WARNING),
            ("15", 15),
            ("OFF", -1),
            ("false", -1),
            (True, logging.INFO),
            (False, -1),
            (LoggingLevel.ERROR, logging.ERROR),
        ],
    )
    def test_coerce(self, value, expected):
        assert LoggingLevel(value).value == expected

    @pytest.mark.parametrize("value", ["verbose", 2.5, None, -2, []])
    def test_rejects(self, value):
        with pytest.raises((ValueError, TypeError)):
            LoggingLevel(value)

    @pytest.mark.parametrize(
        ("value", "name", "representation"),
        [
            ("debug", "DEBUG", "LoggingLevel.DEBUG"),
            (-1, "OFF", "LoggingLevel.OFF"),
            (42, "42", "LoggingLevel(42)"),
        ],
    )
    def test_names(self, value, name, representation):
        level = LoggingLevel(value)
        assert level.name == name
        assert str(level) == name
        assert repr(level) == representation

    def test_comparisons(self):
        assert LoggingLevel("info") == logging.INFO
        assert LoggingLevel("info") == "INFO"
        assert LoggingLevel("info") == LoggingLevel.INFO
        assert not LoggingLevel.OFF.enabled
        assert LoggingLevel.NOTSET.enabled
        assert len({LoggingLevel(20), LoggingLevel.INFO}) == 1


@pytest.mark.logging
class TestLoggingConfig:
    def test_defaults(self):
        config = LoggingConfig()
        assert config.levels.file == LoggingLevel.OFF
        assert config.levels.default == LoggingLevel.WARNING
        assert config.rich is True

    def test_validates_levels(self):
        levels = LoggingLevels.model_validate({"tty": "debug", "default": None, "custom": {r"^typeresolve\.cli": "ERROR"}})
        assert levels.tty == LoggingLevel.DEBUG
        assert levels.default == LoggingLevel.WARNING
        assert levels.custom[re.compile(r"^typeresolve\.cli", re.IGNORECASE)] == LoggingLevel.ERROR
        assert levels.custom[re.compile(r"^lark", re.IGNORECASE)] == LoggingLevel.WARNING

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            LoggingConfig.model_validate({"colour": True})

    def test_rejects_invalid_level(self):
        with pytest.raises(ValidationError):
            LoggingLevels.model_validate({"tty": "loud"})
