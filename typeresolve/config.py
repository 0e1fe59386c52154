# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import pathlib

from pydantic import Field

from .util.helpers.pydantic_lib import ConfigBaseModel
from .util.logging.config import LoggingConfig
from .util.yaml_loader import load_yaml


class ResolverOptions(ConfigBaseModel):
    annotation: bool = Field(default=False, description="Print resolved Python types as annotations instead of type references")


class Config(ConfigBaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    resolver: ResolverOptions = Field(default_factory=ResolverOptions, description="Resolver options")


def load_config(path: pathlib.Path | str | None = None) -> Config:
    """Load the configuration from the YAML document at *path*, or the defaults when *path* is ``None``.

    Raises:
        pydantic.ValidationError: If the document is not a valid configuration.

    """
    if path is None:
        return Config()
    return Config.model_validate(load_yaml(pathlib.Path(path)))
