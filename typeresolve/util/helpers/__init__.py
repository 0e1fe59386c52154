# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

from . import script_info
from .frozendict import FrozenDict
from .pydantic_lib import ConfigBaseModel


__all__ = [
    "ConfigBaseModel",
    "FrozenDict",
    "script_info",
]
