# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Resolve the concrete types bound to generic parameters along inheritance hierarchies."""

from .generics import (
    GenericsError,
    ParameterMethod,
    TypeReference,
    is_defined,
    refine,
    resolve_parameter,
    to_annotation,
)


__version__ = "0.1.0"

__all__ = [
    "GenericsError",
    "ParameterMethod",
    "TypeReference",
    "is_defined",
    "refine",
    "resolve_parameter",
    "to_annotation",
]
