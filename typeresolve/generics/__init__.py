# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

from .declarations import DeclarationProvider, DeclarationTable, TypeDeclaration
from .descriptor import ParameterMethod
from .errors import (
    AncestorNotFoundError,
    ArrayOfGenericTypeError,
    DeclarationError,
    GenericsError,
    IndexOutOfRangeError,
    NoGenericParametersError,
    UnresolvedParameterError,
    UnsolvableGenericError,
    UnsupportedTypeError,
)
from .introspection import RuntimeTypeProvider, to_annotation
from .provider import TypeMetadataProvider
from .references import Concrete, GenericArray, Parameterized, TypeReference, Variable, Wildcard, is_defined
from .resolver import refine, resolve_parameter, walk
from .syntax import parse_reference


__all__ = [
    "AncestorNotFoundError",
    "ArrayOfGenericTypeError",
    "Concrete",
    "DeclarationError",
    "DeclarationProvider",
    "DeclarationTable",
    "GenericArray",
    "GenericsError",
    "IndexOutOfRangeError",
    "NoGenericParametersError",
    "ParameterMethod",
    "Parameterized",
    "RuntimeTypeProvider",
    "TypeDeclaration",
    "TypeMetadataProvider",
    "TypeReference",
    "UnresolvedParameterError",
    "UnsolvableGenericError",
    "UnsupportedTypeError",
    "Variable",
    "Wildcard",
    "is_defined",
    "parse_reference",
    "refine",
    "resolve_parameter",
    "to_annotation",
    "walk",
]
