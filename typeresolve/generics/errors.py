# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Errors raised while resolving generic parameters.

Every error derives from :class:`GenericsError`, itself a :class:`TypeError`, so
callers can catch a single type when they do not care about the reason.
"""


class GenericsError(TypeError):
    """Signals incorrect generic usage outside the resolver's control.

    Raised when callers provide inputs that make generic resolution impossible
    (for example, asking for a parameter that was never declared, or querying a
    declaration that is not an ancestor of the leaf).
    """


class NoGenericParametersError(GenericsError):
    def __init__(self, ancestor: str) -> None:
        self.ancestor = ancestor
        super().__init__(f"{ancestor} declares no generic parameters")


class IndexOutOfRangeError(GenericsError):
    def __init__(self, ancestor: str, index: int, count: int) -> None:
        self.ancestor = ancestor
        self.index = index
        self.count = count
        super().__init__(f"{ancestor} declares {count} generic parameters with indices from 0 to {count - 1}, got index {index}")


class AncestorNotFoundError(GenericsError):
    def __init__(self, ancestor: str, leaf: str) -> None:
        self.ancestor = ancestor
        self.leaf = leaf
        super().__init__(f"{ancestor} not found in the parent hierarchy of {leaf}")


class UnresolvedParameterError(GenericsError):
    """The leaf's hierarchy never bound the requested parameter to a concrete type."""

    def __init__(self, parameter: str, index: int, ancestor: str, leaf: str) -> None:
        self.parameter = parameter
        self.index = index
        self.ancestor = ancestor
        self.leaf = leaf
        super().__init__(f"Parameter {parameter} with index {index} declared on {ancestor} has not been bound to a concrete type by {leaf}")


class UnsolvableGenericError(GenericsError):
    """A type variable has no binding at the level being refined.

    Well-formed hierarchies never trigger this; it points at a declaration whose
    supertype mentions a variable it does not declare.
    """

    def __init__(self, variable: str, available: tuple[str, ...] = ()) -> None:
        self.variable = variable
        self.available = available
        known = ", ".join(available) if available else "none"
        super().__init__(f"Type variable {variable} has no binding (known variables: {known})")


class ArrayOfGenericTypeError(GenericsError):
    def __init__(self, component: str) -> None:
        self.component = component
        super().__init__(f"Array component {component} cannot be resolved to a concrete or parameterized type")


class DeclarationError(GenericsError):
    """A hand-built declaration table is malformed."""


class UnsupportedTypeError(GenericsError):
    """A typing construct cannot be expressed as a type reference."""
