# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Type reference model.

A type reference describes a type as seen at one point of an inheritance
hierarchy. It is one of five immutable variants:

* :class:`Concrete` - a fully resolved, non-generic type (optionally an array of it),
* :class:`Variable` - a generic slot that has not been bound yet,
* :class:`Parameterized` - a generic instantiation such as ``List[String]``,
* :class:`GenericArray` - an array whose component is not concrete,
* :class:`Wildcard` - a bounded or unbounded placeholder.

References render to a compact text form that :func:`typeresolve.generics.syntax.parse_reference`
reads back::

    >>> from typeresolve.generics.references import Concrete, GenericArray, Parameterized, Wildcard
    >>> string = Concrete("String")
    >>> print(GenericArray(Parameterized(Concrete("List"), (Wildcard(upper=frozenset({string})),))))
    List[? extends String][]

"""

import dataclasses
import typing


# MARK: Definitions
type TypeReference = Concrete | Variable | Parameterized | GenericArray | Wildcard


@dataclasses.dataclass(slots=True, frozen=True)
class Concrete:
    #: Display name of the type.
    name: str
    #: Number of array dimensions wrapped around the type, 0 for a plain type.
    dimensions: int = 0
    #: The runtime object described by this reference (a class, a declaration, or None when only the name is known).
    origin: typing.Any = None

    @property
    def component(self) -> Concrete:
        """Return the non-array component of this reference."""
        return self if not self.dimensions else dataclasses.replace(self, dimensions=0)

    @typing.override
    def __str__(self) -> str:
        return self.name + "[]" * self.dimensions


@dataclasses.dataclass(slots=True, frozen=True)
class Variable:
    #: Name of the generic slot.
    name: str
    #: The object that introduced the slot (a ``typing.TypeVar`` for Python classes), if any.
    origin: typing.Any = None

    @typing.override
    def __str__(self) -> str:
        return self.name


@dataclasses.dataclass(slots=True, frozen=True)
class Parameterized:
    raw: Concrete
    arguments: tuple[TypeReference, ...]
    owner: TypeReference | None = None

    @typing.override
    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        prefix = "" if self.owner is None else f"{self.owner}."
        return f"{prefix}{self.raw}[{args}]"


@dataclasses.dataclass(slots=True, frozen=True)
class GenericArray:
    component: TypeReference

    @typing.override
    def __str__(self) -> str:
        return f"{self.component}[]"


@dataclasses.dataclass(slots=True, frozen=True)
class Wildcard:
    upper: frozenset[TypeReference] = frozenset()
    lower: frozenset[TypeReference] = frozenset()

    @typing.override
    def __str__(self) -> str:
        if self.upper:
            return "? extends " + _join_bounds(self.upper)
        elif self.lower:
            return "? super " + _join_bounds(self.lower)
        else:
            return "?"


REFERENCE_TYPES = (Concrete, Variable, Parameterized, GenericArray, Wildcard)


def _join_bounds(bounds: frozenset[TypeReference]) -> str:
    return " & ".join(sorted(str(bound) for bound in bounds))


# MARK: Definedness
def is_defined(reference: TypeReference) -> bool:
    """Return ``True`` if no unresolved :class:`Variable` is reachable from *reference*.

    >>> is_defined(Parameterized(Concrete("List"), (Concrete("String"),)))
    True
    >>> is_defined(GenericArray(Variable("T")))
    False

    """
    if isinstance(reference, Concrete):
        return True
    elif isinstance(reference, Variable):
        return False
    elif isinstance(reference, Parameterized):
        return all(is_defined(arg) for arg in reference.arguments)
    elif isinstance(reference, GenericArray):
        return is_defined(reference.component)
    elif isinstance(reference, Wildcard):
        return all(is_defined(bound) for bound in reference.upper) and all(is_defined(bound) for bound in reference.lower)
    else:
        msg = f"Expected a type reference, got {type(reference).__name__}"
        raise TypeError(msg)


# MARK: Helpers
def iter_variables(reference: TypeReference) -> typing.Iterator[Variable]:
    """Yield every :class:`Variable` reachable from *reference*, depth first."""
    if isinstance(reference, Variable):
        yield reference
    elif isinstance(reference, Parameterized):
        for arg in reference.arguments:
            yield from iter_variables(arg)
    elif isinstance(reference, GenericArray):
        yield from iter_variables(reference.component)
    elif isinstance(reference, Wildcard):
        for bound in (*reference.upper, *reference.lower):
            yield from iter_variables(bound)


def flatten_array(reference: TypeReference) -> tuple[TypeReference, int]:
    """Return the innermost non-array component of *reference* and its number of array dimensions.

    >>> flatten_array(GenericArray(GenericArray(Variable("T"))))
    (Variable(name='T', origin=None), 2)

    """
    dimensions = 0
    while isinstance(reference, GenericArray):
        dimensions += 1
        reference = reference.component
    if isinstance(reference, Concrete) and reference.dimensions:
        dimensions += reference.dimensions
        reference = reference.component
    return reference, dimensions
