# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Resolution of generic parameters through inheritance hierarchies.

Given a leaf class, one of its ancestors and a parameter declared by that
ancestor, :func:`resolve_parameter` walks the hierarchy from the leaf up to the
ancestor, carrying the type arguments each level passes to the one above::

    >>> from typeresolve.generics import resolve_parameter
    >>> class Base[I, E, F]: ...
    >>> class Mid[F](Base[str, bool, F]): ...
    >>> class Leaf(Mid[int]): ...
    >>> print(resolve_parameter(Leaf, Base, 0), resolve_parameter(Leaf, Base, 2))
    str int

Composite arguments keep their structure::

    >>> class Handler[T](Base[list[T], tuple[T, ...], dict[str, T]]): ...
    >>> class IntHandler(Handler[int]): ...
    >>> print(resolve_parameter(IntHandler, Base, 0), resolve_parameter(IntHandler, Base, 1))
    list[int] int[]

A parameter that the leaf never binds cannot be resolved::

    >>> resolve_parameter(Mid, Base, "F")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    UnresolvedParameterError: Parameter F with index 2 declared on Base has not been bound to a concrete type by Mid

The walk itself works on any :class:`~typeresolve.generics.provider.TypeMetadataProvider`,
so hand-built :class:`~typeresolve.generics.declarations.TypeDeclaration` hierarchies
resolve the same way.
"""

import logging
import typing

from frozendict import frozendict

from ..util.logging import getLogger
from .declarations import DeclarationProvider, TypeDeclaration
from .errors import (
    AncestorNotFoundError,
    ArrayOfGenericTypeError,
    GenericsError,
    IndexOutOfRangeError,
    NoGenericParametersError,
    UnresolvedParameterError,
    UnsolvableGenericError,
)
from .introspection import RuntimeTypeProvider
from .references import Concrete, GenericArray, Parameterized, TypeReference, Variable, Wildcard, flatten_array, is_defined


if typing.TYPE_CHECKING:
    from .provider import TypeMetadataProvider


# Identifiers accepted when referring to a generic parameter of the ancestor.
type ParamType = int | str | typing.TypeVar

# Bindings passed from one level to the next, by slot position.
type SubstitutionTable = typing.Mapping[int, TypeReference]

# Bindings of one level's own slots.
type LevelBindings = typing.Mapping[Variable, TypeReference]


log = getLogger(__name__)


# MARK: Entry point
def default_provider(leaf: typing.Any, ancestor: typing.Any) -> TypeMetadataProvider:
    """Return the provider matching the kind of *leaf*."""
    if isinstance(leaf, Parameterized):
        leaf = leaf.raw.origin
    if isinstance(leaf, TypeDeclaration):
        return DeclarationProvider()
    return RuntimeTypeProvider(prefer=ancestor if isinstance(ancestor, type) else None)


def _narrow_index(provider: TypeMetadataProvider, ancestor: typing.Any, param: ParamType) -> int:
    if isinstance(param, bool):
        msg = f"Parameter index must be an int, str or TypeVar, got {type(param).__name__}"
        raise TypeError(msg)
    if isinstance(param, int):
        return param

    if isinstance(param, typing.TypeVar):
        slots = provider.declared_slots(ancestor)
        matches = [pos for pos, slot in enumerate(slots) if slot.origin is param]
        if not matches:
            matches = [pos for pos, slot in enumerate(slots) if slot.name == param.__name__]
    elif isinstance(param, str):
        matches = [pos for pos, slot in enumerate(provider.declared_slots(ancestor)) if slot.name == param]
    else:
        msg = f"Parameter index must be an int, str or TypeVar, got {type(param).__name__}"
        raise TypeError(msg)

    if not matches:
        msg = f"Could not find generic parameter {param} in {provider.declaration_name(ancestor)}"
        raise GenericsError(msg)
    return matches[0]


def resolve_parameter[D](leaf: D, ancestor: D, index: ParamType, *, provider: TypeMetadataProvider[D] | None = None) -> TypeReference:
    """Return the fully resolved type bound to parameter *index* of *ancestor*, as seen from *leaf*.

    *index* is the zero-based position of the parameter on *ancestor*, or its name, or
    (for Python classes) the ``TypeVar`` itself. *leaf* may be specialised, e.g.
    ``Leaf[int]``, in which case its own parameters are bound to the given arguments.

    Raises:
        NoGenericParametersError: If *ancestor* declares no generic parameters.
        IndexOutOfRangeError: If *index* is outside the parameters declared by *ancestor*.
        AncestorNotFoundError: If *ancestor* is not in the hierarchy of *leaf*.
        UnresolvedParameterError: If the hierarchy of *leaf* never binds the parameter to a concrete type.
        UnsolvableGenericError: If a supertype mentions a type variable its declaration does not declare.
        ArrayOfGenericTypeError: If an array component resolves to a bare type variable or wildcard.

    """
    if provider is None:
        provider = default_provider(leaf, ancestor)

    ancestor_name = provider.declaration_name(ancestor)
    count = provider.declared_slot_count(ancestor)
    if count == 0:
        raise NoGenericParametersError(ancestor_name)

    position = _narrow_index(provider, ancestor, index)
    if not 0 <= position < count:
        raise IndexOutOfRangeError(ancestor_name, position, count)

    declaration, arguments = provider.split_specialization(leaf)
    inherited: SubstitutionTable | None = None
    if arguments is not None:
        arity = provider.declared_slot_count(declaration)
        if len(arguments) != arity:
            msg = f"{provider.declaration_name(declaration)} declares {arity} generic parameters, got {len(arguments)} type arguments"
            raise GenericsError(msg)
        inherited = frozendict(enumerate(arguments))

    leaf_name = provider.declaration_name(declaration)
    log.debug("Resolving %s parameter %d from %s", ancestor_name, position, leaf_name)

    reference = walk(provider, declaration, declaration, ancestor, position, inherited)
    if not is_defined(reference):
        raise UnresolvedParameterError(str(reference), position, ancestor_name, leaf_name)

    log.debug("Resolved %s parameter %d from %s to %s", ancestor_name, position, leaf_name, reference)
    return reference


# MARK: Hierarchy walk
def walk[D](provider: TypeMetadataProvider[D], current: D, target: D, ancestor: D, index: int, inherited: SubstitutionTable | None) -> TypeReference:
    """Walk from *current* up to *ancestor* and return the binding of slot *index*.

    *inherited* holds the bindings the level below passed to *current*, by slot
    position, and is ``None`` on the first call unless the leaf is specialised.
    *target* is the leaf the walk started from and is only used for error reporting.
    """
    slots = provider.declared_slots(current)

    # The level below already refined its supertype, i.e. the ancestor's arguments
    if current == ancestor:
        if inherited is None:
            return slots[index]
        return inherited.get(index, slots[index])

    bindings: LevelBindings = frozendict(
        {slot: slot if inherited is None else inherited.get(pos, slot) for pos, slot in enumerate(slots)},
    )

    outgoing: SubstitutionTable = frozendict()
    supertype = provider.super_type_reference(current)
    if isinstance(supertype, Parameterized):
        outgoing = frozendict({pos: refine(arg, bindings) for pos, arg in enumerate(supertype.arguments)})

    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            "%s -> %s: %s",
            provider.declaration_name(current),
            supertype,
            ", ".join(f"{pos}={arg}" for pos, arg in outgoing.items()) or "no arguments",
        )

    superclass = provider.super_declaration(current)
    if superclass is None:
        raise AncestorNotFoundError(provider.declaration_name(ancestor), provider.declaration_name(target))

    return walk(provider, superclass, target, ancestor, index, outgoing)


# MARK: Refinement
def refine(reference: TypeReference, bindings: LevelBindings) -> TypeReference:
    """Replace the type variables in *reference* with their value in *bindings*.

    The structure of *reference* is preserved; only :class:`Variable` leaves change.
    Arrays are the exception: an array of a type that becomes concrete is folded into
    a single :class:`Concrete` array type.

    Raises:
        UnsolvableGenericError: If *reference* mentions a variable missing from *bindings*.
        ArrayOfGenericTypeError: If an array component becomes a variable or wildcard.

    """
    if isinstance(reference, Concrete):
        return reference

    elif isinstance(reference, Variable):
        try:
            return bindings[reference]
        except KeyError:
            raise UnsolvableGenericError(str(reference), tuple(str(variable) for variable in bindings)) from None

    elif isinstance(reference, Parameterized):
        return Parameterized(reference.raw, tuple(refine(arg, bindings) for arg in reference.arguments), reference.owner)

    elif isinstance(reference, GenericArray):
        component, dimensions = flatten_array(reference)
        return _rebuild_array(refine(component, bindings), dimensions)

    elif isinstance(reference, Wildcard):
        return Wildcard(
            upper=frozenset(refine(bound, bindings) for bound in reference.upper),
            lower=frozenset(refine(bound, bindings) for bound in reference.lower),
        )

    else:
        msg = f"Expected a type reference, got {type(reference).__name__}"
        raise TypeError(msg)


def _rebuild_array(component: TypeReference, dimensions: int) -> TypeReference:
    """Wrap *component* in *dimensions* array levels."""
    if isinstance(component, Concrete):
        return Concrete(component.name, component.dimensions + dimensions, component.origin)

    if not isinstance(component, (Parameterized, GenericArray)):
        raise ArrayOfGenericTypeError(str(component))

    for _ in range(dimensions):
        component = GenericArray(component)
    return component
