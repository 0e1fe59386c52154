# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Type metadata for Python classes.

This module wraps the Python typing machinery (and some Pydantic internals) so
that ordinary generic classes can be walked by the resolver:

* the generic slots of a class are its ``TypeVar`` parameters,
* its supertype is the original (possibly subscripted) base it inherits from,
* type arguments are converted to and from :data:`TypeReference` values.

Homogeneous variadic tuples play the role of arrays: ``tuple[str, ...]`` is a
concrete array of ``str`` while ``tuple[list[T], ...]`` is a generic array::

    >>> from typeresolve.generics.introspection import RuntimeTypeProvider, to_annotation
    >>> provider = RuntimeTypeProvider()
    >>> reference = provider.reference(tuple[tuple[str, ...], ...])
    >>> print(reference)
    str[][]
    >>> to_annotation(reference)
    tuple[tuple[str, ...], ...]

"""

import dataclasses
import types
import typing

import pydantic

from .errors import UnsupportedTypeError
from .provider import TypeMetadataProvider
from .references import Concrete, GenericArray, Parameterized, TypeReference, Variable, Wildcard


# MARK: Definitions
# Bases that carry generic bookkeeping rather than inheritance.
SKIPPED_BASES: tuple[typing.Any, ...] = (typing.Generic, typing.Protocol, object)

UNION_ORIGINS: tuple[typing.Any, ...] = (typing.Union, types.UnionType)


class ParameterList:
    """Raw type of the parameter list of a ``Callable``, e.g. ``[int, str]`` in ``Callable[[int, str], None]``."""


# Renders with an empty name, so a parameter list prints as ``[int, str]``.
PARAMETER_LIST = Concrete("", origin=ParameterList)


# MARK: Typing helpers
def is_pydantic_model(cls: typing.Any) -> bool:
    """Return whether *cls* is a Pydantic ``BaseModel`` subclass."""
    return isinstance(cls, type) and issubclass(cls, pydantic.BaseModel)


def get_pydantic_metadata(cls: typing.Any) -> typing.Mapping[str, typing.Any] | None:
    """Return the generic metadata of a Pydantic model, ``None`` for anything else.

    ``BaseModel`` itself carries no metadata.
    """
    if not is_pydantic_model(cls):
        return None
    return getattr(cls, "__pydantic_generic_metadata__", None)


def get_origin_or_none(cls: typing.Any) -> typing.Any:
    """Return the generic origin of *cls*, or ``None`` when it is not a specialisation.

    Parametrised Pydantic models are real classes, so their origin comes from the
    model's generic metadata instead of :func:`typing.get_origin`.
    """
    if (metadata := get_pydantic_metadata(cls)) is not None:
        return metadata["origin"]
    return typing.get_origin(cls)


def get_origin(cls: typing.Any) -> typing.Any:
    """Return the generic origin of *cls*, or *cls* itself when it is not a specialisation."""
    origin = get_origin_or_none(cls)
    return cls if origin is None else origin


def get_arguments(cls: typing.Any) -> tuple[typing.Any, ...]:
    if (metadata := get_pydantic_metadata(cls)) is not None:
        return tuple(metadata["args"])
    return typing.get_args(cls)


def get_parameters(cls: type) -> tuple[typing.Any, ...]:
    if (metadata := get_pydantic_metadata(cls)) is not None:
        return tuple(metadata["parameters"])
    if is_pydantic_model(cls):
        return ()
    return tuple(getattr(cls, "__parameters__", ()))


def get_name(obj: typing.Any) -> str:
    name = getattr(obj, "__name__", None)
    return name if isinstance(name, str) else repr(obj)


def has_free_variables(obj: typing.Any) -> bool:
    if isinstance(obj, (typing.TypeVar, typing.ParamSpec, typing.TypeVarTuple)):
        return True
    if isinstance(obj, (list, tuple)):
        return any(has_free_variables(item) for item in obj)
    return bool(getattr(obj, "__parameters__", ()))


# MARK: RuntimeTypeProvider
class RuntimeTypeProvider(TypeMetadataProvider[type]):
    """Metadata provider over Python classes.

    Python allows several bases, while the resolver follows a single supertype per
    level. When *prefer* is given, the first base that is a subclass of *prefer* is
    followed, which keeps mixins from hiding the path to an ancestor. Otherwise the
    first base that is not ``Generic``, ``Protocol`` or ``object`` is followed.
    """

    def __init__(self, prefer: type | None = None) -> None:
        self.prefer = prefer

    @staticmethod
    def _check(declaration: typing.Any) -> type:
        if not isinstance(declaration, type):
            msg = f"{declaration!r} is not a class"
            raise UnsupportedTypeError(msg)
        return declaration

    @typing.override
    def declared_slots(self, declaration: type) -> tuple[Variable, ...]:
        cls = self._check(declaration)

        slots = []
        for pos, param in enumerate(get_parameters(cls)):
            if not isinstance(param, typing.TypeVar):
                msg = f"Expected all generic parameters to be TypeVars, got {param} at position {pos} in {cls.__name__}"
                raise UnsupportedTypeError(msg)
            slots.append(Variable(param.__name__, param))
        return tuple(slots)

    def _super_base(self, cls: type) -> typing.Any:
        bases = [base for base in types.get_original_bases(cls) if get_origin(base) not in SKIPPED_BASES]
        if not bases:
            return None

        if self.prefer is not None:
            for base in bases:
                origin = get_origin(base)
                if isinstance(origin, type) and issubclass(origin, self.prefer):
                    return base

        return bases[0]

    @typing.override
    def super_type_reference(self, declaration: type) -> TypeReference | None:
        base = self._super_base(self._check(declaration))
        return None if base is None else self.reference(base)

    @typing.override
    def super_declaration(self, declaration: type) -> type | None:
        base = self._super_base(self._check(declaration))
        return None if base is None else get_origin(base)

    @typing.override
    def declaration_name(self, declaration: type) -> str:
        return get_name(declaration)

    @typing.override
    def split_specialization(self, leaf: typing.Any) -> tuple[type, tuple[TypeReference, ...] | None]:
        origin = get_origin_or_none(leaf)
        if origin is None:
            return leaf, None
        return self._check(origin), tuple(self.reference(arg) for arg in get_arguments(leaf))

    # MARK: Conversion
    def reference(self, arg: typing.Any) -> TypeReference:
        """Convert a type, type argument or typing construct into a :data:`TypeReference`.

        Raises:
            UnsupportedTypeError: If *arg* is a forward reference, a ``ParamSpec`` or
                ``TypeVarTuple``, or an unknown construct that still contains type variables.

        """
        if isinstance(arg, typing.TypeVar):
            return Variable(arg.__name__, arg)
        if isinstance(arg, (typing.ParamSpec, typing.TypeVarTuple)):
            msg = f"{type(arg).__name__} {arg} is not supported as a generic parameter"
            raise UnsupportedTypeError(msg)
        if isinstance(arg, typing.ForwardRef):
            msg = f"Could not resolve forward reference {arg.__forward_arg__}"
            raise UnsupportedTypeError(msg)
        if isinstance(arg, typing.TypeAliasType) and not arg.__type_params__:
            return self.reference(arg.__value__)
        if arg is None:
            arg = types.NoneType

        origin = get_origin_or_none(arg)
        if origin is not None:
            args = get_arguments(arg)
            if origin is tuple and len(args) == 2 and args[1] is Ellipsis:  # noqa: PLR2004
                return self._array(self.reference(args[0]))
            return Parameterized(self._concrete(origin), tuple(self.reference(a) for a in args))

        # Parameter list of a Callable
        if isinstance(arg, (list, tuple)):
            return Parameterized(PARAMETER_LIST, tuple(self.reference(a) for a in arg))

        if isinstance(arg, type):
            return self._concrete(arg)

        # Opaque values such as Literal members or Annotated metadata
        if has_free_variables(arg):
            msg = f"Unsupported type argument {arg!r}"
            raise UnsupportedTypeError(msg)
        return Concrete(repr(arg), origin=arg)

    @staticmethod
    def _concrete(origin: typing.Any) -> Concrete:
        name = "Union" if origin in UNION_ORIGINS else get_name(origin)
        return Concrete(name, origin=origin)

    @staticmethod
    def _array(component: TypeReference) -> TypeReference:
        if isinstance(component, Concrete):
            return dataclasses.replace(component, dimensions=component.dimensions + 1)
        return GenericArray(component)


# MARK: to_annotation
def to_annotation(reference: TypeReference) -> typing.Any:
    """Rebuild a typing annotation from a reference produced by :class:`RuntimeTypeProvider`.

    Arrays become homogeneous tuples, unions are rebuilt with :data:`typing.Union`, the
    parameter list of a ``Callable`` becomes a list, and a wildcard becomes its single upper
    bound (or :data:`typing.Any` when unbounded).

    Raises:
        UnsupportedTypeError: If a reference has no runtime counterpart, e.g. a type only
            known by name or a wildcard with several upper bounds.

    """
    if isinstance(reference, Concrete):
        if reference.origin is None or not _is_runtime(reference.origin):
            msg = f"{reference} has no runtime type"
            raise UnsupportedTypeError(msg)
        annotation = reference.origin
        for _ in range(reference.dimensions):
            annotation = tuple[annotation, ...]
        return annotation

    elif isinstance(reference, Variable):
        if not isinstance(reference.origin, typing.TypeVar):
            msg = f"Type variable {reference} has no runtime TypeVar"
            raise UnsupportedTypeError(msg)
        return reference.origin

    elif isinstance(reference, Parameterized):
        origin = to_annotation(reference.raw)
        args = tuple(to_annotation(arg) for arg in reference.arguments)
        if origin is ParameterList:
            return list(args)
        if origin in UNION_ORIGINS:
            return typing.Union[args]  # noqa: UP007
        return origin[args]

    elif isinstance(reference, GenericArray):
        return tuple[to_annotation(reference.component), ...]

    elif isinstance(reference, Wildcard):
        if not reference.upper:
            return typing.Any
        if len(reference.upper) > 1:
            msg = f"Cannot express {reference} as an annotation, intersections are not supported"
            raise UnsupportedTypeError(msg)
        (bound,) = reference.upper
        return to_annotation(bound)

    else:
        msg = f"Expected a type reference, got {type(reference).__name__}"
        raise TypeError(msg)


def _is_runtime(origin: typing.Any) -> bool:
    # Hand-built declarations only exist as metadata
    from .declarations import TypeDeclaration

    return not isinstance(origin, TypeDeclaration)
