# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Hand-built type declarations.

When a hierarchy is not available as Python classes it can be described explicitly,
either in code::

    >>> from typeresolve.generics import declarations as d
    >>> Base = d.declare("Base", "I", "E", "F")
    >>> Mid = d.declare("Mid", "F", extends=Base[d.concrete("String"), d.concrete("Boolean"), d.var("F")])
    >>> Leaf = d.declare("Leaf", extends=Mid[d.concrete("Integer")])
    >>> Leaf.superclass is Mid
    True

or as a YAML document loaded into a :class:`DeclarationTable`, where supertypes use
the syntax of :mod:`typeresolve.generics.syntax`:

.. code-block:: yaml

    declarations:
      Base: {parameters: [I, E, F]}
      Mid:  {parameters: [F], extends: "Base[String, Boolean, F]"}
      Leaf: {extends: "Mid[Integer]"}

"""

import dataclasses
import pathlib
import typing

from frozendict import frozendict
from pydantic import Field, ValidationError, field_validator

from ..util.helpers.frozendict import FrozenDict
from ..util.helpers.pydantic_lib import ConfigBaseModel
from ..util.yaml_loader import load_yaml
from .errors import DeclarationError
from .provider import TypeMetadataProvider
from .references import Concrete, GenericArray, Parameterized, TypeReference, Variable, Wildcard
from .syntax import parse_reference


# MARK: TypeDeclaration
@dataclasses.dataclass(slots=True, frozen=True, eq=False)
class TypeDeclaration:
    """A named type with generic parameters and at most one supertype.

    Declarations compare by identity, like classes do.
    """

    name: str
    parameters: tuple[str, ...] = ()
    #: The immediate supertype, expressed over this declaration's own parameters.
    supertype: Concrete | Parameterized | None = None

    def __post_init__(self) -> None:
        if len(set(self.parameters)) != len(self.parameters):
            msg = f"{self.name} declares duplicate generic parameters {self.parameters}"
            raise DeclarationError(msg)
        if self.supertype is not None and not isinstance(self.supertype, (Concrete, Parameterized)):
            msg = f"{self.name} must extend a concrete or parameterized type, got {self.supertype}"
            raise DeclarationError(msg)

    @property
    def slots(self) -> tuple[Variable, ...]:
        return tuple(Variable(name) for name in self.parameters)

    @property
    def reference(self) -> Concrete:
        """Return a :class:`Concrete` reference to this declaration."""
        return Concrete(self.name, origin=self)

    @property
    def superclass(self) -> TypeDeclaration | None:
        """Return the declaration one level up, if the supertype refers to one."""
        raw = self.supertype.raw if isinstance(self.supertype, Parameterized) else self.supertype
        origin = None if raw is None else raw.origin
        return origin if isinstance(origin, TypeDeclaration) else None

    def __getitem__(self, arguments: TypeReference | tuple[TypeReference, ...]) -> Parameterized:
        """Return a :class:`Parameterized` reference binding this declaration's parameters to *arguments*.

        Raises:
            DeclarationError: If the number of arguments does not match the declared parameters.

        """
        if not isinstance(arguments, tuple):
            arguments = (arguments,)
        if len(arguments) != len(self.parameters):
            msg = f"{self.name} declares {len(self.parameters)} generic parameters, got {len(arguments)} type arguments"
            raise DeclarationError(msg)
        return Parameterized(self.reference, arguments)

    @typing.override
    def __str__(self) -> str:
        if not self.parameters:
            return self.name
        return f"{self.name}[{', '.join(self.parameters)}]"


# MARK: Builders
def declare(name: str, *parameters: str, extends: Concrete | Parameterized | TypeDeclaration | None = None) -> TypeDeclaration:
    if isinstance(extends, TypeDeclaration):
        extends = extends.reference
    return TypeDeclaration(name, parameters, extends)


def concrete(name: str, dimensions: int = 0) -> Concrete:
    return Concrete(name, dimensions)


def var(name: str) -> Variable:
    return Variable(name)


def array(component: TypeReference, dimensions: int = 1) -> TypeReference:
    """Return an array of *component*, concrete when the component is concrete."""
    if isinstance(component, Concrete):
        return dataclasses.replace(component, dimensions=component.dimensions + dimensions)
    for _ in range(dimensions):
        component = GenericArray(component)
    return component


def wildcard(*, upper: typing.Iterable[TypeReference] = (), lower: typing.Iterable[TypeReference] = ()) -> Wildcard:
    return Wildcard(frozenset(upper), frozenset(lower))


# MARK: Provider
class DeclarationProvider(TypeMetadataProvider[TypeDeclaration]):
    """Metadata provider over :class:`TypeDeclaration` hierarchies."""

    @staticmethod
    def _check(declaration: typing.Any) -> TypeDeclaration:
        if not isinstance(declaration, TypeDeclaration):
            msg = f"Expected a TypeDeclaration, got {type(declaration).__name__}"
            raise TypeError(msg)
        return declaration

    @typing.override
    def declared_slots(self, declaration: TypeDeclaration) -> tuple[Variable, ...]:
        return self._check(declaration).slots

    @typing.override
    def super_type_reference(self, declaration: TypeDeclaration) -> TypeReference | None:
        return self._check(declaration).supertype

    @typing.override
    def super_declaration(self, declaration: TypeDeclaration) -> TypeDeclaration | None:
        return self._check(declaration).superclass

    @typing.override
    def declaration_name(self, declaration: TypeDeclaration) -> str:
        return self._check(declaration).name

    @typing.override
    def split_specialization(self, leaf: typing.Any) -> tuple[TypeDeclaration, tuple[TypeReference, ...] | None]:
        if isinstance(leaf, Parameterized):
            return self._check(leaf.raw.origin), leaf.arguments
        return leaf, None


# MARK: DeclarationTable
class DeclarationModel(ConfigBaseModel):
    parameters: tuple[str, ...] = Field(default=(), description="Generic parameter names, in declaration order")
    extends: str | None = Field(default=None, description="Supertype, in type reference syntax, using this declaration's parameters")

    @field_validator("parameters")
    @classmethod
    def _validate_parameters(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            msg = f"Generic parameter names must be unique, got {list(value)}"
            raise ValueError(msg)
        for name in value:
            if not name.isidentifier():
                msg = f"Generic parameter names must be identifiers, got {name!r}"
                raise ValueError(msg)
        return value


class DeclarationTable(ConfigBaseModel):
    declarations: FrozenDict[str, DeclarationModel] = Field(default_factory=frozendict, description="Declarations by name")

    @classmethod
    def from_yaml(cls, path: pathlib.Path | str) -> DeclarationTable:
        """Load a table from the YAML document at *path*.

        Raises:
            DeclarationError: If the document does not describe a valid table.

        """
        data = load_yaml(pathlib.Path(path))
        try:
            return cls.model_validate(data)
        except ValidationError as err:
            msg = f"Invalid declaration table {path}: {err}"
            raise DeclarationError(msg) from err

    def build(self) -> frozendict[str, TypeDeclaration]:
        """Build every declaration, supertypes first.

        Raises:
            DeclarationError: If a supertype is malformed, has the wrong arity, or the
                inheritance chain is cyclic.

        """
        arities = {name: len(model.parameters) for name, model in self.declarations.items()}
        built: dict[str, TypeDeclaration] = {}

        def build_one(name: str, chain: tuple[str, ...]) -> TypeDeclaration:
            if (declaration := built.get(name)) is not None:
                return declaration
            if name in chain:
                msg = f"Cyclic inheritance: {' -> '.join((*chain, name))}"
                raise DeclarationError(msg)

            model = self.declarations[name]
            supertype = None
            if model.extends is not None:
                supertype = parse_reference(model.extends, parameters=model.parameters, arities=arities)
                raw = supertype.raw if isinstance(supertype, Parameterized) else supertype
                if not isinstance(raw, Concrete) or raw.dimensions:
                    msg = f"{name} must extend a concrete or parameterized type, got {model.extends}"
                    raise DeclarationError(msg)

                # Link the raw supertype to its declaration so the hierarchy can be walked
                if raw.name in self.declarations:
                    parent = build_one(raw.name, (*chain, name))
                    raw = parent.reference
                    supertype = dataclasses.replace(supertype, raw=raw) if isinstance(supertype, Parameterized) else raw

            declaration = built[name] = TypeDeclaration(name, model.parameters, supertype)
            return declaration

        for name in self.declarations:
            build_one(name, ())

        return frozendict(built)
