# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Text syntax for type references.

The syntax mirrors the string form of :mod:`typeresolve.generics.references`::

    Name                       concrete type, or a variable if declared as a parameter
    Name[A, B]                 parameterized type
    Outer[A].Inner[B]          parameterized type with an enclosing type
    A[]                        array
    ?  /  ? extends A & B  /  ? super A
                               wildcards, only valid as type arguments

Parsing is done with an Earley parser from ``lark``::

    >>> from typeresolve.generics.syntax import parse_reference
    >>> reference = parse_reference("Map[K, List[? extends Number][]]", parameters=("K",))
    >>> print(reference)
    Map[K, List[? extends Number][]]
    >>> reference.arguments[0]
    Variable(name='K', origin=None)

"""

import dataclasses
import functools

from collections.abc import Iterable, Mapping

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError, VisitError

from .errors import DeclarationError
from .references import Concrete, GenericArray, Parameterized, TypeReference, Variable, Wildcard


GRAMMAR = r"""
    ?start: reference

    ?reference: wildcard
              | type

    wildcard: "?"                       -> unbounded
            | "?" "extends" bounds      -> upper
            | "?" "super" bounds        -> lower

    bounds: type ("&" type)*

    ?type: type "[" "]"                 -> array
         | parameterized
         | NAME                         -> name

    parameterized: (parameterized ".")? NAME "[" reference ("," reference)* "]"

    NAME: /[A-Za-z_][A-Za-z0-9_]*/

    %import common.WS
    %ignore WS
"""


@functools.cache
def _parser() -> Lark:
    return Lark(GRAMMAR, start="start", parser="earley")


@v_args(inline=True)
class ReferenceBuilder(Transformer):
    """Turn a parse tree into a :data:`TypeReference`.

    Names listed in *parameters* become :class:`Variable` instances, every other name
    a :class:`Concrete`. *arities* maps known generic declarations to their parameter
    count so that parameterized uses can be checked.
    """

    def __init__(self, parameters: Iterable[str] = (), arities: Mapping[str, int] | None = None) -> None:
        super().__init__()
        self.parameters = frozenset(parameters)
        self.arities = arities or {}

    def name(self, token: Token) -> TypeReference:
        name = str(token)
        if name in self.parameters:
            return Variable(name)
        return Concrete(name)

    def array(self, component: TypeReference) -> TypeReference:
        if isinstance(component, Concrete):
            return dataclasses.replace(component, dimensions=component.dimensions + 1)
        return GenericArray(component)

    def parameterized(self, *children: Token | TypeReference) -> Parameterized:
        owner = None
        if not isinstance(children[0], Token):
            owner, *rest = children
            children = tuple(rest)

        token, *arguments = children
        name = str(token)
        if name in self.parameters:
            msg = f"Type variable {name} cannot take type arguments"
            raise DeclarationError(msg)

        expected = self.arities.get(name)
        if expected is not None and expected != len(arguments):
            msg = f"{name} declares {expected} generic parameters, got {len(arguments)} type arguments"
            raise DeclarationError(msg)

        return Parameterized(Concrete(name), tuple(arguments), owner)

    def bounds(self, *items: TypeReference) -> frozenset[TypeReference]:
        return frozenset(items)

    def unbounded(self) -> Wildcard:
        return Wildcard()

    def upper(self, bounds: frozenset[TypeReference]) -> Wildcard:
        return Wildcard(upper=bounds)

    def lower(self, bounds: frozenset[TypeReference]) -> Wildcard:
        return Wildcard(lower=bounds)


def parse_reference(text: str, *, parameters: Iterable[str] = (), arities: Mapping[str, int] | None = None) -> TypeReference:
    """Parse *text* into a type reference.

    Raises:
        DeclarationError: If *text* is not valid reference syntax, or a parameterized
            use does not match the arity listed in *arities*.

    """
    try:
        tree = _parser().parse(text)
    except LarkError as err:
        msg = f"Invalid type reference {text!r}: {err}"
        raise DeclarationError(msg) from err

    try:
        return ReferenceBuilder(parameters, arities).transform(tree)
    except VisitError as err:
        if isinstance(err.orig_exc, DeclarationError):
            raise err.orig_exc from None
        raise
