# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import collections.abc
import typing

import pytest

from pydantic import BaseModel

from typeresolve.generics import (
    Concrete,
    GenericArray,
    Parameterized,
    RuntimeTypeProvider,
    UnsupportedTypeError,
    Variable,
    Wildcard,
    resolve_parameter,
    to_annotation,
)
from typeresolve.generics import declarations as d
from typeresolve.generics.introspection import get_origin, get_parameters


# MARK: Class definitions
class Pair[K, V]:
    pass


class Named[V](Pair[str, V]):
    pass


class Envelope[T](BaseModel):
    payload: T


class IntEnvelope(Envelope[int]):
    pass


class Batch[T](Envelope[list[T]]):
    pass


class Mixin[M]:
    pass


class Mixed(Mixin[bytes], Named[float]):
    pass


class Protocolled[T](typing.Protocol):
    def get(self) -> T: ...


class Implementation(Protocolled[int]):
    def get(self) -> int:
        return 0


type Alias = dict[str, int]


@pytest.mark.generics
@pytest.mark.introspection
class TestRuntimeTypeProvider:
    provider = RuntimeTypeProvider()

    def test_declared_slots(self):
        k, v = Pair.__type_params__
        assert self.provider.declared_slots(Pair) == (Variable("K", k), Variable("V", v))
        assert self.provider.declared_slot_count(Named) == 1
        assert self.provider.declared_slots(int) == ()

    def test_supertype(self):
        (v,) = Named.__type_params__
        assert self.provider.super_type_reference(Named) == Parameterized(Concrete("Pair", origin=Pair), (Concrete("str", origin=str), Variable("V", v)))
        assert self.provider.super_declaration(Named) is Pair
        assert self.provider.super_declaration(Pair) is None
        assert self.provider.super_type_reference(Pair) is None

    def test_rejects_non_classes(self):
        with pytest.raises(UnsupportedTypeError):
            self.provider.declared_slots(d.declare("Base", "T"))  # pyright: ignore[reportArgumentType]

    def test_rejects_paramspec(self):
        class Callback[**P]:
            pass

        with pytest.raises(UnsupportedTypeError):
            self.provider.declared_slots(Callback)

    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (int, "int"),
            (None, "NoneType"),
            (list[int], "list[int]"),
            (dict[str, list[bytes]], "dict[str, list[bytes]]"),
            (tuple[int, ...], "int[]"),
            (tuple[tuple[int, ...], ...], "int[][]"),
            (tuple[list[int], ...], "list[int][]"),
            (tuple[int, str], "tuple[int, str]"),
            (int | None, "Union[int, NoneType]"),
            (Alias, "dict[str, int]"),
            (Envelope[int], "Envelope[int]"),
            (typing.Literal["a"], "Literal['a']"),
            (collections.abc.Callable[[int, str], bytes], "Callable[[int, str], bytes]"),
            (collections.abc.Callable[[], None], "Callable[[], NoneType]"),
        ],
    )
    def test_reference(self, annotation, expected):
        assert str(self.provider.reference(annotation)) == expected

    def test_forward_reference(self):
        with pytest.raises(UnsupportedTypeError):
            self.provider.reference(typing.ForwardRef("Missing"))

    def test_split_specialization(self):
        assert self.provider.split_specialization(Named) == (Named, None)
        assert self.provider.split_specialization(Named[int]) == (Named, (Concrete("int", origin=int),))
        assert self.provider.split_specialization(Envelope[int]) == (Envelope, (Concrete("int", origin=int),))


@pytest.mark.generics
@pytest.mark.introspection
class TestPydanticModels:
    def test_parameters(self):
        (t,) = Envelope.__type_params__
        assert get_parameters(Envelope) == (t,)
        assert get_parameters(IntEnvelope) == ()
        assert get_parameters(BaseModel) == ()
        assert get_origin(Envelope[int]) is Envelope

    def test_resolve(self):
        assert resolve_parameter(IntEnvelope, Envelope, 0) == Concrete("int", origin=int)
        assert str(resolve_parameter(Batch[str], Envelope, "T")) == "list[str]"
        assert to_annotation(resolve_parameter(Envelope[bytes], Envelope, 0)) is bytes


@pytest.mark.generics
@pytest.mark.introspection
class TestHierarchies:
    def test_prefers_path_to_ancestor(self):
        assert str(resolve_parameter(Mixed, Pair, 1)) == "float"
        assert str(resolve_parameter(Mixed, Mixin, 0)) == "bytes"

    def test_protocol_bases(self):
        assert str(resolve_parameter(Implementation, Protocolled, 0)) == "int"


@pytest.mark.generics
@pytest.mark.introspection
class TestToAnnotation:
    @pytest.mark.parametrize(
        "annotation",
        [
            int,
            list[int],
            dict[str, list[bytes]],
            tuple[int, ...],
            tuple[tuple[str, ...], ...],
            tuple[list[int], ...],
            int | None,
            Envelope[int],
            collections.abc.Callable[[int, str], bytes],
            collections.abc.Callable[..., int],
        ],
    )
    def test_rebuilds_runtime_types(self, annotation):
        assert to_annotation(RuntimeTypeProvider().reference(annotation)) == annotation

    def test_wildcards(self):
        assert to_annotation(Wildcard()) is typing.Any
        assert to_annotation(Wildcard(upper=frozenset({Concrete("int", origin=int)}))) is int
        with pytest.raises(UnsupportedTypeError):
            to_annotation(Wildcard(upper=frozenset({Concrete("int", origin=int), Concrete("str", origin=str)})))

    def test_typevar(self):
        (v,) = Named.__type_params__
        assert to_annotation(Variable("V", v)) is v
        with pytest.raises(UnsupportedTypeError):
            to_annotation(Variable("V"))

    def test_declared_types_have_no_annotation(self):
        with pytest.raises(UnsupportedTypeError):
            to_annotation(Concrete("String"))
        with pytest.raises(UnsupportedTypeError):
            to_annotation(d.declare("Base").reference)

    def test_generic_array(self):
        assert to_annotation(GenericArray(Parameterized(Concrete("list", origin=list), (Concrete("int", origin=int),)))) == tuple[list[int], ...]
