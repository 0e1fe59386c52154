# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import pytest

from typeresolve.generics import Concrete, GenericsError, ParameterMethod, UnresolvedParameterError


# MARK: Class definitions
class Repository[K, V: object]:
    get_key_type = ParameterMethod[K]()
    get_value_type = ParameterMethod[V]()


class NamedRepository[V](Repository[str, V]):
    pass


class Users(NamedRepository[dict[str, int]]):
    pass


class Numeric[N: int]:
    get_number_type = ParameterMethod[N]()


class Booleans(Numeric[bool]):
    pass


class Strings(Numeric[str]):  # pyright: ignore[reportInvalidTypeArguments]
    pass


@pytest.mark.generics
@pytest.mark.descriptor
class TestParameterMethod:
    def test_resolves_for_subclasses(self):
        assert Users.get_key_type() is str
        assert Users.get_value_type() == dict[str, int]
        assert NamedRepository.get_key_type() is str

    def test_instances(self):
        assert Users().get_key_type() is str

    def test_reference(self):
        assert Users.get_key_type(reference=True) == Concrete("str", origin=str)

    def test_unbound(self):
        with pytest.raises(UnresolvedParameterError):
            NamedRepository.get_value_type()
        with pytest.raises(UnresolvedParameterError):
            Repository.get_key_type()

    def test_bound(self):
        assert Booleans.get_number_type() is bool
        with pytest.raises(GenericsError) as ei:
            Strings.get_number_type()
        assert str(ei.value) == "Strings binds Numeric.N to str, which is not a subclass of int"

    def test_requires_typevar(self):
        with pytest.raises(TypeError):
            ParameterMethod["T"]  # pyright: ignore[reportInvalidTypeArguments]
        with pytest.raises(TypeError):
            ParameterMethod()

    def test_names(self):
        descriptor = Repository.__dict__["get_key_type"]
        assert descriptor.__name__ == "get_key_type"
        assert descriptor.__qualname__ == "Repository.get_key_type"
