# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import pytest

from typeresolve.generics.references import Concrete, GenericArray, Parameterized, Variable, Wildcard, flatten_array, is_defined, iter_variables


T = Variable("T")
STRING = Concrete("String")
LIST_T = Parameterized(Concrete("List"), (T,))


@pytest.mark.generics
@pytest.mark.references
class TestReferences:
    @pytest.mark.parametrize(
        ("reference", "expected"),
        [
            (STRING, "String"),
            (Concrete("int", dimensions=2), "int[][]"),
            (T, "T"),
            (LIST_T, "List[T]"),
            (Parameterized(Concrete("Inner"), (STRING,), owner=Parameterized(Concrete("Outer"), (T,))), "Outer[T].Inner[String]"),
            (GenericArray(GenericArray(LIST_T)), "List[T][][]"),
            (Wildcard(), "?"),
            (Wildcard(upper=frozenset({Concrete("B"), Concrete("A")})), "? extends A & B"),
            (Wildcard(lower=frozenset({STRING})), "? super String"),
        ],
    )
    def test_str(self, reference, expected):
        assert str(reference) == expected

    def test_values_are_immutable_and_hashable(self):
        assert LIST_T == Parameterized(Concrete("List"), (Variable("T"),))
        assert len({LIST_T, Parameterized(Concrete("List"), (T,))}) == 1
        with pytest.raises(AttributeError):
            STRING.name = "Integer"  # pyright: ignore[reportAttributeAccessIssue]

    def test_component(self):
        assert Concrete("int", dimensions=3).component == Concrete("int")
        assert STRING.component is STRING


@pytest.mark.generics
@pytest.mark.references
class TestIsDefined:
    @pytest.mark.parametrize(
        ("reference", "expected"),
        [
            (STRING, True),
            (T, False),
            (LIST_T, False),
            (Parameterized(Concrete("List"), (STRING,)), True),
            (GenericArray(LIST_T), False),
            (GenericArray(Parameterized(Concrete("List"), (STRING,))), True),
            (Wildcard(), True),
            (Wildcard(upper=frozenset({T})), False),
            (Wildcard(lower=frozenset({STRING})), True),
        ],
    )
    def test_is_defined(self, reference, expected):
        assert is_defined(reference) is expected

    def test_owner_is_ignored(self):
        reference = Parameterized(Concrete("Inner"), (STRING,), owner=LIST_T)
        assert is_defined(reference)

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            is_defined("String")  # pyright: ignore[reportArgumentType]


@pytest.mark.generics
@pytest.mark.references
class TestHelpers:
    def test_iter_variables(self):
        u = Variable("U")
        reference = Parameterized(Concrete("Map"), (T, GenericArray(Parameterized(Concrete("List"), (Wildcard(upper=frozenset({u})),)))))
        assert list(iter_variables(reference)) == [T, u]
        assert list(iter_variables(STRING)) == []

    def test_flatten_array(self):
        assert flatten_array(STRING) == (STRING, 0)
        assert flatten_array(GenericArray(Concrete("int", dimensions=2))) == (Concrete("int"), 3)
        assert flatten_array(GenericArray(GenericArray(LIST_T))) == (LIST_T, 2)
