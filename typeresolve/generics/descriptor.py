# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Class-level access to resolved generic parameters.

A generic base class declares one :class:`ParameterMethod` per parameter that its
subclasses need at runtime::

    >>> from typeresolve.generics import ParameterMethod
    >>> class Repository[T]:
    ...     get_item_type = ParameterMethod[T]()
    >>> class Users(Repository[dict[str, int]]): ...
    >>> Users.get_item_type()
    dict[str, int]

"""

import annotationlib
import functools
import typing

from .errors import GenericsError
from .introspection import UNION_ORIGINS, RuntimeTypeProvider, get_origin, to_annotation
from .resolver import resolve_parameter


if typing.TYPE_CHECKING:
    from .references import TypeReference


class ParameterMethod(classmethod):
    """Classmethod descriptor resolving one generic parameter of its owner for the calling class.

    Nothing is cached, every call walks the hierarchy of the calling class.
    """

    _owner: type | None = None
    _param: typing.TypeVar

    def __class_getitem__(cls, arg: typing.TypeVar) -> typing.Any:
        """Allow ``ParameterMethod[T]()`` with a ``TypeVar``."""
        if not isinstance(arg, typing.TypeVar):
            msg = f"ParameterMethod expects a TypeVar parameter, got {type(arg).__name__}"
            raise TypeError(msg)
        return functools.partial(cls, arg)

    def __init__(self, param: typing.TypeVar | None = None) -> None:
        if param is None:
            msg = "ParameterMethod must be subscripted with a TypeVar, e.g. ParameterMethod[T](), or passed one, e.g. ParameterMethod(T)"
            raise TypeError(msg)
        self._param = param
        super().__init__(self.introspect)

    def __set_name__(self, owner: type, name: str) -> None:
        self._owner = owner
        self.__name__ = name
        self.__qualname__ = f"{owner.__qualname__}.{name}"

    @property
    def _bound(self) -> typing.Any:
        if (evaluate_bound := getattr(self._param, "evaluate_bound", None)) is None:
            return None
        bound = annotationlib.call_evaluate_function(evaluate_bound, format=annotationlib.Format.FORWARDREF)
        # Unresolvable forward references are not enforced
        return None if isinstance(bound, typing.ForwardRef) else bound

    def introspect(self, cls: type, *, reference: bool = False) -> typing.Any:
        """Return the argument bound to this descriptor's parameter by *cls*.

        The result is an annotation such as ``list[int]``, or the raw
        :data:`~typeresolve.generics.references.TypeReference` when *reference* is true.

        Raises:
            GenericsError: If the parameter cannot be resolved for *cls*, or the result
                does not satisfy the bound of the ``TypeVar``.

        """
        if self._owner is None:
            msg = "ParameterMethod must be used as a class attribute"
            raise TypeError(msg)

        resolved: TypeReference = resolve_parameter(cls, self._owner, self._param, provider=RuntimeTypeProvider(prefer=self._owner))
        if reference:
            return resolved

        annotation = to_annotation(resolved)
        bound = self._bound
        origin = get_origin(annotation)
        if isinstance(bound, type) and isinstance(origin, type) and origin not in UNION_ORIGINS and not issubclass(origin, bound):
            msg = f"{cls.__name__} binds {self._owner.__name__}.{self._param.__name__} to {resolved}, which is not a subclass of {bound.__name__}"
            raise GenericsError(msg)
        return annotation
