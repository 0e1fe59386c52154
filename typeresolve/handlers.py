# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""JSON request handlers typed by their generic parameters.

Subclasses bind the input and output types once, in the class statement, and the
handler decodes and encodes payloads accordingly::

    >>> from typeresolve.handlers import RequestHandler
    >>> class Sum(RequestHandler[list[int], int]):
    ...     def process(self, request: list[int]) -> int:
    ...         return sum(request)
    >>> Sum().handle(b"[1, 2, 3]")
    b'6'

"""

import abc

from typing import Any

from pydantic import TypeAdapter

from .generics import ParameterMethod
from .util.logging import getLogger


class RequestHandler[I, O](metaclass=abc.ABCMeta):
    get_input_type = ParameterMethod[I]()
    get_output_type = ParameterMethod[O]()

    def __init__(self) -> None:
        self.log = getLogger(type(self).__name__, parent=getLogger(__name__))

    @classmethod
    def input_adapter(cls) -> TypeAdapter[Any]:
        return TypeAdapter(cls.get_input_type())

    @classmethod
    def output_adapter(cls) -> TypeAdapter[Any]:
        return TypeAdapter(cls.get_output_type())

    def decode(self, payload: str | bytes) -> I:
        """Validate the JSON *payload* against the input type.

        Raises:
            pydantic.ValidationError: If *payload* does not match the input type.

        """
        return self.input_adapter().validate_json(payload)

    def encode(self, response: O) -> bytes:
        return self.output_adapter().dump_json(response)

    @abc.abstractmethod
    def process(self, request: I) -> O:
        raise NotImplementedError

    def handle(self, payload: str | bytes) -> bytes:
        request = self.decode(payload)
        self.log.debug("Processing %r", request)
        return self.encode(self.process(request))
