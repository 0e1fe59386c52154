# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from .references import TypeReference, Variable


@runtime_checkable
class TypeMetadataProvider[D](Protocol):
    """Read-only access to the generic metadata of type declarations.

    The resolver never inspects declarations directly, it only asks a provider for
    the slots a declaration introduces and for the declaration one level up.
    Providers must not hold per-call state, so a single instance can serve
    concurrent resolutions.
    """

    @abstractmethod
    def declared_slots(self, declaration: D) -> tuple[Variable, ...]:
        """Return the generic slots declared by *declaration*, in declaration order."""
        raise NotImplementedError

    def declared_slot_count(self, declaration: D) -> int:
        return len(self.declared_slots(declaration))

    @abstractmethod
    def super_type_reference(self, declaration: D) -> TypeReference | None:
        """Return the immediate supertype of *declaration*, expressed over its own slots."""
        raise NotImplementedError

    @abstractmethod
    def super_declaration(self, declaration: D) -> D | None:
        raise NotImplementedError

    @abstractmethod
    def declaration_name(self, declaration: D) -> str:
        raise NotImplementedError

    def split_specialization(self, leaf: Any) -> tuple[D, tuple[TypeReference, ...] | None]:
        """Split a specialised leaf such as ``Leaf[int]`` into its declaration and type arguments.

        Leaves that are plain declarations are returned as is, with ``None`` arguments.
        """
        return leaf, None
