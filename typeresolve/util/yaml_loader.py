# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import os
import pathlib

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import yaml


if TYPE_CHECKING:
    from io import IOBase


@runtime_checkable
class NamedStreamProtocol(Protocol):
    @property
    def name(self) -> str: ...


class IncludeLoader(yaml.SafeLoader):
    """Safe YAML loader with an ``!include`` tag, resolved relative to the including document."""

    def __init__(self, stream: IOBase, root: pathlib.Path | None = None) -> None:
        if root is None:
            root = pathlib.Path(stream.name).resolve().parent if isinstance(stream, NamedStreamProtocol) else pathlib.Path.cwd()

        self._root: pathlib.Path = root

        super().__init__(stream)

    def include(self, node: Any) -> Any:
        filename = pathlib.Path(os.path.expandvars(self._root / self.construct_scalar(node))).expanduser()
        return load_yaml(filename)


IncludeLoader.add_constructor("!include", IncludeLoader.include)


def load_yaml(path: pathlib.Path) -> Any:
    """Load the YAML document at *path*, returning an empty dict for empty documents."""
    with path.open(encoding="UTF-8") as f:
        data = yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader
    return {} if data is None else data
