# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Command line front-end.

Resolve a parameter of Python classes::

    python -m typeresolve mypkg.handlers:IntHandler mypkg.base:Base 0

or of declarations described in a YAML table::

    python -m typeresolve --table hierarchy.yaml Leaf Base F
"""

import annotationlib
import importlib
import sys

from typing import TYPE_CHECKING, Any

from rich.console import Console

from .config import load_config
from .generics import DeclarationError, DeclarationTable, GenericsError, resolve_parameter, to_annotation
from .util.args import ArgsParser
from .util.logging import LoggingLevel, LoggingManager, getLogger


if TYPE_CHECKING:
    import argparse

    from .config import Config
    from .generics.resolver import ParamType


log = getLogger(__name__)


def build_parser() -> ArgsParser:
    parser = ArgsParser(description="Resolve the type bound to a generic parameter of an ancestor, as seen from a leaf type")
    parser.add_argument("leaf", help="Leaf type, as module:QualName or a declaration name with --table")
    parser.add_argument("ancestor", help="Ancestor type declaring the parameter, in the same form as LEAF")
    parser.add_argument("parameter", help="Parameter index (0-based) or name")

    parser.add_option("table", "-t", "--table", help="YAML declaration table to resolve against instead of Python classes")
    parser.add_option("config", "-c", "--config", help="YAML configuration file")
    parser.add_option("annotation", "-a", "--annotation", action="store_true", default=False, help="Print a Python annotation instead of a type reference")
    parser.add_option("log_level", "-l", "--log-level", help="Default log level, e.g. DEBUG")
    return parser


def import_object(path: str) -> Any:
    """Import the object at *path*, given as ``package.module:Qual.Name``."""
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        msg = f"Expected module:QualName, got {path!r}"
        raise ValueError(msg)

    obj = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


def parse_parameter(text: str) -> int | str:
    text = text.strip()
    return int(text) if text.lstrip("-").isdigit() else text


def _setup_logging(args: argparse.Namespace, config: Config) -> None:
    manager = LoggingManager()
    if manager.initialized:
        return

    logging_config = config.logging
    if args.log_level is not None:
        levels = logging_config.levels.model_copy(update={"default": LoggingLevel(args.log_level)})
        logging_config = logging_config.model_copy(update={"levels": levels})
    manager.initialize(logging_config)


def _resolve_declarations(args: argparse.Namespace) -> Any:
    declarations = DeclarationTable.from_yaml(args.table).build()
    try:
        leaf, ancestor = declarations[args.leaf], declarations[args.ancestor]
    except KeyError as err:
        msg = f"Unknown declaration {err.args[0]} in {args.table}"
        raise DeclarationError(msg) from None
    return resolve_parameter(leaf, ancestor, parse_parameter(args.parameter))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except OSError as err:
        parser.error(f"Could not read configuration: {err}")
    _setup_logging(args, config)
    annotation = args.annotation or config.resolver.annotation

    try:
        if args.table is not None:
            try:
                result = _resolve_declarations(args)
            except OSError as err:
                parser.error(f"Could not read declaration table: {err}")
        else:
            try:
                leaf, ancestor = import_object(args.leaf), import_object(args.ancestor)
            except (ImportError, AttributeError, ValueError) as err:
                parser.error(str(err))

            parameter: ParamType = parse_parameter(args.parameter)
            result = resolve_parameter(leaf, ancestor, parameter)

        text = annotationlib.type_repr(to_annotation(result)) if annotation else str(result)
    except GenericsError as err:
        log.error("%s", err)  # noqa: TRY400 as the message is the whole diagnostic
        return 1

    Console(markup=False, highlight=False, soft_wrap=True).print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
