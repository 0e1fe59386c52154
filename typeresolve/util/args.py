# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

"""Argument parser whose options default from ``TYPERESOLVE_*`` environment variables."""

import argparse
import os

from typing import Any

from .helpers.script_info import ENV_PREFIX, get_script_name


FALSE_STRINGS = ("", "0", "false", "no", "off")


class ArgsParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("prog", get_script_name())
        kwargs.setdefault("description", f"{get_script_name()} CLI options")
        kwargs["formatter_class"] = argparse.ArgumentDefaultsHelpFormatter

        super().__init__(*args, **kwargs)

    def add_option(self, name: str, *flags: str, default: Any = None, **kwargs: Any) -> argparse.Action:
        """Add an option stored in *name*, defaulting to ``TYPERESOLVE_<NAME>`` when that variable is set.

        Args:
            name: The destination variable name.
            *flags: Option flags, e.g. ``-t``, ``--table``.
            default: Default value when neither the flag nor the environment variable is given.
            **kwargs: Additional argparse options.

        """
        env = os.getenv(f"{ENV_PREFIX}_{name.upper().replace('.', '_')}")
        if env is not None:
            default = env.strip().lower() not in FALSE_STRINGS if kwargs.get("action") == "store_true" else env

        return super().add_argument(*flags, dest=name, default=default, **kwargs)
