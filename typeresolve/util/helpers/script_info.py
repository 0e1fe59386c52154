# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import functools
import os


SCRIPT_NAME = "typeresolve"

#: Prefix of the environment variables that provide command line defaults.
ENV_PREFIX = SCRIPT_NAME.upper()


@functools.cache
def is_unit_test() -> bool:
    """Test whether running in a unit test environment.

    Returns:
        bool: True if running under pytest or with a truthy ``UNIT_TEST`` environment variable.

    """
    if os.environ.get("PYTEST_VERSION", None) is not None:
        return True

    env = os.environ.get("UNIT_TEST", "").strip()
    if not env:
        return False

    return env.lower() not in ("false", "0", "no")


def get_script_name() -> str:
    return SCRIPT_NAME
