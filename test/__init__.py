# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro

import logging


# Quieten the parser generator when tests run at DEBUG
logging.getLogger("lark").setLevel(logging.WARNING)
