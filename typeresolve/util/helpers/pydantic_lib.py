# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 typeresolve Rui Pinheiro


from pydantic import BaseModel, ConfigDict


class ConfigBaseModel(BaseModel):
    """Base for configuration models: unknown keys are rejected and instances are immutable."""

    model_config = ConfigDict(extra="forbid", frozen=True)
