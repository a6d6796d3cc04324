# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
boxed: function pipes and value-object builders.

    from boxed import Pipe, Boxed
"""

from boxed.builder import Boxed, FieldSpec, register_schema, value_object
from boxed.pipeline import TERMINATED, Pipe, PipeDefinitionError, compose, resolve
from boxed.runtime_config import RuntimeConfig, get_runtime_config

__version__ = "0.3.0"

__all__ = [
    "Pipe",
    "compose",
    "resolve",
    "TERMINATED",
    "PipeDefinitionError",
    "Boxed",
    "FieldSpec",
    "register_schema",
    "value_object",
    "RuntimeConfig",
    "get_runtime_config",
]
