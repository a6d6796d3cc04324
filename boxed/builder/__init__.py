# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Builder Module

Fluent builders for value objects described by a static field schema.

Example:
    from dataclasses import dataclass
    from boxed.builder import Boxed

    @dataclass
    class Student:
        name: str
        location: str
        age: int | None = None

    student = (
        Boxed(Student)
        .builder()
        .set_name("Ada")
        .set_location(lambda shape: "London" if shape["name"] == "Ada" else "")
        .build()
    )
"""

from boxed.builder.core import (
    Boxed,
    Builder,
    ForwardBuilder,
    StagedBuilder,
)
from boxed.builder.errors import (
    BuilderError,
    BuilderSurfaceError,
    FieldAlreadySetError,
    FieldNotSetError,
    IncompleteBuildError,
    SchemaError,
    StageOrderError,
    UnknownFieldError,
)
from boxed.builder.schema import (
    FieldSchema,
    FieldSpec,
    register_schema,
    schema_for,
    value_object,
)
from boxed.builder.serialization import build_value, dump_value, to_json_safe


__all__ = [
    # Builders
    "Boxed",
    "Builder",
    "StagedBuilder",
    "ForwardBuilder",
    # Schema
    "FieldSchema",
    "FieldSpec",
    "register_schema",
    "schema_for",
    "value_object",
    # Serialization
    "build_value",
    "dump_value",
    "to_json_safe",
    # Errors
    "BuilderError",
    "SchemaError",
    "UnknownFieldError",
    "BuilderSurfaceError",
    "StageOrderError",
    "FieldAlreadySetError",
    "FieldNotSetError",
    "IncompleteBuildError",
]
