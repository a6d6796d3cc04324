# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
from __future__ import annotations

import dataclasses
import datetime
import enum
import inspect
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel

from boxed.builder.errors import SchemaError
from boxed.builder.schema import schema_for

T = TypeVar("T")


def build_value(cls: type[T], data: Mapping[str, Any]) -> T:
    """
    Construct a value object of type `cls` from field values.

    Pydantic v2 models go through `model_validate`, dataclasses through
    their `__init__`, registered plain classes are created with no
    arguments and populated attribute by attribute.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"Value data must be a mapping, got: {type(data)!r}")
    if inspect.isclass(cls) and issubclass(cls, BaseModel):
        return cls.model_validate(dict(data))  # type: ignore[return-value]
    if dataclasses.is_dataclass(cls):
        return cls(**data)  # type: ignore[return-value]

    schema = schema_for(cls)
    obj = cls()
    for name in schema.names:
        if name in data:
            setattr(obj, name, data[name])
    return obj


def dump_value(value: Any) -> dict[str, Any]:
    """
    Dump a value object to a plain dict of its schema fields.

    For Pydantic v2 models, uses `model_dump()`. Dataclass fields declared
    with `init=False` are left out, since they cannot be passed back in.
    """
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value) if f.init}
    try:
        schema = schema_for(type(value))
    except SchemaError:
        raise TypeError(f"Unsupported value type for dump: {type(value)!r}") from None
    return {name: getattr(value, name) for name in schema.names if hasattr(value, name)}


def to_json_safe(value: Any) -> Any:
    """Recursively convert a dumped value into JSON-compatible primitives."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json_safe(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(v) for v in value]
    return value
