# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Field Schemas

A FieldSchema is the static field table of one value-object type: field
names in declaration order, which of them are required, and the default
table used to fill optional fields at build time.

Schemas come from declarations, never from inspecting instances:
- explicit registration (`register_schema` / `@value_object`) for plain classes
- `dataclasses.fields()` for dataclasses
- `model_fields` for Pydantic v2 models

Each type's schema is built once and cached.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

from pydantic import BaseModel

from boxed.builder.errors import SchemaError, UnknownFieldError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = dataclasses.MISSING


@dataclass(frozen=True)
class FieldSpec:
    """
    One field of a value object.

    Attributes:
        name: Attribute name on the value object
        required: Whether build() refuses to run until this field is set
        default: Value used when an optional field is never set
        default_factory: Zero-arg callable producing a fresh default
    """

    name: str
    required: bool = True
    default: Any = None
    default_factory: Callable[[], Any] | None = None

    def default_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    @classmethod
    def optional(cls, name: str, default: Any = None, *, default_factory: Callable[[], Any] | None = None) -> FieldSpec:
        return cls(name=name, required=False, default=default, default_factory=default_factory)


@dataclass(frozen=True)
class FieldSchema:
    """Field table for one value-object type."""

    target: type
    fields: tuple[FieldSpec, ...]
    source: str = "registered"
    _by_name: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, FieldSpec] = {}
        for spec in self.fields:
            if spec.name in by_name:
                raise SchemaError(
                    f"Duplicate field '{spec.name}' in schema for {self.target.__name__}",
                    target=self.target.__name__,
                    field=spec.name,
                )
            by_name[spec.name] = spec
        object.__setattr__(self, "_by_name", by_name)

    @property
    def target_name(self) -> str:
        return self.target.__name__

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required(self) -> frozenset[str]:
        return frozenset(spec.name for spec in self.fields if spec.required)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> FieldSpec:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownFieldError(
                f"{self.target_name} has no field '{name}'",
                target=self.target_name,
                field=name,
            ) from None

    def defaults_for(self, names: Iterable[str]) -> dict[str, Any]:
        """Fresh default values for the given optional fields."""
        return {name: self.get(name).default_value() for name in names if not self.get(name).required}


# ─────────────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────────────

_registry: dict[type, FieldSchema] = {}
_registry_lock = threading.Lock()


def register_schema(cls: type, *fields: FieldSpec | str) -> FieldSchema:
    """
    Declare the field table of a plain class.

    Plain names are required fields. The class must be constructible with
    no arguments; built values are populated attribute by attribute.

    Example:
        register_schema(Student, "name", "location", FieldSpec.optional("age"))
    """
    if not inspect.isclass(cls):
        raise SchemaError(f"Can only register classes, got {type(cls).__name__}")
    specs = tuple(FieldSpec(name=f) if isinstance(f, str) else f for f in fields)
    schema = FieldSchema(target=cls, fields=specs, source="registered")
    with _registry_lock:
        _registry[cls] = schema
    logger.debug("[Builder] Registered schema for %s: %s", cls.__name__, list(schema.names))
    return schema


def value_object(*fields: FieldSpec | str) -> Callable[[type[T]], type[T]]:
    """Class decorator form of `register_schema`."""

    def decorator(cls: type[T]) -> type[T]:
        register_schema(cls, *fields)
        return cls

    return decorator


def schema_for(cls: type) -> FieldSchema:
    """
    Return the (cached) field schema of `cls`.

    Raises:
        SchemaError: If `cls` is not registered, a dataclass, or a Pydantic model
    """
    schema = _registry.get(cls)
    if schema is not None:
        return schema

    if inspect.isclass(cls) and dataclasses.is_dataclass(cls):
        schema = _from_dataclass(cls)
    elif inspect.isclass(cls) and issubclass(cls, BaseModel):
        schema = _from_pydantic(cls)
    else:
        raise SchemaError(
            f"No field schema for {getattr(cls, '__name__', cls)!r}; "
            "use a dataclass, a Pydantic model, or register_schema()",
        )

    with _registry_lock:
        # Another thread may have won; keep the first
        schema = _registry.setdefault(cls, schema)
    return schema


def _from_dataclass(cls: type) -> FieldSchema:
    specs = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.default is not _MISSING:
            specs.append(FieldSpec.optional(f.name, f.default))
        elif f.default_factory is not _MISSING:
            specs.append(FieldSpec.optional(f.name, default_factory=f.default_factory))
        else:
            specs.append(FieldSpec(name=f.name))
    return FieldSchema(target=cls, fields=tuple(specs), source="dataclass")


def _from_pydantic(cls: type[BaseModel]) -> FieldSchema:
    specs = []
    for name, info in cls.model_fields.items():
        if info.is_required():
            specs.append(FieldSpec(name=name))
        elif info.default_factory is not None:
            specs.append(FieldSpec.optional(name, default_factory=info.default_factory))
        else:
            specs.append(FieldSpec.optional(name, info.default))
    return FieldSchema(target=cls, fields=tuple(specs), source="pydantic")
