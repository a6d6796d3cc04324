# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Builders

Fluent assembly of value objects over a field schema.

    Boxed(Student).builder().set_name("Ada").set_location("London").build()

Every builder keeps a mutable accumulator of field values and resolves
`set_<field>` / `get_<field>` by name against the schema. The three
variants differ only in which setters they expose at a given moment:

- Builder: every setter, always
- StagedBuilder: only the next field of a declared order, then every setter
  once the order is exhausted; build() is gated on the order
- ForwardBuilder: each setter disappears after its first use

`set_<field>(value, validate=None)`: a callable `value` is treated as a
derive function and called with a read-only view of the accumulator so
far. `validate` runs against the view after the write and may raise; the
written value is not rolled back. To store a callable as a field value,
wrap it: `set_handler(lambda _: handler)`.
"""

from __future__ import annotations

import functools
import logging
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from boxed.builder.errors import (
    BuilderSurfaceError,
    FieldAlreadySetError,
    FieldNotSetError,
    IncompleteBuildError,
    SchemaError,
    StageOrderError,
    UnknownFieldError,
)
from boxed.builder.schema import FieldSchema, schema_for
from boxed.builder.serialization import build_value, dump_value
from boxed.runtime_config import RuntimeConfig, get_runtime_config
from boxed.utils.preview import preview

logger = logging.getLogger(__name__)

T = TypeVar("T")

Validator = Callable[[Mapping[str, Any]], Any]

_SETTER = "set_"
_GETTER = "get_"


class Builder(Generic[T]):
    """Direct builder: all setters available, build() once required fields are set."""

    def __init__(self, schema: FieldSchema, *, runtime: RuntimeConfig | None = None) -> None:
        self._schema = schema
        self._runtime = runtime or get_runtime_config()
        self._values: dict[str, Any] = {}
        self._touched = False

    # ─── Surface ───────────────────────────────────────

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        if name.startswith(_SETTER):
            field_name = name[len(_SETTER):]
            self._schema.get(field_name)
            self._check_settable(field_name)
            return functools.partial(self._set, field_name)
        if name.startswith(_GETTER):
            field_name = name[len(_GETTER):]
            self._schema.get(field_name)
            return functools.partial(self._get, field_name)
        raise UnknownFieldError(
            f"{type(self).__name__} for {self._schema.target_name} has no attribute '{name}'",
            target=self._schema.target_name,
        )

    def __dir__(self) -> Iterable[str]:
        surface = [f"{_GETTER}{n}" for n in self._schema.names]
        surface += [f"{_SETTER}{n}" for n in self._settable()]
        if not self._touched:
            surface.append("from_")
        return sorted(set(super().__dir__()) | set(surface))

    def from_(self, partial: Any) -> Builder[T]:
        """Seed the accumulator from a mapping or value object. Only valid as the first call."""
        if self._touched:
            raise BuilderSurfaceError(
                "from_() is only available before any field has been set",
                target=self._schema.target_name,
            )
        data = dump_value(partial)
        unknown = [k for k in data if k not in self._schema]
        if unknown:
            raise UnknownFieldError(
                f"{self._schema.target_name} has no field(s): {', '.join(map(str, unknown))}",
                target=self._schema.target_name,
                field=str(unknown[0]),
            )
        self._touched = True
        self._values.update(data)
        self._after_from(data.keys())
        return self

    def build(self) -> T:
        self._check_buildable()
        missing = [n for n in self._schema.names if n in self._schema.required and n not in self._values]
        if missing:
            raise IncompleteBuildError(missing, target=self._schema.target_name)
        data = dict(self._values)
        data.update(self._schema.defaults_for(n for n in self._schema.names if n not in self._values))
        return build_value(self._schema.target, data)

    def values(self) -> dict[str, Any]:
        """Copy of the fields set so far."""
        return dict(self._values)

    # ─── Mechanics ─────────────────────────────────────

    def _set(self, name: str, value: Any, validate: Validator | None = None) -> Builder[T]:
        self._check_settable(name)
        if callable(value):
            value = value(self._view())
        self._touched = True
        self._values[name] = value
        self._after_set(name)
        if self._runtime.builder.log_writes:
            logger.debug(
                "[Builder] %s.%s = %s",
                self._schema.target_name,
                name,
                preview(value, max_chars=self._runtime.debug.trace_max_inline_chars),
            )
        if validate is not None:
            validate(self._view())
        return self

    def _get(self, name: str) -> Any:
        if name in self._values:
            return self._values[name]
        spec = self._schema.get(name)
        if spec.required:
            raise FieldNotSetError(
                f"{self._schema.target_name}.{name} has not been set",
                target=self._schema.target_name,
                field=name,
            )
        return spec.default_value()

    def _view(self) -> Mapping[str, Any]:
        return MappingProxyType(self._values)

    def _settable(self) -> list[str]:
        return list(self._schema.names)

    # Hooks for the narrowing variants

    def _check_settable(self, name: str) -> None:
        return None

    def _check_buildable(self) -> None:
        return None

    def _after_set(self, name: str) -> None:
        return None

    def _after_from(self, names: Iterable[str]) -> None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._schema.target_name}, set={sorted(self._values)})"


class StagedBuilder(Builder[T]):
    """Setters exposed strictly in a declared order; build() once the order is done."""

    def __init__(self, schema: FieldSchema, order: Iterable[str], *, runtime: RuntimeConfig | None = None) -> None:
        super().__init__(schema, runtime=runtime)
        stages = list(order)
        seen: set[str] = set()
        for name in stages:
            if name not in schema:
                raise SchemaError(
                    f"Stage '{name}' is not a field of {schema.target_name}",
                    target=schema.target_name,
                    field=name,
                )
            if name in seen:
                raise SchemaError(
                    f"Stage '{name}' appears more than once",
                    target=schema.target_name,
                    field=name,
                )
            seen.add(name)
        self._stages = stages

    @property
    def remaining_stages(self) -> tuple[str, ...]:
        return tuple(self._stages)

    def _settable(self) -> list[str]:
        return self._stages[:1] if self._stages else super()._settable()

    def _check_settable(self, name: str) -> None:
        if self._stages and name != self._stages[0]:
            raise StageOrderError(
                f"Expected set_{self._stages[0]}() next, not set_{name}()",
                expected=self._stages[0],
                target=self._schema.target_name,
                field=name,
            )

    def _check_buildable(self) -> None:
        if self._stages:
            raise StageOrderError(
                f"build() is unavailable until stages are set: {', '.join(self._stages)}",
                expected=self._stages[0],
                target=self._schema.target_name,
            )

    def _after_set(self, name: str) -> None:
        if self._stages and self._stages[0] == name:
            self._stages.pop(0)

    def _after_from(self, names: Iterable[str]) -> None:
        provided = set(names)
        self._stages = [s for s in self._stages if s not in provided]


class ForwardBuilder(Builder[T]):
    """Fields may be set in any order, each at most once."""

    def __init__(self, schema: FieldSchema, *, runtime: RuntimeConfig | None = None) -> None:
        super().__init__(schema, runtime=runtime)
        self._used: set[str] = set()

    def _settable(self) -> list[str]:
        return [n for n in self._schema.names if n not in self._used]

    def _check_settable(self, name: str) -> None:
        if name in self._used:
            raise FieldAlreadySetError(
                f"{self._schema.target_name}.{name} has already been set",
                target=self._schema.target_name,
                field=name,
            )

    def _after_set(self, name: str) -> None:
        self._used.add(name)

    def _after_from(self, names: Iterable[str]) -> None:
        self._used.update(names)


class Boxed(Generic[T]):
    """
    Builder factory for one value-object type.

    The type's field schema is resolved once here and shared by every
    builder this factory hands out.

    Example:
        @dataclass
        class University:
            state: str
            students: list[Student]

        uni = Boxed(University).staged_builder("state", "students").set_state("MA").set_students([]).build()
    """

    def __init__(self, cls: type[T], *, runtime: RuntimeConfig | None = None) -> None:
        self.schema = schema_for(cls)
        self._runtime = runtime

    def builder(self) -> Builder[T]:
        return Builder(self.schema, runtime=self._runtime)

    def staged_builder(self, *order: str) -> StagedBuilder[T]:
        return StagedBuilder(self.schema, order, runtime=self._runtime)

    def forward_builder(self) -> ForwardBuilder[T]:
        return ForwardBuilder(self.schema, runtime=self._runtime)

    def __repr__(self) -> str:
        return f"Boxed({self.schema.target_name})"
