# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Builder Errors

All builder exceptions inherit from BuilderError so callers can catch
broadly or narrowly. Surface errors (calling a setter the builder does not
currently expose) are also AttributeErrors, so `hasattr` behaves.

Exceptions raised by user validators are not wrapped.
"""

from __future__ import annotations

from typing import Any, Iterable


class BuilderError(Exception):
    """Base exception for all builder errors."""

    def __init__(self, message: str, *, target: str | None = None, field: str | None = None) -> None:
        self.target = target
        self.field = field
        super().__init__(message)

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "target": self.target,
            "field": self.field,
            "message": str(self),
        }


class SchemaError(BuilderError, TypeError):
    """A type has no usable field schema, or a stage list is malformed."""


class UnknownFieldError(BuilderError, AttributeError):
    """A field name (or surface method) that the target type does not have."""


class BuilderSurfaceError(BuilderError, AttributeError):
    """The builder exists but does not expose this operation right now."""


class StageOrderError(BuilderSurfaceError):
    """A staged builder was driven out of its declared order."""

    def __init__(self, message: str, *, expected: str | None = None, **kwargs: Any) -> None:
        self.expected = expected
        super().__init__(message, **kwargs)


class FieldAlreadySetError(BuilderSurfaceError):
    """A forward builder's setter was used a second time."""


class FieldNotSetError(BuilderError, LookupError):
    """Reading a required field that has not been set yet."""


class IncompleteBuildError(BuilderError):
    """build() was called before every required field was set."""

    def __init__(self, missing: Iterable[str], *, target: str | None = None) -> None:
        self.missing = tuple(missing)
        super().__init__(
            f"Cannot build {target or 'value'}: missing required field(s): {', '.join(self.missing)}",
            target=target,
        )

    def to_log_dict(self) -> dict[str, Any]:
        out = super().to_log_dict()
        out["missing"] = list(self.missing)
        return out
