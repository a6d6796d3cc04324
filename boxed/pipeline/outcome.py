# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Step outcomes and per-invocation termination state.

Every step invocation is classified into exactly one Outcome kind; the
executor dispatches on the kind and never inspects raw step results itself.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class OutcomeKind(enum.Enum):
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class Outcome:
    """Tagged result of one step invocation."""

    kind: OutcomeKind
    value: Any = None

    @classmethod
    def immediate(cls, value: Any) -> Outcome:
        return cls(OutcomeKind.IMMEDIATE, value)

    @classmethod
    def deferred(cls, awaitable: Any) -> Outcome:
        return cls(OutcomeKind.DEFERRED, awaitable)

    @classmethod
    def terminated(cls, value: Any) -> Outcome:
        return cls(OutcomeKind.TERMINATED, value)

    @property
    def is_deferred(self) -> bool:
        return self.kind is OutcomeKind.DEFERRED

    @property
    def is_terminated(self) -> bool:
        return self.kind is OutcomeKind.TERMINATED


class _TerminatedMarker:
    """Returned by `terminate`; step bodies return it to end early."""

    _instance: _TerminatedMarker | None = None

    def __new__(cls) -> _TerminatedMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "TERMINATED"

    def __bool__(self) -> bool:
        return False


TERMINATED = _TerminatedMarker()


class Invocation:
    """
    Termination state for a single pipe call.

    Created when the call starts and dropped when it ends; never shared
    between calls. Once `terminated` is set it stays set.
    """

    __slots__ = ("terminated", "result")

    def __init__(self) -> None:
        self.terminated = False
        self.result: Any = None

    def terminate(self, value: Any = None) -> _TerminatedMarker:
        """Short-circuit the pipe; `value` becomes the call's result."""
        self.terminated = True
        self.result = value
        return TERMINATED
