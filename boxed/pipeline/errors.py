# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Pipeline Errors

Raised when a pipe is composed incorrectly. Faults raised by steps
themselves are never wrapped; they propagate unchanged.
"""

from __future__ import annotations

from typing import Any


class PipeDefinitionError(TypeError):
    """
    Raised at composition time when a chain cannot be built.

    Attributes:
        reason: What is wrong with the definition
        position: Chain index the bad step would have taken, if any
        step: The offending object, if any
    """

    def __init__(self, reason: str, *, position: int | None = None, step: Any = None):
        self.reason = reason
        self.position = position
        self.step = step
        msg = f"Invalid pipe definition: {reason}"
        if position is not None:
            msg += f" (at position {position})"
        super().__init__(msg)

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "error": "pipe_definition",
            "reason": self.reason,
            "position": self.position,
            "step_type": type(self.step).__name__ if self.step is not None else None,
        }
