# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Pipeline Module

Function composition with transparent sync/async bridging.

This module provides:
- Pipe: Callable chain of steps, extended with `.extend()` or `|`
- compose: Build a pipe from several steps at once
- resolve: Await a pipe result whose modality isn't known statically
- Step / PipeStep: Adapters that turn callables and nested pipes into steps
- Outcome: Tagged result of a single step invocation

Example:
    from boxed.pipeline import Pipe

    async def fetch_price(symbol):
        ...

    quote = Pipe(str.upper).extend(fetch_price).extend(round)
    price = await quote("abc")
"""

from boxed.pipeline.core import (
    Pipe,
    compose,
    resolve,
)
from boxed.pipeline.errors import PipeDefinitionError
from boxed.pipeline.outcome import (
    TERMINATED,
    Invocation,
    Outcome,
    OutcomeKind,
)
from boxed.pipeline.step import (
    PipeStep,
    Step,
    StepSignature,
    analyze_signature,
)


__all__ = [
    # Core
    "Pipe",
    "compose",
    "resolve",
    # Steps
    "Step",
    "PipeStep",
    "StepSignature",
    "analyze_signature",
    # Outcomes
    "Outcome",
    "OutcomeKind",
    "Invocation",
    "TERMINATED",
    # Errors
    "PipeDefinitionError",
]
