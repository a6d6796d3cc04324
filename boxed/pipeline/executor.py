# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Pipeline Executor

Runs a chain of steps for one call.

The call stays synchronous for as long as every step returns a plain
value. The first deferred outcome switches the rest of the call into a
coroutine: later steps run inside it (sync steps included) and the caller
gets the coroutine back instead of a value. Termination ends the call
early with the recorded value, in either mode.

Step faults are never caught here. A sync raise escapes the call; a raise
inside an awaitable escapes when the returned coroutine is awaited.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Sequence

from boxed.pipeline.outcome import Invocation, Outcome
from boxed.pipeline.step import Step
from boxed.runtime_config import RuntimeConfig
from boxed.utils.preview import preview

logger = logging.getLogger(__name__)


async def _settle(pending: Awaitable[Any]) -> Any:
    """Await until the result is no longer awaitable."""
    value = await pending
    while inspect.isawaitable(value):
        value = await value
    return value


class Executor:
    """Evaluates one chain against call arguments."""

    def __init__(self, chain: Sequence[Step], runtime: RuntimeConfig) -> None:
        self.chain = chain
        self.runtime = runtime
        self._trace = runtime.debug.trace_steps

    def run(self, args: tuple[Any, ...]) -> Any:
        invocation = Invocation()
        outcome = self._invoke(0, args, invocation)

        for position in range(1, len(self.chain)):
            if outcome.is_terminated:
                break
            if outcome.is_deferred:
                return self._resume(outcome.value, position, invocation)
            outcome = self._invoke(position, (outcome.value,), invocation)

        if outcome.is_deferred:
            return self._resume(outcome.value, len(self.chain), invocation)
        if outcome.is_terminated and self._trace:
            self._log_terminated(invocation)
        return outcome.value

    async def _resume(self, pending: Awaitable[Any], position: int, invocation: Invocation) -> Any:
        if self._trace:
            logger.debug("[Pipe] Suspending at step %d, rest of call is async", position - 1)

        value = await _settle(pending)
        for index in range(position, len(self.chain)):
            if invocation.terminated:
                break
            outcome = self._invoke(index, (value,), invocation)
            value = await _settle(outcome.value) if outcome.is_deferred else outcome.value

        if invocation.terminated:
            if self._trace:
                self._log_terminated(invocation)
            return invocation.result
        return value

    def _invoke(self, position: int, args: tuple[Any, ...], invocation: Invocation) -> Outcome:
        step = self.chain[position]
        outcome = step.invoke(args, invocation)
        if self._trace:
            logger.debug(
                "[Pipe] Step %d/%d %s -> %s %s",
                position + 1,
                len(self.chain),
                step.name,
                outcome.kind.value,
                "" if outcome.is_deferred else self._preview(outcome.value),
            )
        return outcome

    def _log_terminated(self, invocation: Invocation) -> None:
        logger.debug("[Pipe] Terminated early with %s", self._preview(invocation.result))

    def _preview(self, value: Any) -> str:
        return preview(value, max_chars=self.runtime.debug.trace_max_inline_chars)
