# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Pipeline Core

Defines Pipe, the composable unit, and the helpers around it.

Design Principles:
- A pipe wraps an immutable chain of steps; extending a pipe builds a new
  chain and leaves the original untouched, so pipes can share prefixes
- Only the seed step sees the call's full argument list; every later step
  gets the previous step's output
- Steps may be sync or async; the call becomes async at the first step
  that actually returns an awaitable
- Any step can short-circuit the call through its `terminate` handle
- A pipe is itself a valid step

Usage:
    from boxed import Pipe

    def positive(x):
        return x > 0

    def guard(ok, terminate):
        return terminate("rejected") if not ok else ok

    check = Pipe(positive).extend(guard)
    check(10)   # True
    check(-1)   # "rejected"
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from boxed.pipeline.errors import PipeDefinitionError
from boxed.pipeline.executor import Executor
from boxed.pipeline.step import Step, as_step
from boxed.runtime_config import RuntimeConfig, get_runtime_config


class Pipe:
    """
    A callable chain of steps.

    Calling a pipe returns the final value directly when every step ran
    synchronously, or a coroutine resolving to it when any step returned
    an awaitable.

    Example:
        area = Pipe(lambda base, height: base * height).extend(lambda x: x / 2)
        area(10, 5)   # 25.0
    """

    __slots__ = ("_chain", "_runtime", "_executor")

    def __init__(self, seed: Callable[..., Any], *, runtime: RuntimeConfig | None = None) -> None:
        self._init_chain((as_step(seed, position=0),), runtime)

    @classmethod
    def _from_chain(cls, chain: tuple[Step, ...], runtime: RuntimeConfig | None) -> Pipe:
        pipe = cls.__new__(cls)
        pipe._init_chain(chain, runtime)
        return pipe

    def _init_chain(self, chain: tuple[Step, ...], runtime: RuntimeConfig | None) -> None:
        self._chain = chain
        self._runtime = runtime
        self._executor: Executor | None = None

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._chain

    @property
    def runtime(self) -> RuntimeConfig:
        return self._runtime or get_runtime_config()

    def extend(self, step: Callable[..., Any]) -> Pipe:
        """Return a new pipe that feeds this pipe's output into `step`."""
        wrapped = as_step(step, position=len(self._chain))
        return Pipe._from_chain(self._chain + (wrapped,), self._runtime)

    def __or__(self, step: Callable[..., Any]) -> Pipe:
        return self.extend(step)

    def __call__(self, *args: Any) -> Any:
        if self._executor is None:
            # Built lazily so the env config is read at first call, not import
            self._executor = Executor(self._chain, self.runtime)
        return self._executor.run(args)

    def __len__(self) -> int:
        return len(self._chain)

    def __repr__(self) -> str:
        return f"Pipe(steps={[s.name for s in self._chain]})"


def compose(*steps: Callable[..., Any], runtime: RuntimeConfig | None = None) -> Pipe:
    """
    Chain `steps` left to right: compose(f, g, h)(x) == h(g(f(x))).

    Raises:
        PipeDefinitionError: If no steps are given
    """
    if not steps:
        raise PipeDefinitionError("compose() needs at least one step")
    pipe = Pipe(steps[0], runtime=runtime)
    for step in steps[1:]:
        pipe = pipe.extend(step)
    return pipe


async def resolve(value: Any) -> Any:
    """Await `value` if a pipe call returned a coroutine, else pass it through."""
    if inspect.isawaitable(value):
        return await value
    return value
