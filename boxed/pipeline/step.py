# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Pipeline Steps

Adapts plain callables (sync functions, coroutine functions, callable
objects, nested pipes) into Steps that report a tagged Outcome.

A step receives the termination handle when it asks for it:
- it declares a parameter named ``terminate`` (passed by keyword), or
- it declares exactly one more required positional parameter than the
  inputs it is given (passed positionally, after the inputs).

Parameters with defaults, ``*args`` and ``**kwargs`` never pick up the
handle, so ``def scale(x, factor=2)`` stays a plain unary step.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from boxed.pipeline.errors import PipeDefinitionError
from boxed.pipeline.outcome import Invocation, Outcome

if TYPE_CHECKING:
    from boxed.pipeline.core import Pipe


TERMINATE_PARAM = "terminate"


@dataclass(frozen=True)
class StepSignature:
    """What a callable's signature says about how to call it."""

    terminate_keyword: bool = False
    required_positional: int = 0
    variadic: bool = True

    def wants_terminate(self, arg_count: int) -> str | None:
        if self.terminate_keyword:
            return "keyword"
        if not self.variadic and self.required_positional == arg_count + 1:
            return "positional"
        return None


def analyze_signature(fn: Callable[..., Any]) -> StepSignature:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins and C callables expose no signature
        return StepSignature()

    terminate_keyword = False
    required = 0
    variadic = False
    for name, param in sig.parameters.items():
        if param.kind is param.VAR_POSITIONAL:
            variadic = True
            continue
        if param.kind is param.VAR_KEYWORD:
            continue
        if name == TERMINATE_PARAM and param.kind in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY):
            terminate_keyword = True
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD) and param.default is param.empty:
            required += 1

    return StepSignature(
        terminate_keyword=terminate_keyword,
        required_positional=required,
        variadic=variadic,
    )


def step_name(fn: Any) -> str:
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if name:
        return name
    func = getattr(fn, "func", None)  # functools.partial
    if func is not None:
        return f"partial({step_name(func)})"
    return type(fn).__name__


class Step:
    """One transformation unit in a chain."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self.fn = fn
        self.name = step_name(fn)
        self.signature = analyze_signature(fn)

    def invoke(self, args: tuple[Any, ...], invocation: Invocation) -> Outcome:
        result = self._call(args, invocation)
        if invocation.terminated:
            if inspect.iscoroutine(result):
                # Sync body terminated and also produced a coroutine; it will never run
                result.close()
            return Outcome.terminated(invocation.result)
        if inspect.isawaitable(result):
            return Outcome.deferred(result)
        return Outcome.immediate(result)

    def _call(self, args: tuple[Any, ...], invocation: Invocation) -> Any:
        mode = self.signature.wants_terminate(len(args))
        if mode == "keyword":
            return self.fn(*args, **{TERMINATE_PARAM: invocation.terminate})
        if mode == "positional":
            return self.fn(*args, invocation.terminate)
        return self.fn(*args)

    def __repr__(self) -> str:
        return f"Step({self.name})"


class PipeStep(Step):
    """
    A nested pipe used as a step.

    The inner pipe runs to completion with its own termination state; the
    outer chain only sees its resolved output.
    """

    def __init__(self, pipe: Pipe) -> None:
        self.fn = pipe
        self.pipe = pipe
        self.name = f"pipe[{' > '.join(s.name for s in pipe.steps)}]"
        self.signature = StepSignature()

    def _call(self, args: tuple[Any, ...], invocation: Invocation) -> Any:
        return self.pipe(*args)

    def __repr__(self) -> str:
        return f"PipeStep({self.name})"


def as_step(obj: Any, *, position: int) -> Step:
    """Wrap `obj` for use at chain index `position`."""
    from boxed.pipeline.core import Pipe

    if isinstance(obj, Step):
        return obj
    if isinstance(obj, Pipe):
        return PipeStep(obj)
    if not callable(obj):
        raise PipeDefinitionError(
            f"step must be callable, got {type(obj).__name__}",
            position=position,
            step=obj,
        )
    return Step(obj)
