# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Unit tests for step adaptation: signature analysis and outcome tagging.
"""

import functools

import pytest

from boxed.pipeline import Invocation, OutcomeKind, Step, StepSignature, analyze_signature


class Doubler:
    def __call__(self, x):
        return x * 2


class Guard:
    def __call__(self, x, terminate):
        return terminate(x)


# ─────────────────────────────────────────────────────────────────────────────
# Tests: analyze_signature
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestAnalyzeSignature:
    def test_plain_unary(self):
        sig = analyze_signature(lambda x: x)
        assert sig == StepSignature(terminate_keyword=False, required_positional=1, variadic=False)
        assert sig.wants_terminate(1) is None

    def test_extra_positional_gets_handle(self):
        sig = analyze_signature(lambda x, stop: x)
        assert sig.wants_terminate(1) == "positional"

    def test_named_terminate_gets_keyword(self):
        sig = analyze_signature(lambda x, terminate: x)
        assert sig.wants_terminate(1) == "keyword"
        assert sig.wants_terminate(5) == "keyword"

    def test_defaults_are_not_counted(self):
        sig = analyze_signature(lambda x, factor=2: x)
        assert sig.required_positional == 1
        assert sig.wants_terminate(1) is None

    def test_varargs_never_get_positional_handle(self):
        sig = analyze_signature(lambda *args: args)
        assert sig.variadic is True
        assert sig.wants_terminate(0) is None

    def test_callable_object(self):
        assert analyze_signature(Doubler()).wants_terminate(1) is None
        assert analyze_signature(Guard()).wants_terminate(1) == "keyword"

    def test_partial(self):
        sig = analyze_signature(functools.partial(lambda a, b: a + b, 1))
        assert sig.required_positional == 1

    def test_uninspectable_callable_is_plain(self):
        # dict has no inspectable signature on most interpreters
        sig = analyze_signature(dict)
        assert sig.wants_terminate(1) is None


# ─────────────────────────────────────────────────────────────────────────────
# Tests: Step.invoke
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestStepInvoke:
    def test_immediate_outcome(self):
        outcome = Step(lambda x: x + 1).invoke((1,), Invocation())
        assert outcome.kind is OutcomeKind.IMMEDIATE
        assert outcome.value == 2

    @pytest.mark.asyncio
    async def test_deferred_outcome(self):
        async def add_one(x):
            return x + 1

        outcome = Step(add_one).invoke((1,), Invocation())
        assert outcome.is_deferred
        assert await outcome.value == 2

    def test_terminated_outcome(self):
        invocation = Invocation()
        outcome = Step(Guard()).invoke(("why",), invocation)
        assert outcome.is_terminated
        assert outcome.value == "why"
        assert invocation.terminated is True

    def test_step_names(self):
        def named(x):
            return x

        assert Step(named).name.endswith("named")
        assert Step(Doubler()).name == "Doubler"
        assert Step(functools.partial(max, 3)).name == "partial(max)"
