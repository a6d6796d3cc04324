# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors

from boxed import Pipe
from boxed.runtime_config import RuntimeConfig, get_runtime_config


def test_trace_steps_default_false(monkeypatch):
    monkeypatch.delenv("BOXED_TRACE_STEPS", raising=False)
    cfg = RuntimeConfig.load_from_env()
    assert cfg.debug.trace_steps is False


def test_trace_steps_enabled_from_env(monkeypatch):
    monkeypatch.setenv("BOXED_TRACE_STEPS", "yes")
    cfg = RuntimeConfig.load_from_env()
    assert cfg.debug.trace_steps is True


def test_unparseable_bool_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("BOXED_BUILDER_LOG_WRITES", "maybe")
    cfg = RuntimeConfig.load_from_env()
    assert cfg.builder.log_writes is False


def test_inline_chars_is_clamped(monkeypatch):
    monkeypatch.setenv("BOXED_TRACE_MAX_INLINE_CHARS", "999999")
    assert RuntimeConfig.load_from_env().debug.trace_max_inline_chars == 5000

    monkeypatch.setenv("BOXED_TRACE_MAX_INLINE_CHARS", "1")
    assert RuntimeConfig.load_from_env().debug.trace_max_inline_chars == 20

    monkeypatch.setenv("BOXED_TRACE_MAX_INLINE_CHARS", "lots")
    assert RuntimeConfig.load_from_env().debug.trace_max_inline_chars == 200


def test_get_runtime_config_is_cached(monkeypatch):
    monkeypatch.setenv("BOXED_TRACE_STEPS", "1")
    first = get_runtime_config()
    monkeypatch.setenv("BOXED_TRACE_STEPS", "0")
    assert get_runtime_config() is first
    assert first.debug.trace_steps is True


def test_pipe_uses_process_config_unless_given(monkeypatch):
    monkeypatch.setenv("BOXED_TRACE_STEPS", "1")
    assert Pipe(str).runtime.debug.trace_steps is True

    explicit = RuntimeConfig()
    assert Pipe(str, runtime=explicit).extend(len).runtime is explicit


def test_safe_log_dict():
    assert RuntimeConfig().to_safe_log_dict() == {
        "debug": {"trace_steps": False, "trace_max_inline_chars": 200},
        "builder": {"log_writes": False},
    }
