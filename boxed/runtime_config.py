# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
from __future__ import annotations

import functools
import os
from dataclasses import dataclass, field
from typing import Any


def _parse_bool(raw: Any, *, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    s = str(raw).strip().lower()
    if not s:
        return default
    if s in ("1", "true", "yes", "y", "on"):
        return True
    if s in ("0", "false", "no", "n", "off"):
        return False
    return default


def _parse_int(raw: Any, *, default: int, min_v: int, max_v: int) -> int:
    try:
        if raw is None:
            v = default
        elif isinstance(raw, int):
            v = raw
        else:
            v = int(str(raw).strip())
    except (TypeError, ValueError):
        v = default
    return max(min_v, min(max_v, v))


@dataclass(frozen=True)
class DebugFlags:
    # Step tracing is off by default; pipes sit on hot paths.
    trace_steps: bool = False
    trace_max_inline_chars: int = 200


@dataclass(frozen=True)
class BuilderFlags:
    log_writes: bool = False


@dataclass(frozen=True)
class RuntimeConfig:
    debug: DebugFlags = field(default_factory=DebugFlags)
    builder: BuilderFlags = field(default_factory=BuilderFlags)

    @staticmethod
    def load_from_env() -> "RuntimeConfig":
        debug = DebugFlags(
            trace_steps=_parse_bool(os.getenv("BOXED_TRACE_STEPS"), default=False),
            trace_max_inline_chars=_parse_int(
                os.getenv("BOXED_TRACE_MAX_INLINE_CHARS"), default=200, min_v=20, max_v=5000
            ),
        )
        builder = BuilderFlags(
            log_writes=_parse_bool(os.getenv("BOXED_BUILDER_LOG_WRITES"), default=False),
        )
        return RuntimeConfig(debug=debug, builder=builder)

    def to_safe_log_dict(self) -> dict[str, Any]:
        return {
            "debug": {
                "trace_steps": bool(self.debug.trace_steps),
                "trace_max_inline_chars": int(self.debug.trace_max_inline_chars),
            },
            "builder": {
                "log_writes": bool(self.builder.log_writes),
            },
        }


@functools.lru_cache(maxsize=1)
def get_runtime_config() -> RuntimeConfig:
    """Process-wide config, read from the environment on first use."""
    return RuntimeConfig.load_from_env()
