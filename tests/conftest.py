# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors

import pytest

from boxed.runtime_config import DebugFlags, RuntimeConfig, get_runtime_config


@pytest.fixture(autouse=True)
def _fresh_runtime_config():
    """Each test reads the environment anew."""
    get_runtime_config.cache_clear()
    yield
    get_runtime_config.cache_clear()


@pytest.fixture
def tracing_runtime() -> RuntimeConfig:
    """Runtime config with step tracing switched on."""
    return RuntimeConfig(debug=DebugFlags(trace_steps=True, trace_max_inline_chars=80))


@pytest.fixture
def multiply_by():
    return lambda x: lambda y: x * y


@pytest.fixture
def async_multiply_by():
    def factory(x):
        async def multiply(y):
            return x * y

        return multiply

    return factory
