# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Value previews for log lines.

Step inputs and outputs are arbitrary user objects; logging them raw can
flood logs or leak credentials. `preview` renders a bounded, redacted repr.
"""

from __future__ import annotations

import re
from typing import Any

_SECRET_KEYS = ("authorization", "api_key", "key", "password", "secret", "token")


def _redact_text(s: str) -> str:
    if not s:
        return s

    # URL params
    s = re.sub(r"([?&](?:api_)?key=)[^&\s'\"]+", r"\1***", s, flags=re.IGNORECASE)
    s = re.sub(r"([?&]access_token=)[^&\s'\"]+", r"\1***", s, flags=re.IGNORECASE)

    # Bearer tokens
    s = re.sub(r"(Bearer\s+)[A-Za-z0-9._-]+", r"\1***", s)

    return s


def _mask(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: dict[Any, Any] = {}
        for k, v in obj.items():
            if str(k).lower() in _SECRET_KEYS:
                out[k] = "***"
            else:
                out[k] = _mask(v)
        return out
    if isinstance(obj, list):
        return [_mask(x) for x in obj]
    if isinstance(obj, tuple):
        return tuple(_mask(x) for x in obj)
    return obj


def preview(value: Any, *, max_chars: int = 200) -> str:
    """
    Render `value` for logging.

    Mapping entries with secret-looking keys are masked, bearer tokens and
    key query params are redacted, and the result is cut to head/tail around
    `max_chars`.
    """
    try:
        text = repr(_mask(value))
    except Exception as exc:  # repr of user objects may raise anything
        return f"<unrepresentable {type(value).__name__}: {type(exc).__name__}>"

    text = _redact_text(text)
    if len(text) <= max_chars:
        return text
    head_tail_len = max(1, (max_chars - 20) // 2)
    return f"{text[:head_tail_len]}...(+{len(text) - 2 * head_tail_len} chars)...{text[-head_tail_len:]}"
