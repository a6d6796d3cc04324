# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""Shared helpers."""

from boxed.utils.preview import preview

__all__ = ["preview"]
