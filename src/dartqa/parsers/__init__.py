# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public parser exports for converting analyzer output into issues."""

from __future__ import annotations

from .base import load_json_payload
from .json_report import JsonShape, classify_json_shape, decode_json
from .snapshot import decode_snapshot
from .text_report import decode_text

__all__ = [
    "JsonShape",
    "classify_json_shape",
    "decode_json",
    "decode_snapshot",
    "decode_text",
    "load_json_payload",
]
