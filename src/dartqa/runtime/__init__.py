# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime collaborators: analyzer invocation, snapshots and console access."""

from __future__ import annotations

from .invoker import AnalyzerMode, SubprocessToolInvoker, ToolInvoker, ToolOutput
from .snapshots import (
    JsonFileSnapshotProvider,
    SnapshotProvider,
    StaticSnapshotProvider,
    empty_snapshot,
)

__all__ = [
    "AnalyzerMode",
    "JsonFileSnapshotProvider",
    "SnapshotProvider",
    "StaticSnapshotProvider",
    "SubprocessToolInvoker",
    "ToolInvoker",
    "ToolOutput",
    "empty_snapshot",
]
