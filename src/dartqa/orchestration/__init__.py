# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analysis pipeline orchestration."""

from __future__ import annotations

from .pipeline import (
    AnalysisFailedError,
    AnalysisReport,
    FailureKind,
    StageFailure,
    StageOutcome,
    Strategy,
    analyze,
)
from .session import AnalysisSession

__all__ = [
    "AnalysisFailedError",
    "AnalysisReport",
    "AnalysisSession",
    "FailureKind",
    "StageFailure",
    "StageOutcome",
    "Strategy",
    "analyze",
]
