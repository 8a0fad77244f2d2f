# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models and severity helpers shared across dartqa."""

from __future__ import annotations

from .models import (
    TEXT_REPORT_CODE,
    UNKNOWN_CODE,
    DiagnosticCodeValue,
    DiagnosticPosition,
    DiagnosticRange,
    DiagnosticsSnapshot,
    HostDiagnostic,
    Issue,
    IssueGroup,
    SeveritySummary,
)
from .severity import HostSeverity, Severity, map_host_severity, map_severity, severity_rank

__all__ = [
    "TEXT_REPORT_CODE",
    "UNKNOWN_CODE",
    "DiagnosticCodeValue",
    "DiagnosticPosition",
    "DiagnosticRange",
    "DiagnosticsSnapshot",
    "HostDiagnostic",
    "HostSeverity",
    "Issue",
    "IssueGroup",
    "Severity",
    "SeveritySummary",
    "map_host_severity",
    "map_severity",
    "severity_rank",
]
