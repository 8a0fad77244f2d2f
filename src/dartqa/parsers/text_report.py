# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decoder for the analyzer's human readable text report."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from typing import Final

from ..core.models import TEXT_REPORT_CODE, Issue
from ..core.serialization import coerce_positive_int
from ..core.severity import map_severity
from ..filesystem.paths import relativize_path
from .base import IssueDetails, IssueLocation, build_issue, ensure_lines

ISSUE_START_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?P<severity>error|warning|info|hint)\s+•\s+(?P<message>.+?)\s+•\s+"
    r"(?P<file>.+?):(?P<line>\d+):(?P<column>\d+)",
)
REPORT_FOOTER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?:\d+\s+issues?\s+found\b|No issues found\b)",
    re.IGNORECASE,
)
CONTINUATION_SEPARATOR: Final[str] = " "


@dataclass(slots=True)
class _PendingIssue:
    """Issue accumulated across an issue-start line and its continuations."""

    location: IssueLocation
    details: IssueDetails

    def extend(self, text: str) -> None:
        self.details.message = f"{self.details.message}{CONTINUATION_SEPARATOR}{text}"

    def build(self) -> Issue:
        return build_issue(location=self.location, details=self.details)


def _start_issue(match: re.Match[str], root: str | PathLike[str] | None) -> _PendingIssue:
    location = IssueLocation(
        file=relativize_path(match.group("file"), root),
        line=coerce_positive_int(match.group("line")),
        column=coerce_positive_int(match.group("column")),
    )
    details = IssueDetails(
        severity=map_severity(match.group("severity")),
        message=match.group("message").strip(),
        code=TEXT_REPORT_CODE,
    )
    return _PendingIssue(location=location, details=details)


def decode_text(report: str | Sequence[str], root: str | PathLike[str] | None) -> list[Issue]:
    """Decode the analyzer's line-oriented report into issues.

    Issue lines look like ``error • message • lib/a.dart:10:1``. The analyzer
    wraps long messages onto indented follow-up lines; any non-blank line that
    is not an issue start is appended to the pending issue's message. Lines
    preceding the first issue are ignored and the summary footer closes the
    pending issue.

    Args:
        report: Report text or its lines.
        root: Analysis root used to relativise reported files.

    Returns:
        list[Issue]: Issues in report order, each coded ``"analyzer"``.
    """

    issues: list[Issue] = []
    pending: _PendingIssue | None = None
    for raw_line in ensure_lines(report):
        stripped = raw_line.strip()
        if not stripped:
            continue
        match = ISSUE_START_PATTERN.match(raw_line)
        if match:
            if pending is not None:
                issues.append(pending.build())
            pending = _start_issue(match, root)
            continue
        if pending is None:
            continue
        if REPORT_FOOTER_PATTERN.match(stripped):
            issues.append(pending.build())
            pending = None
            continue
        pending.extend(stripped)
    if pending is not None:
        issues.append(pending.build())
    return issues


__all__ = [
    "ISSUE_START_PATTERN",
    "REPORT_FOOTER_PATTERN",
    "decode_text",
]
