# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Grouping and summary projections over an issue collection."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import Issue, IssueGroup, SeveritySummary
from ..core.severity import Severity


def file_sort_key(path: str) -> tuple[str, str]:
    """Return a locale-style sort key: case-insensitive first, exact text as tie breaker."""

    return path.casefold(), path


def group_and_sort(issues: Iterable[Issue]) -> list[IssueGroup]:
    """Group ``issues`` by file.

    Groups are ordered by file path and the issues inside each group by line.
    The line sort is stable, so issues sharing a line keep their input order.

    Args:
        issues: Issues produced by a single analysis run.

    Returns:
        list[IssueGroup]: File groups ready for presentation.
    """

    by_file: dict[str, list[Issue]] = {}
    for issue in issues:
        by_file.setdefault(issue.file, []).append(issue)
    return [
        IssueGroup(file=file, issues=tuple(sorted(by_file[file], key=lambda issue: issue.line)))
        for file in sorted(by_file, key=file_sort_key)
    ]


def summarize(issues: Iterable[Issue]) -> SeveritySummary:
    """Count ``issues`` per severity."""

    counts = dict.fromkeys(Severity, 0)
    for issue in issues:
        counts[issue.severity] += 1
    return SeveritySummary(
        errors=counts[Severity.ERROR],
        warnings=counts[Severity.WARNING],
        infos=counts[Severity.INFO],
        hints=counts[Severity.HINT],
    )


__all__ = ["file_sort_key", "group_and_sort", "summarize"]
