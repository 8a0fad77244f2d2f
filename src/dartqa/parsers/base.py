# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import cast

from ..core.models import UNKNOWN_CODE, Issue
from ..core.serialization import JsonValue
from ..core.severity import Severity
from ..errors import MalformedPayloadError


def ensure_lines(value: str | Sequence[str]) -> list[str]:
    """Normalise string-based output into a list of lines."""
    if isinstance(value, str):
        return value.splitlines()
    return [str(item) for item in value]


def load_json_payload(stdout: str) -> JsonValue:
    """Parse analyzer ``stdout`` as a single JSON document.

    Args:
        stdout: Raw standard output captured from the analyzer.

    Returns:
        JsonValue: Parsed payload.

    Raises:
        MalformedPayloadError: If ``stdout`` is blank or not valid JSON.
    """

    text = stdout.strip()
    if not text:
        raise MalformedPayloadError("analyzer produced no JSON output")
    try:
        return cast(JsonValue, json.loads(text))
    except ValueError as exc:
        raise MalformedPayloadError(f"analyzer output is not valid JSON: {exc}") from exc


@dataclass(slots=True)
class IssueLocation:
    """Describe the file and position associated with an issue."""

    file: str
    line: int = 1
    column: int = 1


@dataclass(slots=True)
class IssueDetails:
    """Capture issue metadata excluding the physical location."""

    severity: Severity
    message: str = ""
    code: str = UNKNOWN_CODE


def build_issue(*, location: IssueLocation, details: IssueDetails) -> Issue:
    """Return an :class:`Issue` assembled from ``location`` and ``details``."""

    return Issue(
        severity=details.severity,
        code=details.code,
        message=details.message,
        file=location.file,
        line=location.line,
        column=location.column,
    )


def append_issue(
    collection: list[Issue],
    *,
    location: IssueLocation,
    details: IssueDetails,
) -> None:
    """Build an :class:`Issue` and append it to ``collection``.

    Args:
        collection: Target list receiving the issue.
        location: File and position describing where the issue occurs.
        details: Severity, message and code reported by the analyzer.
    """

    collection.append(build_issue(location=location, details=details))


__all__ = [
    "IssueDetails",
    "IssueLocation",
    "append_issue",
    "build_issue",
    "ensure_lines",
    "load_json_payload",
]
