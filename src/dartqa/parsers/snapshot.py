# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decoder for the host's diagnostics snapshot."""

from __future__ import annotations

from os import PathLike
from typing import Final

from ..core.models import UNKNOWN_CODE, DiagnosticCodeValue, DiagnosticsSnapshot, HostDiagnostic, Issue
from ..core.severity import map_host_severity
from ..filesystem.paths import FILE_SCHEME, relativize_path, uri_to_path
from .base import IssueDetails, IssueLocation, build_issue

DEFAULT_SOURCE_EXTENSION: Final[str] = ".dart"


def diagnostic_code(code: DiagnosticCodeValue | str | int | None) -> str:
    """Return the textual code of a host diagnostic.

    Args:
        code: Plain string, number, structured ``{value, target}`` code or ``None``.

    Returns:
        str: Code text, or ``"unknown"`` when the diagnostic carries none.
    """

    if code is None:
        return UNKNOWN_CODE
    if isinstance(code, DiagnosticCodeValue):
        return str(code.value)
    return str(code)


def decode_host_diagnostic(diagnostic: HostDiagnostic, file: str) -> Issue:
    """Convert a host diagnostic with zero-based positions into an :class:`Issue`."""

    start = diagnostic.range.start
    location = IssueLocation(file=file, line=start.line + 1, column=start.character + 1)
    details = IssueDetails(
        severity=map_host_severity(diagnostic.severity),
        message=diagnostic.message,
        code=diagnostic_code(diagnostic.code),
    )
    return build_issue(location=location, details=details)


def decode_snapshot(
    snapshot: DiagnosticsSnapshot,
    root: str | PathLike[str] | None,
    *,
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
) -> list[Issue]:
    """Decode a diagnostics snapshot into issues.

    Entries whose URI is not a ``file`` reference or whose path lacks the
    source extension are skipped.

    Args:
        snapshot: Mapping of document URI to the diagnostics reported for it.
        root: Analysis root; when ``None`` or empty paths stay absolute.
        source_extension: Extension identifying analysable source files.

    Returns:
        list[Issue]: Issues in snapshot iteration order.
    """

    issues: list[Issue] = []
    for uri, diagnostics in snapshot.items():
        scheme, path = uri_to_path(uri)
        if scheme != FILE_SCHEME or not path.endswith(source_extension):
            continue
        file = relativize_path(path, root) if root else path
        issues.extend(decode_host_diagnostic(diagnostic, file) for diagnostic in diagnostics)
    return issues


__all__ = [
    "DEFAULT_SOURCE_EXTENSION",
    "decode_host_diagnostic",
    "decode_snapshot",
    "diagnostic_code",
]
