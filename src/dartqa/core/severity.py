# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different analyzer vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


class HostSeverity(IntEnum):
    """Severity levels reported by the host diagnostics feed."""

    ERROR = 0
    WARNING = 1
    INFORMATION = 2
    HINT = 3


_LABEL_TO_SEVERITY: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "fatal": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "info": Severity.INFO,
    "information": Severity.INFO,
}

_HOST_TO_SEVERITY: Final[dict[int, Severity]] = {
    HostSeverity.ERROR: Severity.ERROR,
    HostSeverity.WARNING: Severity.WARNING,
    HostSeverity.INFORMATION: Severity.INFO,
    HostSeverity.HINT: Severity.HINT,
}

_SEVERITY_RANK: Final[Mapping[Severity, int]] = {
    Severity.ERROR: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
    Severity.HINT: 0,
}


def map_severity(label: object) -> Severity:
    """Return the :class:`Severity` matching an analyzer supplied ``label``.

    Matching is case-insensitive. Unknown labels, ``None`` and non-string values
    degrade to :attr:`Severity.HINT` instead of raising.

    Args:
        label: Raw severity label such as ``"ERROR"``, ``"warn"`` or ``"fatal"``.

    Returns:
        Severity: Canonical severity for ``label``.
    """

    if isinstance(label, Severity):
        return label
    if not isinstance(label, str):
        return Severity.HINT
    return _LABEL_TO_SEVERITY.get(label.strip().lower(), Severity.HINT)


def map_host_severity(level: object) -> Severity:
    """Translate a host diagnostic severity level into a :class:`Severity`.

    Args:
        level: Host severity level, normally a :class:`HostSeverity` value.

    Returns:
        Severity: Mapped severity; unrecognised levels map to :attr:`Severity.INFO`.
    """

    if isinstance(level, bool) or not isinstance(level, int):
        return Severity.INFO
    return _HOST_TO_SEVERITY.get(level, Severity.INFO)


def severity_rank(severity: Severity) -> int:
    """Return the urgency rank of ``severity`` (higher is more urgent)."""

    return _SEVERITY_RANK[severity]


__all__ = [
    "HostSeverity",
    "Severity",
    "map_host_severity",
    "map_severity",
    "severity_rank",
]
