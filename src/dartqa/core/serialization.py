# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for coercing JSON values and serialising issues."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import TypeAlias

from .models import Issue, IssueGroup, SeveritySummary

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = "JsonScalar | list[JsonValue] | dict[str, JsonValue]"


def coerce_optional_int(value: object) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_positive_int(*candidates: object, default: int = 1) -> int:
    """Return the first candidate that coerces to an integer ``>= 1``.

    Args:
        *candidates: Values probed in priority order.
        default: Value returned when no candidate qualifies.

    Returns:
        int: First positive integer candidate or ``default``.
    """

    for candidate in candidates:
        value = coerce_optional_int(candidate)
        if value is not None and value >= 1:
            return value
    return default


def first_text(*candidates: object) -> str | None:
    """Return the first candidate that is a non-empty value, as a string."""
    for candidate in candidates:
        if candidate is None or candidate == "" or candidate is False:
            continue
        return str(candidate)
    return None


def iter_dicts(value: object) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if is_json_sequence(value):
        for item in value:
            if isinstance(item, Mapping):
                yield item


def is_json_sequence(value: object) -> bool:
    """Return ``True`` for list-like JSON values (strings excluded)."""

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def mapping_or_empty(value: object) -> Mapping[str, JsonValue]:
    """Return ``value`` when it is a mapping, otherwise an empty mapping."""

    return value if isinstance(value, Mapping) else {}


def serialize_issue(issue: Issue) -> dict[str, JsonValue]:
    """Convert an issue into a JSON-friendly mapping."""
    return {
        "severity": issue.severity.value,
        "code": issue.code,
        "message": issue.message,
        "file": issue.file,
        "line": issue.line,
        "column": issue.column,
    }


def serialize_group(group: IssueGroup) -> dict[str, JsonValue]:
    """Convert an issue group into a JSON-friendly mapping."""
    return {
        "file": group.file,
        "issues": [serialize_issue(issue) for issue in group.issues],
    }


def serialize_summary(summary: SeveritySummary) -> dict[str, JsonValue]:
    """Convert severity counts into a JSON-friendly mapping."""
    return {
        "errors": summary.errors,
        "warnings": summary.warnings,
        "infoAndHints": summary.info_and_hints,
        "total": summary.total,
    }


__all__ = [
    "JsonScalar",
    "JsonValue",
    "coerce_optional_int",
    "coerce_positive_int",
    "first_text",
    "is_json_sequence",
    "iter_dicts",
    "mapping_or_empty",
    "serialize_group",
    "serialize_issue",
    "serialize_summary",
]
