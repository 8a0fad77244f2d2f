# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decoder for analyzer JSON output."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from os import PathLike
from typing import Final

from ..core.models import UNKNOWN_CODE, Issue
from ..core.serialization import (
    JsonValue,
    coerce_positive_int,
    first_text,
    is_json_sequence,
    iter_dicts,
    mapping_or_empty,
)
from ..core.severity import map_severity
from ..filesystem.paths import relativize_path
from .base import IssueDetails, IssueLocation, build_issue

SEVERITY_KEYS: Final[tuple[str, ...]] = ("severity", "level")
CODE_KEYS: Final[tuple[str, ...]] = ("code", "errorCode")
MESSAGE_KEYS: Final[tuple[str, ...]] = ("message", "problemMessage")
DIAGNOSTICS_KEY: Final[str] = "diagnostics"
LOCATION_KEY: Final[str] = "location"


class JsonShape(str, Enum):
    """Payload layouts recognised by :func:`decode_json`."""

    SINGLE = "single"
    ARRAY = "array"
    WRAPPED = "wrapped"


def _first_value(item: Mapping[str, JsonValue], keys: tuple[str, ...]) -> str | None:
    return first_text(*(item.get(key) for key in keys))


def classify_json_shape(payload: JsonValue) -> JsonShape | None:
    """Return the recognised layout of ``payload`` or ``None``.

    Shapes are checked in priority order: a single issue object carrying both
    a severity-like and a code-like field, a bare array of issues, then an
    object wrapping an array under ``diagnostics``.

    Args:
        payload: Parsed JSON document emitted by the analyzer.

    Returns:
        JsonShape | None: Matching shape tag, or ``None`` when unrecognised.
    """

    if isinstance(payload, Mapping):
        if _first_value(payload, SEVERITY_KEYS) and _first_value(payload, CODE_KEYS):
            return JsonShape.SINGLE
        if is_json_sequence(payload.get(DIAGNOSTICS_KEY)):
            return JsonShape.WRAPPED
        return None
    if is_json_sequence(payload):
        return JsonShape.ARRAY
    return None


def decode_json_issue(item: Mapping[str, JsonValue], root: str | PathLike[str] | None) -> Issue:
    """Decode one JSON issue object into an :class:`Issue`.

    Args:
        item: Mapping describing a single analyzer finding.
        root: Analysis root used to relativise the reported file.

    Returns:
        Issue: Normalised issue; missing fields fall back to defaults.
    """

    location = mapping_or_empty(item.get(LOCATION_KEY))
    start = mapping_or_empty(mapping_or_empty(location.get("range")).get("start"))
    raw_file = first_text(location.get("file"), item.get("file")) or ""
    issue_location = IssueLocation(
        file=relativize_path(raw_file, root),
        line=coerce_positive_int(location.get("startLine"), start.get("line"), item.get("line")),
        column=coerce_positive_int(location.get("startColumn"), start.get("column"), item.get("column")),
    )
    details = IssueDetails(
        severity=map_severity(_first_value(item, SEVERITY_KEYS)),
        message=_first_value(item, MESSAGE_KEYS) or "",
        code=_first_value(item, CODE_KEYS) or UNKNOWN_CODE,
    )
    return build_issue(location=issue_location, details=details)


def decode_json(payload: JsonValue, root: str | PathLike[str] | None) -> list[Issue]:
    """Decode a parsed analyzer JSON payload into issues.

    Unrecognised payload shapes yield an empty list; this function never raises.

    Args:
        payload: Parsed JSON document emitted by the analyzer.
        root: Analysis root used to relativise reported files.

    Returns:
        list[Issue]: Issues in payload order.
    """

    shape = classify_json_shape(payload)
    if shape is JsonShape.SINGLE and isinstance(payload, Mapping):
        return [decode_json_issue(payload, root)]
    if shape is JsonShape.ARRAY:
        return [decode_json_issue(item, root) for item in iter_dicts(payload)]
    if shape is JsonShape.WRAPPED and isinstance(payload, Mapping):
        return [decode_json_issue(item, root) for item in iter_dicts(payload.get(DIAGNOSTICS_KEY))]
    return []


__all__ = [
    "JsonShape",
    "classify_json_shape",
    "decode_json",
    "decode_json_issue",
]
