# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the dartqa package."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import HostSeverity, Severity

UNKNOWN_CODE: Final[str] = "unknown"
TEXT_REPORT_CODE: Final[str] = "analyzer"


class Issue(BaseModel):
    """Normalised analyzer finding."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    code: str = UNKNOWN_CODE
    message: str = ""
    file: str = ""
    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)

    @field_validator("file", mode="before")
    @classmethod
    def _coerce_file(cls, value: object) -> object:
        """Store a missing file as an empty string rather than ``None``."""
        if value is None:
            return ""
        return value


@dataclass(frozen=True, slots=True)
class IssueGroup:
    """Issues reported against a single file, ordered by line."""

    file: str
    issues: tuple[Issue, ...]

    def __len__(self) -> int:
        return len(self.issues)


@dataclass(frozen=True, slots=True)
class SeveritySummary:
    """Severity counts derived from an issue collection."""

    errors: int = 0
    warnings: int = 0
    infos: int = 0
    hints: int = 0

    @property
    def info_and_hints(self) -> int:
        """Return the combined informational count shown next to errors and warnings."""
        return self.infos + self.hints

    @property
    def total(self) -> int:
        """Return the number of issues summarised."""
        return self.errors + self.warnings + self.infos + self.hints


class DiagnosticPosition(BaseModel):
    """Zero-based position inside a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(default=0, ge=0)
    character: int = Field(default=0, ge=0)


class DiagnosticRange(BaseModel):
    """Range covered by a host diagnostic."""

    model_config = ConfigDict(frozen=True)

    start: DiagnosticPosition = Field(default_factory=DiagnosticPosition)
    end: DiagnosticPosition | None = None


class DiagnosticCodeValue(BaseModel):
    """Structured diagnostic code carrying a value and an optional link target."""

    model_config = ConfigDict(frozen=True)

    value: str | int
    target: str | None = None


class HostDiagnostic(BaseModel):
    """Diagnostic record as exposed by the hosting environment."""

    model_config = ConfigDict(frozen=True)

    severity: int = HostSeverity.ERROR
    code: DiagnosticCodeValue | str | int | None = None
    message: str = ""
    range: DiagnosticRange = Field(default_factory=DiagnosticRange)


DiagnosticsSnapshot: TypeAlias = Mapping[str, Sequence[HostDiagnostic]]

__all__ = [
    "TEXT_REPORT_CODE",
    "UNKNOWN_CODE",
    "DiagnosticCodeValue",
    "DiagnosticPosition",
    "DiagnosticRange",
    "DiagnosticsSnapshot",
    "HostDiagnostic",
    "Issue",
    "IssueGroup",
    "SeveritySummary",
]
