# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised across the dartqa package."""

from __future__ import annotations

from collections.abc import Sequence


class DartQAError(RuntimeError):
    """Base class for errors raised by dartqa."""


class ToolInvocationError(DartQAError):
    """Raised when the analyzer could not be run or produced no usable output."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class MalformedPayloadError(DartQAError, ValueError):
    """Raised when analyzer stdout is not a parseable JSON document."""


class SnapshotUnavailableError(DartQAError):
    """Raised when the host diagnostics snapshot cannot be queried."""


class ConfigError(DartQAError):
    """Raised when configuration input is invalid."""


__all__ = (
    "ConfigError",
    "DartQAError",
    "MalformedPayloadError",
    "SnapshotUnavailableError",
    "ToolInvocationError",
)
