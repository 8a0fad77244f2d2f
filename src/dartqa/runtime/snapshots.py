# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostics snapshot providers consumed by the analysis pipeline."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Final, TypeAlias

from pydantic import TypeAdapter, ValidationError

from ..core.models import DiagnosticsSnapshot, HostDiagnostic
from ..core.serialization import is_json_sequence, iter_dicts
from ..errors import SnapshotUnavailableError

SnapshotProvider: TypeAlias = Callable[[], DiagnosticsSnapshot]

URI_KEY: Final[str] = "uri"
DIAGNOSTICS_KEY: Final[str] = "diagnostics"

_DIAGNOSTICS_ADAPTER: Final[TypeAdapter[list[HostDiagnostic]]] = TypeAdapter(list[HostDiagnostic])


def freeze_snapshot(entries: Mapping[str, Sequence[HostDiagnostic]]) -> DiagnosticsSnapshot:
    """Return a read-only copy of ``entries``."""

    return MappingProxyType({uri: tuple(diagnostics) for uri, diagnostics in entries.items()})


def empty_snapshot() -> DiagnosticsSnapshot:
    """Return a snapshot containing no diagnostics."""

    return MappingProxyType({})


class StaticSnapshotProvider:
    """Serve a fixed snapshot captured at construction time."""

    def __init__(self, entries: Mapping[str, Sequence[HostDiagnostic]]) -> None:
        self._snapshot = freeze_snapshot(entries)

    def __call__(self) -> DiagnosticsSnapshot:
        return self._snapshot


class JsonFileSnapshotProvider:
    """Load a snapshot exported by the host as JSON.

    Two layouts are accepted: an object mapping document URIs to diagnostic
    arrays, or an array of ``{"uri": ..., "diagnostics": [...]}`` entries as
    carried by ``textDocument/publishDiagnostics`` notifications.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Return the snapshot file location."""
        return self._path

    def __call__(self) -> DiagnosticsSnapshot:
        """Read and validate the snapshot file.

        Returns:
            DiagnosticsSnapshot: Read-only mapping of URI to diagnostics.

        Raises:
            SnapshotUnavailableError: If the file cannot be read or validated.
        """

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SnapshotUnavailableError(f"Unable to read diagnostics snapshot {self._path}: {exc}") from exc
        if not isinstance(payload, Mapping) and not is_json_sequence(payload):
            raise SnapshotUnavailableError(f"Diagnostics snapshot {self._path} must be a JSON object or array")
        try:
            return freeze_snapshot(_coerce_entries(payload))
        except ValidationError as exc:
            raise SnapshotUnavailableError(f"Invalid diagnostics snapshot {self._path}: {exc}") from exc


def _coerce_entries(payload: object) -> dict[str, list[HostDiagnostic]]:
    entries: dict[str, list[HostDiagnostic]] = {}
    if isinstance(payload, Mapping):
        for uri, diagnostics in payload.items():
            entries[str(uri)] = _DIAGNOSTICS_ADAPTER.validate_python(diagnostics)
        return entries
    for item in iter_dicts(payload):
        uri = item.get(URI_KEY)
        if not isinstance(uri, str):
            continue
        diagnostics = _DIAGNOSTICS_ADAPTER.validate_python(item.get(DIAGNOSTICS_KEY) or [])
        entries.setdefault(uri, []).extend(diagnostics)
    return entries


__all__ = [
    "JsonFileSnapshotProvider",
    "SnapshotProvider",
    "StaticSnapshotProvider",
    "empty_snapshot",
    "freeze_snapshot",
]
