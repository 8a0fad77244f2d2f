# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fallback pipeline turning analyzer output into an issue collection.

Stages run in a fixed order: the analyzer's JSON report, its default text
report, then the host diagnostics snapshot. Each stage returns a
:class:`StageOutcome` describing either its issues or why it failed; only
:func:`analyze` interprets failures and chooses the next stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import AnalyzerConfig
from ..core.models import Issue, IssueGroup, SeveritySummary
from ..errors import DartQAError, MalformedPayloadError, SnapshotUnavailableError, ToolInvocationError
from ..parsers import classify_json_shape, decode_json, decode_snapshot, decode_text, load_json_payload
from ..reporting.grouping import group_and_sort, summarize
from ..runtime.invoker import AnalyzerMode, ToolInvoker
from ..runtime.snapshots import SnapshotProvider

LOGGER = logging.getLogger(__name__)


class Strategy(str, Enum):
    """Decoding strategies in fallback order."""

    JSON = "json"
    TEXT = "text"
    SNAPSHOT = "snapshot"


class FailureKind(str, Enum):
    """Reasons a stage may fail to produce issues."""

    INVOCATION = "invocation"
    EMPTY_OUTPUT = "empty-output"
    MALFORMED_PAYLOAD = "malformed-payload"
    UNRECOGNIZED_SHAPE = "unrecognized-shape"
    SNAPSHOT_UNAVAILABLE = "snapshot-unavailable"


@dataclass(frozen=True, slots=True)
class StageFailure:
    """Why a stage produced no usable result."""

    strategy: Strategy
    kind: FailureKind
    reason: str

    def __str__(self) -> str:
        return f"{self.strategy.value}: {self.reason}"


@dataclass(frozen=True, slots=True)
class StageOutcome:
    """Result-or-failure value returned by each pipeline stage."""

    strategy: Strategy
    issues: tuple[Issue, ...] = ()
    failure: StageFailure | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the stage produced a usable result."""
        return self.failure is None

    @classmethod
    def success(cls, strategy: Strategy, issues: list[Issue]) -> StageOutcome:
        return cls(strategy=strategy, issues=tuple(issues))

    @classmethod
    def failed(cls, strategy: Strategy, kind: FailureKind, reason: str) -> StageOutcome:
        return cls(strategy=strategy, failure=StageFailure(strategy=strategy, kind=kind, reason=reason))


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Issue collection produced by one analysis run."""

    issues: tuple[Issue, ...]
    strategy: Strategy
    failures: tuple[StageFailure, ...] = ()

    @property
    def groups(self) -> list[IssueGroup]:
        """Return issues grouped by file and sorted for presentation."""
        return group_and_sort(self.issues)

    @property
    def summary(self) -> SeveritySummary:
        """Return per-severity counts."""
        return summarize(self.issues)

    @property
    def analyzer_unavailable(self) -> bool:
        """Return ``True`` when both analyzer reports failed and the snapshot was used."""
        return self.strategy is Strategy.SNAPSHOT and bool(self.failures)


class AnalysisFailedError(DartQAError):
    """Raised when every strategy in the fallback chain failed."""

    def __init__(self, failures: tuple[StageFailure, ...]) -> None:
        self.failures = failures
        reason = failures[-1].reason if failures else "analysis failed"
        super().__init__(reason)


def json_stage(root: Path, invoker: ToolInvoker, mode: AnalyzerMode, config: AnalyzerConfig) -> StageOutcome:
    """Run the analyzer's JSON report and decode it.

    Args:
        root: Analysis root.
        invoker: Analyzer invoker.
        mode: Analyzer front-end.
        config: Analyzer configuration.

    Returns:
        StageOutcome: Decoded issues, or the failure explaining which stage follows.
    """

    try:
        output = invoker.invoke(root, mode, json_output=True)
    except ToolInvocationError as exc:
        return StageOutcome.failed(Strategy.JSON, FailureKind.INVOCATION, str(exc))
    if not output.has_stdout:
        reason = "analyzer wrote only to stderr" if output.has_stderr else "analyzer produced no output"
        return StageOutcome.failed(Strategy.JSON, FailureKind.EMPTY_OUTPUT, reason)
    try:
        payload = load_json_payload(output.stdout)
    except MalformedPayloadError as exc:
        return StageOutcome.failed(Strategy.JSON, FailureKind.MALFORMED_PAYLOAD, str(exc))
    if config.fallback_on_unrecognized_json and classify_json_shape(payload) is None:
        return StageOutcome.failed(
            Strategy.JSON,
            FailureKind.UNRECOGNIZED_SHAPE,
            "analyzer JSON output has an unrecognised shape",
        )
    return StageOutcome.success(Strategy.JSON, decode_json(payload, str(root)))


def text_stage(root: Path, invoker: ToolInvoker, mode: AnalyzerMode) -> StageOutcome:
    """Run the analyzer's default text report and decode it."""

    try:
        output = invoker.invoke(root, mode, json_output=False)
    except ToolInvocationError as exc:
        return StageOutcome.failed(Strategy.TEXT, FailureKind.INVOCATION, str(exc))
    return StageOutcome.success(Strategy.TEXT, decode_text(output.stdout, str(root)))


def snapshot_stage(root: Path | None, provider: SnapshotProvider, config: AnalyzerConfig) -> StageOutcome:
    """Decode the host diagnostics snapshot."""

    try:
        snapshot = provider()
    except SnapshotUnavailableError as exc:
        return StageOutcome.failed(Strategy.SNAPSHOT, FailureKind.SNAPSHOT_UNAVAILABLE, str(exc))
    issues = decode_snapshot(
        snapshot,
        str(root) if root is not None else None,
        source_extension=config.source_extension,
    )
    return StageOutcome.success(Strategy.SNAPSHOT, issues)


def analyze(
    root: Path,
    invoker: ToolInvoker,
    snapshot_provider: SnapshotProvider,
    *,
    config: AnalyzerConfig | None = None,
    mode: AnalyzerMode | None = None,
) -> AnalysisReport:
    """Run the fallback chain once and return the resulting issue collection.

    An analyzer invocation failure skips straight to the snapshot. Empty or
    malformed JSON output falls back to the text report, and a failed text
    report falls back to the snapshot.

    Args:
        root: Analysis root; reported paths are made relative to it.
        invoker: Analyzer invoker.
        snapshot_provider: Callable returning the host diagnostics snapshot.
        config: Analyzer configuration; defaults apply when omitted.
        mode: Analyzer front-end overriding ``config.mode``.

    Returns:
        AnalysisReport: Issues from the first successful stage plus the
        failures of the stages tried before it.

    Raises:
        AnalysisFailedError: If every stage failed.
    """

    cfg = config or AnalyzerConfig()
    active_mode = mode or cfg.mode
    failures: list[StageFailure] = []

    outcome = json_stage(root, invoker, active_mode, cfg)
    if outcome.failure is not None and outcome.failure.kind is not FailureKind.INVOCATION:
        LOGGER.debug("JSON report unusable (%s); trying text report", outcome.failure.reason)
        failures.append(outcome.failure)
        outcome = text_stage(root, invoker, active_mode)
    if outcome.failure is not None:
        LOGGER.warning(
            "%s analyzer unavailable (%s); using diagnostics snapshot",
            active_mode.display_name,
            outcome.failure.reason,
        )
        failures.append(outcome.failure)
        outcome = snapshot_stage(root, snapshot_provider, cfg)
    if outcome.failure is not None:
        failures.append(outcome.failure)
        raise AnalysisFailedError(tuple(failures))

    LOGGER.debug("%s strategy produced %d issue(s)", outcome.strategy.value, len(outcome.issues))
    return AnalysisReport(issues=outcome.issues, strategy=outcome.strategy, failures=tuple(failures))


__all__ = [
    "AnalysisFailedError",
    "AnalysisReport",
    "FailureKind",
    "StageFailure",
    "StageOutcome",
    "Strategy",
    "analyze",
    "json_stage",
    "snapshot_stage",
    "text_stage",
]
