# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-session analysis state guarded against overlapping runs."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from threading import Lock
from typing import Final

from ..config import Config
from ..core.models import Issue, IssueGroup, SeveritySummary
from ..reporting.grouping import group_and_sort, summarize
from ..runtime.invoker import AnalyzerMode, ToolInvoker
from ..runtime.snapshots import SnapshotProvider
from .pipeline import AnalysisFailedError, AnalysisReport, analyze

LOGGER = logging.getLogger(__name__)

Notifier = Callable[[str], None]
StatusListener = Callable[[str], None]

NO_ROOT_STATUS: Final[str] = "No workspace folder found"
ERROR_NOTIFICATION_PREFIX: Final[str] = "Dart Analysis Error"


def analyzing_status(mode: AnalyzerMode) -> str:
    """Return the status shown while ``mode`` runs."""
    return f"{mode.display_name} Analyzing..."


def found_status(count: int) -> str:
    """Return the status summarising ``count`` issues."""
    return f"Found {count} issue{'' if count == 1 else 's'}"


def error_status(reason: str) -> str:
    """Return the status describing a failed run."""
    return f"Error: {reason}"


def _log_notification(message: str) -> None:
    LOGGER.error("%s", message)


class AnalysisSession:
    """Own one issue collection and run the pipeline for it one pass at a time.

    A refresh requested while another is in flight, from another thread or
    re-entrantly from a collaborator, is dropped rather than queued.
    """

    def __init__(
        self,
        root: Path | None,
        invoker: ToolInvoker,
        snapshot_provider: SnapshotProvider,
        *,
        config: Config | None = None,
        notifier: Notifier | None = None,
        on_status: StatusListener | None = None,
    ) -> None:
        self._root = root
        self._invoker = invoker
        self._snapshot_provider = snapshot_provider
        self._config = config or Config()
        self._notifier = notifier or _log_notification
        self._on_status = on_status
        self._lock = Lock()
        self._issues: tuple[Issue, ...] = ()
        self._report: AnalysisReport | None = None
        self._status = ""

    @property
    def root(self) -> Path | None:
        """Return the analysis root, or ``None`` when no workspace is open."""
        return self._root

    @property
    def config(self) -> Config:
        return self._config

    @property
    def issues(self) -> tuple[Issue, ...]:
        """Return the issue collection from the last successful run."""
        return self._issues

    @property
    def report(self) -> AnalysisReport | None:
        """Return the report from the last successful run."""
        return self._report

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_analyzing(self) -> bool:
        """Return ``True`` while a refresh is in flight."""
        return self._lock.locked()

    @property
    def groups(self) -> list[IssueGroup]:
        return group_and_sort(self._issues)

    @property
    def summary(self) -> SeveritySummary:
        return summarize(self._issues)

    def refresh(self, mode: AnalyzerMode | None = None) -> AnalysisReport | None:
        """Run one analysis pass and replace the issue collection.

        Args:
            mode: Analyzer front-end; defaults to the configured mode.

        Returns:
            AnalysisReport | None: The new report, or ``None`` when the call was
            dropped, no root is available, or every strategy failed.
        """

        if not self._lock.acquire(blocking=False):
            LOGGER.debug("analysis already running; refresh ignored")
            return None
        try:
            return self._run(mode or self._config.analyzer.mode)
        finally:
            self._lock.release()

    def _run(self, mode: AnalyzerMode) -> AnalysisReport | None:
        self._set_status(analyzing_status(mode))
        if self._root is None:
            self._set_status(NO_ROOT_STATUS)
            return None
        try:
            report = analyze(
                self._root,
                self._invoker,
                self._snapshot_provider,
                config=self._config.analyzer,
                mode=mode,
            )
        except AnalysisFailedError as exc:
            self._fail(str(exc))
            return None

        self._issues = report.issues
        self._report = report
        if report.analyzer_unavailable and not report.issues:
            # Nothing to show and the analyzer never ran: tell the user why.
            self._fail(report.failures[-1].reason)
            return report
        self._set_status(found_status(len(report.issues)))
        return report

    def _fail(self, reason: str) -> None:
        self._set_status(error_status(reason))
        self._notifier(f"{ERROR_NOTIFICATION_PREFIX}: {reason}")

    def _set_status(self, status: str) -> None:
        self._status = status
        if self._on_status is not None:
            self._on_status(status)


__all__ = [
    "NO_ROOT_STATUS",
    "AnalysisSession",
    "Notifier",
    "StatusListener",
    "analyzing_status",
    "error_status",
    "found_status",
]
