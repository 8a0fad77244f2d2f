# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the analyzer fallback pipeline."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dartqa.config import AnalyzerConfig
from dartqa.core.models import DiagnosticPosition, DiagnosticRange, HostDiagnostic
from dartqa.core.severity import Severity
from dartqa.errors import SnapshotUnavailableError
from dartqa.orchestration import AnalysisFailedError, FailureKind, Strategy, analyze
from dartqa.runtime.invoker import AnalyzerMode, ToolOutput
from dartqa.runtime.snapshots import StaticSnapshotProvider, empty_snapshot

TEXT_REPORT = "error • Undefined name 'foo' • lib/a.dart:4:2 • undefined_identifier"


def _json_report(root: Path) -> str:
    return json.dumps(
        [
            {
                "severity": "ERROR",
                "code": "undefined_identifier",
                "message": "Undefined name 'foo'",
                "location": {"file": str(root / "lib" / "a.dart"), "startLine": 4, "startColumn": 2},
            },
        ],
    )


def _snapshot(root: Path) -> StaticSnapshotProvider:
    diagnostic = HostDiagnostic(
        severity=1,
        code="dead_code",
        message="Dead code",
        range=DiagnosticRange(start=DiagnosticPosition(line=6, character=0)),
    )
    return StaticSnapshotProvider({(root / "lib" / "b.dart").as_uri(): [diagnostic]})


def _unavailable_snapshot() -> dict[str, list[HostDiagnostic]]:
    raise SnapshotUnavailableError("no diagnostics exported")


def test_analyze_uses_json_report_when_available(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=ToolOutput(stdout=_json_report(workspace)))

    report = analyze(workspace, invoker, empty_snapshot)

    assert report.strategy is Strategy.JSON
    assert report.failures == ()
    assert [(issue.file, issue.line, issue.column) for issue in report.issues] == [("lib/a.dart", 4, 2)]
    assert report.issues[0].severity is Severity.ERROR
    assert invoker.calls == [(workspace, AnalyzerMode.FLUTTER, True)]


def test_analyze_falls_back_to_text_when_json_only_writes_stderr(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(
        json=ToolOutput(stdout="", stderr="Could not find an option named 'format'."),
        text=ToolOutput(stdout=TEXT_REPORT),
    )

    report = analyze(workspace, invoker, empty_snapshot)

    assert report.strategy is Strategy.TEXT
    assert invoker.json_calls == 1
    assert invoker.text_calls == 1
    assert [failure.kind for failure in report.failures] == [FailureKind.EMPTY_OUTPUT]
    assert report.issues[0].code == "analyzer"
    assert report.issues[0].file == "lib/a.dart"


def test_analyze_falls_back_to_text_on_malformed_json(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=ToolOutput(stdout="Analyzing workspace..."), text=ToolOutput(stdout=TEXT_REPORT))

    report = analyze(workspace, invoker, empty_snapshot)

    assert report.strategy is Strategy.TEXT
    assert report.failures[0].kind is FailureKind.MALFORMED_PAYLOAD
    assert len(report.issues) == 1


def test_analyze_skips_text_report_when_json_invocation_fails(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=None, text=ToolOutput(stdout=TEXT_REPORT))

    report = analyze(workspace, invoker, _snapshot(workspace))

    assert report.strategy is Strategy.SNAPSHOT
    assert report.analyzer_unavailable
    assert invoker.text_calls == 0
    assert [failure.kind for failure in report.failures] == [FailureKind.INVOCATION]
    assert [(issue.file, issue.line, issue.column) for issue in report.issues] == [("lib/b.dart", 7, 1)]
    assert report.issues[0].severity is Severity.WARNING


def test_analyze_uses_snapshot_when_text_report_fails(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=ToolOutput(stdout="{"), text=None)

    report = analyze(workspace, invoker, _snapshot(workspace))

    assert report.strategy is Strategy.SNAPSHOT
    assert [failure.strategy for failure in report.failures] == [Strategy.JSON, Strategy.TEXT]
    assert len(report.issues) == 1


def test_analyze_unrecognised_json_shape_yields_no_issues(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=ToolOutput(stdout='{"unrelatedField": 1}'), text=ToolOutput(stdout=TEXT_REPORT))

    report = analyze(workspace, invoker, empty_snapshot)

    assert report.strategy is Strategy.JSON
    assert report.issues == ()
    assert invoker.text_calls == 0


def test_analyze_unrecognised_json_shape_can_trigger_text_fallback(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=ToolOutput(stdout='{"unrelatedField": 1}'), text=ToolOutput(stdout=TEXT_REPORT))
    config = AnalyzerConfig(fallback_on_unrecognized_json=True)

    report = analyze(workspace, invoker, empty_snapshot, config=config)

    assert report.strategy is Strategy.TEXT
    assert report.failures[0].kind is FailureKind.UNRECOGNIZED_SHAPE
    assert len(report.issues) == 1


def test_analyze_raises_when_every_strategy_fails(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=None)

    with pytest.raises(AnalysisFailedError) as excinfo:
        analyze(workspace, invoker, _unavailable_snapshot)

    assert [failure.kind for failure in excinfo.value.failures] == [
        FailureKind.INVOCATION,
        FailureKind.SNAPSHOT_UNAVAILABLE,
    ]
    assert str(excinfo.value) == "no diagnostics exported"


def test_analyze_passes_requested_mode(workspace: Path, make_invoker) -> None:
    invoker = make_invoker(json=ToolOutput(stdout="[]"))

    config = AnalyzerConfig(mode=AnalyzerMode.FLUTTER)

    analyze(workspace, invoker, empty_snapshot, config=config, mode=AnalyzerMode.DART)

    assert invoker.calls == [(workspace, AnalyzerMode.DART, True)]


def test_report_groups_and_summary(workspace: Path, make_invoker) -> None:
    text = "\n".join(
        [
            "warning • Unused import • lib/b.dart:2:1 • unused_import",
            "error • Missing return • lib/a.dart:9:3 • missing_return",
            "info • Prefer const • lib/a.dart:1:1 • prefer_const",
        ],
    )
    invoker = make_invoker(json=ToolOutput(stdout=""), text=ToolOutput(stdout=text))

    report = analyze(workspace, invoker, empty_snapshot)

    assert [group.file for group in report.groups] == ["lib/a.dart", "lib/b.dart"]
    assert [issue.line for issue in report.groups[0].issues] == [1, 9]
    assert (report.summary.errors, report.summary.warnings, report.summary.info_and_hints) == (1, 1, 1)


def test_analyze_falls_back_to_text_on_oversized_json_number(workspace: Path, make_invoker) -> None:
    payload = '[{"severity": "error", "line": ' + "9" * 5000 + "}]"
    invoker = make_invoker(json=ToolOutput(stdout=payload), text=ToolOutput(stdout=TEXT_REPORT))

    report = analyze(workspace, invoker, empty_snapshot)

    assert report.strategy is Strategy.TEXT
    assert report.failures[0].kind is FailureKind.MALFORMED_PAYLOAD
    assert invoker.text_calls == 1
