# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the analyze and config commands."""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dartqa.cli.app import app
from dartqa.runtime.invoker import AnalyzerMode, ToolOutput

cli_module = importlib.import_module("dartqa.cli.app")

TEXT_REPORT = "\n".join(
    [
        "error • Undefined name 'foo' • lib/main.dart:4:2 • undefined_identifier",
        "info • Prefer const constructors • lib/widgets.dart:10:5 • prefer_const_constructors",
        "2 issues found.",
    ],
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


def _install_invoker(monkeypatch: pytest.MonkeyPatch, invoker) -> list[object]:
    configs: list[object] = []

    def build(config):
        configs.append(config)
        return invoker

    monkeypatch.setattr(cli_module, "build_invoker", build)
    return configs


def test_analyze_json_output_and_exit_code(workspace: Path, make_invoker, monkeypatch: pytest.MonkeyPatch) -> None:
    invoker = make_invoker(json=ToolOutput(stdout=""), text=ToolOutput(stdout=TEXT_REPORT))
    _install_invoker(monkeypatch, invoker)

    result = CliRunner().invoke(app, ["analyze", str(workspace), "--json", "--mode", "dart"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["strategy"] == "text"
    assert payload["summary"]["errors"] == 1
    assert [group["file"] for group in payload["groups"]] == ["lib/main.dart", "lib/widgets.dart"]
    assert invoker.calls[0][1] is AnalyzerMode.DART


def test_analyze_exits_zero_without_errors(workspace: Path, make_invoker, monkeypatch: pytest.MonkeyPatch) -> None:
    report = "warning • Unused import • lib/main.dart:1:8 • unused_import"
    _install_invoker(monkeypatch, make_invoker(json=ToolOutput(stdout=""), text=ToolOutput(stdout=report)))

    result = CliRunner().invoke(app, ["analyze", str(workspace), "--no-color", "--no-emoji"])

    assert result.exit_code == 0
    assert "lib/main.dart" in result.stdout
    assert "Line 1:8 warning [analyzer] Unused import" in result.stdout
    assert "Found 1 issue" in result.stdout


def test_analyze_passes_overrides_to_invoker_config(
    workspace: Path,
    make_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    configs = _install_invoker(monkeypatch, make_invoker(json=ToolOutput(stdout="[]")))

    result = CliRunner().invoke(app, ["analyze", str(workspace), "--json", "--timeout", "12.5"])

    assert result.exit_code == 0
    assert configs[0].analyzer.timeout == 12.5
    assert configs[0].output.format == "json"


def test_analyze_reads_snapshot_when_analyzer_missing(
    workspace: Path,
    tmp_path: Path,
    make_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    snapshot = tmp_path / "snapshot.json"
    uri = (workspace / "lib" / "main.dart").as_uri()
    diagnostic = {"severity": 0, "code": "undefined_identifier", "message": "Undefined", "range": {"start": {"line": 2}}}
    snapshot.write_text(json.dumps({uri: [diagnostic]}), encoding="utf-8")
    _install_invoker(monkeypatch, make_invoker(json=None))

    result = CliRunner().invoke(app, ["analyze", str(workspace), "--json", "--snapshot", str(snapshot)])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["strategy"] == "snapshot"
    assert payload["groups"][0]["issues"][0]["line"] == 3


def test_analyze_without_workspace_fails(tmp_path: Path, make_invoker, monkeypatch: pytest.MonkeyPatch) -> None:
    invoker = make_invoker(json=ToolOutput(stdout="[]"))
    _install_invoker(monkeypatch, invoker)

    result = CliRunner().invoke(app, ["analyze", str(tmp_path / "missing"), "--json"])

    assert result.exit_code == 2
    assert invoker.calls == []


def test_analyze_rejects_invalid_project_config(
    workspace: Path,
    make_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (workspace / ".dartqa.toml").write_text("[analyzer]\nunknown = true\n", encoding="utf-8")
    invoker = make_invoker(json=ToolOutput(stdout="[]"))
    _install_invoker(monkeypatch, invoker)

    result = CliRunner().invoke(app, ["analyze", str(workspace), "--json"])

    assert result.exit_code == 2
    assert invoker.calls == []


def test_config_show_outputs_json(workspace: Path) -> None:
    (workspace / ".dartqa.toml").write_text('[analyzer]\nmode = "dart"\n\n[output]\ncolor = false\n', encoding="utf-8")

    result = CliRunner().invoke(app, ["config", "show", str(workspace)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["analyzer"]["mode"] == "dart"
    assert payload["analyzer"]["source_extension"] == ".dart"
    assert payload["output"]["color"] is False


def test_analyze_warns_when_showing_host_diagnostics(
    workspace: Path,
    tmp_path: Path,
    make_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    snapshot = tmp_path / "snapshot.json"
    uri = (workspace / "lib" / "main.dart").as_uri()
    snapshot.write_text(json.dumps({uri: [{"severity": 1, "message": "Dead code"}]}), encoding="utf-8")
    _install_invoker(monkeypatch, make_invoker(json=None))

    result = CliRunner().invoke(
        app,
        ["analyze", str(workspace), "--snapshot", str(snapshot), "--no-color", "--no-emoji"],
    )

    assert result.exit_code == 0
    assert "Flutter analyzer unavailable; showing host diagnostics" in result.stdout
    assert "Line 1:1 warning [unknown] Dead code" in result.stdout


def test_analyze_json_mode_sends_notifications_to_stderr(
    workspace: Path,
    tmp_path: Path,
    make_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text("not json", encoding="utf-8")
    _install_invoker(monkeypatch, make_invoker(json=None))

    result = CliRunner().invoke(app, ["analyze", str(workspace), "--json", "--snapshot", str(snapshot)])

    assert result.exit_code == 2
    assert "Dart Analysis Error: Unable to read diagnostics snapshot" in result.output
    assert "❌" not in result.output
