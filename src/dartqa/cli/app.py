# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Final

import typer

from ..config import Config
from ..config_loader import load_config
from ..core.severity import Severity
from ..errors import ConfigError
from ..logging import enable_verbose_logging, fail, info, warn
from ..orchestration.session import AnalysisSession
from ..reporting.console import render_report, report_to_json
from ..runtime.invoker import AnalyzerMode, SubprocessToolInvoker, ToolInvoker
from ..runtime.snapshots import JsonFileSnapshotProvider, SnapshotProvider, empty_snapshot

EXIT_OK: Final[int] = 0
EXIT_ISSUES: Final[int] = 1
EXIT_FAILURE: Final[int] = 2

app = typer.Typer(name="dartqa", help="Normalise Dart and Flutter analyzer output.", no_args_is_help=True)
config_app = typer.Typer(help="Inspect dartqa configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")


def build_invoker(config: Config) -> ToolInvoker:
    """Return the analyzer invoker configured from ``config``."""

    return SubprocessToolInvoker(
        timeout=config.analyzer.timeout,
        max_output_bytes=config.analyzer.max_output_bytes,
    )


def build_snapshot_provider(snapshot: Path | None) -> SnapshotProvider:
    """Return the snapshot provider reading ``snapshot``, or an empty one."""

    if snapshot is None:
        return empty_snapshot
    return JsonFileSnapshotProvider(snapshot)


def resolve_root(root: Path | None) -> Path | None:
    """Return the analysis root, or ``None`` when it is not an existing directory."""

    candidate = (root or Path.cwd()).expanduser()
    if not candidate.is_dir():
        return None
    return candidate.resolve()


def _build_overrides(
    *,
    mode: AnalyzerMode | None,
    timeout: float | None,
    json_output: bool,
    no_color: bool,
    no_emoji: bool,
) -> dict[str, Any]:
    analyzer: dict[str, Any] = {}
    output: dict[str, Any] = {}
    if mode is not None:
        analyzer["mode"] = mode.value
    if timeout is not None:
        analyzer["timeout"] = timeout
    if json_output:
        output["format"] = "json"
    if no_color:
        output["color"] = False
    if no_emoji:
        output["emoji"] = False
    overrides: dict[str, Any] = {}
    if analyzer:
        overrides["analyzer"] = analyzer
    if output:
        overrides["output"] = output
    return overrides


def _load_or_exit(root: Path, config_path: Path | None, overrides: dict[str, Any] | None = None) -> Config:
    try:
        return load_config(root, config_path=config_path, overrides=overrides)
    except ConfigError as exc:
        fail(str(exc), use_emoji=True)
        raise typer.Exit(code=EXIT_FAILURE) from exc


@app.command("analyze")
def analyze_command(
    root: Annotated[Path | None, typer.Argument(help="Workspace root to analyse (defaults to cwd).")] = None,
    mode: Annotated[
        AnalyzerMode | None,
        typer.Option("--mode", "-m", case_sensitive=False, help="Analyzer front-end to run."),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Emit the grouped report as JSON.")] = False,
    snapshot: Annotated[
        Path | None,
        typer.Option("--snapshot", dir_okay=False, help="Diagnostics snapshot used when the analyzer fails."),
    ] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="Configuration file to use.")] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", help="Analyzer timeout in seconds.")] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline decisions to stderr.")] = False,
) -> None:
    """Run the analyzer once and print its issues grouped by file."""

    if verbose:
        enable_verbose_logging()
    analysis_root = resolve_root(root)
    overrides = _build_overrides(
        mode=mode,
        timeout=timeout,
        json_output=json_output,
        no_color=no_color,
        no_emoji=no_emoji,
    )
    config = _load_or_exit(analysis_root or Path.cwd(), config_path, overrides)
    output = config.output
    as_json = output.format == "json"

    def notify(message: str) -> None:
        fail(message, use_emoji=output.emoji and not as_json, use_color=output.color, stderr=as_json)

    def show_status(status: str) -> None:
        if not as_json:
            info(status, use_emoji=output.emoji, use_color=output.color)

    session = AnalysisSession(
        analysis_root,
        build_invoker(config),
        build_snapshot_provider(snapshot),
        config=config,
        notifier=notify,
        on_status=show_status,
    )
    report = session.refresh()
    if report is None:
        if analysis_root is None and as_json:
            fail(session.status, use_emoji=False, use_color=output.color, stderr=True)
        raise typer.Exit(code=EXIT_FAILURE)

    if as_json:
        typer.echo(report_to_json(report))
    else:
        if report.analyzer_unavailable and report.issues:
            warn(
                f"{config.analyzer.mode.display_name} analyzer unavailable; showing host diagnostics",
                use_emoji=output.emoji,
                use_color=output.color,
            )
        render_report(report, output)
    has_errors = any(issue.severity is Severity.ERROR for issue in report.issues)
    raise typer.Exit(code=EXIT_ISSUES if has_errors else EXIT_OK)


@config_app.command("show")
def config_show_command(
    root: Annotated[Path | None, typer.Argument(help="Project root holding .dartqa.toml.")] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="Configuration file to use.")] = None,
) -> None:
    """Print the effective configuration as JSON."""

    config = _load_or_exit(resolve_root(root) or Path.cwd(), config_path)
    typer.echo(json.dumps(config.to_dict(), indent=2))


__all__ = ["app", "build_invoker", "build_snapshot_provider", "resolve_root"]
