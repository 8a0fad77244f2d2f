# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich rendering of analysis reports."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Final

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..config import OutputConfig
from ..core.models import Issue, IssueGroup, SeveritySummary
from ..core.serialization import serialize_group, serialize_summary
from ..core.severity import Severity
from ..orchestration.pipeline import AnalysisReport
from ..runtime.console import get_console_manager

EMPTY_STATE_MESSAGE: Final[str] = "No analysis issues found"
LOCATION_PREFIX: Final[str] = "Line "


def severity_color(sev: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.INFO: "blue",
        Severity.HINT: "cyan",
    }.get(sev, "yellow")


def plural(count: int, noun: str) -> str:
    """Return ``"<count> <noun>"`` with a trailing ``s`` unless ``count`` is one."""

    return f"{count} {noun}{'' if count == 1 else 's'}"


def create_summary_table(summary: SeveritySummary, cfg: OutputConfig) -> Table:
    """Create the one-row summary showing errors, warnings and informational counts."""

    table = Table(show_header=False, box=box.SIMPLE, pad_edge=False, expand=False)
    cells = (
        (plural(summary.errors, "Error"), Severity.ERROR),
        (plural(summary.warnings, "Warning"), Severity.WARNING),
        (f"{summary.info_and_hints} Info", Severity.INFO),
    )
    for _ in cells:
        table.add_column(no_wrap=True)
    table.add_row(*(Text(label, style=severity_color(sev) if cfg.color else "") for label, sev in cells))
    return table


def format_issue_line(issue: Issue, cfg: OutputConfig, location_width: int = 0) -> Text:
    """Return one indented issue line: location, severity, code and message.

    Args:
        issue: Issue to render.
        cfg: Output configuration describing colour preferences.
        location_width: Width the ``Line L:C`` column is padded to.

    Returns:
        Text: Rich text ready for printing.
    """

    location = f"{LOCATION_PREFIX}{issue.line}:{issue.column}"
    line = Text("  ")
    line.append(location.ljust(location_width))
    line.append(" ")
    line.append(issue.severity.value, style=severity_color(issue.severity) if cfg.color else "")
    line.append(" ")
    line.append(f"[{issue.code}]", style="dim" if cfg.color else "")
    if issue.message:
        line.append(" ")
        line.append(issue.message)
    return line


def render_groups(groups: Sequence[IssueGroup], console: Console, cfg: OutputConfig) -> None:
    """Print each file header followed by its issues."""

    for group in groups:
        header = Text(group.file or "<unknown file>", style="bold" if cfg.color else "")
        header.append(f"  ({plural(len(group), 'issue')})")
        console.print(header)
        width = max(len(f"{LOCATION_PREFIX}{issue.line}:{issue.column}") for issue in group.issues)
        for issue in group.issues:
            console.print(format_issue_line(issue, cfg, width))


def render_report(report: AnalysisReport, cfg: OutputConfig, console: Console | None = None) -> None:
    """Render ``report`` to the console in the grouped, human readable layout.

    Args:
        report: Report produced by the analysis pipeline.
        cfg: Output configuration describing colour and emoji preferences.
        console: Console override; the shared managed console when omitted.
    """

    target = console or get_console_manager().get(color=cfg.color, emoji=cfg.emoji)
    target.print(create_summary_table(report.summary, cfg))
    if not report.issues:
        target.print(Text(f"{'✓ ' if cfg.emoji else ''}{EMPTY_STATE_MESSAGE}"))
        return
    render_groups(report.groups, target, cfg)


def report_to_json(report: AnalysisReport) -> str:
    """Return ``report`` serialised as an indented JSON document."""

    payload = {
        "strategy": report.strategy.value,
        "summary": serialize_summary(report.summary),
        "groups": [serialize_group(group) for group in report.groups],
        "failures": [str(failure) for failure in report.failures],
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "EMPTY_STATE_MESSAGE",
    "create_summary_table",
    "format_issue_line",
    "plural",
    "render_groups",
    "render_report",
    "report_to_json",
    "severity_color",
]
