# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyzer invocation contracts and the subprocess-backed implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Protocol, runtime_checkable

from ..errors import ToolInvocationError
from .process import TIMEOUT_RETURNCODE, CommandOptions, OutputLimitExceededError, run_command

LOGGER = logging.getLogger(__name__)

JSON_FORMAT_FLAG: Final[str] = "--format=json"
ANALYZE_SUBCOMMAND: Final[str] = "analyze"

CommandRunner = Callable[..., CompletedProcess[str]]


class AnalyzerMode(str, Enum):
    """Analyzer front-ends capable of producing reports."""

    DART = "dart"
    FLUTTER = "flutter"

    @property
    def display_name(self) -> str:
        """Return the capitalised analyzer name used in status messages."""
        return self.value.capitalize()

    def command(self, *, json_output: bool) -> list[str]:
        """Return the command line for the JSON or default text report."""
        cmd = [self.value, ANALYZE_SUBCOMMAND]
        if json_output:
            cmd.append(JSON_FORMAT_FLAG)
        return cmd


@dataclass(frozen=True, slots=True)
class ToolOutput:
    """Captured analyzer output streams."""

    stdout: str = ""
    stderr: str = ""

    @property
    def has_stdout(self) -> bool:
        """Return ``True`` when stdout carries non-whitespace content."""
        return bool(self.stdout.strip())

    @property
    def has_stderr(self) -> bool:
        """Return ``True`` when stderr carries non-whitespace content."""
        return bool(self.stderr.strip())


@runtime_checkable
class ToolInvoker(Protocol):
    """Run the analyzer for a workspace root and capture its output."""

    def invoke(self, root: Path, mode: AnalyzerMode, *, json_output: bool) -> ToolOutput:
        """Return captured output or raise :class:`ToolInvocationError`."""
        ...


class SubprocessToolInvoker:
    """Invoke ``dart analyze`` / ``flutter analyze`` through :func:`run_command`."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        max_output_bytes: int | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self._timeout = timeout
        self._max_output_bytes = max_output_bytes
        self._runner = runner

    def invoke(self, root: Path, mode: AnalyzerMode, *, json_output: bool) -> ToolOutput:
        """Run the analyzer in ``root``.

        The analyzer exits non-zero whenever it reports issues, so a non-zero
        status only counts as a failure when stdout is empty or the run timed
        out.

        Args:
            root: Working directory for the analyzer.
            mode: Analyzer front-end to run.
            json_output: Request the machine readable JSON report.

        Returns:
            ToolOutput: Captured stdout and stderr.

        Raises:
            ToolInvocationError: If the executable is missing, output exceeds
                the cap, the run timed out, or the analyzer failed without
                producing stdout.
        """

        command = mode.command(json_output=json_output)
        options = CommandOptions(cwd=root, timeout=self._timeout, max_output_bytes=self._max_output_bytes)
        LOGGER.debug("running %s in %s", " ".join(command), root)
        try:
            completed = self._runner(command, options=options)
        except FileNotFoundError as exc:
            raise ToolInvocationError(str(exc), command=command) from exc
        except OutputLimitExceededError as exc:
            raise ToolInvocationError(str(exc), command=command) from exc
        except OSError as exc:
            raise ToolInvocationError(f"Failed to start '{command[0]}': {exc}", command=command) from exc
        output = ToolOutput(stdout=completed.stdout or "", stderr=completed.stderr or "")
        # Partial output from a timed-out run is never a complete report.
        if completed.returncode == TIMEOUT_RETURNCODE or (completed.returncode != 0 and not output.has_stdout):
            raise ToolInvocationError(
                _exit_message(command, completed.returncode, output.stderr),
                command=command,
                returncode=completed.returncode,
                stderr=output.stderr,
            )
        return output


def _exit_message(command: Sequence[str], returncode: int, stderr: str) -> str:
    detail = stderr.strip().splitlines()[-1] if stderr.strip() else "<none>"
    return f"Command '{' '.join(command)}' exited with status {returncode}. stderr: {detail}"


__all__ = [
    "AnalyzerMode",
    "CommandRunner",
    "SubprocessToolInvoker",
    "ToolInvoker",
    "ToolOutput",
]
