# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# analyzer execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124
MEBIBYTE: Final[int] = 1024 * 1024


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    max_output_bytes: int | None = None


class OutputLimitExceededError(RuntimeError):
    """Raised when a command writes more output than the configured cap."""

    def __init__(self, command: Sequence[str], size: int, limit: int) -> None:
        """Initialise the error with the offending command and sizes.

        Args:
            command: Normalised command sequence that was executed.
            size: Combined stdout and stderr size in bytes.
            limit: Configured maximum in bytes.
        """
        super().__init__(
            f"Command '{command[0]}' produced {size} bytes of output, exceeding the {limit} byte limit",
        )
        self.command = tuple(command)
        self.size = size
        self.limit = limit


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="replace")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def _output_size(completed: CompletedProcess[str]) -> int:
    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    return len(stdout.encode(errors="ignore")) + len(stderr.encode(errors="ignore"))


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` capturing text output.

    Output is decoded as UTF-8 with undecodable bytes replaced. A timeout is
    reported as exit status ``124`` with a note appended to stderr rather than
    raised.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory, environment, timeout and output cap.

    Returns:
        CompletedProcess: Subprocess execution metadata with text streams.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        OutputLimitExceededError: When combined output exceeds ``max_output_bytes``.
    """

    normalized = _normalize_args(args)
    resolved = options or CommandOptions()

    try:
        # Bandit: argument lists are passed directly without shell expansion.
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_msg = (
            f"Command timed out after {resolved.timeout:.1f}s" if resolved.timeout is not None else "Command timed out"
        )
        combined_stderr = f"{stderr}\n{timeout_msg}" if stderr else timeout_msg
        completed = subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=combined_stderr,
        )

    if resolved.max_output_bytes is not None:
        size = _output_size(completed)
        if size > resolved.max_output_bytes:
            raise OutputLimitExceededError(normalized, size, resolved.max_output_bytes)

    return completed


__all__ = [
    "MEBIBYTE",
    "TIMEOUT_RETURNCODE",
    "CommandOptions",
    "OutputLimitExceededError",
    "run_command",
]
