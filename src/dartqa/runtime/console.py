# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles for report output and diagnostics.

Reports go to stdout; notifications that must not corrupt a JSON report go to
stderr. Each stream gets its own console so colour is decided by whether that
stream, not stdout, is a terminal.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import TextIO

from rich.console import Console


def stream_is_tty(stream: TextIO | None) -> bool:
    """Return ``True`` when ``stream`` is backed by a terminal."""

    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def detect_tty(*, stderr: bool = False) -> bool:
    """Return ``True`` when stdout (or stderr) is a terminal."""

    return stream_is_tty(sys.stderr if stderr else sys.stdout)


class ConsoleManager:
    """Hand out one rich :class:`Console` per stream and output preference."""

    def __init__(self) -> None:
        self._consoles: dict[tuple[bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console writing to stdout, or stderr when ``stderr`` is set.

        Colour is only enabled when requested and the target stream is a
        terminal. Rich's automatic highlighting stays off so analyzer messages
        print exactly as reported.
        """

        tty = detect_tty(stderr=stderr)
        styled = color and tty
        key = (styled, emoji, stderr)
        console = self._consoles.get(key)
        if console is None:
            console = Console(
                stderr=stderr,
                color_system="auto" if styled else None,
                force_terminal=tty,
                no_color=not styled,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console

    def clear(self) -> None:
        """Forget every cached console."""
        self._consoles.clear()


@lru_cache(maxsize=1)
def get_console_manager() -> ConsoleManager:
    """Return the process-wide :class:`ConsoleManager`."""

    return ConsoleManager()


__all__ = ["ConsoleManager", "detect_tty", "get_console_manager", "stream_is_tty"]
