# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures and fakes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from dartqa.errors import ToolInvocationError
from dartqa.runtime.invoker import AnalyzerMode, ToolOutput

InvokerReply = ToolOutput | ToolInvocationError | Callable[[], ToolOutput]


class FakeInvoker:
    """Invoker stub returning canned replies for the JSON and text reports."""

    def __init__(self, *, json: InvokerReply | None = None, text: InvokerReply | None = None) -> None:
        self._replies = {True: json, False: text}
        self.calls: list[tuple[Path, AnalyzerMode, bool]] = []

    def invoke(self, root: Path, mode: AnalyzerMode, *, json_output: bool) -> ToolOutput:
        self.calls.append((root, mode, json_output))
        reply = self._replies[json_output]
        if reply is None:
            raise ToolInvocationError(f"no {'json' if json_output else 'text'} reply configured")
        if isinstance(reply, ToolInvocationError):
            raise reply
        if callable(reply):
            return reply()
        return reply

    @property
    def json_calls(self) -> int:
        return sum(1 for call in self.calls if call[2])

    @property
    def text_calls(self) -> int:
        return sum(1 for call in self.calls if not call[2])


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return an empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def make_invoker() -> type[FakeInvoker]:
    """Return the fake invoker class so tests can configure canned replies."""
    return FakeInvoker
