# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for analyzer path helpers."""

from pathlib import Path

from dartqa.filesystem.paths import relativize_path, uri_to_path


def test_relativize_path_strips_root() -> None:
    assert relativize_path("/work/app/a/b.dart", "/work/app") == "a/b.dart"


def test_relativize_path_accepts_path_root() -> None:
    assert relativize_path("/work/app/lib/main.dart", Path("/work/app")) == "lib/main.dart"


def test_relativize_path_leaves_outside_paths() -> None:
    assert relativize_path("/elsewhere/lib/a.dart", "/work/app") == "/elsewhere/lib/a.dart"


def test_relativize_path_is_idempotent_on_relative_paths() -> None:
    once = relativize_path("/work/app/lib/a.dart", "/work/app")
    assert relativize_path(once, "/work/app") == once
    assert relativize_path("lib/a.dart", "/work/app") == "lib/a.dart"


def test_relativize_path_without_root_returns_input() -> None:
    assert relativize_path("/work/app/lib/a.dart", None) == "/work/app/lib/a.dart"
    assert relativize_path("/work/app/lib/a.dart", "") == "/work/app/lib/a.dart"
    assert relativize_path("", "/work/app") == ""


def test_relativize_path_is_a_plain_prefix_test() -> None:
    # No canonicalisation: a sibling sharing the prefix is still relativised.
    assert relativize_path("/work/app2/a.dart", "/work/app") == "../app2/a.dart"


def test_uri_to_path_file_scheme() -> None:
    assert uri_to_path("file:///work/app/lib/a%20b.dart") == ("file", "/work/app/lib/a b.dart")


def test_uri_to_path_other_scheme() -> None:
    scheme, _ = uri_to_path("untitled:Untitled-1")
    assert scheme == "untitled"


def test_uri_to_path_bare_path_counts_as_file() -> None:
    assert uri_to_path("/work/app/lib/a.dart") == ("file", "/work/app/lib/a.dart")
