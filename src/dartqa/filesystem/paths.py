# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about analyzer reported paths."""

from __future__ import annotations

import os
from os import PathLike
from typing import Final
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

_Pathish = str | PathLike[str]
FILE_SCHEME: Final[str] = "file"


def relativize_path(raw_path: str, root: _Pathish | None) -> str:
    """Return ``raw_path`` relative to ``root`` when it starts with ``root``.

    The check is a plain string prefix test. Paths are not resolved, so ``..``
    segments, symlinks and case-insensitive filesystems are left alone and
    callers must supply an already-normalised root.

    Args:
        raw_path: Path reported by the analyzer.
        root: Analysis root used to relativise the path.

    Returns:
        str: Root-relative path, or ``raw_path`` unchanged when it does not
        start with ``root``.
    """

    root_text = os.fspath(root) if root is not None else ""
    if not raw_path or not root_text or not raw_path.startswith(root_text):
        return raw_path
    return os.path.relpath(raw_path, root_text)


def uri_to_path(uri: str) -> tuple[str, str]:
    """Split a document URI into its scheme and filesystem path.

    Args:
        uri: Document reference such as ``file:///work/lib/main.dart``.

    Returns:
        tuple[str, str]: Lower-cased scheme (``"file"`` for bare paths) and the
        decoded path component.
    """

    parts = urlsplit(uri)
    scheme = parts.scheme.lower()
    # Bare paths and Windows drive letters parse as a missing or one-letter scheme.
    if not scheme or (len(scheme) == 1 and os.name == "nt"):
        return FILE_SCHEME, uri
    if scheme != FILE_SCHEME:
        return scheme, unquote(parts.path)
    return scheme, url2pathname(parts.path)


__all__ = ["FILE_SCHEME", "relativize_path", "uri_to_path"]
