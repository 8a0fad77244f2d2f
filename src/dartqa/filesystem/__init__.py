# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers shared across dartqa."""

from __future__ import annotations

from .paths import relativize_path, uri_to_path

__all__ = ["relativize_path", "uri_to_path"]
