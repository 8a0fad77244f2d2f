# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers: grouping projections and console rendering."""

from __future__ import annotations

from .grouping import group_and_sort, summarize

__all__ = ["group_and_sort", "summarize"]
