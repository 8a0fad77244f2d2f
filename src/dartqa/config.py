# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the dartqa analysis pipeline."""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError
from .runtime.invoker import AnalyzerMode
from .runtime.process import MEBIBYTE

DEFAULT_MAX_OUTPUT_BYTES: Final[int] = 32 * MEBIBYTE
MIN_OUTPUT_BYTES: Final[int] = 10 * MEBIBYTE


class AnalyzerConfig(BaseModel):
    """Analyzer invocation and decoding behaviour."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    mode: AnalyzerMode = AnalyzerMode.FLUTTER
    timeout: float | None = Field(default=None, gt=0)
    max_output_bytes: int = Field(default=DEFAULT_MAX_OUTPUT_BYTES, ge=MIN_OUTPUT_BYTES)
    source_extension: str = ".dart"
    fallback_on_unrecognized_json: bool = False

    @field_validator("source_extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        """Ensure the extension carries its leading dot."""
        value = value.strip()
        if not value:
            raise ValueError("source_extension must not be empty")
        return value if value.startswith(".") else f".{value}"


class OutputConfig(BaseModel):
    """Configuration for controlling console output."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    color: bool = True
    emoji: bool = True
    format: Literal["pretty", "json"] = "pretty"


class Config(BaseModel):
    """Primary configuration container used by the analysis session."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible representation of the configuration."""
        return dict(self.model_dump(mode="json"))


__all__ = [
    "DEFAULT_MAX_OUTPUT_BYTES",
    "AnalyzerConfig",
    "Config",
    "ConfigError",
    "OutputConfig",
]
