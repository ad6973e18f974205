"""Shared type aliases for conversion modules."""

from __future__ import annotations

from typing import Literal, TypeAlias

Direction: TypeAlias = Literal["ltr", "rtl"]
DetectionSource: TypeAlias = Literal["detected", "defaulted"]
FailureStage: TypeAlias = Literal["prepare", "read", "engine", "write", "copy"]
