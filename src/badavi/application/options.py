"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from badavi.types import Direction


@dataclass(frozen=True)
class RenderDirectives:
    """Rendering directives handed to the conversion engine for one document."""

    language_tag: str
    direction: Direction
    stylesheet_path: Path | None = None
    extra_args: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunOptions:
    """Run-wide processing policy."""

    fail_fast: bool = False
    workers: int = 1

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
