"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from badavi.application.options import RenderDirectives


@dataclass(frozen=True)
class EngineResult:
    """Successful engine invocation."""

    output_path: Path
    warnings: str = ""


class ConversionEngine(Protocol):
    """Render a Markdown document into a standalone HTML file."""

    def convert(
        self,
        input_path: Path,
        output_path: Path,
        directives: RenderDirectives,
    ) -> EngineResult:
        """Write HTML for ``input_path`` to ``output_path``; raise ``EngineError`` on failure."""


class LanguageDetector(Protocol):
    """Identify the language of a text sample."""

    def detect(self, text: str) -> str | None:
        """Return an ISO 639-3 code, or ``None``/``"und"`` when undetermined."""
