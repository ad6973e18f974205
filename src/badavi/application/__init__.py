"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from badavi.application.options import RenderDirectives, RunOptions
from badavi.application.ports import (
    ConversionEngine,
    EngineResult,
    LanguageDetector,
)
from badavi.application.results import (
    ConversionOutcome,
    FileEntry,
    FileKind,
    OutcomeStatus,
    RunSummary,
)
from badavi.schemas import BadaviConfig


def convert_tree(
    input_root: Path,
    output_root: Path,
    config: BadaviConfig,
    engine: ConversionEngine,
    detector: LanguageDetector,
    options: RunOptions | None = None,
) -> list[ConversionOutcome]:
    """Convert an input tree via lazy use-case import."""
    from badavi.application.use_cases import convert_tree as _impl

    return _impl(
        input_root=input_root,
        output_root=output_root,
        config=config,
        engine=engine,
        detector=detector,
        options=options,
    )


__all__ = [
    "ConversionEngine",
    "ConversionOutcome",
    "EngineResult",
    "FileEntry",
    "FileKind",
    "LanguageDetector",
    "OutcomeStatus",
    "RenderDirectives",
    "RunOptions",
    "RunSummary",
    "convert_tree",
]
