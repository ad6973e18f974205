"""Top-level API for Markdown tree to HTML conversion."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from badavi.application.ports import ConversionEngine, LanguageDetector
    from badavi.application.results import RunSummary
    from badavi.language import ResolvedLanguage
    from badavi.schemas import BadaviConfig

__version__ = "0.1.0"


def convert_directory(
    input_dir: Path,
    output_dir: Path,
    *,
    config: BadaviConfig | None = None,
    config_path: Path | None = None,
    fail_fast: bool = False,
    workers: int = 1,
    engine_timeout: float | None = 120.0,
    engine: ConversionEngine | None = None,
    detector: LanguageDetector | None = None,
) -> RunSummary:
    """Convert every Markdown file below ``input_dir`` into HTML.

    Parameters
    ----------
    input_dir : Path
        Folder holding Markdown documents and assets.
    output_dir : Path
        Folder receiving the mirrored tree.
    config : BadaviConfig | None, default=None
        Configuration; loaded from ``config_path`` or the input folder when
        omitted.
    config_path : Path | None, default=None
        Explicit ``badavi-config.json`` location.
    fail_fast : bool, default=False
        Stop dispatching files after the first failure.
    workers : int, default=1
        Number of files processed concurrently.
    engine_timeout : float | None, default=120.0
        Seconds allowed for each pandoc invocation.
    engine, detector : optional
        Replacements for the pandoc engine and lingua detector.

    Returns
    -------
    RunSummary
        Per-file outcomes in enumeration order.
    """
    from .api import convert_directory as _impl

    return _impl(
        input_dir=input_dir,
        output_dir=output_dir,
        config=config,
        config_path=config_path,
        fail_fast=fail_fast,
        workers=workers,
        engine_timeout=engine_timeout,
        engine=engine,
        detector=detector,
    )


def rewrite_links(html: str) -> tuple[str, int]:
    """Retarget relative ``.md`` links in ``html`` to ``.html``."""
    from .links import rewrite_links as _impl

    return _impl(html)


def resolve_language(
    content: str,
    config: BadaviConfig,
    detector: LanguageDetector,
) -> ResolvedLanguage:
    """Resolve language tag and writing direction for ``content``."""
    from .language import resolve_language as _impl

    return _impl(content, config, detector)


def map_output_path(input_root: Path, output_root: Path, input_path: Path) -> Path:
    """Map an input file to its mirrored output path."""
    from .paths import map_output_path as _impl

    return _impl(input_root, output_root, input_path)


__all__ = [
    "convert_directory",
    "rewrite_links",
    "resolve_language",
    "map_output_path",
]
