"""Public directory conversion API (delegates to application use-cases)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from badavi.adapters.detectors import LinguaDetector
from badavi.adapters.pandoc import DEFAULT_TIMEOUT, PandocEngine
from badavi.application.options import RunOptions
from badavi.application.ports import ConversionEngine, LanguageDetector
from badavi.application.results import RunSummary
from badavi.application.use_cases import convert_tree
from badavi.config import load_config
from badavi.errors import InputNotFoundError
from badavi.schemas import BadaviConfig

logger = logging.getLogger(__name__)


def convert_directory(
    input_dir: Path,
    output_dir: Path,
    *,
    config: Optional[BadaviConfig] = None,
    config_path: Optional[Path] = None,
    fail_fast: bool = False,
    workers: int = 1,
    engine_timeout: Optional[float] = DEFAULT_TIMEOUT,
    engine: Optional[ConversionEngine] = None,
    detector: Optional[LanguageDetector] = None,
) -> RunSummary:
    """Convert a Markdown tree into a mirrored HTML tree.

    When no ``engine`` is injected, a :class:`PandocEngine` is built from the
    configuration and verified before any file is touched.

    Raises
    ------
    InputNotFoundError
        If ``input_dir`` does not exist or is not a directory.
    ConfigFileNotFoundError
        If ``config_path`` was given but does not exist.
    EngineUnavailableError
        If pandoc cannot be run.
    DependencyError
        If no ``detector`` is injected and lingua is not installed.
    """
    input_dir = Path(input_dir).resolve()
    output_dir = Path(output_dir).resolve()
    if not input_dir.exists():
        raise InputNotFoundError(f"Input directory not found: {input_dir}")
    if not input_dir.is_dir():
        raise InputNotFoundError(f"Input path is not a directory: {input_dir}")

    if config is None:
        config = load_config(input_dir, config_path)
    logger.info("Using configuration: %s", config.model_dump())

    if engine is None:
        pandoc = PandocEngine(executable=config.engine_path, timeout=engine_timeout)
        pandoc.check_available()
        engine = pandoc

    if detector is None:
        lingua = LinguaDetector()
        lingua.check_available()
        detector = lingua

    outcomes = convert_tree(
        input_root=input_dir,
        output_root=output_dir,
        config=config,
        engine=engine,
        detector=detector,
        options=RunOptions(fail_fast=fail_fast, workers=workers),
    )
    return RunSummary.from_outcomes(outcomes)
