"""Application use-cases orchestrating tree conversion."""

from __future__ import annotations

import logging
import shutil
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

from badavi.application.options import RenderDirectives, RunOptions
from badavi.application.ports import ConversionEngine, LanguageDetector
from badavi.application.results import (
    ConversionOutcome,
    FileEntry,
    FileKind,
    OutcomeStatus,
)
from badavi.errors import EngineError
from badavi.language import ResolvedLanguage, resolve_language
from badavi.links import rewrite_links
from badavi.paths import (
    enumerate_files,
    ensure_parent,
    find_case_collisions,
    output_path_for,
)
from badavi.schemas import BadaviConfig
from badavi.types import FailureStage

logger = logging.getLogger(__name__)

ABORTED_REASON = "aborted after earlier failure"


def resolve_stylesheet(config: BadaviConfig, base_dir: Path | None = None) -> Path | None:
    """Return the absolute stylesheet path when configured and present on disk."""
    if not config.stylesheet_path:
        return None
    candidate = Path(config.stylesheet_path)
    if not candidate.is_absolute():
        candidate = (base_dir or Path.cwd()) / candidate
    candidate = candidate.resolve()
    if not candidate.is_file():
        logger.warning("Stylesheet not found at %s, skipping.", candidate)
        return None
    return candidate


def build_render_directives(
    language: ResolvedLanguage,
    config: BadaviConfig,
    stylesheet_path: Path | None = None,
) -> RenderDirectives:
    """Use-case: assemble engine directives for one document."""
    return RenderDirectives(
        language_tag=language.tag,
        direction=language.direction,
        stylesheet_path=stylesheet_path,
        extra_args=tuple(config.extra_engine_args),
    )


def _failed(
    entry: FileEntry,
    output_path: Path,
    stage: FailureStage,
    exc: BaseException | str,
    language: ResolvedLanguage | None = None,
) -> ConversionOutcome:
    reason = f"{stage} failed: {exc}"
    logger.error("Failed to process %s: %s", entry.relative_path, reason)
    return ConversionOutcome(
        relative_path=entry.relative_path,
        status=OutcomeStatus.FAILED,
        output_path=output_path,
        reason=reason,
        language=language,
    )


def convert_markdown_file(
    entry: FileEntry,
    output_path: Path,
    config: BadaviConfig,
    engine: ConversionEngine,
    detector: LanguageDetector,
    stylesheet_path: Path | None = None,
) -> ConversionOutcome:
    """Use-case: render one Markdown document and retarget its links.

    ``EngineUnavailableError`` is not caught: a vanished engine aborts the
    whole run rather than failing each remaining file.
    """
    logger.info("Converting %s", entry.relative_path)
    try:
        content = entry.absolute_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _failed(entry, output_path, "read", exc)

    language = resolve_language(content, config, detector)
    logger.info(" -> Language: %s", language.describe())
    directives = build_render_directives(language, config, stylesheet_path)

    try:
        result = engine.convert(entry.absolute_path, output_path, directives)
    except EngineError as exc:
        return _failed(entry, output_path, "engine", exc, language)
    if result.warnings.strip():
        logger.warning(
            " -> Engine warnings for %s:\n%s", entry.relative_path, result.warnings.strip()
        )

    try:
        html = output_path.read_text(encoding="utf-8")
        rewritten, count = rewrite_links(html)
        if count:
            output_path.write_text(rewritten, encoding="utf-8")
            logger.info(" -> Fixed %d internal Markdown link(s)", count)
    except (OSError, UnicodeDecodeError) as exc:
        return _failed(entry, output_path, "write", exc, language)

    return ConversionOutcome(
        relative_path=entry.relative_path,
        status=OutcomeStatus.SUCCESS,
        output_path=output_path,
        language=language,
        links_rewritten=count,
    )


def copy_file(entry: FileEntry, output_path: Path) -> ConversionOutcome:
    """Use-case: copy a non-Markdown file byte for byte."""
    try:
        shutil.copyfile(entry.absolute_path, output_path)
    except OSError as exc:
        return _failed(entry, output_path, "copy", exc)
    logger.info("Copied %s", entry.relative_path)
    return ConversionOutcome(
        relative_path=entry.relative_path,
        status=OutcomeStatus.SUCCESS,
        output_path=output_path,
    )


def _claim_outputs(
    entries: Sequence[FileEntry], output_root: Path
) -> dict[Path, Path]:
    """Map each entry whose output path is already taken to the earlier owner.

    ``doc.html`` and ``doc.md`` both target ``doc.html``; the first entry in
    sorted order keeps the path and later ones are never written.
    """
    owners: dict[Path, Path] = {}
    shadowed: dict[Path, Path] = {}
    for entry in entries:
        output_path = output_path_for(output_root, entry.relative_path)
        owner = owners.setdefault(output_path, entry.relative_path)
        if owner != entry.relative_path:
            shadowed[entry.relative_path] = owner
    return shadowed


def _collision_locks(
    entries: Sequence[FileEntry], output_root: Path
) -> dict[str, threading.Lock]:
    outputs = [output_path_for(output_root, entry.relative_path) for entry in entries]
    locks: dict[str, threading.Lock] = {}
    for group in find_case_collisions(outputs):
        logger.warning(
            "Output paths differ only by case, result is undefined on "
            "case-insensitive filesystems: %s",
            ", ".join(str(path) for path in group),
        )
        locks[str(group[0]).casefold()] = threading.Lock()
    return locks


def convert_tree(
    input_root: Path,
    output_root: Path,
    config: BadaviConfig,
    engine: ConversionEngine,
    detector: LanguageDetector,
    options: RunOptions | None = None,
) -> list[ConversionOutcome]:
    """Use-case: mirror an input tree into HTML documents and copied assets.

    Parameters
    ----------
    input_root : Path
        Folder holding Markdown documents and assets.
    output_root : Path
        Folder receiving the mirrored tree.
    config : BadaviConfig
        Validated run configuration.
    engine : ConversionEngine
        Markdown to HTML renderer.
    detector : LanguageDetector
        Statistical language detector.
    options : RunOptions | None, default=None
        Failure policy and worker count.

    Returns
    -------
    list[ConversionOutcome]
        One outcome per input file, in sorted relative-path order.

    Notes
    -----
    Per-file failures are recorded and processing continues unless
    ``options.fail_fast`` is set, in which case files not yet started are
    marked skipped.
    """
    options = options or RunOptions()
    input_root = input_root.resolve()
    output_root = output_root.resolve()
    nested = output_root != input_root and output_root.is_relative_to(input_root)
    entries = enumerate_files(input_root, exclude=output_root if nested else None)
    if not entries:
        logger.warning("No files found in %s.", input_root)
        return []

    logger.info("Found %d file(s) to process.", len(entries))
    output_root.mkdir(parents=True, exist_ok=True)
    stylesheet_path = resolve_stylesheet(config)
    if stylesheet_path is not None:
        logger.info("Including stylesheet %s", stylesheet_path)
    if config.extra_engine_args:
        logger.info("Extra engine args: %s", " ".join(config.extra_engine_args))
    shadowed = _claim_outputs(entries, output_root)
    locks = _collision_locks(entries, output_root)
    abort = threading.Event()

    def _write_entry(entry: FileEntry, output_path: Path) -> ConversionOutcome:
        lock: AbstractContextManager[object] = locks.get(
            str(output_path).casefold(), nullcontext()
        )
        with lock:
            try:
                ensure_parent(output_path)
            except OSError as exc:
                return _failed(entry, output_path, "prepare", exc)
            if entry.kind is FileKind.MARKDOWN:
                return convert_markdown_file(
                    entry, output_path, config, engine, detector, stylesheet_path
                )
            return copy_file(entry, output_path)

    def process(entry: FileEntry) -> ConversionOutcome:
        output_path = output_path_for(output_root, entry.relative_path)
        if abort.is_set():
            return ConversionOutcome(
                relative_path=entry.relative_path,
                status=OutcomeStatus.SKIPPED,
                output_path=output_path,
                reason=ABORTED_REASON,
            )
        owner = shadowed.get(entry.relative_path)
        if owner is not None:
            outcome = _failed(
                entry, output_path, "prepare", f"output path collides with {owner.as_posix()}"
            )
        else:
            outcome = _write_entry(entry, output_path)
        if outcome.failed and options.fail_fast:
            abort.set()
        return outcome

    outcomes = _dispatch(process, entries, options.workers, abort)
    failed = sum(1 for outcome in outcomes if outcome.failed)
    logger.info(
        "File processing completed: %d succeeded, %d failed, %d skipped.",
        sum(1 for outcome in outcomes if outcome.status is OutcomeStatus.SUCCESS),
        failed,
        sum(1 for outcome in outcomes if outcome.status is OutcomeStatus.SKIPPED),
    )
    return outcomes


def _dispatch(
    process: Callable[[FileEntry], ConversionOutcome],
    entries: Sequence[FileEntry],
    workers: int,
    abort: threading.Event,
) -> list[ConversionOutcome]:
    if workers == 1:
        return [process(entry) for entry in entries]

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="badavi") as pool:
        futures = [pool.submit(process, entry) for entry in entries]
        try:
            return [future.result() for future in futures]
        except BaseException:
            abort.set()
            for future in futures:
                future.cancel()
            raise
