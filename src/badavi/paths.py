"""Input tree enumeration and output path mapping."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from badavi.application.results import FileEntry, FileKind

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


def classify(path: Path) -> FileKind:
    """Classify a file by its (case-insensitive) extension."""
    if path.suffix.lower() == MARKDOWN_SUFFIX:
        return FileKind.MARKDOWN
    return FileKind.OTHER


def map_output_path(input_root: Path, output_root: Path, input_path: Path) -> Path:
    """Mirror ``input_path`` from ``input_root`` under ``output_root``.

    Markdown files (``.md`` in any case) get an ``.html`` extension; every
    other extension is kept as is.

    Parameters
    ----------
    input_root : Path
        Root of the input tree.
    output_root : Path
        Root of the output tree.
    input_path : Path
        File inside ``input_root``.

    Returns
    -------
    Path
        Absolute output path.

    Raises
    ------
    ValueError
        If ``input_path`` is not located under ``input_root``.
    """
    relative = input_path.absolute().relative_to(input_root.absolute())
    return output_path_for(output_root, relative)


def output_path_for(output_root: Path, relative_path: Path) -> Path:
    """Re-root a relative input path under ``output_root``."""
    target = output_root.absolute() / relative_path
    if classify(target) is FileKind.MARKDOWN:
        target = target.with_suffix(HTML_SUFFIX)
    return target


def ensure_parent(path: Path) -> None:
    """Create the parent directory of ``path`` if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)


def enumerate_files(input_root: Path, exclude: Path | None = None) -> list[FileEntry]:
    """List every file below ``input_root`` in sorted order.

    Parameters
    ----------
    input_root : Path
        Directory to walk recursively.
    exclude : Path | None, default=None
        Directory whose contents are skipped, typically an output root
        nested inside the input tree.

    Returns
    -------
    list[FileEntry]
        One entry per regular file; directories are traversed, not listed.
    """
    root = input_root.resolve()
    excluded = exclude.resolve() if exclude is not None else None
    entries: list[FileEntry] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if excluded is not None and path.is_relative_to(excluded):
            continue
        entries.append(
            FileEntry(
                absolute_path=path,
                relative_path=path.relative_to(root),
                kind=classify(path),
            )
        )
    return entries


def find_case_collisions(paths: Iterable[Path]) -> list[list[Path]]:
    """Group distinct output paths that differ only by letter case.

    Such paths are distinct on case-sensitive filesystems and clash on
    case-insensitive ones. Repeated identical paths are reported once.
    """
    groups: dict[str, list[Path]] = defaultdict(list)
    for path in dict.fromkeys(paths):
        groups[str(path).casefold()].append(path)
    return [group for group in groups.values() if len(group) > 1]
