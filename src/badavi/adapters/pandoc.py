"""Pandoc subprocess adapter implementing the conversion engine port."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from badavi.application.options import RenderDirectives
from badavi.application.ports import EngineResult
from badavi.errors import EngineError, EngineUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "pandoc"
DEFAULT_TIMEOUT = 120.0


def build_engine_args(
    input_path: Path,
    output_path: Path,
    directives: RenderDirectives,
) -> list[str]:
    """Build the pandoc argument list for one document.

    User-supplied arguments follow the built-in ones so they can override
    them.
    """
    args = [
        "--from",
        "markdown",
        "--to",
        "html5",
        "--standalone",
        "--metadata",
        f"lang={directives.language_tag}",
        "--variable",
        f"dir={directives.direction}",
    ]
    if directives.stylesheet_path is not None:
        args.extend(["--css", str(directives.stylesheet_path)])
    args.extend(directives.extra_args)
    args.extend([str(input_path), "--output", str(output_path)])
    return args


class PandocEngine:
    """Render Markdown with the ``pandoc`` executable."""

    def __init__(
        self,
        executable: str | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self.executable = executable or DEFAULT_EXECUTABLE
        self.timeout = timeout

    def check_available(self) -> str:
        """Verify the executable runs and return its version line.

        Raises
        ------
        EngineUnavailableError
            If pandoc cannot be started or reports an error.
        """
        try:
            completed = subprocess.run(
                [self.executable, "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise EngineUnavailableError(
                f"Pandoc not found or not runnable ({self.executable}): {exc}"
            ) from exc
        if completed.returncode != 0:
            raise EngineUnavailableError(
                f"Pandoc check failed ({self.executable}), exit code "
                f"{completed.returncode}: {completed.stderr.strip()}"
            )
        version = (completed.stdout.splitlines() or ["pandoc"])[0]
        logger.info("Pandoc found: %s", version)
        return version

    def convert(
        self,
        input_path: Path,
        output_path: Path,
        directives: RenderDirectives,
    ) -> EngineResult:
        """Run pandoc for one document.

        Raises
        ------
        EngineError
            If pandoc exits non-zero or exceeds the timeout.
        EngineUnavailableError
            If the executable can no longer be started.
        """
        command = [self.executable, *build_engine_args(input_path, output_path, directives)]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise EngineUnavailableError(
                f"Pandoc executable disappeared: {self.executable}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise EngineError(
                f"pandoc timed out after {self.timeout}s",
                stderr=_as_text(exc.stderr),
                stdout=_as_text(exc.stdout),
            ) from exc
        except OSError as exc:
            raise EngineError(f"pandoc could not be started: {exc}") from exc

        if completed.returncode != 0:
            raise EngineError(
                f"pandoc exited with code {completed.returncode}",
                stderr=completed.stderr,
                stdout=completed.stdout,
                returncode=completed.returncode,
            )
        return EngineResult(output_path=output_path, warnings=completed.stderr)


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
