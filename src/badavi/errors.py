"""Exception hierarchy for Markdown tree conversion."""

from __future__ import annotations


class BadaviError(Exception):
    """Base error for conversion runs."""

    exit_code: int = 1


class InputNotFoundError(BadaviError):
    """Input folder is missing or is not a directory."""


class ConfigFileNotFoundError(BadaviError):
    """Explicitly requested configuration file does not exist."""


class EngineUnavailableError(BadaviError):
    """Conversion engine executable cannot be run."""


class EngineError(BadaviError):
    """Conversion engine failed on a single document.

    Parameters
    ----------
    message : str
        Human-readable failure summary.
    stderr : str, default=""
        Captured standard error of the engine process.
    stdout : str, default=""
        Captured standard output of the engine process.
    returncode : int | None, default=None
        Engine exit code, ``None`` when the process never finished.
    """

    def __init__(
        self,
        message: str,
        *,
        stderr: str = "",
        stdout: str = "",
        returncode: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.stdout = stdout
        self.returncode = returncode

    def __str__(self) -> str:
        base = super().__str__()
        detail = self.stderr.strip()
        if detail:
            return f"{base}: {detail}"
        return base


class DependencyError(BadaviError):
    """Optional runtime dependency is missing."""
