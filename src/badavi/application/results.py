"""Application-layer result objects."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from badavi.language import ResolvedLanguage


class FileKind(Enum):
    """Classification of an enumerated input file."""

    MARKDOWN = "markdown"
    OTHER = "other"


class OutcomeStatus(Enum):
    """Terminal state of one file in a run."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FileEntry:
    """Input file discovered during tree enumeration."""

    absolute_path: Path
    relative_path: Path
    kind: FileKind


@dataclass(frozen=True)
class ConversionOutcome:
    """Structured per-file outcome."""

    relative_path: Path
    status: OutcomeStatus
    output_path: Path | None = None
    reason: str | None = None
    language: ResolvedLanguage | None = None
    links_rewritten: int = 0

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


@dataclass(frozen=True)
class RunSummary:
    """Aggregated outcomes of a conversion run, in enumeration order."""

    outcomes: tuple[ConversionOutcome, ...]

    @classmethod
    def from_outcomes(cls, outcomes: Sequence[ConversionOutcome]) -> RunSummary:
        return cls(outcomes=tuple(outcomes))

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def ok(self) -> bool:
        """Whether every file converted or copied successfully."""
        return self.failed == 0 and self.skipped == 0

    @property
    def partial(self) -> bool:
        """Whether some files succeeded while others failed."""
        return self.succeeded > 0 and self.failed > 0

    def failures(self) -> list[ConversionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]
