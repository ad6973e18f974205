"""Language detector adapters."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from badavi.errors import DependencyError

if TYPE_CHECKING:
    from lingua import LanguageDetector as _LinguaModel
    from lingua import LanguageDetectorBuilder


def _import_builder() -> type[LanguageDetectorBuilder]:
    try:
        from lingua import LanguageDetectorBuilder
    except Exception as exc:
        raise DependencyError(
            "lingua-language-detector is required for language detection."
        ) from exc
    return LanguageDetectorBuilder


class LinguaDetector:
    """Detect document language with ``lingua-language-detector``.

    The statistical model is built on first use and shared by all threads
    using this instance.
    """

    def __init__(self, low_accuracy: bool = False) -> None:
        self.low_accuracy = low_accuracy
        self._model: _LinguaModel | None = None
        self._lock = threading.Lock()

    def check_available(self) -> None:
        """Raise :class:`DependencyError` when lingua cannot be imported.

        Only the import is checked; the model itself is built on first use.
        """
        _import_builder()

    def _build(self) -> _LinguaModel:
        builder = _import_builder().from_all_languages()
        if self.low_accuracy:
            builder = builder.with_low_accuracy_mode()
        return builder.build()

    def _detector(self) -> _LinguaModel:
        with self._lock:
            if self._model is None:
                self._model = self._build()
            return self._model

    def detect(self, text: str) -> str | None:
        """Return the ISO 639-3 code of ``text`` or ``None`` when undetermined."""
        language = self._detector().detect_language_of(text)
        if language is None:
            return None
        return language.iso_code_639_3.name.lower()
