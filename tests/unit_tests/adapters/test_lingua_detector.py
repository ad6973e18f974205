"""Unit tests for the lingua detector adapter."""

from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

from badavi.adapters.detectors import LinguaDetector
from badavi.errors import DependencyError


class _Model:
    def __init__(self, code: str | None) -> None:
        self.code = code
        self.calls = 0

    def detect_language_of(self, text: str):
        self.calls += 1
        if self.code is None:
            return None
        return SimpleNamespace(iso_code_639_3=SimpleNamespace(name=self.code))


def test_detect_returns_lowercase_iso_639_3(monkeypatch: pytest.MonkeyPatch) -> None:
    """Lower-case lingua's ISO 639-3 enum names."""
    model = _Model("FAS")
    detector = LinguaDetector()
    monkeypatch.setattr(detector, "_build", lambda: model)
    assert detector.detect("متن") == "fas"


def test_detect_returns_none_when_undetermined(monkeypatch: pytest.MonkeyPatch) -> None:
    """Return None when lingua cannot decide."""
    detector = LinguaDetector()
    monkeypatch.setattr(detector, "_build", lambda: _Model(None))
    assert detector.detect("???") is None


def test_model_is_built_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reuse the built model across calls."""
    builds: list[_Model] = []

    def build() -> _Model:
        builds.append(_Model("ENG"))
        return builds[-1]

    detector = LinguaDetector()
    monkeypatch.setattr(detector, "_build", build)
    detector.detect("one")
    detector.detect("two")
    assert len(builds) == 1
    assert builds[0].calls == 2


def test_check_available_reports_missing_dependency(monkeypatch: pytest.MonkeyPatch) -> None:
    """Raise DependencyError when lingua cannot be imported."""
    monkeypatch.setitem(sys.modules, "lingua", None)
    with pytest.raises(DependencyError, match="lingua-language-detector"):
        LinguaDetector().check_available()
