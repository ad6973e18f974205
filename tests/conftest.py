"""Shared pytest configuration, marker assignment and test doubles."""

from __future__ import annotations

from pathlib import Path

import pytest

from badavi.application.options import RenderDirectives
from badavi.application.ports import EngineResult
from badavi.errors import EngineError

DEFAULT_HTML = """<!DOCTYPE html>
<html lang="{lang}" dir="{dir}">
<body>
<p><a href="other.md">Other</a> and <a href="https://example.com/x.md">remote</a></p>
</body>
</html>
"""


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class FakeEngine:
    """Engine double writing canned HTML and recording every call."""

    def __init__(
        self,
        html: str = DEFAULT_HTML,
        fail_on: set[str] | None = None,
        warnings: str = "",
    ) -> None:
        self.html = html
        self.fail_on = fail_on or set()
        self.warnings = warnings
        self.calls: list[tuple[Path, Path, RenderDirectives]] = []

    def convert(
        self,
        input_path: Path,
        output_path: Path,
        directives: RenderDirectives,
    ) -> EngineResult:
        self.calls.append((input_path, output_path, directives))
        if input_path.name in self.fail_on:
            raise EngineError(
                "pandoc exited with code 64",
                stderr="parse error",
                returncode=64,
            )
        output_path.write_text(
            self.html.format(lang=directives.language_tag, dir=directives.direction),
            encoding="utf-8",
        )
        return EngineResult(output_path=output_path, warnings=self.warnings)


class FakeDetector:
    """Detector double returning a fixed code or a code chosen by keyword."""

    def __init__(
        self,
        code: str | None = "eng",
        by_keyword: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.by_keyword = by_keyword or {}
        self.calls = 0

    def detect(self, text: str) -> str | None:
        self.calls += 1
        for keyword, code in self.by_keyword.items():
            if keyword in text:
                return code
        return self.code


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def fake_detector() -> FakeDetector:
    return FakeDetector()


@pytest.fixture
def make_tree(tmp_path: Path):
    """Create files below ``tmp_path / "input"`` from a path -> content mapping."""

    def _make(files: dict[str, str | bytes]) -> Path:
        root = tmp_path / "input"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def engine_factory() -> type[FakeEngine]:
    return FakeEngine


@pytest.fixture
def detector_factory() -> type[FakeDetector]:
    return FakeDetector
