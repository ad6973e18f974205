"""Integration tests against a real pandoc executable."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

import badavi
from badavi.adapters.pandoc import PandocEngine
from badavi.application.results import OutcomeStatus

pytestmark = pytest.mark.skipif(shutil.which("pandoc") is None, reason="pandoc not installed")


def test_pandoc_renders_directory(make_tree, tmp_path: Path, detector_factory) -> None:
    """Render real HTML with lang/dir and retargeted links."""
    root = make_tree(
        {
            "index.md": "# Home\n\nSee [the guide](guide/intro.md#start).\n",
            "guide/intro.md": "# Intro\n\nWelcome.\n",
            "img/pixel.gif": b"GIF89a\x01\x00\x01\x00",
        }
    )
    detector = detector_factory(code="heb")
    output = tmp_path / "site"

    summary = badavi.convert_directory(
        root, output, engine=PandocEngine(timeout=60), detector=detector
    )

    assert summary.ok, summary.failures()
    assert [o.status for o in summary.outcomes] == [OutcomeStatus.SUCCESS] * 3
    index = (output / "index.html").read_text(encoding="utf-8")
    assert 'href="guide/intro.html#start"' in index
    assert (output / "guide" / "intro.html").exists()
    assert (output / "img" / "pixel.gif").read_bytes() == b"GIF89a\x01\x00\x01\x00"


def test_pandoc_check_available() -> None:
    """Report the installed pandoc version."""
    assert PandocEngine().check_available().lower().startswith("pandoc")
