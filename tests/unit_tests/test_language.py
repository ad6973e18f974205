"""Unit tests for language tag and direction resolution."""

from __future__ import annotations

import logging

import pytest

from badavi.language import (
    LANGUAGES,
    MIN_DETECTION_LENGTH,
    RTL_LANGUAGE_CODES,
    lookup_language,
    meaningful_length,
    resolve_language,
)
from badavi.schemas import BadaviConfig

LONG_TEXT = "This paragraph is long enough for statistical detection."


class _RaisingDetector:
    def detect(self, text: str) -> str | None:
        del text
        raise RuntimeError("model crashed")


@pytest.mark.parametrize("content", ["", "short", "# Hi!", "1234567890 ---- ****", "abc def g"])
def test_short_content_uses_defaults(content: str, detector_factory) -> None:
    """Return configured defaults without consulting the detector."""
    detector = detector_factory(code="pes")
    config = BadaviConfig(default_language="fa", default_direction="rtl")

    resolved = resolve_language(content, config, detector)

    assert resolved.tag == "fa"
    assert resolved.direction == "rtl"
    assert resolved.source == "defaulted"
    assert detector.calls == 0


@pytest.mark.parametrize("code", [None, "und", "UND", ""])
def test_undetermined_uses_defaults(code: str | None, detector_factory) -> None:
    """Fall back to defaults when the detector cannot decide."""
    resolved = resolve_language(LONG_TEXT, BadaviConfig(), detector_factory(code=code))
    assert (resolved.tag, resolved.direction, resolved.source) == ("en", "ltr", "defaulted")


def test_detector_failure_uses_defaults(caplog: pytest.LogCaptureFixture) -> None:
    """Treat detector exceptions as undetermined and say so at warning level."""
    config = BadaviConfig(default_language="de")
    with caplog.at_level(logging.WARNING, logger="badavi.language"):
        resolved = resolve_language(LONG_TEXT, config, _RaisingDetector())
    assert resolved.tag == "de"
    assert resolved.source == "defaulted"
    assert "Language detection failed" in caplog.text


@pytest.mark.parametrize(
    ("code", "tag", "direction"),
    [
        ("eng", "en", "ltr"),
        ("pes", "fa", "rtl"),
        ("fas", "fa", "rtl"),
        ("arb", "ar", "rtl"),
        ("heb", "he", "rtl"),
        ("urd", "ur", "rtl"),
        ("FRA", "fr", "ltr"),
    ],
)
def test_detected_codes_map_to_tag_and_direction(
    code: str, tag: str, direction: str, detector_factory
) -> None:
    """Map detected ISO 639-3 codes through the static table."""
    resolved = resolve_language(LONG_TEXT, BadaviConfig(), detector_factory(code=code))
    assert resolved.tag == tag
    assert resolved.direction == direction
    assert resolved.source == "detected"
    assert resolved.code == code.lower()


def test_unknown_code_keeps_three_letter_tag(detector_factory) -> None:
    """Use the three-letter code itself when no two-letter tag is known."""
    resolved = resolve_language(LONG_TEXT, BadaviConfig(), detector_factory(code="haw"))
    assert resolved.tag == "haw"
    assert resolved.direction == "ltr"
    assert resolved.source == "detected"


def test_minimum_length_counts_letters_only() -> None:
    """Ignore whitespace, digits and punctuation when measuring content."""
    assert meaningful_length("a b c 1 2 3 !!!") == 3
    assert meaningful_length("سلام دنیا") == 8
    assert MIN_DETECTION_LENGTH == 10


def test_rtl_set_covers_required_languages() -> None:
    """Persian, Arabic, Hebrew and Urdu read right-to-left."""
    assert {"fas", "pes", "ara", "arb", "heb", "urd"} <= RTL_LANGUAGE_CODES
    assert "eng" not in RTL_LANGUAGE_CODES


def test_direction_follows_rtl_codes_only(detector_factory) -> None:
    """Read every code outside the right-to-left set as left-to-right."""
    directions = {
        code: resolve_language(LONG_TEXT, BadaviConfig(), detector_factory(code=code)).direction
        for code in ("heb", "yid", "eng", "haw")
    }
    assert directions == {"heb": "rtl", "yid": "rtl", "eng": "ltr", "haw": "ltr"}


def test_language_table_is_immutable() -> None:
    """Reject mutation of the lookup table."""
    with pytest.raises(TypeError):
        LANGUAGES["xxx"] = lookup_language("eng")  # type: ignore[index]


def test_describe_mentions_source(detector_factory) -> None:
    """Summaries distinguish detected and defaulted results."""
    detected = resolve_language(LONG_TEXT, BadaviConfig(), detector_factory(code="heb"))
    defaulted = resolve_language("", BadaviConfig(), detector_factory())
    assert "detected heb -> he" in detected.describe()
    assert "[default]" in defaulted.describe()
