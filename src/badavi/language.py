"""Language tag and writing-direction resolution for document content."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple

from badavi.schemas import BadaviConfig
from badavi.types import DetectionSource, Direction

if TYPE_CHECKING:
    from badavi.application.ports import LanguageDetector

logger = logging.getLogger(__name__)

MIN_DETECTION_LENGTH = 10
UNDETERMINED = "und"


class LanguageInfo(NamedTuple):
    """Display tag and direction for an ISO 639-3 code."""

    tag: str
    rtl: bool = False


# ISO 639-3 (individual and macrolanguage codes) -> ISO 639-1.
LANGUAGES: Mapping[str, LanguageInfo] = MappingProxyType(
    {
        "afr": LanguageInfo("af"),
        "als": LanguageInfo("sq"),
        "amh": LanguageInfo("am"),
        "ara": LanguageInfo("ar", rtl=True),
        "arb": LanguageInfo("ar", rtl=True),
        "aze": LanguageInfo("az"),
        "azj": LanguageInfo("az"),
        "bel": LanguageInfo("be"),
        "ben": LanguageInfo("bn"),
        "bos": LanguageInfo("bs"),
        "bul": LanguageInfo("bg"),
        "cat": LanguageInfo("ca"),
        "ces": LanguageInfo("cs"),
        "ckb": LanguageInfo("ku", rtl=True),
        "cmn": LanguageInfo("zh"),
        "cym": LanguageInfo("cy"),
        "dan": LanguageInfo("da"),
        "deu": LanguageInfo("de"),
        "div": LanguageInfo("dv", rtl=True),
        "ell": LanguageInfo("el"),
        "eng": LanguageInfo("en"),
        "epo": LanguageInfo("eo"),
        "est": LanguageInfo("et"),
        "eus": LanguageInfo("eu"),
        "fas": LanguageInfo("fa", rtl=True),
        "fin": LanguageInfo("fi"),
        "fra": LanguageInfo("fr"),
        "gle": LanguageInfo("ga"),
        "guj": LanguageInfo("gu"),
        "hau": LanguageInfo("ha"),
        "heb": LanguageInfo("he", rtl=True),
        "hin": LanguageInfo("hi"),
        "hrv": LanguageInfo("hr"),
        "hun": LanguageInfo("hu"),
        "hye": LanguageInfo("hy"),
        "ind": LanguageInfo("id"),
        "isl": LanguageInfo("is"),
        "ita": LanguageInfo("it"),
        "jpn": LanguageInfo("ja"),
        "kat": LanguageInfo("ka"),
        "kaz": LanguageInfo("kk"),
        "kor": LanguageInfo("ko"),
        "lat": LanguageInfo("la"),
        "lav": LanguageInfo("lv"),
        "lit": LanguageInfo("lt"),
        "lug": LanguageInfo("lg"),
        "mar": LanguageInfo("mr"),
        "mkd": LanguageInfo("mk"),
        "mon": LanguageInfo("mn"),
        "mri": LanguageInfo("mi"),
        "msa": LanguageInfo("ms"),
        "nld": LanguageInfo("nl"),
        "nno": LanguageInfo("nn"),
        "nob": LanguageInfo("nb"),
        "pan": LanguageInfo("pa"),
        "pes": LanguageInfo("fa", rtl=True),
        "pol": LanguageInfo("pl"),
        "por": LanguageInfo("pt"),
        "prs": LanguageInfo("fa", rtl=True),
        "pus": LanguageInfo("ps", rtl=True),
        "ron": LanguageInfo("ro"),
        "rus": LanguageInfo("ru"),
        "slk": LanguageInfo("sk"),
        "slv": LanguageInfo("sl"),
        "sna": LanguageInfo("sn"),
        "snd": LanguageInfo("sd", rtl=True),
        "som": LanguageInfo("so"),
        "sot": LanguageInfo("st"),
        "spa": LanguageInfo("es"),
        "sqi": LanguageInfo("sq"),
        "srp": LanguageInfo("sr"),
        "swa": LanguageInfo("sw"),
        "swe": LanguageInfo("sv"),
        "swh": LanguageInfo("sw"),
        "tam": LanguageInfo("ta"),
        "tel": LanguageInfo("te"),
        "tgl": LanguageInfo("tl"),
        "tha": LanguageInfo("th"),
        "tsn": LanguageInfo("tn"),
        "tso": LanguageInfo("ts"),
        "tur": LanguageInfo("tr"),
        "uig": LanguageInfo("ug", rtl=True),
        "ukr": LanguageInfo("uk"),
        "urd": LanguageInfo("ur", rtl=True),
        "uzn": LanguageInfo("uz"),
        "vie": LanguageInfo("vi"),
        "xho": LanguageInfo("xh"),
        "yid": LanguageInfo("yi", rtl=True),
        "yor": LanguageInfo("yo"),
        "zho": LanguageInfo("zh"),
        "zlm": LanguageInfo("ms"),
        "zul": LanguageInfo("zu"),
    }
)

RTL_LANGUAGE_CODES = frozenset(code for code, info in LANGUAGES.items() if info.rtl)


@dataclass(frozen=True)
class ResolvedLanguage:
    """Language tag and direction chosen for one document."""

    tag: str
    direction: Direction
    source: DetectionSource
    code: str | None = None

    def describe(self) -> str:
        """Return a short log-friendly summary."""
        if self.source == "detected":
            return f"{self.tag} ({self.direction}) [detected {self.code} -> {self.tag}]"
        return f"{self.tag} ({self.direction}) [default]"


def meaningful_length(content: str) -> int:
    """Count letters in ``content``; markup, digits and whitespace carry no signal."""
    return sum(1 for ch in content if ch.isalpha())


def lookup_language(code: str) -> LanguageInfo:
    """Map an ISO 639-3 code to its display tag and direction.

    Unknown codes keep the three-letter code as tag and read left-to-right.
    """
    normalized = code.strip().lower()
    info = LANGUAGES.get(normalized)
    if info is None:
        return LanguageInfo(normalized)
    return info


def resolve_language(
    content: str,
    config: BadaviConfig,
    detector: LanguageDetector,
) -> ResolvedLanguage:
    """Resolve the language tag and writing direction of a document.

    Never raises: short content, an undetermined result and detector
    failures all fall back to the configured defaults.

    Parameters
    ----------
    content : str
        Raw document text.
    config : BadaviConfig
        Run configuration holding the defaults.
    detector : LanguageDetector
        Statistical detector returning ISO 639-3 codes.

    Returns
    -------
    ResolvedLanguage
        Resolved tag, direction and whether it was detected or defaulted.
    """
    defaulted = ResolvedLanguage(
        tag=config.default_language,
        direction=config.default_direction,
        source="defaulted",
    )
    if meaningful_length(content) < MIN_DETECTION_LENGTH:
        return defaulted

    try:
        code = detector.detect(content)
    except Exception as exc:
        logger.warning("Language detection failed, using defaults: %s", exc)
        return defaulted
    if not code or code.strip().lower() == UNDETERMINED:
        return defaulted

    code = code.strip().lower()
    info = lookup_language(code)
    return ResolvedLanguage(
        tag=info.tag,
        direction="rtl" if code in RTL_LANGUAGE_CODES else "ltr",
        source="detected",
        code=code,
    )
