"""Retarget internal Markdown links in rendered HTML."""

from __future__ import annotations

import re

# href="path.md[?query][#fragment]" with matching quotes. Only the delimiting
# quote ends the value, so href="Don't panic.md" still matches. The path part
# never contains '?' or '#', so query and fragment stay separate.
_NOT_QUOTE = r"(?!(?P=quote))"
_LINK_RE = re.compile(
    r"""(?<![\w-])(?P<attr>href\s*=\s*)(?P<quote>["'])"""
    rf"""(?P<path>(?:{_NOT_QUOTE}[^#?])+\.md)"""
    rf"""(?P<query>\?(?:{_NOT_QUOTE}[^#])*)?"""
    rf"""(?P<fragment>#(?:{_NOT_QUOTE}[\s\S])*)?"""
    r"""(?P=quote)""",
    re.IGNORECASE,
)
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_MD_SUFFIX_RE = re.compile(r"\.md$", re.IGNORECASE)


def is_relative_target(path: str) -> bool:
    """Return whether a link target points inside the document tree.

    URLs with a scheme (``http:``, ``file:``, ``mailto:``...) and
    protocol-relative ``//host/...`` targets are external.
    """
    stripped = path.strip()
    if stripped.startswith(("//", "\\\\")):
        return False
    return _SCHEME_RE.match(stripped) is None


def rewrite_links(html: str) -> tuple[str, int]:
    """Point relative ``.md`` hyperlinks at their ``.html`` counterparts.

    Backslash separators in rewritten targets become forward slashes;
    query strings and fragments are carried over verbatim. Absolute URLs
    are left alone even when they end in ``.md``.

    Parameters
    ----------
    html : str
        Rendered HTML document.

    Returns
    -------
    tuple[str, int]
        Rewritten text and number of substitutions. With a count of zero the
        input object itself is returned.
    """
    count = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal count
        path = match.group("path")
        if not is_relative_target(path):
            return match.group(0)
        count += 1
        target = _MD_SUFFIX_RE.sub(".html", path).replace("\\", "/")
        quote = match.group("quote")
        return (
            f"{match.group('attr')}{quote}{target}"
            f"{match.group('query') or ''}{match.group('fragment') or ''}{quote}"
        )

    rewritten = _LINK_RE.sub(_replace, html)
    if count == 0:
        return html, 0
    return rewritten, count
