"""Shared HTML utilities for manuscript processing."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import quote

from pubtoc.exceptions import ParseError

try:
    from bs4 import BeautifulSoup, ParserRejectedMarkup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


# Elements that never belong in heading markup copied into a ToC.
_ACTIVE_CONTENT_TAGS = ["script", "style", "noscript", "template", "iframe", "object", "embed"]
_URL_ATTRIBUTES = {"href", "src", "action", "formaction", "xlink:href"}
_JAVASCRIPT_URL_RE = re.compile(r"^\s*javascript:", re.IGNORECASE)
# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~".
_FRAGMENT_SAFE = "!*'()"


def parse_html_document(markup: str | bytes) -> BeautifulSoup:
    """Parse HTML markup into a document tree.

    Raises:
        ParseError: If the markup is not text or the parser rejects it.
    """
    if not isinstance(markup, (str, bytes)):
        raise ParseError(f"Expected HTML markup as str or bytes, got {type(markup).__name__}")
    try:
        return BeautifulSoup(markup, "lxml")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"HTML parser rejected the document: {exc}") from exc


def load_html_document(path: Path) -> BeautifulSoup:
    """Read and parse an HTML file.

    Raises:
        ParseError: If the file cannot be read, decoded, or parsed.
    """
    try:
        markup = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Cannot read HTML document {path}: {exc}") from exc
    try:
        return parse_html_document(markup)
    except ParseError as exc:
        raise ParseError(f"Cannot parse HTML document {path}: {exc}") from exc


def find_document_root(soup: BeautifulSoup) -> Tag:
    """Find the element holding the document's content.

    Returns ``<body>`` when present, otherwise the soup itself.
    """
    if soup.body:
        return soup.body
    return soup


def inner_html(tag: Tag) -> str:
    """Serialize the children of ``tag``."""
    return "".join(str(child) for child in tag.contents).strip()


def sanitize_fragment(html: str) -> str:
    """Strip scripts, event handlers and ``javascript:`` URLs from a fragment."""
    fragment = BeautifulSoup(html, "html.parser")
    for tag in fragment.find_all(_ACTIVE_CONTENT_TAGS):
        tag.decompose()
    for tag in fragment.find_all(True):
        for name in list(tag.attrs):
            if name.lower().startswith("on"):
                del tag.attrs[name]
            elif name.lower() in _URL_ATTRIBUTES and _JAVASCRIPT_URL_RE.match(str(tag.attrs[name])):
                del tag.attrs[name]
    return str(fragment).strip()


def escape_fragment(value: str) -> str:
    """Escape an anchor id for use as a URL fragment (``#`` becomes ``%23``)."""
    return quote(value, safe=_FRAGMENT_SAFE)


def normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
