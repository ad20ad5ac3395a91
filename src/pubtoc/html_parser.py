"""Extract the heading outline of a manuscript HTML document."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from pubtoc.exceptions import ParseError
from pubtoc.html_utils import (
    escape_fragment,
    find_document_root,
    inner_html,
    load_html_document,
    normalize_text,
    parse_html_document,
    sanitize_fragment,
)
from pubtoc.schemas import SectionNode

try:
    from bs4 import BeautifulSoup
    from bs4.element import NavigableString, PreformattedString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^h[1-6]$")
# Headings quoted from elsewhere are not part of the document's own outline.
_EXCLUDED_ANCESTORS = ["blockquote"]


@dataclass
class _Draft:
    heading_html: str
    heading_text: str
    level: int
    id: str | None
    href: str | None
    children: list[_Draft] = field(default_factory=list)


@dataclass
class _Frame:
    """An open sectioning container and the node its heading produced."""

    scope: Tag
    draft: _Draft


def extract_sections(
    document: BeautifulSoup | Tag | str | bytes, *, href: str | None = None
) -> list[SectionNode]:
    """Build the section forest of a document.

    Nesting follows the containers headings sit in: a heading whose
    container lies inside another heading's container becomes that
    heading's descendant whatever the two levels are. A heading is the
    parent of every later heading inside its own container, so headings
    sharing one container form a chain. Levels are never compared.

    Args:
        document: Parsed document (or element) or raw HTML markup.
        href: Path of the document as linked from the ToC. When given, every
            node with an id gets ``href#id``.

    Raises:
        ParseError: If raw markup cannot be parsed.
    """
    if isinstance(document, (str, bytes)):
        document = parse_html_document(document)
    if isinstance(document, BeautifulSoup):
        root = find_document_root(document)
    elif isinstance(document, Tag):
        root = document
    else:
        raise ParseError(f"Cannot extract sections from {type(document).__name__}")

    sections: list[_Draft] = []
    stack: list[_Frame] = []

    for heading in iter_headings(root):
        level = int(heading.name[1])
        scope = heading.parent
        draft = _draft_from_heading(heading, level=level, href=href)

        while stack and not _contains(stack[-1].scope, heading):
            stack.pop()

        if stack:
            stack[-1].draft.children.append(draft)
        else:
            sections.append(draft)

        stack.append(_Frame(scope=scope, draft=draft))

    return [_freeze(draft) for draft in sections]


def iter_headings(root: Tag) -> Iterator[Tag]:
    """Yield ``h1``-``h6`` elements below ``root`` in document order."""
    for heading in root.find_all(_HEADING_RE):
        if heading.find_parent(_EXCLUDED_ANCESTORS):
            continue
        yield heading


def get_structured_section_from_html(
    path: Path, href: str | None = None
) -> list[SectionNode]:
    """Load an HTML file and extract its section forest."""
    soup = load_html_document(path)
    sections = extract_sections(soup, href=href)
    logger.debug("Extracted %d top-level sections from %s", len(sections), path)
    return sections


def extract_document_title(document: BeautifulSoup) -> str | None:
    """Return the document's ``<title>``, else its first heading's text."""
    if document.title:
        title = normalize_text(document.title.get_text(" ", strip=True))
        if title:
            return title
    for heading in iter_headings(find_document_root(document)):
        text = normalize_text(heading.get_text(" ", strip=True))
        if text:
            return text
    return None


def _draft_from_heading(heading: Tag, *, level: int, href: str | None) -> _Draft:
    anchor = heading.get("id") or _parent_id(heading)
    fragment = escape_fragment(anchor) if anchor else None
    node_href = None
    if fragment is not None and href is not None:
        node_href = f"{href}#{fragment}"
    return _Draft(
        heading_html=sanitize_fragment(inner_html(heading)),
        heading_text=_heading_text(heading),
        level=level,
        id=fragment,
        href=node_href,
    )


def _parent_id(heading: Tag) -> str | None:
    parent = heading.parent
    if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
        return parent.get("id") or None
    return None


def _heading_text(heading: Tag) -> str:
    # Every text node counts, script and style bodies included; comments do not.
    strings = (
        node.strip()
        for node in heading.descendants
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString)
    )
    return normalize_text(" ".join(strings))


def _contains(scope: Tag, element: Tag) -> bool:
    # Tag equality is structural, so ancestry has to be checked by identity.
    return any(parent is scope for parent in element.parents)


def _freeze(draft: _Draft) -> SectionNode:
    return SectionNode(
        heading_html=draft.heading_html,
        heading_text=draft.heading_text,
        level=draft.level,
        id=draft.id,
        href=draft.href,
        children=[_freeze(child) for child in draft.children],
    )

