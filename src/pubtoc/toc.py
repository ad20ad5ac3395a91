"""Render entries and their section trees into a ToC document."""

from __future__ import annotations

from typing import Callable, Sequence

from pubtoc.schemas import SectionNode, TocEntry

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML rendering (pip install beautifulsoup4)."
    ) from exc


# Both hooks receive sibling nodes and the rendered child list of each node,
# and return markup for the whole sibling list.
DocumentListTransform = Callable[[Sequence[TocEntry], Sequence[str]], str]
SectionListTransform = Callable[[Sequence[SectionNode], Sequence[str]], str]

_PAGE_SKELETON = "<!DOCTYPE html><html><head></head><body></body></html>"


def render_toc_body(
    entries: Sequence[TocEntry],
    *,
    title: str | None = None,
    transform_document_list: DocumentListTransform | None = None,
    transform_section_list: SectionListTransform | None = None,
) -> str:
    """Render the ``<nav role="doc-toc">`` element for ``entries``.

    Lists are composed bottom-up: each entry's sections are rendered before
    the entry list is, and the rendered markup is passed to the parent hook
    next to the nodes themselves. The section hook is only called for
    non-empty lists; the document hook is always called once.

    Args:
        entries: Entries in reading order, sections already depth-filtered.
        title: Heading shown above the list.
        transform_document_list: Replaces the default ``<ol>`` of entries.
        transform_section_list: Replaces the default ``<ol>`` of sections.
    """
    document_list = transform_document_list or default_document_list
    section_list = transform_section_list or default_section_list

    def _render_sections(nodes: Sequence[SectionNode]) -> str:
        if not nodes:
            return ""
        children = [_render_sections(node.children) for node in nodes]
        return section_list(nodes, children)

    linked = [
        entry.model_copy(update={"sections": link_sections(entry.sections, entry.href)})
        for entry in entries
    ]
    children = [_render_sections(entry.sections) for entry in linked]
    body = document_list(linked, children)

    heading = ""
    if title:
        soup = BeautifulSoup("", "html.parser")
        h2 = soup.new_tag("h2")
        h2.string = title
        heading = str(h2)
    return f'<nav id="toc" role="doc-toc">{heading}{body}</nav>'


def default_document_list(nodes: Sequence[TocEntry], children: Sequence[str]) -> str:
    """Render entries as an ``<ol>`` of links titled after each entry."""
    if not nodes:
        return ""
    soup = BeautifulSoup("", "html.parser")
    ol = soup.new_tag("ol")
    for node, child_markup in zip(nodes, children):
        li = soup.new_tag("li")
        link = soup.new_tag("a", attrs={"href": node.href})
        link.string = node.title
        li.append(link)
        _append_markup(li, child_markup)
        ol.append(li)
    return str(ol)


def default_section_list(nodes: Sequence[SectionNode], children: Sequence[str]) -> str:
    """Render sections as an ``<ol>``; sections without an id are not linked."""
    if not nodes:
        return ""
    soup = BeautifulSoup("", "html.parser")
    ol = soup.new_tag("ol")
    for node, child_markup in zip(nodes, children):
        li = soup.new_tag("li", attrs={"data-section-level": str(node.level)})
        if node.href is not None:
            label = soup.new_tag("a", attrs={"href": node.href})
        else:
            label = soup.new_tag("span")
        _append_markup(label, node.heading_html)
        li.append(label)
        _append_markup(li, child_markup)
        ol.append(li)
    return str(ol)


def link_sections(sections: Sequence[SectionNode], href: str) -> list[SectionNode]:
    """Point every section with an id at ``href#id``.

    An empty ``href`` means the sections live in the ToC document itself, so
    the links are bare fragments.
    """
    return [
        section.model_copy(
            update={
                "href": f"{href}#{section.id}" if section.id else None,
                "children": link_sections(section.children, href),
            }
        )
        for section in sections
    ]


def generate_toc_html(
    entries: Sequence[TocEntry],
    *,
    toc_title: str | None,
    title: str | None = None,
    manifest_href: str | None = None,
    language: str | None = None,
    transform_document_list: DocumentListTransform | None = None,
    transform_section_list: SectionListTransform | None = None,
) -> str:
    """Render a complete ToC page around :func:`render_toc_body`."""
    body = render_toc_body(
        entries,
        title=toc_title,
        transform_document_list=transform_document_list,
        transform_section_list=transform_section_list,
    )

    soup = BeautifulSoup(_PAGE_SKELETON, "html.parser")
    if language:
        soup.html["lang"] = language

    head = soup.head
    head.append(soup.new_tag("meta", attrs={"charset": "utf-8"}))
    page_title = soup.new_tag("title")
    page_title.string = title or toc_title or ""
    head.append(page_title)
    if manifest_href is not None:
        head.append(
            soup.new_tag(
                "link",
                attrs={
                    "href": manifest_href,
                    "rel": "publication",
                    "type": "application/ld+json",
                },
            )
        )

    if title:
        h1 = soup.new_tag("h1")
        h1.string = title
        soup.body.append(h1)
    _append_markup(soup.body, body)
    return str(soup) + "\n"


def _append_markup(parent: Tag, markup: str) -> None:
    if not markup:
        return
    fragment = BeautifulSoup(markup, "html.parser")
    for child in list(fragment.contents):
        parent.append(child.extract())
