"""Section depth filtering and utilities."""

from __future__ import annotations

from typing import Iterable, Iterator

from pubtoc.exceptions import ConfigurationError
from pubtoc.schemas import SectionNode


def trim_section_depth(
    sections: list[SectionNode], section_depth: int | None
) -> list[SectionNode]:
    """Return a copy of ``sections`` nested at most ``section_depth`` deep.

    Depth counts container nesting below the entry: top-level nodes are at
    depth 1. Nodes at exactly ``section_depth`` are kept without their
    children, and ``0`` drops every node. ``None`` keeps the whole forest.
    Heading levels are not consulted.
    """
    if section_depth is None:
        return list(sections)
    validate_section_depth(section_depth)

    def _trim(nodes: list[SectionNode], remaining: int) -> list[SectionNode]:
        if remaining <= 0:
            return []
        return [
            node.model_copy(update={"children": _trim(node.children, remaining - 1)})
            for node in nodes
        ]

    return _trim(list(sections), section_depth)


def validate_section_depth(section_depth: object) -> int:
    """Check that ``section_depth`` is a non-negative integer."""
    if isinstance(section_depth, bool) or not isinstance(section_depth, int):
        raise ConfigurationError(
            f"section_depth must be a non-negative integer, got {section_depth!r}"
        )
    if section_depth < 0:
        raise ConfigurationError(
            f"section_depth must be a non-negative integer, got {section_depth}"
        )
    return section_depth


def count_sections(sections: Iterable[SectionNode]) -> int:
    """Count total sections in the tree."""
    total = 0
    for section in sections:
        total += 1
        total += count_sections(section.children)
    return total


def flatten_sections(sections: Iterable[SectionNode]) -> Iterator[SectionNode]:
    """Yield every node of a forest in document order."""
    for section in sections:
        yield section
        yield from flatten_sections(section.children)
