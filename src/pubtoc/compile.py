"""Compile manuscript HTML files into a ToC document and publication manifest."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import Any, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pubtoc.config import (
    DEFAULT_SECTION_DEPTH,
    PUBTOC_MANIFEST_FILENAME,
    PUBTOC_SECTION_DEPTH,
    PUBTOC_TOC_FILENAME,
    PUBTOC_TOC_TITLE,
)
from pubtoc.exceptions import ConfigurationError, ConflictError, ParseError
from pubtoc.html_parser import extract_document_title, extract_sections
from pubtoc.html_utils import load_html_document
from pubtoc.manifest import (
    build_manifest,
    contents_record,
    relative_href,
    resolve_manifest_url,
    serialize_manifest,
)
from pubtoc.schemas import (
    CompilationResult,
    ContentsEntry,
    ManifestRecord,
    ManuscriptEntry,
    SectionNode,
    TocEntry,
)
from pubtoc.sections import count_sections, trim_section_depth, validate_section_depth
from pubtoc.toc import DocumentListTransform, SectionListTransform, generate_toc_html

logger = logging.getLogger(__name__)

EntryLike = Union[ManuscriptEntry, ContentsEntry, str, PurePath]


class TocMode(str, Enum):
    """How the ToC document comes into being."""

    AUTO = "auto"
    MANUAL = "manual"


class ParseErrorPolicy(str, Enum):
    """What to do when a manuscript cannot be parsed."""

    ABORT = "abort"
    SKIP = "skip"


class TocOptions(BaseModel):
    """ToC settings.

    Attributes:
        mode: ``auto`` renders and writes a ToC; ``manual`` uses a manuscript
            entry the author wrote as the ToC.
        html_path: ToC location relative to the output directory. In manual
            mode it must be the target of one of the entries.
        title: Heading of the generated ToC and its manifest name.
        section_depth: How deep sections nest below each entry; ``None`` for
            no limit.
        transform_document_list: Custom renderer for the list of entries.
        transform_section_list: Custom renderer for lists of sections.
    """

    model_config = ConfigDict(frozen=True)

    mode: TocMode = TocMode.AUTO
    html_path: str = Field(default_factory=lambda: PUBTOC_TOC_FILENAME)
    title: str = Field(default_factory=lambda: PUBTOC_TOC_TITLE)
    section_depth: int | None = Field(default_factory=lambda: PUBTOC_SECTION_DEPTH)
    transform_document_list: DocumentListTransform | None = None
    transform_section_list: SectionListTransform | None = None

    @field_validator("section_depth", mode="before")
    @classmethod
    def check_section_depth(cls, v: Any) -> int | None:
        """Reject negative and non-integer depths."""
        if v is None:
            return None
        return validate_section_depth(v)


class CompileOptions(BaseModel):
    """Options for one compilation.

    Attributes:
        output_dir: Directory holding the manuscripts; outputs go here too.
        manifest_path: Manifest location relative to ``output_dir``.
        title: Publication title.
        author: Publication author.
        language: Publication language tag.
        toc: ToC settings, or None for a publication without ToC.
        on_parse_error: ``abort`` fails the compilation on the first
            unparseable manuscript; ``skip`` leaves that manuscript out.
    """

    model_config = ConfigDict(frozen=True)

    output_dir: Path
    manifest_path: str = Field(default_factory=lambda: PUBTOC_MANIFEST_FILENAME)
    title: str | None = None
    author: str | None = None
    language: str | None = None
    toc: TocOptions | None = Field(default_factory=TocOptions)
    on_parse_error: ParseErrorPolicy = ParseErrorPolicy.ABORT


@dataclass
class _Slot:
    """One position in the reading order."""

    path: str
    entry: ManuscriptEntry | None = None
    is_contents: bool = False
    title: str | None = None
    sections: list[SectionNode] = field(default_factory=list)


def compile_publication(
    entries: Sequence[EntryLike],
    options: CompileOptions | Mapping[str, Any],
) -> CompilationResult:
    """Build the ToC and manifest and write them to the output directory.

    Nothing is written unless every check passes. The manifest is written
    last.

    Raises:
        ConfigurationError: If options or entries are malformed.
        ParseError: If a manuscript cannot be parsed and the policy is abort.
        ConflictError: If the ToC or manifest would overwrite a manuscript.
    """
    result = build_publication(entries, options)
    write_publication(result)
    return result


def build_publication(
    entries: Sequence[EntryLike],
    options: CompileOptions | Mapping[str, Any],
) -> CompilationResult:
    """Compute the ToC page and manifest without writing anything."""
    opts = resolve_options(options)
    output_dir = Path(opts.output_dir)
    toc = opts.toc

    manifest_path = _normalize_path(opts.manifest_path, output_dir, field_name="manifest_path")
    toc_path = _normalize_path(toc.html_path, output_dir, field_name="toc.html_path") if toc else None
    if toc_path is not None and toc_path == manifest_path:
        raise ConfigurationError(f"ToC and manifest cannot share the path {toc_path}")

    slots = _plan_reading_order(entries, toc=toc, toc_path=toc_path, output_dir=output_dir)

    section_depth = toc.section_depth if toc else DEFAULT_SECTION_DEPTH
    link_base = toc_path or manifest_path
    compiled: list[_Slot] = []
    for slot in slots:
        if slot.entry is None:
            compiled.append(slot)
            continue
        try:
            _extract_slot(slot, output_dir=output_dir, link_base=link_base, section_depth=section_depth)
        except ParseError as exc:
            if opts.on_parse_error is ParseErrorPolicy.ABORT:
                raise
            if slot.is_contents:
                raise ConfigurationError(
                    f"Manual ToC {slot.path} could not be parsed and cannot be skipped"
                ) from exc
            logger.warning("Skipping manuscript %s: it could not be parsed", slot.path, exc_info=True)
            continue
        compiled.append(slot)

    _check_conflicts(compiled, toc=toc, toc_path=toc_path, manifest_path=manifest_path)

    toc_entries = [
        TocEntry(
            title=slot.title or "",
            href=_href_from(slot.path, link_base),
            sections=slot.sections,
        )
        for slot in compiled
        if slot.entry is not None and not slot.is_contents
    ]

    toc_html = None
    if toc is not None and toc.mode is TocMode.AUTO:
        toc_html = generate_toc_html(
            toc_entries,
            toc_title=toc.title,
            title=opts.title,
            manifest_href=relative_href(manifest_path, from_document=toc_path),
            language=opts.language,
            transform_document_list=toc.transform_document_list,
            transform_section_list=toc.transform_section_list,
        )

    records = [_record_for(slot, toc=toc, manifest_path=manifest_path) for slot in compiled]
    manifest = build_manifest(records, title=opts.title, author=opts.author, language=opts.language)

    return CompilationResult(
        entries=toc_entries,
        toc_html=toc_html,
        toc_path=output_dir / toc_path if toc_html is not None else None,
        manifest=manifest,
        manifest_path=output_dir / manifest_path,
    )


def write_publication(result: CompilationResult) -> None:
    """Write the ToC document, then the manifest."""
    if result.toc_html is not None and result.toc_path is not None:
        result.toc_path.parent.mkdir(parents=True, exist_ok=True)
        result.toc_path.write_text(result.toc_html, encoding="utf-8")
        logger.info("Wrote ToC document %s", result.toc_path)

    result.manifest_path.parent.mkdir(parents=True, exist_ok=True)
    result.manifest_path.write_text(serialize_manifest(result.manifest), encoding="utf-8")
    logger.info(
        "Wrote publication manifest %s (%d resources)",
        result.manifest_path,
        len(result.manifest.reading_order),
    )


def resolve_options(options: CompileOptions | Mapping[str, Any]) -> CompileOptions:
    """Validate raw options, reporting problems as ConfigurationError."""
    if isinstance(options, CompileOptions):
        return options
    try:
        return CompileOptions.model_validate(options)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid compile options: {exc}") from exc


def _plan_reading_order(
    entries: Sequence[EntryLike],
    *,
    toc: TocOptions | None,
    toc_path: str | None,
    output_dir: Path,
) -> list[_Slot]:
    slots: list[_Slot] = []
    markers = 0
    for raw in entries:
        entry = _coerce_entry(raw)
        if isinstance(entry, ContentsEntry):
            markers += 1
            slots.append(_Slot(path=toc_path or "", is_contents=True))
            continue
        path = _normalize_path(entry.target, output_dir, field_name="entry target")
        slots.append(_Slot(path=path, entry=entry))

    if markers and (toc is None or toc.mode is TocMode.MANUAL):
        raise ConfigurationError("A contents marker needs an auto-generated ToC")
    if markers > 1:
        raise ConfigurationError("Only one contents marker may appear in the entries")
    if toc is None:
        return slots

    if toc.mode is TocMode.MANUAL:
        manual = [slot for slot in slots if slot.path == toc_path]
        if not manual:
            raise ConfigurationError(f"Manual ToC {toc_path} is not one of the entries")
        for slot in manual:
            slot.is_contents = True
    elif not markers:
        slots.insert(0, _Slot(path=toc_path or "", is_contents=True))
    return slots


def _extract_slot(
    slot: _Slot,
    *,
    output_dir: Path,
    link_base: str,
    section_depth: int | None,
) -> None:
    source = output_dir / slot.path
    soup = load_html_document(source)
    sections = extract_sections(soup, href=_href_from(slot.path, link_base))
    slot.sections = trim_section_depth(sections, section_depth)
    slot.title = slot.entry.title or extract_document_title(soup) or PurePath(slot.path).stem
    logger.debug(
        "Extracted %s: %d sections, %d kept at depth %s",
        slot.path,
        count_sections(sections),
        count_sections(slot.sections),
        section_depth,
    )


def _check_conflicts(
    slots: list[_Slot],
    *,
    toc: TocOptions | None,
    toc_path: str | None,
    manifest_path: str,
) -> None:
    for slot in slots:
        if slot.entry is None:
            continue
        if slot.path == manifest_path:
            raise ConflictError(f"Manifest path {manifest_path} would overwrite a manuscript")
        if toc is not None and toc.mode is TocMode.AUTO and slot.path == toc_path:
            raise ConflictError(
                f"Generated ToC {toc_path} would overwrite the manuscript {slot.path}; "
                "set a different ToC path or use a manual ToC"
            )


def _record_for(slot: _Slot, *, toc: TocOptions | None, manifest_path: str) -> ManifestRecord:
    url = resolve_manifest_url(slot.path, manifest_path)
    if slot.is_contents:
        name = slot.title if slot.entry is not None else (toc.title if toc else None)
        return contents_record(name=name, url=url)
    return ManifestRecord(name=slot.title, url=url)


def _href_from(path: str, document_path: str) -> str:
    if path == document_path:
        return ""
    return relative_href(path, from_document=document_path)


def _coerce_entry(raw: EntryLike) -> ManuscriptEntry | ContentsEntry:
    if isinstance(raw, (ManuscriptEntry, ContentsEntry)):
        return raw
    if isinstance(raw, (str, PurePath)):
        return ManuscriptEntry(target=Path(raw))
    raise ConfigurationError(f"Unsupported entry {raw!r}")


def _normalize_path(value: str | PurePath, output_dir: Path, *, field_name: str) -> str:
    """Return ``value`` as a POSIX path relative to ``output_dir``."""
    path = Path(value)
    if path.is_absolute():
        try:
            path = path.resolve().relative_to(output_dir.resolve())
        except ValueError as exc:
            raise ConfigurationError(
                f"{field_name} {value} is outside the output directory {output_dir}"
            ) from exc
    normalized = posixpath.normpath(path.as_posix())
    if normalized in (".", "") or normalized == ".." or normalized.startswith("../"):
        raise ConfigurationError(f"{field_name} {value} does not name a file in {output_dir}")
    return normalized
