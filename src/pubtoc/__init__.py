"""pubtoc: compile manuscript HTML into a ToC and publication manifest."""

from pubtoc.compile import (
    CompileOptions,
    ParseErrorPolicy,
    TocMode,
    TocOptions,
    build_publication,
    compile_publication,
    write_publication,
)
from pubtoc.exceptions import (
    ConfigurationError,
    ConflictError,
    ParseError,
    PubtocError,
)
from pubtoc.html_parser import extract_sections, get_structured_section_from_html
from pubtoc.schemas import (
    CompilationResult,
    ContentsEntry,
    ManifestRecord,
    ManuscriptEntry,
    PublicationManifest,
    SectionNode,
    TocEntry,
)
from pubtoc.sections import trim_section_depth
from pubtoc.toc import generate_toc_html, render_toc_body

__all__ = [
    "CompilationResult",
    "CompileOptions",
    "ConfigurationError",
    "ConflictError",
    "ContentsEntry",
    "ManifestRecord",
    "ManuscriptEntry",
    "ParseError",
    "ParseErrorPolicy",
    "PublicationManifest",
    "PubtocError",
    "SectionNode",
    "TocEntry",
    "TocMode",
    "TocOptions",
    "build_publication",
    "compile_publication",
    "extract_sections",
    "generate_toc_html",
    "get_structured_section_from_html",
    "render_toc_body",
    "trim_section_depth",
    "write_publication",
]
