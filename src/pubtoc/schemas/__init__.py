"""Shared schemas for pubtoc."""

from pubtoc.schemas.compilation import CompilationResult
from pubtoc.schemas.entries import ContentsEntry, ManuscriptEntry, TocEntry
from pubtoc.schemas.manifest import ManifestRecord, PublicationManifest
from pubtoc.schemas.sections import SectionNode

__all__ = [
    "CompilationResult",
    "ContentsEntry",
    "ManifestRecord",
    "ManuscriptEntry",
    "PublicationManifest",
    "SectionNode",
    "TocEntry",
]
