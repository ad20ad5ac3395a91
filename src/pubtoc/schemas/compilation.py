"""Compilation output model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from pubtoc.schemas.entries import TocEntry
from pubtoc.schemas.manifest import PublicationManifest


class CompilationResult(BaseModel):
    """Everything a compilation produces, before or after writing.

    Attributes:
        entries: Entries as rendered into the ToC, in reading order.
        toc_html: Generated ToC page, or None when no ToC is generated.
        toc_path: Where the generated ToC page is written.
        manifest: The publication manifest.
        manifest_path: Where the manifest is written.
    """

    entries: list[TocEntry]
    toc_html: str | None = None
    toc_path: Path | None = None
    manifest: PublicationManifest
    manifest_path: Path
