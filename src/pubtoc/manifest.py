"""Build and serialize the publication manifest."""

from __future__ import annotations

import json
import posixpath

from pubtoc.config import CONTENTS_REL
from pubtoc.schemas import ManifestRecord, PublicationManifest


def resolve_manifest_url(resource_path: str, manifest_path: str) -> str:
    """Return ``resource_path`` relative to the manifest's directory.

    Both paths are POSIX paths relative to the output directory, so a
    manifest under ``meta/`` links ``a.html`` as ``../a.html``.
    """
    return relative_href(resource_path, from_document=manifest_path)


def relative_href(resource_path: str, *, from_document: str) -> str:
    """Return the link to ``resource_path`` as written inside ``from_document``."""
    start = posixpath.dirname(from_document) or "."
    return posixpath.relpath(resource_path, start)


def build_manifest(
    records: list[ManifestRecord],
    *,
    title: str | None = None,
    author: str | None = None,
    language: str | None = None,
) -> PublicationManifest:
    """Wrap reading-order records into a manifest document."""
    return PublicationManifest(
        name=title,
        author=author,
        in_language=language,
        reading_order=records,
    )


def contents_record(*, name: str | None, url: str) -> ManifestRecord:
    """Return the reading-order record of a ToC document."""
    return ManifestRecord(rel=CONTENTS_REL, name=name, url=url)


def serialize_manifest(manifest: PublicationManifest) -> str:
    """Serialize ``manifest`` to stable, human-readable JSON."""
    data = manifest.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

