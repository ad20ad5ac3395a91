"""Local configuration for pubtoc."""

from __future__ import annotations

import os


DEFAULT_TOC_FILENAME = "index.html"
DEFAULT_MANIFEST_FILENAME = "publication.json"
DEFAULT_TOC_TITLE = "Table of Contents"
DEFAULT_SECTION_DEPTH = 6

# Defaults picked up by CompileOptions/TocOptions when a field is not given.
PUBTOC_TOC_FILENAME = os.getenv("PUBTOC_TOC_FILENAME", DEFAULT_TOC_FILENAME)
PUBTOC_MANIFEST_FILENAME = os.getenv("PUBTOC_MANIFEST_FILENAME", DEFAULT_MANIFEST_FILENAME)
PUBTOC_TOC_TITLE = os.getenv("PUBTOC_TOC_TITLE", DEFAULT_TOC_TITLE)
PUBTOC_SECTION_DEPTH = int(os.getenv("PUBTOC_SECTION_DEPTH", str(DEFAULT_SECTION_DEPTH)))

MANIFEST_CONTEXT = ["https://schema.org", "https://www.w3.org/ns/pub-context"]
MANIFEST_RESOURCE_TYPE = "LinkedResource"
CONTENTS_REL = "contents"
