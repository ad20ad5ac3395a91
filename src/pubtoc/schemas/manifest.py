"""Publication manifest models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pubtoc.config import MANIFEST_CONTEXT, MANIFEST_RESOURCE_TYPE


class ManifestRecord(BaseModel):
    """One resource in the reading order."""

    model_config = ConfigDict(frozen=True)

    rel: str | None = None
    name: str | None = None
    type: str = MANIFEST_RESOURCE_TYPE
    url: str


class PublicationManifest(BaseModel):
    """W3C publication manifest document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    context: list[str] = Field(default_factory=lambda: list(MANIFEST_CONTEXT), alias="@context")
    type: str = "Book"
    name: str | None = None
    author: str | None = None
    in_language: str | None = None
    reading_order: list[ManifestRecord] = Field(default_factory=list)
