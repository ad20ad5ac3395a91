"""Reading-order entry models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pubtoc.schemas.sections import SectionNode


class ManuscriptEntry(BaseModel):
    """A manuscript document already written to the output directory.

    Attributes:
        target: Path of the HTML file, relative to the output directory or
            absolute inside it.
        title: Title used in the ToC and manifest. Taken from the document
            itself when omitted.
    """

    model_config = ConfigDict(frozen=True)

    target: Path
    title: str | None = None


class ContentsEntry(BaseModel):
    """Marks where a generated ToC sits in the reading order."""

    model_config = ConfigDict(frozen=True)


class TocEntry(BaseModel):
    """An entry as handed to the ToC renderer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    href: str
    sections: list[SectionNode] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON form."""
        return self.model_dump(by_alias=True, exclude_none=True)
