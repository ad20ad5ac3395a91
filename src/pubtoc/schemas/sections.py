"""Section tree models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SectionNode(BaseModel):
    """A heading-anchored node of a document outline.

    ``level`` is the literal heading rank and plays no part in deciding
    which node is the parent of which; that comes from the document's
    container nesting.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    heading_html: str
    heading_text: str
    level: int = Field(..., ge=1, le=6)
    id: str | None = None
    href: str | None = None
    children: list["SectionNode"] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON form, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
