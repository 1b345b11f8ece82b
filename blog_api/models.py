from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from blog_api.object_ids import format_blog_id


# ---------------------------------------------------------------------------
# Blog document
# ---------------------------------------------------------------------------
class BlogItem(BaseModel):
    """
    Shape of one document in the blog collection::

        {"_id": ObjectId, "author_id": str, "title": str, "content": str}

    A missing or null string field decodes as ``""``.  A field of any other
    type, or an ``_id`` that is not an ``ObjectId``, fails validation.

    ``id`` is ``None`` only for a record that has not been inserted yet;
    MongoDB assigns it on ``insert_one``.
    """

    id: Optional[ObjectId] = Field(default=None, alias="_id")
    author_id: StrictStr = ""
    title: StrictStr = ""
    content: StrictStr = ""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    @field_validator("author_id", "title", "content", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        # other non-str types still fail StrictStr
        return "" if value is None else value

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> BlogItem:
        """Decode a raw Mongo document.  Raises ``pydantic.ValidationError``."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Encode for ``insert_one``; omits ``_id`` until one is assigned."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def mutable_fields(self) -> dict[str, str]:
        """The fields an update overwrites, keyed by their stored names."""
        return {"author_id": self.author_id, "title": self.title, "content": self.content}

    @property
    def hex_id(self) -> str:
        if self.id is None:
            raise ValueError("BlogItem has not been persisted yet")
        return format_blog_id(self.id)
