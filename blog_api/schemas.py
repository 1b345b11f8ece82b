from pydantic import BaseModel

from blog_api.models import BlogItem


# --- Blog ---

class BlogBase(BaseModel):
    author_id: str
    title: str
    content: str


class BlogCreate(BlogBase):
    pass


class BlogUpdate(BlogBase):
    """All three mutable fields are required; an update overwrites them."""


class BlogResponse(BlogBase):
    id: str

    @classmethod
    def from_item(cls, item: BlogItem) -> "BlogResponse":
        return cls(
            id=item.hex_id,
            author_id=item.author_id,
            title=item.title,
            content=item.content,
        )


class DeleteBlogResponse(BaseModel):
    success: bool


# --- Errors ---

class ErrorResponse(BaseModel):
    detail: str
    kind: str
