from bson import ObjectId
from bson.errors import InvalidId

from blog_api.errors import InvalidInputError


def parse_blog_id(blog_id: str) -> ObjectId:
    """
    Translate the external hex identifier into a BSON ``ObjectId``.

    Raises ``InvalidInputError`` for anything that is not a 24-digit hex
    string.  Callers must run this before touching the collection.
    """
    if not isinstance(blog_id, str):
        raise InvalidInputError(
            f"could not convert to ObjectId: expected str, got {type(blog_id).__name__}"
        )
    try:
        return ObjectId(blog_id)
    except InvalidId as exc:
        raise InvalidInputError(f"could not convert to ObjectId: {exc}") from exc


def format_blog_id(oid: ObjectId) -> str:
    """Return the 24-character lowercase hex form of *oid*."""
    return str(oid)
