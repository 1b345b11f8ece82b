"""
Blog service: business logic for the blog collection.

Design notes
------------
- ``BlogService`` is handed its collection handle at construction time
  and holds no other state, so one instance can serve any number of
  concurrent requests.  The router builds one per request via the
  ``get_blog_service`` dependency.
- Every handler that takes an external id runs ``parse_blog_id`` first;
  a malformed id is rejected before any collection call.
- A document that exists but does not decode into ``BlogItem`` is
  reported exactly like a missing one (``NotFoundError``) for single
  reads and updates.  While streaming it ends the list with
  ``UnavailableError``.
- ``increment_query_count()`` is called once per collection call so the
  ``TimingMiddleware`` can surface the total in ``X-Query-Count``.
- Nothing here retries.  Driver errors are wrapped in
  ``StorageFailureError`` with the original exception chained.
"""
import logging
from typing import Any, AsyncIterator

from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from blog_api.errors import NotFoundError, StorageFailureError, UnavailableError
from blog_api.middleware import increment_query_count
from blog_api.models import BlogItem
from blog_api.object_ids import parse_blog_id

logger = logging.getLogger(__name__)


class BlogService:
    """CRUD and streaming list over a single blog collection."""

    def __init__(self, collection: Any) -> None:
        # pymongo AsyncCollection or anything with the same async methods
        self.collection = collection

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def read_blog(self, blog_id: str) -> BlogItem:
        oid = parse_blog_id(blog_id)

        increment_query_count()
        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            logger.error("find_one failed for blog %s: %s", blog_id, exc)
            raise StorageFailureError(f"Internal error: {exc}") from exc

        if document is None:
            raise NotFoundError(f"Could not find blog with Object Id {blog_id}")
        try:
            return BlogItem.from_document(document)
        except ValidationError as exc:
            logger.warning("Blog %s is stored in an unreadable shape: %s", blog_id, exc)
            raise NotFoundError(f"Could not find blog with Object Id {blog_id}: {exc}") from exc

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_blog(self, author_id: str, title: str, content: str) -> BlogItem:
        """
        Insert a new blog and return it with the id MongoDB assigned.

        The input document is built fresh here so the driver's habit of
        writing ``_id`` back into the inserted dict never leaks out.
        """
        item = BlogItem(author_id=author_id, title=title, content=content)

        increment_query_count()
        try:
            result = await self.collection.insert_one(item.to_document())
        except PyMongoError as exc:
            logger.error("insert_one failed: %s", exc)
            raise StorageFailureError(f"Internal error: {exc}") from exc

        item.id = result.inserted_id
        logger.info("Created blog %s", item.hex_id)
        return item

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def update_blog(self, blog_id: str, author_id: str, title: str, content: str) -> BlogItem:
        """
        Overwrite all three mutable fields and return the post-update
        document (``ReturnDocument.AFTER``).
        """
        oid = parse_blog_id(blog_id)
        update = BlogItem(author_id=author_id, title=title, content=content).mutable_fields()

        increment_query_count()
        try:
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.error("find_one_and_update failed for blog %s: %s", blog_id, exc)
            raise StorageFailureError(f"Internal error: {exc}") from exc

        if document is None:
            raise NotFoundError(f"Could not find blog with supplied ID: {blog_id}")
        try:
            item = BlogItem.from_document(document)
        except ValidationError as exc:
            raise NotFoundError(f"Could not find blog with supplied ID: {exc}") from exc

        logger.info("Updated blog %s", item.hex_id)
        return item

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_blog(self, blog_id: str) -> bool:
        """
        Delete the blog identified by *blog_id*.

        Returns True whether or not a document was actually removed.
        """
        oid = parse_blog_id(blog_id)

        increment_query_count()
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            logger.error("delete_one failed for blog %s: %s", blog_id, exc)
            raise StorageFailureError(f"Internal error: {exc}") from exc

        if result.deleted_count == 0:
            logger.debug("delete_blog: no blog with id %s", blog_id)
        else:
            logger.info("Deleted blog %s", blog_id)
        return True

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    async def list_blogs(self) -> AsyncIterator[BlogItem]:
        """
        Stream every blog in natural scan order, one decoded record at a
        time.

        The cursor is closed when the stream ends for any reason,
        including the consumer calling ``aclose()`` or being cancelled.
        """
        increment_query_count()
        try:
            cursor = self.collection.find({})
        except PyMongoError as exc:
            raise StorageFailureError(f"Unknown internal error: {exc}") from exc

        emitted = 0
        try:
            async for document in cursor:
                try:
                    item = BlogItem.from_document(document)
                except ValidationError as exc:
                    logger.warning(
                        "list_blogs: undecodable document %r after %d record(s)",
                        document.get("_id"), emitted,
                    )
                    raise UnavailableError(f"Could not decode data: {exc}") from exc
                emitted += 1
                yield item
        except PyMongoError as exc:
            logger.error("list_blogs: cursor failed after %d record(s): %s", emitted, exc)
            raise StorageFailureError(f"Unknown cursor error: {exc}") from exc
        finally:
            await cursor.close()
        logger.debug("list_blogs: streamed %d record(s)", emitted)
