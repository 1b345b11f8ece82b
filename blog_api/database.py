import logging

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from blog_api.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings = default_settings) -> AsyncMongoClient:
    """Build the process-wide client.  No I/O happens until first use."""
    return AsyncMongoClient(
        settings.MONGO_URL,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    )


def get_blog_collection(client: AsyncMongoClient, settings: Settings = default_settings) -> AsyncCollection:
    return client[settings.MONGO_DB_NAME][settings.MONGO_COLLECTION]


async def ping(client: AsyncMongoClient) -> bool:
    """
    Round-trip a ``ping`` command so a bad ``MONGO_URL`` shows up in the
    startup log instead of on the first request.  Never raises.
    """
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False
    logger.info("Connected to MongoDB")
    return True


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_collection(request: Request) -> AsyncCollection:
    """
    Return the collection handle opened by the application lifespan.

    Tests replace this dependency with an in-memory double via
    ``app.dependency_overrides``.
    """
    return request.app.state.blog_collection
