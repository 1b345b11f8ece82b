import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from blog_api.database import get_collection
from blog_api.errors import BlogServiceError
from blog_api.schemas import BlogCreate, BlogResponse, BlogUpdate, DeleteBlogResponse, ErrorResponse
from blog_api.services.blog_service import BlogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/blogs", tags=["blogs"])

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def get_blog_service(collection=Depends(get_collection)) -> BlogService:
    return BlogService(collection)


def _ndjson(payload: dict) -> bytes:
    return (json.dumps(payload) + "\n").encode()


@router.get("", response_class=StreamingResponse, responses=_ERRORS)
async def list_blogs(service: BlogService = Depends(get_blog_service)):
    """
    Stream every blog as newline-delimited JSON.

    The first record is pulled before the response starts so that an
    error raised up front becomes a regular error response.  Errors
    after that end the stream with a single ``{"error": ...}`` line.
    The background task releases the cursor even if the body is never
    iterated (client gone before the first chunk).
    """
    records = service.list_blogs()
    try:
        first = await anext(records)
    except StopAsyncIteration:
        first = None

    async def body():
        try:
            if first is None:
                return
            yield _ndjson(BlogResponse.from_item(first).model_dump())
            async for item in records:
                yield _ndjson(BlogResponse.from_item(item).model_dump())
        except BlogServiceError as exc:
            logger.warning("list_blogs stream aborted: %s", exc)
            yield _ndjson({"error": exc.to_dict()})
        finally:
            await records.aclose()

    return StreamingResponse(
        body(),
        media_type="application/x-ndjson",
        background=BackgroundTask(records.aclose),
    )


@router.get("/{blog_id}", response_model=BlogResponse, responses=_ERRORS)
async def read_blog(blog_id: str, service: BlogService = Depends(get_blog_service)):
    return BlogResponse.from_item(await service.read_blog(blog_id))


@router.post("", status_code=201, response_model=BlogResponse, responses=_ERRORS)
async def create_blog(data: BlogCreate, service: BlogService = Depends(get_blog_service)):
    item = await service.create_blog(data.author_id, data.title, data.content)
    return BlogResponse.from_item(item)


@router.put("/{blog_id}", response_model=BlogResponse, responses=_ERRORS)
async def update_blog(blog_id: str, data: BlogUpdate, service: BlogService = Depends(get_blog_service)):
    item = await service.update_blog(blog_id, data.author_id, data.title, data.content)
    return BlogResponse.from_item(item)


@router.delete("/{blog_id}", response_model=DeleteBlogResponse, responses=_ERRORS)
async def delete_blog(blog_id: str, service: BlogService = Depends(get_blog_service)):
    return DeleteBlogResponse(success=await service.delete_blog(blog_id))
