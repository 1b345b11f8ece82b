import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api import __version__
from blog_api.config import settings
from blog_api.database import create_client, get_blog_collection, ping
from blog_api.errors import BlogServiceError
from blog_api.middleware import TimingMiddleware
from blog_api.routers import blogs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Connecting to MongoDB (%s.%s)", settings.MONGO_DB_NAME, settings.MONGO_COLLECTION)
    client = create_client(settings)
    await ping(client)  # logs and continues on failure
    app.state.mongo_client = client
    app.state.blog_collection = get_blog_collection(client, settings)
    yield
    # Shutdown
    logger.info("Closing MongoDB connection")
    await client.close()


app = FastAPI(
    title="Blog Record Service",
    description="Create, read, update, delete and stream blog records stored in MongoDB",
    version=__version__,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(blogs.router)


@app.exception_handler(BlogServiceError)
async def blog_service_error_handler(request: Request, exc: BlogServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}
