"""
Run the blog service under uvicorn::

    python -m blog_api

Host, port and log level come from ``Settings`` (``HOST``, ``PORT``,
``LOG_LEVEL``).  Ctrl-C stops the server; the application lifespan then
closes the MongoDB client.
"""
import logging

from uvicorn import Config, Server

from blog_api.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = Config(
        app="blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
    Server(config).run()


if __name__ == "__main__":
    main()
