"""
Error taxonomy for the blog service.

The service layer raises only ``BlogServiceError`` subclasses.  The HTTP
boundary (``blog_api.main``) is the single place that turns them into
responses, using the ``status_code`` carried by each class.

============================  ==============  ======
Cause                         ErrorKind       HTTP
============================  ==============  ======
identifier does not parse     INVALID_INPUT   400
no match / undecodable match  NOT_FOUND       404
insert / cursor / driver err  STORAGE_FAILURE 500
undecodable doc mid-stream    UNAVAILABLE     503
============================  ==============  ======
"""
from enum import StrEnum, auto


class ErrorKind(StrEnum):
    INVALID_INPUT = auto()
    NOT_FOUND = auto()
    STORAGE_FAILURE = auto()
    UNAVAILABLE = auto()


class BlogServiceError(Exception):
    """Base class for every error surfaced to callers of ``BlogService``."""

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": str(self.kind), "detail": self.message}


class InvalidInputError(BlogServiceError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class NotFoundError(BlogServiceError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class StorageFailureError(BlogServiceError):
    kind = ErrorKind.STORAGE_FAILURE
    status_code = 500


class UnavailableError(BlogServiceError):
    kind = ErrorKind.UNAVAILABLE
    status_code = 503
