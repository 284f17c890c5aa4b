"""Mapping of engine errors onto HTTP errors."""

from fastapi import HTTPException

from app.core.errors import DocumentEngineError, NotFoundError, ValidationError


def to_http_exception(error: DocumentEngineError) -> HTTPException:
    """NotFoundError -> 404, ValidationError -> 422, anything else -> 500."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(status_code=422, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
