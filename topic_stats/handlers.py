"""Mapping of topic data errors to JSON error responses."""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from topic_stats.errors import MissingTopicDataError, NoSuchTopicError, TopicDataError
from topic_stats.logging_utils import log_event
from topic_stats.models import ErrorView


def _error_response(request: Request, exc: Exception, status_code: int, level: int) -> JSONResponse:
    fields = {
        "request_id": getattr(request.state, "request_id", "unknown"),
        "method": request.method,
        "path": request.url.path,
        "status": status_code,
        "result": type(exc).__name__,
    }
    topic_id = getattr(exc, "topic_id", None)
    if topic_id is not None:
        fields["topic_id"] = topic_id
    if exc.__cause__ is not None:
        fields["cause"] = repr(exc.__cause__)
    log_event("topics", level, str(exc), **fields)

    return JSONResponse(
        status_code=status_code,
        content=ErrorView(errorMessage=str(exc)).model_dump(),
    )


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NoSuchTopicError)
    async def no_such_topic_handler(request: Request, exc: NoSuchTopicError):
        return _error_response(request, exc, status.HTTP_404_NOT_FOUND, logging.WARNING)

    @app.exception_handler(MissingTopicDataError)
    async def missing_topic_data_handler(request: Request, exc: MissingTopicDataError):
        return _error_response(request, exc, status.HTTP_404_NOT_FOUND, logging.WARNING)

    @app.exception_handler(TopicDataError)
    async def topic_data_error_handler(request: Request, exc: TopicDataError):
        return _error_response(
            request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, logging.ERROR
        )
