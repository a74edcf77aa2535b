"""Map domain errors to JSON responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from relationship_wise.errors import CoachError

logger = structlog.get_logger()


async def coach_error_handler(request: Request, exc: CoachError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are a 400 with pydantic's messages."""
    return JSONResponse({"detail": jsonable_encoder(exc.errors())}, status_code=400)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CoachError, coach_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
