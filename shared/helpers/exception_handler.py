import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from shared.helpers.json_response_helper import INTERNAL_ERROR_MESSAGE, error_body

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())
                        if part not in ("body", "query", "path"))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(content=error_body(str(exc.detail)), status_code=exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(content=error_body(_validation_message(exc)), status_code=400)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s",
                         request.method, request.url.path)
        return JSONResponse(content=error_body(INTERNAL_ERROR_MESSAGE), status_code=500)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return JSONResponse(content=error_body(INTERNAL_ERROR_MESSAGE), status_code=500)
