# instashare/utils/errors.py
import logging
from contextlib import contextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


@contextmanager
def failure_as_400(message: str):
    """
    Explicit checks (HTTPException with 401/403/404...) pass through untouched.
    Anything else is logged and answered with a 400 carrying `message`.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception:
        logger.exception(message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def register_error_handlers(app: FastAPI) -> None:
    """Every error body leaving the API has the shape {"err": "<message>"}."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"err": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "err": "Invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"err": "An unexpected error occurred"},
        )
