import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core.schemas import ApiFailure, is_envelope
from shared.helpers.json_response_helper import NOT_FOUND, UNAUTHORIZED, VALIDATION_ERROR

logger = logging.getLogger(__name__)

DEFAULT_ERRORS = {
    400: VALIDATION_ERROR,
    401: UNAUTHORIZED,
    404: NOT_FOUND,
}


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return "; ".join(parts)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if is_envelope(exc.detail):
            content = exc.detail
        else:
            content = ApiFailure(
                error=DEFAULT_ERRORS.get(exc.status_code, "Request failed"),
                message=str(exc.detail),
            ).model_dump()

        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, content.get("message"))
        else:
            logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, content.get("message"))

        return JSONResponse(content=content, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
        wrapped = ApiFailure(error=VALIDATION_ERROR, message=message).model_dump()
        return JSONResponse(content=wrapped, status_code=400)
