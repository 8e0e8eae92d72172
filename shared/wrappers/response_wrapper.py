import json
import logging
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.core.schemas import ApiFailure, ApiSuccess, is_envelope

logger = logging.getLogger(__name__)

SKIP_PREFIXES = ("/openapi", "/docs", "/redoc")


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps plain JSON success bodies as ``{success: true, data}``.

    Uncaught exceptions from the routes become a 500 failure envelope.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path.startswith(SKIP_PREFIXES):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            wrapped_error = ApiFailure(
                error="Internal server error",
                message=str(e) or "Unknown error",
            ).model_dump()
            return JSONResponse(content=wrapped_error, status_code=500)

        content_type = response.headers.get("content-type", "")
        if not (200 <= response.status_code < 300) or "application/json" not in content_type:
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            data = None

        headers = {k: v for k, v in response.headers.items() if k.lower() != "content-length"}

        if is_envelope(data):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        wrapped = ApiSuccess(data=data).model_dump()
        return JSONResponse(content=wrapped, status_code=response.status_code, headers=headers)
