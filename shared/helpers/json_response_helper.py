from typing import Optional

from fastapi import HTTPException, status

from shared.core.schemas import ApiFailure

VALIDATION_ERROR = "Validation error"
NOT_FOUND = "Not found"
UNAUTHORIZED = "Unauthorized"


def error_response(error: str, message: Optional[str] = None, http_status: int = status.HTTP_400_BAD_REQUEST, headers: dict = None):
    raise HTTPException(
        status_code=http_status,
        detail=ApiFailure(error=error, message=message).model_dump(),
        headers=headers,
    )


def validation_error(message: str, error: str = VALIDATION_ERROR):
    return error_response(error=error, message=message, http_status=status.HTTP_400_BAD_REQUEST)


def not_found_error(message: str):
    return error_response(error=NOT_FOUND, message=message, http_status=status.HTTP_404_NOT_FOUND)


def unauthorized_error(message: str):
    return error_response(
        error=UNAUTHORIZED,
        message=message,
        http_status=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def internal_error(error: str, exc: Exception = None):
    return error_response(
        error=error,
        message=str(exc) if exc is not None else "Unknown error",
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
