from typing import Any, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, TypeAdapter

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    session_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    exp: Optional[int] = None


class ApiSuccess(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: T


class ApiFailure(BaseModel):
    success: Literal[False] = False
    error: str
    message: Optional[str] = None


ApiResponse = Union[ApiSuccess[Any], ApiFailure]

_api_response_adapter = TypeAdapter(ApiResponse)


def parse_api_response(payload: Any) -> ApiResponse:
    """Validate a decoded envelope into its success or failure variant."""
    return _api_response_adapter.validate_python(payload)


def is_envelope(payload: Any) -> bool:
    if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
        return False
    if payload["success"]:
        return "data" in payload
    return "error" in payload
