from datetime import datetime
from typing import Optional

from pydantic import EmailStr, model_validator

from shared.models.users import UserRole
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class WildApricotLoginRequest(EmptyStringModel):
    """Either an authorization ``code`` from the redirect or a provider ``access_token``."""
    code: Optional[str] = None
    redirect_uri: Optional[str] = None
    access_token: Optional[str] = None

    @model_validator(mode="after")
    def validate_code_or_token(self):
        if not self.code and not self.access_token:
            raise ValueError("Either code or accessToken is required")
        if self.code and not self.access_token and not self.redirect_uri:
            raise ValueError("redirectUri is required with code")
        return self


class AuthorizeUrlResponse(EmptyStringModel):
    authorize_url: str
    state: str


class ProviderProfile(EmptyStringModel):
    external_id: str
    email: EmailStr
    name: Optional[str] = None


class UserResponse(EmptyStringModel):
    id: str
    external_id: Optional[str] = None
    email: str
    name: Optional[str] = None
    role: Optional[UserRole] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthenticationResponse(EmptyStringModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class LogoutResponse(EmptyStringModel):
    message: str
