import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import unauthorized_error
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    payload = data.copy()
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES)
    payload["exp"] = expires

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(db: Session, token: str) -> UserToken:
    """Decode a JWT and check that its login session is still active."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        user = UserToken(**payload)
    except (JWTError, ValidationError):
        return unauthorized_error("Invalid or expired token")

    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == user.session_id,
        UserLoginSession.user_id == user.user_id
    ).first()

    if not session or not session.is_active:
        return unauthorized_error("Session has been logged out or is inactive")

    return user


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None or not credentials.credentials:
        return unauthorized_error("You must be logged in to perform this action")

    user_data = verify_token(db, credentials.credentials)

    user = db.query(Users).filter(Users.id == user_data.user_id).first()
    if not user:
        logger.warning("Token for unknown user %s", user_data.user_id)
        return unauthorized_error("User not found")

    user_data.name = user.name
    user_data.email = user.email
    user_data.role = user.role.value if user.role else None
    return user_data
