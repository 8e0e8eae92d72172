import logging
import secrets

import requests
from fastapi import Request, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, internal_error, unauthorized_error
from shared.models.user_login_session import LoginPlatform, UserLoginSession
from shared.models.users import Users
from ..schemas import authschema

logger = logging.getLogger(__name__)

PROVIDER_UNAVAILABLE = "Authentication provider unavailable"


def _provider_request(method: str, url: str, **kwargs) -> requests.Response:
    try:
        return requests.request(method, url, timeout=settings.WILDAPRICOT_TIMEOUT_SECONDS, **kwargs)
    except requests.RequestException as e:
        logger.exception("WildApricot request to %s failed", url)
        return error_response(PROVIDER_UNAVAILABLE, str(e), http_status=status.HTTP_502_BAD_GATEWAY)


#### WILDAPRICOT OAUTH ###

def build_authorize_url(redirect_uri: str, state: str = None) -> authschema.AuthorizeUrlResponse:
    state = state or secrets.token_urlsafe(16)
    prepared = requests.Request("GET", settings.WILDAPRICOT_AUTHORIZE_URL, params={
        "client_id": settings.WILDAPRICOT_CLIENT_ID,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": settings.WILDAPRICOT_SCOPE,
        "state": state,
    }).prepare()
    return authschema.AuthorizeUrlResponse(authorize_url=prepared.url, state=state)


def exchange_code(code: str, redirect_uri: str) -> str:
    response = _provider_request(
        "POST",
        settings.WILDAPRICOT_TOKEN_URL,
        data={
            "grant_type": "authorization_code",
            "code": code,
            "client_id": settings.WILDAPRICOT_CLIENT_ID,
            "redirect_uri": redirect_uri,
            "scope": settings.WILDAPRICOT_SCOPE,
        },
        auth=(settings.WILDAPRICOT_CLIENT_ID, settings.WILDAPRICOT_CLIENT_SECRET),
    )

    if response.status_code != 200:
        logger.warning("Code exchange rejected by WildApricot (%s)", response.status_code)
        return unauthorized_error("Invalid authorization code")

    access_token = response.json().get("access_token")
    if not access_token:
        return unauthorized_error("Invalid authorization code")
    return access_token


def map_profile(data: dict) -> authschema.ProviderProfile:
    external_id = data.get("Id") or data.get("id")
    name = f"{data.get('FirstName') or ''} {data.get('LastName') or ''}".strip() or data.get("DisplayName")
    email = data.get("Email")

    if not external_id or not email:
        return unauthorized_error("Provider profile is missing an id or email")

    try:
        return authschema.ProviderProfile(external_id=str(external_id), email=email, name=name)
    except ValidationError:
        logger.warning("WildApricot contact %s has an unusable email %r", external_id, email)
        return unauthorized_error("Provider profile has an invalid email")


def fetch_profile(access_token: str) -> authschema.ProviderProfile:
    url = f"{settings.WILDAPRICOT_API_BASE_URL}/accounts/{settings.WILDAPRICOT_ACCOUNT_ID}/contacts/me"
    response = _provider_request(
        "GET", url,
        headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
    )

    if response.status_code != 200:
        logger.warning("WildApricot rejected access token (%s)", response.status_code)
        return unauthorized_error("Invalid access token")

    return map_profile(response.json())


def upsert_user(db: Session, profile: authschema.ProviderProfile) -> Users:
    user = db.query(Users).filter(Users.external_id == profile.external_id).first()
    if not user:
        # accounts created before the contact id was recorded
        user = db.query(Users).filter(Users.email == profile.email).first()

    if user:
        user.external_id = profile.external_id
        user.email = profile.email
        if profile.name:
            user.name = profile.name
    else:
        user = Users(external_id=profile.external_id, email=profile.email, name=profile.name)
        db.add(user)

    db.flush()
    return user


def get_user_token(request: Request, db: Session, user: Users, platform: LoginPlatform) -> authschema.AuthenticationResponse:
    ua = request.headers.get("user-agent")
    session = UserLoginSession(
        user_id=user.id,
        platform=platform,
        ip_address=request.client.host if request.client else None,
        user_agent=ua[:255] if ua else None,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    db.refresh(user)

    token = auth.create_access_token({
        "user_id": str(user.id),
        "session_id": str(session.id),
    })

    logger.info("User %s signed in (session %s)", user.id, session.id)
    return authschema.AuthenticationResponse(
        access_token=token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=authschema.UserResponse.model_validate(user),
    )


def wildapricot_login(request: Request, db: Session, req: authschema.WildApricotLoginRequest):
    if req.access_token:
        access_token, platform = req.access_token, LoginPlatform.api
    else:
        access_token, platform = exchange_code(req.code, req.redirect_uri), LoginPlatform.portal

    profile = fetch_profile(access_token)

    try:
        user = upsert_user(db, profile)
        return get_user_token(request, db, user, platform)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to sign in WildApricot contact %s", profile.external_id)
        return internal_error("Failed to sign in", e)


def logout_user(db: Session, current_user: UserToken):
    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == current_user.session_id,
        UserLoginSession.user_id == current_user.user_id,
    ).first()

    if not session or not session.is_active:
        return unauthorized_error("Session has been logged out or is inactive")

    session.is_active = False
    db.commit()

    logger.info("User %s logged out (session %s)", current_user.user_id, session.id)
    return authschema.LogoutResponse(message="Logged out successfully")


def get_current_user(db: Session, current_user: UserToken) -> Users:
    user = db.query(Users).filter(Users.id == current_user.user_id).first()
    if not user:
        return unauthorized_error("User not found")
    return user
