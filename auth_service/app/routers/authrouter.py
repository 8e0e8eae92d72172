from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..schemas import authschema
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Inventory Auth"])


@router.get("/wildapricot/authorize-url", response_model=authschema.AuthorizeUrlResponse)
def authorize_url(redirect_uri: str = Query(...)):
    return authservices.build_authorize_url(redirect_uri)


@router.post("/wildapricot", response_model=authschema.AuthenticationResponse)
def wildapricot_login(
        req: authschema.WildApricotLoginRequest,
        request: Request,
        db: Session = Depends(get_db)):
    return authservices.wildapricot_login(request, db, req)


@router.post("/logout", response_model=authschema.LogoutResponse)
def logout(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.logout_user(db, current_user)


@router.get("/me", response_model=authschema.UserResponse)
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.get_current_user(db, current_user)
