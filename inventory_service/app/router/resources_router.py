from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken

from ..crud import resources_crud as crud
from ..schemas.resources_schemas import (
    DEFAULT_PAGE_LIMIT,
    ResourceCreate,
    ResourceListResponse,
    ResourceOut,
    ResourceRequest,
    ResourceUpdate,
)

router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.get("", response_model=ResourceListResponse)
def get_resources(
        search: Optional[str] = Query(None),
        limit: int = Query(DEFAULT_PAGE_LIMIT),
        offset: int = Query(0),
        db: Session = Depends(get_db)):
    # bounds are checked in crud so they report their own error labels
    params = ResourceRequest(search=search, limit=limit, offset=offset)
    return crud.get_resources(db, params)


@router.post("", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(
        resource: ResourceCreate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.create_resource(db, resource, current_user, request)


@router.patch("/{resource_id}", response_model=ResourceOut)
def update_resource(
        resource_id: str,
        resource: ResourceUpdate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.update_resource(db, resource_id, resource, current_user, request)
