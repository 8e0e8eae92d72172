from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken

from ..crud import resource_models_crud as crud
from ..schemas.resource_models_schemas import ResourceModelCreate, ResourceModelOut

router = APIRouter(prefix="/api/resource-models", tags=["resource-models"])


@router.get("", response_model=List[ResourceModelOut])
def get_resource_models(search: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return crud.get_resource_models(db, search)


@router.post("", response_model=ResourceModelOut, status_code=status.HTTP_201_CREATED)
def create_resource_model(
        model: ResourceModelCreate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.create_resource_model(db, model, current_user, request)
