from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken

from ..crud import tags_crud as crud
from ..schemas.tags_schemas import TagCategoryOut, TagCreate, TagOut, TagUpdate

router = APIRouter(prefix="/api/tags", tags=["tags"])

# categories are read-only over the API; they come from the seed script
category_router = APIRouter(prefix="/api/tag-categories", tags=["tags"])


@router.get("", response_model=List[TagOut])
def get_tags(db: Session = Depends(get_db)):
    return crud.get_tags(db)


@router.post("", response_model=TagOut, status_code=status.HTTP_201_CREATED)
def create_tag(
        tag: TagCreate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.create_tag(db, tag, current_user, request)


@router.patch("/{tag_id}", response_model=TagOut)
def update_tag(
        tag_id: str,
        tag: TagUpdate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.update_tag(db, tag_id, tag, current_user, request)


@category_router.get("", response_model=List[TagCategoryOut])
def get_tag_categories(db: Session = Depends(get_db)):
    return crud.get_tag_categories(db)
