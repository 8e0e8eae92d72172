from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.database import get_db

from ..crud import resources_crud as crud
from ..schemas.resources_schemas import MAX_PAGE, MAX_PAGE_LIMIT
from ..schemas.search_schemas import SearchRequest, SearchResponse

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
def search_resources(
        q: Optional[str] = Query(None),
        page: int = Query(1, ge=1, le=MAX_PAGE),
        page_size: int = Query(20, ge=1, le=MAX_PAGE_LIMIT, alias="pageSize"),
        location_id: Optional[str] = Query(None, alias="locationId"),
        db: Session = Depends(get_db)):
    params = SearchRequest(q=q, page=page, page_size=page_size, location_id=location_id)
    return crud.search_resources(db, params)
