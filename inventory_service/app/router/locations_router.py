from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken

from ..crud import locations_crud as crud
from ..schemas.locations_schemas import LocationCreate, LocationOut, LocationUpdate

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.get("", response_model=List[LocationOut])
def get_locations(db: Session = Depends(get_db)):
    return crud.get_locations(db)


@router.post("", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
def create_location(
        location: LocationCreate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.create_location(db, location, current_user, request)


@router.patch("/{location_id}", response_model=LocationOut)
def update_location(
        location_id: str,
        location: LocationUpdate,
        request: Request,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.update_location(db, location_id, location, current_user, request)
