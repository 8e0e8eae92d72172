import logging
import uuid
from typing import List, Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import internal_error, not_found_error, validation_error
from ..models.locations import Location
from ..models.tags import Tag
from ..schemas.locations_schemas import LocationCreate, LocationUpdate
from . import audit_crud
from .location_paths import creates_cycle, join_path, rebase_path

logger = logging.getLogger(__name__)

ENTITY_TYPE = "location"


def get_locations(db: Session) -> List[Location]:
    try:
        return db.query(Location).order_by(Location.path.asc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch locations")
        return internal_error("Failed to fetch locations", e)


def get_location_by_id(db: Session, location_id: str) -> Optional[Location]:
    return db.query(Location).filter(Location.id == location_id).first()


def _tag_exists(db: Session, tag_id: str) -> bool:
    return db.query(Tag.id).filter(Tag.id == tag_id).first() is not None


def _parent_id_of(db: Session, location_id: str) -> Optional[str]:
    return db.query(Location.parent_id).filter(Location.id == location_id).scalar()


def cascade_paths(db: Session, parent: Location, recursive: bool = False) -> int:
    """Rewrite stored paths beneath ``parent`` after its own paths changed.

    Each child keeps the leaf of its existing stored path and is re-rooted
    under the parent's new ``path`` / ``path_ids``. Only direct children are
    touched unless ``recursive`` is set; deeper descendants otherwise keep
    their old prefix. Returns the number of rows rewritten.
    """
    rewritten = 0
    pending = [parent]
    while pending:
        current = pending.pop()
        children = db.query(Location).filter(Location.parent_id == current.id).all()
        for child in children:
            child.path = rebase_path(current.path, child.path)
            child.path_ids = rebase_path(current.path_ids, child.path_ids)
            rewritten += 1
            if recursive:
                pending.append(child)
    return rewritten


def create_location(db: Session, location: LocationCreate, current_user: UserToken, request: Request = None) -> Location:
    if not location.name or not location.location_type_tag_id:
        return validation_error("Name and location type are required")

    if not _tag_exists(db, location.location_type_tag_id):
        return validation_error("Invalid location type tag")

    parent = None
    if location.parent_id:
        parent = get_location_by_id(db, location.parent_id)
        if not parent:
            return validation_error("Parent location not found")

    new_id = str(uuid.uuid4())
    db_location = Location(
        id=new_id,
        name=location.name,
        location_type_tag_id=location.location_type_tag_id,
        description=location.description,
        parent_id=parent.id if parent else None,
        path=join_path(parent.path if parent else None, location.name),
        path_ids=join_path(parent.path_ids if parent else None, new_id),
        sort_order=0,
        created_by_id=current_user.user_id,
    )

    try:
        db.add(db_location)
        audit_crud.record_audit(
            db, audit_crud.ACTION_CREATE, ENTITY_TYPE, new_id, current_user.user_id,
            after=audit_crud.snapshot(db_location), request=request)
        db.commit()
        db.refresh(db_location)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create location %r", location.name)
        return internal_error("Failed to create location", e)

    logger.info("Location %s created at %s by %s", new_id, db_location.path, current_user.user_id)
    return db_location


def update_location(db: Session, location_id: str, location: LocationUpdate, current_user: UserToken, request: Request = None) -> Location:
    db_location = get_location_by_id(db, location_id)
    if not db_location:
        return not_found_error("Location not found")

    update_data = location.model_dump(exclude_unset=True)

    new_tag_id = update_data.get("location_type_tag_id")
    if new_tag_id and not _tag_exists(db, new_tag_id):
        return validation_error("Invalid location type tag")

    new_name = update_data.get("name")
    name_changed = bool(new_name) and new_name != db_location.name

    parent_changed = "parent_id" in update_data and update_data["parent_id"] != db_location.parent_id
    new_parent = None
    if parent_changed and update_data["parent_id"]:
        new_parent = get_location_by_id(db, update_data["parent_id"])
        if not new_parent:
            return validation_error("Parent location not found")
        if creates_cycle(db_location.id, new_parent.id, lambda lid: _parent_id_of(db, lid)):
            return validation_error("Cannot move a location beneath itself")

    before = audit_crud.snapshot(db_location)

    try:
        if new_name:
            db_location.name = new_name
        if new_tag_id:
            db_location.location_type_tag_id = new_tag_id
        if "description" in update_data:
            db_location.description = update_data["description"]

        if name_changed or parent_changed:
            if parent_changed:
                db_location.parent_id = new_parent.id if new_parent else None
                parent = new_parent
            elif db_location.parent_id:
                parent = get_location_by_id(db, db_location.parent_id)
            else:
                parent = None

            db_location.path = join_path(parent.path if parent else None, db_location.name)
            if parent_changed:
                db_location.path_ids = join_path(parent.path_ids if parent else None, db_location.id)

            rewritten = cascade_paths(db, db_location, recursive=settings.LOCATION_RECURSIVE_CASCADE)
            logger.info("Location %s now at %s; rewrote %d descendant path(s)",
                        location_id, db_location.path, rewritten)

        audit_crud.record_audit(
            db, audit_crud.ACTION_UPDATE, ENTITY_TYPE, location_id, current_user.user_id,
            before=before, after=audit_crud.snapshot(db_location), request=request)
        db.commit()
        db.refresh(db_location)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update location %s", location_id)
        return internal_error("Failed to update location", e)

    return db_location
