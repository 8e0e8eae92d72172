import logging
from typing import List, Optional

from fastapi import Request
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import internal_error, not_found_error, validation_error
from ..models.locations import Location
from ..models.resources import ResourceCondition, ResourceInstance, ResourceInstanceTag, ResourceModel
from ..models.tags import Tag
from ..schemas.resources_schemas import MAX_OFFSET, MAX_PAGE_LIMIT, ResourceCreate, ResourceRequest, ResourceUpdate
from ..schemas.search_schemas import SearchRequest
from . import audit_crud

logger = logging.getLogger(__name__)

ENTITY_TYPE = "resource_instance"


def _search_filter(search: str, include_location: bool = True):
    term = f"%{search.lower()}%"
    columns = [ResourceModel.name, ResourceModel.description, ResourceModel.manufacturer]
    if include_location:
        columns += [Location.name, Location.path]
    return or_(*[func.lower(column).like(term) for column in columns])


def _unique_ids(ids: Optional[List[str]]) -> List[str]:
    return list(dict.fromkeys(ids or []))


def _validate_tags(db: Session, tag_ids: List[str]):
    if not tag_ids:
        return
    found = db.query(func.count(Tag.id)).filter(Tag.id.in_(tag_ids)).scalar()
    if found != len(tag_ids):
        logger.warning("Rejected unknown tag id(s) in %s", tag_ids)
        return validation_error("Invalid tag")


def _tag_ids_of(db: Session, instance_id: str) -> List[str]:
    rows = db.query(ResourceInstanceTag.tag_id).filter(ResourceInstanceTag.instance_id == instance_id).all()
    return sorted(row.tag_id for row in rows)


def get_resource_by_id(db: Session, resource_id: str) -> Optional[ResourceInstance]:
    return db.query(ResourceInstance).filter(ResourceInstance.id == resource_id).first()


def get_resources(db: Session, params: ResourceRequest) -> dict:
    if params.limit < 1 or params.limit > MAX_PAGE_LIMIT:
        return validation_error(f"Limit must be between 1 and {MAX_PAGE_LIMIT}", error="Invalid limit parameter")

    if params.offset < 0:
        return validation_error("Offset must be 0 or greater", error="Invalid offset parameter")

    if params.offset > MAX_OFFSET:
        return validation_error(f"Offset must not exceed {MAX_OFFSET}", error="Invalid offset parameter")

    try:
        query = (
            db.query(ResourceInstance)
            .outerjoin(ResourceModel, ResourceInstance.model_id == ResourceModel.id)
            .outerjoin(Location, ResourceInstance.location_id == Location.id)
        )
        if params.search:
            query = query.filter(_search_filter(params.search))

        total = query.count()
        resources = (
            query.options(selectinload(ResourceInstance.tags))
            .order_by(ResourceInstance.created_at.desc(), ResourceInstance.id.asc())
            .offset(params.offset)
            .limit(params.limit)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch resources")
        return internal_error("Failed to fetch resources", e)

    return {
        "resources": resources,
        "total": total,
        "limit": params.limit,
        "offset": params.offset,
        "has_more": params.offset + len(resources) < total,
    }


def create_resource(db: Session, resource: ResourceCreate, current_user: UserToken, request: Request = None) -> ResourceInstance:
    if not resource.model_id or not resource.location_id:
        return validation_error("Model and location are required")

    if not db.query(ResourceModel.id).filter(ResourceModel.id == resource.model_id).first():
        return validation_error("Invalid resource model")

    if not db.query(Location.id).filter(Location.id == resource.location_id).first():
        return validation_error("Invalid location")

    tag_ids = _unique_ids(resource.tag_ids)
    _validate_tags(db, tag_ids)

    db_resource = ResourceInstance(
        model_id=resource.model_id,
        location_id=resource.location_id,
        serial_number=resource.serial_number,
        quantity=resource.quantity or 1,
        condition=resource.condition or ResourceCondition.good,
        notes=resource.notes,
        created_by_id=current_user.user_id,
    )
    db_resource.tag_links = [ResourceInstanceTag(tag_id=tag_id) for tag_id in tag_ids]

    try:
        db.add(db_resource)
        db.flush()
        after = audit_crud.snapshot(db_resource)
        after["tag_ids"] = sorted(tag_ids)
        audit_crud.record_audit(
            db, audit_crud.ACTION_CREATE, ENTITY_TYPE, db_resource.id, current_user.user_id,
            after=after, request=request)
        db.commit()
        db.refresh(db_resource)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create resource for model %s", resource.model_id)
        return internal_error("Failed to create resource", e)

    logger.info("Resource %s created at location %s by %s",
                db_resource.id, db_resource.location_id, current_user.user_id)
    return db_resource


def update_resource(db: Session, resource_id: str, resource: ResourceUpdate, current_user: UserToken, request: Request = None) -> ResourceInstance:
    db_resource = get_resource_by_id(db, resource_id)
    if not db_resource:
        return not_found_error("Resource not found")

    update_data = resource.model_dump(exclude_unset=True)

    if "location_id" in update_data:
        location_id = update_data["location_id"]
        if not location_id or not db.query(Location.id).filter(Location.id == location_id).first():
            return validation_error("Invalid location")

    replace_tags = "tag_ids" in update_data
    new_tag_ids = _unique_ids(update_data.get("tag_ids"))
    if replace_tags:
        _validate_tags(db, new_tag_ids)

    before = audit_crud.snapshot(db_resource)
    before["tag_ids"] = _tag_ids_of(db, resource_id)

    try:
        for key in ("serial_number", "location_id"):
            if key in update_data:
                setattr(db_resource, key, update_data[key])

        if replace_tags:
            db.query(ResourceInstanceTag).filter(
                ResourceInstanceTag.instance_id == resource_id
            ).delete(synchronize_session=False)
            db.flush()
            for tag_id in new_tag_ids:
                db.add(ResourceInstanceTag(instance_id=resource_id, tag_id=tag_id))
            db.flush()

        after = audit_crud.snapshot(db_resource)
        after["tag_ids"] = sorted(new_tag_ids) if replace_tags else before["tag_ids"]
        audit_crud.record_audit(
            db, audit_crud.ACTION_UPDATE, ENTITY_TYPE, resource_id, current_user.user_id,
            before=before, after=after, request=request)
        db.commit()
        db.refresh(db_resource)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update resource %s", resource_id)
        return internal_error("Failed to update resource", e)

    logger.info("Resource %s updated by %s", resource_id, current_user.user_id)
    return db_resource


def search_resources(db: Session, params: SearchRequest) -> dict:
    q, page, page_size = params.q, params.page, params.page_size
    try:
        query = db.query(ResourceInstance).outerjoin(
            ResourceModel, ResourceInstance.model_id == ResourceModel.id)
        if q:
            query = query.filter(_search_filter(q, include_location=False))
        if params.location_id:
            query = query.filter(ResourceInstance.location_id == params.location_id)

        instances = (
            query.options(selectinload(ResourceInstance.tags))
            .order_by(ResourceInstance.created_at.desc(), ResourceInstance.id.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Search failed for %r", q)
        return internal_error("Failed to search resources", e)

    return {
        "instances": instances,
        # page length, not the number of matches
        "total": len(instances),
        "page": page,
        "page_size": page_size,
    }
