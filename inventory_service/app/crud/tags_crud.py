import logging
from typing import List

from fastapi import Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import internal_error, not_found_error, validation_error
from ..models.tags import DEFAULT_TAG_COLOR, Tag, TagCategory
from ..schemas.tags_schemas import TagCreate, TagUpdate
from . import audit_crud

logger = logging.getLogger(__name__)

ENTITY_TYPE = "tag"
DUPLICATE_TAG = "Tag already exists in this category"


def get_tags(db: Session) -> List[Tag]:
    try:
        return (
            db.query(Tag)
            .join(TagCategory, Tag.category_id == TagCategory.id)
            .order_by(TagCategory.name.asc(), Tag.name.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch tags")
        return internal_error("Failed to fetch tags", e)


def get_tag_categories(db: Session) -> List[TagCategory]:
    try:
        return db.query(TagCategory).order_by(TagCategory.name.asc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch tag categories")
        return internal_error("Failed to fetch tag categories", e)


def get_tag_by_id(db: Session, tag_id: str):
    return db.query(Tag).filter(Tag.id == tag_id).first()


def _category_exists(db: Session, category_id: str) -> bool:
    return db.query(TagCategory.id).filter(TagCategory.id == category_id).first() is not None


def _name_taken(db: Session, category_id: str, name: str, exclude_id: str = None) -> bool:
    query = db.query(Tag.id).filter(Tag.category_id == category_id, Tag.name == name)
    if exclude_id:
        query = query.filter(Tag.id != exclude_id)
    return query.first() is not None


def create_tag(db: Session, tag: TagCreate, current_user: UserToken, request: Request = None) -> Tag:
    if not tag.name or not tag.category_id:
        return validation_error("Name and category are required")

    if not _category_exists(db, tag.category_id):
        return validation_error("Invalid category")

    if _name_taken(db, tag.category_id, tag.name):
        return validation_error(DUPLICATE_TAG)

    db_tag = Tag(
        name=tag.name,
        category_id=tag.category_id,
        description=tag.description,
        color=tag.color or DEFAULT_TAG_COLOR,
        created_by_id=current_user.user_id,
    )

    try:
        db.add(db_tag)
        db.flush()
        audit_crud.record_audit(
            db, audit_crud.ACTION_CREATE, ENTITY_TYPE, db_tag.id, current_user.user_id,
            after=audit_crud.snapshot(db_tag), request=request)
        db.commit()
        db.refresh(db_tag)
    except IntegrityError:
        # lost a race with a concurrent insert of the same name
        db.rollback()
        return validation_error(DUPLICATE_TAG)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create tag %r", tag.name)
        return internal_error("Failed to create tag", e)

    logger.info("Tag %s (%s) created by %s", db_tag.id, db_tag.name, current_user.user_id)
    return db_tag


def update_tag(db: Session, tag_id: str, tag: TagUpdate, current_user: UserToken, request: Request = None) -> Tag:
    db_tag = get_tag_by_id(db, tag_id)
    if not db_tag:
        return not_found_error("Tag not found")

    update_data = tag.model_dump(exclude_unset=True)

    new_category_id = update_data.get("category_id")
    if new_category_id and not _category_exists(db, new_category_id):
        return validation_error("Invalid category")

    target_name = update_data.get("name") or db_tag.name
    target_category = new_category_id or db_tag.category_id
    if _name_taken(db, target_category, target_name, exclude_id=db_tag.id):
        return validation_error(DUPLICATE_TAG)

    before = audit_crud.snapshot(db_tag)

    try:
        if update_data.get("name"):
            db_tag.name = update_data["name"]
        if new_category_id:
            db_tag.category_id = new_category_id
        for key in ("description", "color"):
            if key in update_data:
                setattr(db_tag, key, update_data[key])

        audit_crud.record_audit(
            db, audit_crud.ACTION_UPDATE, ENTITY_TYPE, db_tag.id, current_user.user_id,
            before=before, after=audit_crud.snapshot(db_tag), request=request)
        db.commit()
        db.refresh(db_tag)
    except IntegrityError:
        db.rollback()
        return validation_error(DUPLICATE_TAG)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update tag %s", tag_id)
        return internal_error("Failed to update tag", e)

    logger.info("Tag %s updated by %s", tag_id, current_user.user_id)
    return db_tag
