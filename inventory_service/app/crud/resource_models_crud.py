import logging
from typing import List, Optional

from fastapi import Request
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import internal_error, validation_error
from ..models.resources import ResourceModel
from ..schemas.resource_models_schemas import ResourceModelCreate
from . import audit_crud

logger = logging.getLogger(__name__)

ENTITY_TYPE = "resource_model"


def get_resource_models(db: Session, search: Optional[str] = None) -> List[ResourceModel]:
    query = db.query(ResourceModel)

    if search:
        search_term = f"%{search.lower()}%"
        query = query.filter(or_(
            func.lower(ResourceModel.name).like(search_term),
            func.lower(ResourceModel.manufacturer).like(search_term),
            func.lower(ResourceModel.description).like(search_term),
        ))

    try:
        return query.order_by(ResourceModel.name.asc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch resource models")
        return internal_error("Failed to fetch resource models", e)


def create_resource_model(db: Session, model: ResourceModelCreate, current_user: UserToken, request: Request = None) -> ResourceModel:
    if not model.name:
        return validation_error("Name is required")

    db_model = ResourceModel(
        name=model.name,
        manufacturer=model.manufacturer,
        description=model.description,
        model_number=model.model_number,
        created_by_id=current_user.user_id,
    )

    try:
        db.add(db_model)
        db.flush()
        audit_crud.record_audit(
            db, audit_crud.ACTION_CREATE, ENTITY_TYPE, db_model.id, current_user.user_id,
            after=audit_crud.snapshot(db_model), request=request)
        db.commit()
        db.refresh(db_model)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create resource model %r", model.name)
        return internal_error("Failed to create resource model", e)

    logger.info("Resource model %s (%s) created by %s", db_model.id, db_model.name, current_user.user_id)
    return db_model
