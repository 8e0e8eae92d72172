import json
import logging
from typing import Any, Optional

from fastapi import Request
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from ..models.audit_logs import AuditLog

logger = logging.getLogger(__name__)

ACTION_CREATE = "CREATE"
ACTION_UPDATE = "UPDATE"


def snapshot(obj) -> dict:
    """Column values of an ORM row, keyed by attribute name."""
    if obj is None:
        return None
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


def _dumps(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, default=str, sort_keys=True)


def record_audit(
    db: Session,
    action: str,
    entity_type: str,
    entity_id: str,
    user_id: Optional[str],
    before: Optional[dict] = None,
    after: Optional[dict] = None,
    request: Optional[Request] = None,
    metadata: Optional[dict] = None,
) -> AuditLog:
    """Stage an audit row on ``db``; committed together with the change it describes."""
    entry = AuditLog(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
        changes_before=_dumps(before),
        changes_after=_dumps(after),
        metadata_json=_dumps(metadata),
    )
    if request is not None:
        entry.ip_address = request.client.host if request.client else None
        user_agent = request.headers.get("user-agent")
        entry.user_agent = user_agent[:500] if user_agent else None

    db.add(entry)
    logger.debug("Audit %s %s %s by %s", action, entity_type, entity_id, user_id)
    return entry
