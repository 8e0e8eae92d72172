import uuid

from sqlalchemy import Column, DateTime, Index, String, Text, func

from shared.core.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    action = Column(String(100), nullable=False, index=True)  # CREATE / UPDATE
    entity_type = Column(String(100), nullable=False)  # e.g. "location"
    entity_id = Column(String(36), nullable=False)
    user_id = Column(String(36), nullable=True, index=True)
    changes_before = Column(Text, nullable=True)  # JSON snapshot
    changes_after = Column(Text, nullable=True)  # JSON snapshot
    metadata_json = Column("metadata", Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index("audit_entity_idx", "entity_type", "entity_id"),
    )
