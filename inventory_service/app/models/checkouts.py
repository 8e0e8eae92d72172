import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from shared.core.database import Base
from .resources import ResourceCondition


class Checkout(Base):
    __tablename__ = "checkouts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    instance_id = Column(String(36), ForeignKey("resource_instances.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    checkout_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    expected_return_at = Column(DateTime(timezone=True), nullable=True)
    actual_return_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    return_notes = Column(Text, nullable=True)
    return_condition = Column(Enum(ResourceCondition, name="return_condition"), nullable=True)
    is_returned = Column(Boolean, nullable=False, default=False, index=True)

    instance = relationship("ResourceInstance")
