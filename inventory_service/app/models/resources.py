import enum
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from shared.core.database import Base


class ResourceCondition(str, enum.Enum):
    excellent = "excellent"
    good = "good"
    fair = "fair"
    poor = "poor"
    broken = "broken"


class ResourceModel(Base):
    __tablename__ = "resource_models"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    manufacturer = Column(String(255), nullable=True, index=True)
    model_number = Column(String(255), nullable=True)
    specifications = Column(Text, nullable=True)  # JSON string
    image_url = Column(String(500), nullable=True)
    documentation_url = Column(String(500), nullable=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now(), nullable=False)

    instances = relationship("ResourceInstance", back_populates="model")
    tags = relationship("Tag", secondary="resource_model_tags", viewonly=True)


class ResourceInstance(Base):
    __tablename__ = "resource_instances"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    model_id = Column(String(36), ForeignKey("resource_models.id"), nullable=False, index=True)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=False, index=True)
    serial_number = Column(String(255), nullable=True, index=True)
    asset_tag = Column(String(255), nullable=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    condition = Column(Enum(ResourceCondition, name="resource_condition"), default=ResourceCondition.good)
    notes = Column(Text, nullable=True)
    purchase_date = Column(DateTime(timezone=True), nullable=True)
    purchase_price = Column(Integer, nullable=True)  # cents
    is_checkout_enabled = Column(Boolean, nullable=False, default=False)
    is_available = Column(Boolean, nullable=False, default=True, index=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now(), nullable=False)

    model = relationship("ResourceModel", back_populates="instances", lazy="joined")
    location = relationship("Location", back_populates="resource_instances", lazy="joined")
    tag_links = relationship(
        "ResourceInstanceTag",
        back_populates="instance",
        cascade="all, delete-orphan",
    )
    tags = relationship(
        "Tag",
        secondary="resource_instance_tags",
        viewonly=True,
        order_by="Tag.name",
    )


class ResourceModelTag(Base):
    __tablename__ = "resource_model_tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    model_id = Column(String(36), ForeignKey("resource_models.id"), nullable=False, index=True)
    tag_id = Column(String(36), ForeignKey("tags.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("model_id", "tag_id", name="unique_model_tag"),
    )


class ResourceInstanceTag(Base):
    __tablename__ = "resource_instance_tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    instance_id = Column(String(36), ForeignKey("resource_instances.id"), nullable=False, index=True)
    tag_id = Column(String(36), ForeignKey("tags.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    instance = relationship("ResourceInstance", back_populates="tag_links")
    tag = relationship("Tag")

    __table_args__ = (
        UniqueConstraint("instance_id", "tag_id", name="unique_instance_tag"),
    )
