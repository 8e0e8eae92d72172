import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text, func

from shared.core.database import Base


class ImageEntityType(str, enum.Enum):
    location = "location"
    tag = "tag"
    resource_model = "resource_model"
    resource_instance = "resource_instance"


class Image(Base):
    """Image attached to any one of the entity kinds in ``ImageEntityType``."""

    __tablename__ = "images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    url = Column(String(500), nullable=False)
    s3_key = Column(String(500), nullable=False, unique=True)
    s3_bucket = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False)  # bytes
    mime_type = Column(String(100), nullable=False)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    caption = Column(Text, nullable=True)
    alt_text = Column(String(255), nullable=True)
    entity_type = Column(Enum(ImageEntityType, name="image_entity_type"), nullable=False)
    entity_id = Column(String(36), nullable=False)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    uploaded_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        Index("entity_idx", "entity_type", "entity_id"),
    )
