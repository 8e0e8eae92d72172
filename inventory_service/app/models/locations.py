import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from shared.core.database import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    location_type_tag_id = Column(String(36), ForeignKey("tags.id"), nullable=True, index=True)
    description = Column(Text, nullable=True)
    parent_id = Column(String(36), ForeignKey("locations.id"), nullable=True, index=True)
    path = Column(String(1000), nullable=False)  # e.g. "/Woodshop/Zone A/Cabinet 1"
    path_ids = Column(String(1000), nullable=False)  # e.g. "/id1/id2/id3"
    sort_order = Column(Integer, default=0)
    image_url = Column(String(500), nullable=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now(), nullable=False)

    parent = relationship("Location", remote_side=[id], back_populates="children")
    children = relationship("Location", back_populates="parent")
    location_type_tag = relationship("Tag", lazy="joined")
    resource_instances = relationship("ResourceInstance", back_populates="location")
