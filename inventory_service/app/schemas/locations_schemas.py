from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .tags_schemas import TagSummary


class LocationBase(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=255)
    location_type_tag_id: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[str] = None


class LocationCreate(LocationBase):
    pass


class LocationUpdate(LocationBase):
    pass


class LocationOut(EmptyStringModel):
    id: str
    name: str
    location_type_tag_id: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[str] = None
    path: str
    path_ids: str
    sort_order: Optional[int] = 0
    image_url: Optional[str] = None
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    location_type_tag: Optional[TagSummary] = None
