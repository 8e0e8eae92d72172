from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..models.resources import ResourceCondition
from .locations_schemas import LocationOut
from .resource_models_schemas import ResourceModelOut
from .tags_schemas import TagOut

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100
# keeps OFFSET inside a 32-bit signed integer on every backend
MAX_OFFSET = 2_147_483_647
MAX_PAGE = MAX_OFFSET // MAX_PAGE_LIMIT


class ResourceCreate(EmptyStringModel):
    model_id: Optional[str] = None
    location_id: Optional[str] = None
    serial_number: Optional[str] = Field(None, max_length=255)
    tag_ids: Optional[List[str]] = None
    quantity: Optional[int] = Field(None, ge=1)
    condition: Optional[ResourceCondition] = None
    notes: Optional[str] = None


class ResourceUpdate(EmptyStringModel):
    serial_number: Optional[str] = Field(None, max_length=255)
    location_id: Optional[str] = None
    tag_ids: Optional[List[str]] = None


class ResourceOut(EmptyStringModel):
    id: str
    model_id: str
    location_id: str
    serial_number: Optional[str] = None
    asset_tag: Optional[str] = None
    quantity: int = 1
    condition: Optional[ResourceCondition] = None
    notes: Optional[str] = None
    purchase_date: Optional[datetime] = None
    purchase_price: Optional[int] = None
    is_checkout_enabled: bool = False
    is_available: bool = True
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model: Optional[ResourceModelOut] = None
    location: Optional[LocationOut] = None
    tags: List[TagOut] = []


class ResourceRequest(EmptyStringModel):
    search: Optional[str] = None
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0


class ResourceListResponse(EmptyStringModel):
    resources: List[ResourceOut]
    total: int
    limit: int
    offset: int
    has_more: bool
