from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class TagCategoryOut(EmptyStringModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None


class TagBase(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=100)
    category_id: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class TagCreate(TagBase):
    pass


class TagUpdate(TagBase):
    pass


class TagSummary(EmptyStringModel):
    id: str
    category_id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    image_url: Optional[str] = None
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None


class TagOut(TagSummary):
    category: Optional[TagCategoryOut] = None
