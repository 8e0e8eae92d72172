from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class ResourceModelCreate(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=255)
    manufacturer: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    model_number: Optional[str] = Field(None, max_length=255)


class ResourceModelOut(EmptyStringModel):
    id: str
    name: str
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    model_number: Optional[str] = None
    specifications: Optional[str] = None
    image_url: Optional[str] = None
    documentation_url: Optional[str] = None
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
