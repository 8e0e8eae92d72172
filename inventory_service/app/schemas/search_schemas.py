from typing import List, Optional

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .resources_schemas import ResourceOut


class SearchRequest(EmptyStringModel):
    q: Optional[str] = None
    page: int = 1
    page_size: int = 20
    location_id: Optional[str] = None


class SearchResponse(EmptyStringModel):
    instances: List[ResourceOut]
    # length of this page, not the number of matches
    total: int
    page: int
    page_size: int
