from .tags import Tag, TagCategory
from .locations import Location
from .resources import (
    ResourceCondition,
    ResourceInstance,
    ResourceInstanceTag,
    ResourceModel,
    ResourceModelTag,
)
from .images import Image, ImageEntityType
from .checkouts import Checkout
from .audit_logs import AuditLog
