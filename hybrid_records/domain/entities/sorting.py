"""Sort keys and directions accepted by list operations."""

from enum import Enum


class SortBy(str, Enum):
    """Audit timestamp a listing is ordered by."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class SortOrder(str, Enum):
    """Direction of a listing."""

    ASCENDING = "asc"
    DESCENDING = "desc"
