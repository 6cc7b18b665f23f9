from .record import Record
from .paging import PagedResponse
from .sorting import SortBy, SortOrder

__all__ = [
    "Record",
    "PagedResponse",
    "SortBy",
    "SortOrder",
]
