from .requests import Filter, GetRequest, InsertRequest, ListRequest, UpdateRequest

__all__ = [
    "Filter",
    "GetRequest",
    "InsertRequest",
    "ListRequest",
    "UpdateRequest",
]
