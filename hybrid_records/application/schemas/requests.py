"""Pydantic DTOs (Data Transfer Objects) for record store operations."""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from hybrid_records.domain.entities import SortBy, SortOrder

# Surrounding whitespace is stripped, so a blank value fails min_length.
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Filter(BaseModel):
    """Caller-supplied SQL fragment plus the named parameters it binds.

    The fragment is appended verbatim to the WHERE clause with ``AND``; refer
    to parameters with ``:name`` placeholders, e.g.
    ``Filter(query="data->>'make' = :make", parameters={"make": "Toyota"})``.
    """

    model_config = ConfigDict(frozen=True)

    query: NonBlankStr
    parameters: dict[str, Any] = Field(default_factory=dict)


class GetRequest(BaseModel):
    """Lookup of a single record by id, optionally narrowed to one type."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    type: NonBlankStr | None = None
    include_deleted: bool = False


class ListRequest(BaseModel):
    """Listing of one record type; page fields are only used by paged listings.

    Sort values are checked here: an unknown ``sort_by`` or ``sort_order``
    raises pydantic's ``ValidationError`` when the request is built, so the
    store's own ``InvalidArgumentError`` check only sees requests created with
    ``model_construct``.
    """

    model_config = ConfigDict(frozen=True)

    type: NonBlankStr = Field(..., examples=["car"])
    filter: Filter | None = None
    include_deleted: bool = False
    sort_by: SortBy = SortBy.CREATED
    sort_order: SortOrder = SortOrder.ASCENDING
    page_number: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)


class InsertRequest(BaseModel):
    """A new record. ``is_tenant_data=False`` stores it as a global record."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: UUID
    type: NonBlankStr = Field(..., examples=["car"])
    data: Any
    is_tenant_data: bool = True


class UpdateRequest(BaseModel):
    """Replacement payload for an existing record of the given type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: UUID
    type: NonBlankStr = Field(..., examples=["car"])
    data: Any
