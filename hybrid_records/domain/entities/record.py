"""A typed record read back from the generic record table."""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

T = TypeVar("T")


@dataclass
class Record(Generic[T]):
    """A stored document together with its tenancy and audit stamps.

    ``data`` holds the payload already deserialized into the shape the caller
    asked for. ``tenant_id`` is ``None`` for global records, visible to every
    tenant context. A non-null ``deleted_at`` marks the record as soft-deleted.
    """

    id: UUID
    type: str
    data: T
    created_at: datetime
    tenant_id: UUID | None = None
    created_by: UUID | None = None
    updated_at: datetime | None = None
    updated_by: UUID | None = None
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_global(self) -> bool:
        return self.tenant_id is None
