"""Abstract repository interface (port) for the multi-tenant record store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar
from uuid import UUID

from hybrid_records.application.schemas import GetRequest, InsertRequest, ListRequest, UpdateRequest
from hybrid_records.domain.entities import PagedResponse, Record

T = TypeVar("T")


class RecordStore(ABC):
    """Port for record persistence, implemented in the infrastructure layer.

    Every operation is scoped by the tenant context the store was created
    with: a record is visible iff it is global or belongs to that tenant.
    Soft-deleted records are hidden from reads unless explicitly requested.
    """

    @abstractmethod
    async def insert(self, request: InsertRequest) -> int:
        """Persist a new record stamped with the current user and time.

        Raises the driver's integrity error when the id already exists.
        """
        ...

    @abstractmethod
    async def get(
        self, record: UUID | str | GetRequest, data_type: type[T] = Any
    ) -> Record[T] | None:
        """Retrieve a single visible record, or ``None`` when there is none."""
        ...

    @abstractmethod
    async def list(self, request: ListRequest, data_type: type[T] = Any) -> list[Record[T]]:
        """Retrieve every visible record of a type, ordered as requested."""
        ...

    @abstractmethod
    async def list_paged(
        self, request: ListRequest, data_type: type[T] = Any
    ) -> PagedResponse[T]:
        """Retrieve one page of a listing together with the total count."""
        ...

    @abstractmethod
    async def update(self, request: UpdateRequest) -> int:
        """Replace the payload of a visible record of the same type.

        A type mismatch or an invisible record updates nothing; returns the
        number of rows touched.
        """
        ...

    @abstractmethod
    async def delete(self, record_id: UUID) -> int:
        """Permanently remove a visible record, deleted or not."""
        ...

    @abstractmethod
    async def soft_delete(self, record_id: UUID) -> int:
        """Stamp a visible record as deleted without touching its payload."""
        ...

    @abstractmethod
    async def exists_async(self, record_id: UUID) -> bool:
        """True iff a visible, non-deleted record with this id exists."""
        ...

    @abstractmethod
    def exists(self, record_id: UUID) -> bool:
        """Blocking form of :meth:`exists_async` with identical semantics."""
        ...
