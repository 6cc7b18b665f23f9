"""Abstract interface (port) for the lifecycle of the backing record table."""

from abc import ABC, abstractmethod


class SchemaManager(ABC):
    """Creates and drops the record table. Both operations are idempotent."""

    @abstractmethod
    async def init(self) -> None:
        """Create the table and its indexes unless the table already exists."""
        ...

    @abstractmethod
    async def drop(self) -> None:
        """Drop the table if it exists."""
        ...
