"""Abstract interfaces (ports) for the ambient context of a store operation."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID


class TenantContext(ABC):
    """Resolves the tenant the current operation runs on behalf of."""

    @property
    @abstractmethod
    def tenant_id(self) -> UUID | None:
        """Current tenant, or ``None`` when only global records are visible."""
        ...


class UserContext(ABC):
    """Resolves the user stamped into created/updated/deleted audit columns."""

    @property
    @abstractmethod
    def user_id(self) -> UUID | None:
        ...


class CurrentDateTime(ABC):
    """Clock used for every audit timestamp."""

    @abstractmethod
    def utc_now(self) -> datetime:
        ...
