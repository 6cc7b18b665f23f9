"""Default context providers for a single request scope."""

from datetime import datetime, timezone
from uuid import UUID

from hybrid_records.application.interfaces import CurrentDateTime, TenantContext, UserContext


class StaticTenantContext(TenantContext):
    """Tenant fixed for the lifetime of one request scope."""

    def __init__(self, tenant_id: UUID | None = None):
        self._tenant_id = tenant_id

    @property
    def tenant_id(self) -> UUID | None:
        return self._tenant_id


class StaticUserContext(UserContext):
    """User fixed for the lifetime of one request scope."""

    def __init__(self, user_id: UUID | None = None):
        self._user_id = user_id

    @property
    def user_id(self) -> UUID | None:
        return self._user_id


class SystemClock(CurrentDateTime):
    def utc_now(self) -> datetime:
        return datetime.now(timezone.utc)
