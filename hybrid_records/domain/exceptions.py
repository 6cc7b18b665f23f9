"""Domain-specific exceptions, framework-independent.

Store-level failures (duplicate keys, connectivity, timeouts) are deliberately
absent: they surface as the driver's / SQLAlchemy's own exceptions so callers can
apply the store's error classification directly.
"""


class InvalidArgumentError(ValueError):
    """Raised when a caller passes a malformed argument to a store operation."""

    def __init__(self, param_name: str, reason: str):
        self.param_name = param_name
        self.reason = reason
        super().__init__(f"Invalid argument '{param_name}': {reason}")


class MergeConflictError(ValueError):
    """Raised when filter parameters collide with reserved system parameter names."""

    def __init__(self, names: list[str] | tuple[str, ...]):
        self.names = tuple(sorted(names))
        super().__init__(
            "Filter parameter name(s) collide with reserved system parameters: "
            + ", ".join(self.names)
        )
