"""Abstract interface (port) for payload document serialization."""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class JsonConverter(ABC):
    """Port for turning payload objects into JSON text and back.

    The record store treats payloads as opaque strings up to this boundary,
    so implementations can be swapped without touching any SQL.
    """

    @abstractmethod
    def serialize(self, value: Any) -> str:
        """Serialize a payload object to a JSON document."""
        ...

    @abstractmethod
    def deserialize(self, text: str, data_type: type[T]) -> T:
        """Deserialize a JSON document into an instance of ``data_type``."""
        ...
