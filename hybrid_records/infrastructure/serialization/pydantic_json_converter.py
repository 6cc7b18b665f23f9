"""Default JSON document codec built on pydantic's TypeAdapter."""

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

from hybrid_records.application.interfaces import JsonConverter

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(data_type: Any) -> TypeAdapter:
    return TypeAdapter(data_type)


class PydanticJsonConverter(JsonConverter):
    """Serializes pydantic models, dataclasses, TypedDicts and plain JSON values.

    Payloads are serialized by their runtime type and validated into the type
    the caller asks for on the way back, so a record stored from a dataclass
    can be read as a dict and vice versa.
    """

    def serialize(self, value: Any) -> str:
        return _adapter(type(value)).dump_json(value).decode("utf-8")

    def deserialize(self, text: str, data_type: type[T]) -> T:
        return _adapter(data_type).validate_json(text)
