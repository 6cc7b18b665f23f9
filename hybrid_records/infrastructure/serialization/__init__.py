from .pydantic_json_converter import PydanticJsonConverter

__all__ = ["PydanticJsonConverter"]
