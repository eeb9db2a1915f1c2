"""
Object serializer for state values and invocation payloads.

JSON on the wire; bytes pass through untouched; pydantic models are dumped
and validated through their own JSON schema.
"""

import json
from typing import Any, Optional, Type, TypeVar, Union, overload

from pydantic import BaseModel, ValidationError

from .core.exceptions import SerializationError

T = TypeVar("T")


def _json_default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class DefaultObjectSerializer:
    """
    Serializer used by DaprClient.

    Examples:
        >>> serializer = DefaultObjectSerializer()
        >>> serializer.serialize("existingState")
        b'"existingState"'
        >>> serializer.deserialize(b'"existingState"', str)
        'existingState'
        >>> serializer.deserialize(b"", str) is None
        True
    """

    content_type = "application/json"

    def serialize(self, obj: Any) -> Optional[bytes]:
        """
        Serialize ``obj`` to bytes.

        Raises:
            SerializationError: obj is not JSON serializable
        """
        if obj is None:
            return None
        if isinstance(obj, (bytes, bytearray)):
            return bytes(obj)
        if isinstance(obj, BaseModel):
            return obj.model_dump_json().encode("utf-8")
        try:
            return json.dumps(obj, default=_json_default).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize {type(obj).__name__}: {e}") from e

    @overload
    def deserialize(self, data: Optional[bytes], type_: Type[T]) -> Optional[T]: ...

    @overload
    def deserialize(self, data: Optional[bytes], type_: None = None) -> Any: ...

    def deserialize(self, data: Optional[bytes], type_: Optional[Type[Any]] = None) -> Any:
        """
        Deserialize ``data``; empty or missing data gives None.

        Args:
            data: Raw bytes (response body)
            type_: Expected type: bytes, a pydantic model class, or a JSON type
                   (str, int, float, bool, list, dict). None accepts any JSON.

        Raises:
            SerializationError: data is not valid JSON or does not match type_
        """
        if not data:
            return None
        if type_ is bytes:
            return bytes(data)

        if isinstance(type_, type) and issubclass(type_, BaseModel):
            try:
                return type_.model_validate_json(data)
            except ValidationError as e:
                raise SerializationError(f"Invalid {type_.__name__}: {e}") from e

        try:
            value = json.loads(data)
        except ValueError as e:
            raise SerializationError(f"Invalid JSON: {e}") from e

        if type_ is not None and value is not None and not _matches(value, type_):
            raise SerializationError(
                f"Expected {type_.__name__}, got {type(value).__name__}"
            )
        return value


def _matches(value: Any, type_: type) -> bool:
    # bool is an int subclass; JSON keeps them apart
    if type_ is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if type_ is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type_)


Serializable = Union[bytes, str, int, float, bool, list, dict, BaseModel, None]
