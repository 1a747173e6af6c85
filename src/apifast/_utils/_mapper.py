import json
import types
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..models.errors import DecodeError


def is_supported_destination(destination: Any) -> bool:
    """Check whether ``destination`` can receive a decoded JSON body.

    Types (including generic aliases such as ``list[Item]``) are decoded into
    a new value; ``dict``, ``list`` and pydantic model instances are filled in
    place.
    """
    if isinstance(destination, BaseModel):
        return not destination.model_config.get("frozen", False)
    if isinstance(destination, (dict, list)):
        return True
    if isinstance(destination, (type, types.UnionType)):
        return True
    return hasattr(destination, "__origin__")


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _loads(source: bytes) -> Any:
    try:
        return json.loads(source)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"response body is not valid JSON: {e}", source) from e


def map_result(source: bytes, destination: Any) -> Any:
    """Decode the JSON ``source`` into ``destination``.

    Returns:
        The decoded value. For in-place destinations this is the destination
        object itself.

    Raises:
        DecodeError: The body is not JSON or does not match the destination.
    """
    try:
        if isinstance(destination, BaseModel):
            parsed = type(destination).model_validate_json(source)
            for name in type(destination).model_fields:
                setattr(destination, name, getattr(parsed, name))
            return destination

        if isinstance(destination, dict):
            decoded = _loads(source)
            if not isinstance(decoded, dict):
                raise DecodeError(
                    f"expected a JSON object, got {type(decoded).__name__}", source
                )
            destination.clear()
            destination.update(decoded)
            return destination

        if isinstance(destination, list):
            decoded = _loads(source)
            if not isinstance(decoded, list):
                raise DecodeError(
                    f"expected a JSON array, got {type(decoded).__name__}", source
                )
            destination.clear()
            destination.extend(decoded)
            return destination

        return _adapter(destination).validate_json(source)
    except ValidationError as e:
        raise DecodeError(
            f"response body does not match {_describe(destination)}: {e}", source
        ) from e


def _describe(destination: Any) -> str:
    target = destination if not isinstance(destination, BaseModel) else type(destination)
    return getattr(target, "__name__", None) or repr(target)
