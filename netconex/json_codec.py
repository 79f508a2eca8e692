"""
JSON round-trip helpers shared by the executor and the verb adapters.

Pydantic does the typed work: ``TypeAdapter`` validates incoming text into
any annotated type (models, dataclasses, builtins) and
``to_jsonable_python`` turns outgoing objects into plain JSON data.
"""
import json
from typing import Any, Dict, Type, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .common.errors import ConversionError, JsonFormattingError, JsonParsingError

T = TypeVar("T")

PRETTY_INDENT = 2


def _to_json_data(value: Any) -> Any:
    return to_jsonable_python(value, by_alias=True)


def serialize(value: Any) -> str:
    """Encode a request body as compact JSON text."""
    try:
        return json.dumps(_to_json_data(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise JsonFormattingError("Error serializing request body", original_exception=exc) from exc


def deserialize(text: str, target_type: Type[T]) -> T:
    try:
        return TypeAdapter(target_type).validate_json(text)
    except (ValidationError, PydanticUserError) as exc:
        raise JsonParsingError(
            f"Error deserializing JSON into {getattr(target_type, '__name__', target_type)}",
            original_exception=exc,
        ) from exc


def pretty_print(text: str) -> str:
    """
    Re-indent JSON text. Key order is kept so the output is stable and
    pretty_print(pretty_print(x)) == pretty_print(x).
    """
    try:
        tree = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise JsonParsingError("Error parsing JSON response", original_exception=exc) from exc

    try:
        # NaN and Infinity parse but are not valid JSON on the way out.
        return json.dumps(tree, indent=PRETTY_INDENT, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise JsonFormattingError("Error formatting JSON response", original_exception=exc) from exc


def to_field_map(obj: Any) -> Dict[str, Any]:
    """Convert a structured object into a key -> value mapping usable as a request body."""
    try:
        data = _to_json_data(obj)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise ConversionError("Error building request body from object", original_exception=exc) from exc

    if not isinstance(data, dict):
        raise ConversionError(f"Cannot build a request body from {type(obj).__name__}: not a mapping")
    return data
