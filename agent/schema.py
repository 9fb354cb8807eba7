"""Schemas for structured responses: Pydantic models or raw JSON Schema dicts."""

import json
from typing import Any

import jsonschema
from pydantic import BaseModel, ValidationError

from errors import SchemaValidationError

# Type alias for JSON schema - either a Pydantic model class or a raw dict schema
JsonSchemaType = type[BaseModel] | dict[str, Any]


def is_pydantic_schema(schema: Any) -> bool:
    return isinstance(schema, type) and issubclass(schema, BaseModel)


def to_json_schema(schema: JsonSchemaType) -> dict[str, Any]:
    """Machine-readable JSON Schema description of ``schema``.

    Raises:
        TypeError: If ``schema`` is neither a BaseModel subclass nor a dict
    """
    if is_pydantic_schema(schema):
        return schema.model_json_schema()  # type: ignore[union-attr]
    if isinstance(schema, dict):
        return schema
    raise TypeError(f"Unsupported schema type: {type(schema).__name__}")


def validate(value: Any, schema: JsonSchemaType) -> Any:
    """Validate a parsed value against ``schema`` without coercion.

    Returns:
        A model instance for Pydantic schemas, the value itself for dict schemas

    Raises:
        SchemaValidationError: If the value does not conform
    """
    if is_pydantic_schema(schema):
        try:
            # JSON mode: enums, dates and tuples arrive in their JSON form
            return schema.model_validate_json(json.dumps(value), strict=True)  # type: ignore[union-attr]
        except ValidationError as e:
            raise SchemaValidationError(schema, value, str(e)) from e

    try:
        jsonschema.validate(value, to_json_schema(schema))
    except jsonschema.ValidationError as e:
        raise SchemaValidationError(schema, value, e.message) from e
    return value
