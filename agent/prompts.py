"""Query templates sent to the agent loop."""

import json

from .schema import JsonSchemaType, to_json_schema


def build_structured_query(query: str, schema: JsonSchemaType) -> str:
    """Append the response-format instructions for ``schema`` to a task.

    Args:
        query: The task description as given by the caller
        schema: Pydantic model class or raw JSON schema dict

    Returns:
        New query string; ``query`` itself is left untouched
    """
    json_schema = to_json_schema(schema)
    return f"""\
{query}

Please respond with a valid JSON object that matches this JSON Schema:
```json
{json.dumps(json_schema, indent=2)}
```

Respond ONLY with the JSON object, no additional text."""
