"""Structured-output schemas for feature extraction.

Gemini accepts an array at the root of its response schema, OpenAI function
parameters must be an object, so the same feature object is wrapped in two
envelopes. ``ENVELOPE_KEY`` is shared by the OpenAI request schema and the
OpenAI response parser.
"""

from __future__ import annotations

from typing import Any


ENVELOPE_KEY = "extractedFeatures"

FEATURE_OBJECT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "featureName": {
            "type": "string",
            "description": "A concise, descriptive title for the product update or feature.",
        },
        "featureSummary": {
            "type": "string",
            "description": (
                "A 2-3 sentence technical summary of what the new feature does "
                "or how the update works."
            ),
        },
        "potentialUseCases": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List three distinct, real-world use cases that this feature could address.",
        },
    },
    "required": ["featureName", "featureSummary", "potentialUseCases"],
}

ARRAY_ENVELOPE_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": FEATURE_OBJECT_SCHEMA,
}

OBJECT_ENVELOPE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        ENVELOPE_KEY: {
            "type": "array",
            "description": "A list of all extracted technical features and their associated use cases.",
            "items": FEATURE_OBJECT_SCHEMA,
        }
    },
    "required": [ENVELOPE_KEY],
}


def to_gemini_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert a JSON-Schema subset into Gemini's OpenAPI-style schema.

    Gemini names types in upper case ("OBJECT", "STRING", ...). Everything
    else is copied as is.
    """
    out: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            out[key] = value.upper()
        elif key == "properties" and isinstance(value, dict):
            out[key] = {name: to_gemini_schema(prop) for name, prop in value.items()}
        elif key == "items" and isinstance(value, dict):
            out[key] = to_gemini_schema(value)
        elif isinstance(value, list):
            out[key] = list(value)
        else:
            out[key] = value
    return out
