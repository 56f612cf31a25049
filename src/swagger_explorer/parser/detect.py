"""Detect the shape of a Swagger/OpenAPI document and load raw text."""

import json

import yaml

from swagger_explorer.errors import UnknownSpecVersion

SWAGGER_2 = "2.0"
OPENAPI_3 = "3.x"


def detect_version(spec: dict) -> str:
    """Detect the document shape.

    Returns: '2.0' for Swagger documents, '3.x' for OpenAPI 3 documents.
    """
    if str(spec.get("swagger", "")) == "2.0":
        return SWAGGER_2
    if str(spec.get("openapi", "")).startswith("3"):
        return OPENAPI_3
    raise UnknownSpecVersion("Unknown or unsupported OpenAPI/Swagger version")


def load_document(text: str) -> dict:
    """Parse a document body as JSON, falling back to YAML."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Document is neither JSON nor YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Document root must be a mapping, got {type(data).__name__}")
    return data
