"""OpenAPI / Swagger document helpers.

Projects Swagger 2.0 and OpenAPI 3.x documents onto a NormalizedSpec and
provides model lookups shared by both shapes.
"""

import re
from collections.abc import Iterator

from .base import NormalizedSpec
from .detect import SWAGGER_2, detect_version

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head", "trace")

_MODEL_PREFIX = re.compile(r"^#?/?(definitions|components/schemas)/")


def normalize_spec(spec: dict) -> NormalizedSpec:
    """Build the version-independent view of a document."""
    version = detect_version(spec)
    info = spec.get("info") or {}

    if version == SWAGGER_2:
        base_url = None
        if spec.get("host"):
            scheme = (spec.get("schemes") or ["http"])[0]
            base_url = f"{scheme}://{spec['host']}{spec.get('basePath', '')}"
        return NormalizedSpec(
            version=str(spec["swagger"]),
            title=info.get("title", ""),
            description=info.get("description"),
            api_version=_str_or_none(info.get("version")),
            base_url=base_url,
            paths=spec.get("paths") or {},
            models=spec.get("definitions") or {},
        )

    servers = spec.get("servers") or []
    return NormalizedSpec(
        version=str(spec["openapi"]),
        title=info.get("title", ""),
        description=info.get("description"),
        api_version=_str_or_none(info.get("version")),
        base_url=servers[0].get("url") if servers else None,
        paths=spec.get("paths") or {},
        models=(spec.get("components") or {}).get("schemas") or {},
    )


def clean_model_name(name: str) -> str:
    """Strip '#/definitions/' style prefixes from a model name."""
    return _MODEL_PREFIX.sub("", name)


def get_model_by_name(spec: dict, name: str) -> dict | None:
    return normalize_spec(spec).models.get(clean_model_name(name))


def get_all_model_names(spec: dict) -> list[str]:
    return list(normalize_spec(spec).models)


def iter_operations(paths: dict) -> Iterator[tuple[str, str, dict]]:
    """Yield (path, method, operation) for every operation in a path table."""
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                yield path, method, operation


def get_schema_description(schema: dict) -> str:
    """Summarize a schema's type and constraints as a single line."""
    parts = []

    if schema.get("description"):
        parts.append(schema["description"])

    if schema.get("type"):
        type_ = schema["type"]
        type_str = " | ".join(type_) if isinstance(type_, list) else type_
        parts.append(f"Type: {type_str}")

    if schema.get("format"):
        parts.append(f"Format: {schema['format']}")

    if schema.get("enum"):
        parts.append("Enum: " + ", ".join(str(v) for v in schema["enum"]))

    if schema.get("pattern"):
        parts.append(f"Pattern: {schema['pattern']}")

    length = _bounds(schema, "minLength", "maxLength")
    if length:
        parts.append(f"Length: {length}")

    value_range = _bounds(schema, "minimum", "maximum")
    if value_range:
        parts.append(f"Range: {value_range}")

    return "; ".join(parts) or "No description available"


def _bounds(schema: dict, low: str, high: str) -> str:
    constraints = []
    if schema.get(low) is not None:
        constraints.append(f"min: {schema[low]}")
    if schema.get(high) is not None:
        constraints.append(f"max: {schema[high]}")
    return ", ".join(constraints)


def _str_or_none(value) -> str | None:
    return None if value is None else str(value)
