"""$ref resolution for schema fragments.

resolve_schema() expands every internal reference in a fragment into a new
structure. It never raises: references that cannot be walked are left in
place, and a reference already on the current resolution path is replaced
by a circular-reference placeholder.

The visited set is scoped to one traversal branch. Each property, array
item and composition member gets its own copy, so two siblings pointing at
the same schema are both expanded, while a chain of references inside one
branch accumulates pointers and stops at the first repeat.
"""

import logging

from swagger_explorer.errors import UnresolvableReference

logger = logging.getLogger(__name__)

INTERNAL_PREFIX = "#/"

_COMPOSITIONS = ("allOf", "oneOf", "anyOf")


def resolve_ref(spec: dict, ref: str):
    """Walk a JSON Pointer reference such as '#/components/schemas/Pet'."""
    if not ref.startswith(INTERNAL_PREFIX):
        raise UnresolvableReference(ref, "external references not supported")

    current = spec
    for segment in ref[len(INTERNAL_PREFIX):].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise UnresolvableReference(ref, "not found")
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                raise UnresolvableReference(ref, "invalid array index") from None
        else:
            raise UnresolvableReference(ref, "invalid path")

    return current


def circular_placeholder(ref: str) -> dict:
    return {"type": "object", "description": f"Circular reference: {ref}"}


def resolve_schema(spec: dict, schema, visited: set[str] | None = None):
    """Return a copy of ``schema`` with every internal $ref expanded."""
    if not isinstance(schema, dict):
        return schema
    if visited is None:
        visited = set()

    ref = schema.get("$ref")
    if isinstance(ref, str):
        if ref in visited:
            return circular_placeholder(ref)
        visited.add(ref)

        try:
            target = resolve_ref(spec, ref)
            if not isinstance(target, dict):
                raise UnresolvableReference(ref, "target is not a schema object")
        except UnresolvableReference as e:
            logger.warning("Failed to resolve reference %s: %s", ref, e)
            return schema

        siblings = {k: v for k, v in schema.items() if k != "$ref"}
        return resolve_schema(spec, {**target, **siblings}, visited)

    result = dict(schema)

    if isinstance(result.get("properties"), dict):
        result["properties"] = {
            name: resolve_schema(spec, prop, set(visited))
            for name, prop in result["properties"].items()
        }

    items = result.get("items")
    if isinstance(items, list):
        result["items"] = [resolve_schema(spec, item, set(visited)) for item in items]
    elif isinstance(items, dict):
        result["items"] = resolve_schema(spec, items, set(visited))

    if isinstance(result.get("additionalProperties"), dict):
        result["additionalProperties"] = resolve_schema(
            spec, result["additionalProperties"], set(visited)
        )

    for keyword in _COMPOSITIONS:
        if isinstance(result.get(keyword), list):
            result[keyword] = [
                resolve_schema(spec, member, set(visited)) for member in result[keyword]
            ]

    if isinstance(result.get("not"), dict):
        result["not"] = resolve_schema(spec, result["not"], set(visited))

    return result
