"""Swagger/OpenAPI client session.

Holds one fetched document for reuse across lookups. Each SwaggerClient is
independent, so several documents can be explored in the same process.
"""

from swagger_explorer.cache.spec_cache import SpecCache
from swagger_explorer.config import SwaggerConfig
from swagger_explorer.parser.base import (
    ApiDetails,
    ApiInfo,
    EndpointSummary,
    ModelDetails,
    SearchResult,
)
from swagger_explorer.parser.resolver import resolve_schema
from swagger_explorer.parser.swagger import (
    HTTP_METHODS,
    clean_model_name,
    get_all_model_names,
    get_model_by_name,
    get_schema_description,
    iter_operations,
    normalize_spec,
)


class SwaggerClient:
    """Search and inspect the endpoints and models of a remote document."""

    def __init__(self, config: SwaggerConfig, cache: SpecCache | None = None):
        self.config = config
        self.cache = cache or SpecCache(config.cache_dir)
        self._spec: dict | None = None

    def get_spec(self) -> dict:
        """Return the document, obtaining it through the cache on first use."""
        if self._spec is None:
            self._spec = self.cache.obtain(self.config)
        return self._spec

    def refresh_spec(self) -> dict:
        """Drop the in-memory document and revalidate against the remote."""
        self._spec = self.cache.obtain(self.config)
        return self._spec

    def clear_cache(self) -> None:
        self.cache.clear(self.config.url)
        self._spec = None

    def search_api(self, query: str) -> SearchResult:
        """Find endpoints whose metadata contains ``query`` (case-insensitive)."""
        normalized = normalize_spec(self.get_spec())
        needle = query.lower()

        results = []
        for path, method, operation in iter_operations(normalized.paths):
            if _matches(needle, path, method, operation):
                results.append(
                    EndpointSummary(
                        path=path,
                        method=method.upper(),
                        description=operation.get("summary")
                        or operation.get("description")
                        or f"{method.upper()} {path}",
                    )
                )

        return SearchResult(results=results, total=len(results))

    def get_api_details(self, path: str, method: str) -> ApiDetails | None:
        """Return one endpoint with its schemas expanded, or None if missing."""
        spec = self.get_spec()
        path_item = normalize_spec(spec).paths.get(path)
        method = method.lower()
        if not isinstance(path_item, dict) or method not in HTTP_METHODS:
            return None
        operation = path_item.get(method)
        if not isinstance(operation, dict):
            return None

        parameters = list(path_item.get("parameters") or []) + list(operation.get("parameters") or [])
        resolved_parameters = []
        for param in parameters:
            if isinstance(param, dict) and "$ref" in param:
                param = resolve_schema(spec, param)
            if isinstance(param, dict) and isinstance(param.get("schema"), dict):
                param = {**param, "schema": resolve_schema(spec, param["schema"])}
            resolved_parameters.append(param)

        request_body = operation.get("requestBody")
        if isinstance(request_body, dict):
            request_body = resolve_schema(spec, request_body) if "$ref" in request_body else dict(request_body)
            if isinstance(request_body.get("content"), dict):
                request_body["content"] = _resolve_content(spec, request_body["content"])

        responses = {}
        for status_code, response in (operation.get("responses") or {}).items():
            if not isinstance(response, dict):
                responses[str(status_code)] = response
                continue
            resolved = resolve_schema(spec, response) if "$ref" in response else dict(response)
            # OpenAPI 3.x
            if isinstance(resolved.get("content"), dict):
                resolved["content"] = _resolve_content(spec, resolved["content"])
            # Swagger 2.0
            if isinstance(resolved.get("schema"), dict):
                resolved["schema"] = resolve_schema(spec, resolved["schema"])
            responses[str(status_code)] = resolved

        return ApiDetails(
            path=path,
            method=method.upper(),
            operation_id=operation.get("operationId"),
            summary=operation.get("summary"),
            description=operation.get("description"),
            tags=operation.get("tags") or [],
            parameters=resolved_parameters,
            request_body=request_body,
            responses=responses,
            security=operation.get("security"),
        )

    def get_model_details(self, model_name: str) -> ModelDetails | None:
        """Return a named schema with every reference expanded."""
        spec = self.get_spec()
        schema = get_model_by_name(spec, model_name)
        if schema is None:
            return None

        resolved = resolve_schema(spec, schema)
        name = clean_model_name(model_name)

        # OpenAPI 3.1 boolean schema
        if isinstance(resolved, bool):
            return ModelDetails(
                name=name,
                description="Accepts any value" if resolved else "Accepts no value",
                schema=resolved,
            )
        if not isinstance(resolved, dict):
            return None

        if resolved.get("type") == "object" or "properties" in resolved:
            return ModelDetails(
                name=name,
                type=resolved.get("type", "object"),
                description=resolved.get("description"),
                required=resolved.get("required"),
                properties=resolved.get("properties"),
            )

        return ModelDetails(
            name=name,
            type=resolved.get("type"),
            description=resolved.get("description") or get_schema_description(resolved),
            schema=resolved,
        )

    def list_models(self) -> list[str]:
        return get_all_model_names(self.get_spec())

    def get_api_info(self) -> ApiInfo:
        normalized = normalize_spec(self.get_spec())
        return ApiInfo(
            title=normalized.title,
            version=normalized.api_version,
            description=normalized.description,
            base_url=normalized.base_url,
        )


def _matches(needle: str, path: str, method: str, operation: dict) -> bool:
    fields = [
        path,
        method,
        operation.get("summary"),
        operation.get("description"),
        operation.get("operationId"),
        *(operation.get("tags") or []),
    ]
    for param in operation.get("parameters") or []:
        if isinstance(param, dict):
            fields.extend([param.get("name"), param.get("description")])
    return any(isinstance(f, str) and needle in f.lower() for f in fields)


def _resolve_content(spec: dict, content: dict) -> dict:
    """Expand the schema of every media type in a content map."""
    resolved = {}
    for media_type, media in content.items():
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            media = {**media, "schema": resolve_schema(spec, media["schema"])}
        resolved[media_type] = media
    return resolved
