"""Unified data models for a parsed Swagger/OpenAPI document.

Both document shapes (Swagger 2.0 and OpenAPI 3.x) are projected onto
these models before any search or lookup runs.
"""

from pydantic import BaseModel, ConfigDict, Field


class NormalizedSpec(BaseModel):
    """Version-independent view of a document."""

    version: str  # "2.0" / "3.0.3" / ...
    title: str
    description: str | None = None
    api_version: str | None = None  # info.version
    base_url: str | None = None
    paths: dict = {}
    models: dict = {}


class EndpointSummary(BaseModel):
    """A single search hit."""

    path: str
    method: str
    description: str


class SearchResult(BaseModel):
    results: list[EndpointSummary]
    total: int


class ApiDetails(BaseModel):
    """An endpoint with every schema reference expanded."""

    path: str
    method: str
    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    tags: list[str] = []
    parameters: list[dict] = []
    request_body: dict | None = None
    responses: dict = {}  # {status_code: response object}
    security: list[dict] | None = None


class ModelDetails(BaseModel):
    """A named schema, resolved."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str | list[str] | None = None
    description: str | None = None
    required: list[str] | None = None
    properties: dict | None = None
    schema_: dict | bool | None = Field(default=None, alias="schema")


class ApiInfo(BaseModel):
    title: str
    version: str | None = None
    description: str | None = None
    base_url: str | None = None
