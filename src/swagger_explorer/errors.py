"""Exception hierarchy for swagger-explorer.

Only FetchError, UnknownSpecVersion and ConfigError leave the library.
The soft errors are raised and caught internally to mark a decision point.
"""


class SwaggerExplorerError(Exception):
    """Base class for all swagger-explorer errors."""


class ConfigError(SwaggerExplorerError):
    """Required configuration is missing or invalid."""


class FetchError(SwaggerExplorerError):
    """The document could not be downloaded and no cached copy exists."""


class UnknownSpecVersion(SwaggerExplorerError):
    """The document is neither Swagger 2.0 nor OpenAPI 3.x."""


class StaleCheckError(SwaggerExplorerError):
    """The freshness check could not confirm the cache is current."""


class RefreshFallback(SwaggerExplorerError):
    """A refresh failed while a previous cache entry was available."""


class UnresolvableReference(SwaggerExplorerError):
    """A $ref could not be walked to a value inside the document."""

    def __init__(self, ref: str, reason: str):
        super().__init__(f"Cannot resolve reference: {ref} ({reason})")
        self.ref = ref
        self.reason = reason
