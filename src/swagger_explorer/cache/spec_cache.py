"""Local file cache for remote Swagger/OpenAPI documents.

A cached document is served only after a HEAD request confirms, through its
ETag or Last-Modified header, that the remote copy has not changed. Anything
the check cannot confirm counts as stale and triggers a full download. When
that download fails, the previously cached document is served instead.
"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path

import requests
from pydantic import ValidationError

from swagger_explorer.cache.auth import build_auth_headers
from swagger_explorer.cache.models import CacheEntry
from swagger_explorer.config import DEFAULT_CACHE_DIR, SwaggerConfig
from swagger_explorer.errors import FetchError, RefreshFallback, StaleCheckError
from swagger_explorer.parser.detect import load_document

logger = logging.getLogger(__name__)

CACHE_SUFFIX = ".json"


def cache_key(url: str) -> str:
    """SHA-256 hex digest of the document URL."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


class SpecCache:
    """File-per-document cache with HEAD-based validation."""

    def __init__(self, cache_dir: Path | None = None, session: requests.Session | None = None):
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self.session = session or requests.Session()

    def cache_path(self, url: str) -> Path:
        return self.cache_dir / f"{cache_key(url)}{CACHE_SUFFIX}"

    def read_entry(self, url: str) -> CacheEntry | None:
        path = self.cache_path(url)
        if not path.exists():
            return None
        try:
            return CacheEntry.model_validate_json(path.read_bytes())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error("Failed to read cache file %s: %s", path, e)
            return None

    def write_entry(self, entry: CacheEntry) -> None:
        """Replace the entry for entry.url in one rename."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(entry.model_dump_json(indent=2))
            os.replace(tmp_name, self.cache_path(entry.url))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def obtain(self, config: SwaggerConfig) -> dict:
        """Return the current document, downloading it only when needed.

        Raises FetchError only when there is no cached copy to fall back to.
        """
        cached = self.read_entry(config.url)
        headers = build_auth_headers(config, self.session)

        if cached is None:
            logger.info("No cache found for %s, fetching fresh spec", config.url)
            entry = self.fetch(config, headers)
            self.write_entry(entry)
            return entry.spec

        if not self.is_stale(config, cached, headers):
            logger.info("Using cached spec for %s", config.url)
            return cached.spec

        logger.info("Cache stale for %s, fetching fresh spec", config.url)
        try:
            return self._refresh(config, headers)
        except RefreshFallback as e:
            logger.warning("%s; using cached version from %s", e, cached.cached_at.isoformat())
            return cached.spec

    def is_stale(self, config: SwaggerConfig, cached: CacheEntry, headers: dict[str, str] | None = None) -> bool:
        """Decide whether a cached entry must be refetched."""
        if headers is None:
            headers = build_auth_headers(config, self.session)
        try:
            return self._check_modified(config, cached, headers)
        except StaleCheckError as e:
            logger.info("Treating cache as stale: %s", e)
            return True

    def fetch(self, config: SwaggerConfig, headers: dict[str, str] | None = None) -> CacheEntry:
        """Download the document and wrap it in a new cache entry."""
        if headers is None:
            headers = build_auth_headers(config, self.session)
        try:
            response = self.session.get(config.url, headers=headers, timeout=config.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch Swagger spec: No response from server ({e})") from e

        if not response.ok:
            raise FetchError(
                f"Failed to fetch Swagger spec: HTTP {response.status_code} - {response.reason}"
            )

        try:
            spec = load_document(response.text)
        except ValueError as e:
            raise FetchError(f"Failed to parse Swagger spec from {config.url}: {e}") from e

        return CacheEntry(
            url=config.url,
            etag=response.headers.get("ETag"),
            last_modified=response.headers.get("Last-Modified"),
            spec=spec,
        )

    def clear(self, url: str) -> None:
        self.cache_path(url).unlink(missing_ok=True)

    def clear_all(self) -> int:
        """Delete every cache entry and return how many were removed."""
        if not self.cache_dir.is_dir():
            return 0
        removed = 0
        for path in self.cache_dir.glob(f"*{CACHE_SUFFIX}"):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            removed += 1
        return removed

    def _refresh(self, config: SwaggerConfig, headers: dict[str, str]) -> dict:
        try:
            entry = self.fetch(config, headers)
            self.write_entry(entry)
        except (FetchError, OSError) as e:
            raise RefreshFallback(f"Failed to fetch fresh spec: {e}") from e
        return entry.spec

    def _check_modified(self, config: SwaggerConfig, cached: CacheEntry, headers: dict[str, str]) -> bool:
        try:
            response = self.session.head(
                config.url, headers=headers, timeout=config.timeout, allow_redirects=True
            )
        except requests.RequestException as e:
            raise StaleCheckError(f"HEAD request failed: {e}") from e

        if response.status_code == 405:
            raise StaleCheckError("HEAD method not supported")
        if response.status_code >= 400:
            raise StaleCheckError(f"HEAD request failed with status {response.status_code}")

        etag = response.headers.get("ETag")
        last_modified = response.headers.get("Last-Modified")
        if not etag and not last_modified:
            raise StaleCheckError("no ETag or Last-Modified header in response")

        if etag != cached.etag:
            return True
        if etag is None:
            return last_modified != cached.last_modified
        return False
