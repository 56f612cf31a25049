"""On-disk cache record."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry(BaseModel):
    """One cached document, keyed on disk by the hash of its URL."""

    url: str
    etag: str | None = None
    last_modified: str | None = None
    cached_at: datetime = Field(default_factory=_utcnow)
    spec: dict
