from datetime import timezone

from swagger_explorer.cache.models import CacheEntry
from swagger_explorer.parser.base import ApiDetails, ModelDetails


class TestCacheEntry:
    def test_create_minimal_entry(self):
        entry = CacheEntry(url="https://x.example/spec", spec={"openapi": "3.0.0"})
        assert entry.etag is None
        assert entry.last_modified is None
        assert entry.cached_at.tzinfo == timezone.utc

    def test_json_roundtrip_keeps_validators(self):
        entry = CacheEntry(url="https://x.example/spec", etag='"abc"', spec={"paths": {}})
        restored = CacheEntry.model_validate_json(entry.model_dump_json())
        assert restored == entry


class TestApiDetails:
    def test_defaults(self):
        details = ApiDetails(path="/pets", method="GET")
        assert details.parameters == []
        assert details.request_body is None
        assert details.security is None


class TestModelDetails:
    def test_schema_field_alias(self):
        details = ModelDetails(name="Status", schema={"type": "string"})
        assert details.schema_ == {"type": "string"}
        assert "schema" in details.model_dump(by_alias=True)

    def test_populate_by_field_name(self):
        details = ModelDetails(name="Status", schema_={"type": "string"})
        assert details.schema_ == {"type": "string"}
