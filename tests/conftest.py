from unittest.mock import MagicMock

import pytest
import requests

from swagger_explorer.config import SwaggerConfig

SPEC_URL = "https://api.example.com/openapi.json"


def make_response(status: int = 200, headers: dict | None = None, body: str = "", reason: str = "OK"):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.headers.update(headers or {})
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def config(tmp_path):
    return SwaggerConfig(url=SPEC_URL, cache_dir=tmp_path / "cache")
