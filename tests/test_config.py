from pathlib import Path

import pytest
from pydantic import ValidationError

from swagger_explorer.config import DEFAULT_CACHE_DIR, LoginFlow, SwaggerConfig
from swagger_explorer.errors import ConfigError


class TestFromEnv:
    def test_url_required(self):
        with pytest.raises(ConfigError, match="MCP_SWAGGER_URL"):
            SwaggerConfig.from_env({})

    def test_minimal(self):
        config = SwaggerConfig.from_env({"MCP_SWAGGER_URL": "https://x.example/spec"})
        assert config.url == "https://x.example/spec"
        assert config.token is None
        assert config.login is None
        assert config.cache_dir == DEFAULT_CACHE_DIR

    def test_all_values(self, tmp_path):
        config = SwaggerConfig.from_env({
            "MCP_SWAGGER_URL": "https://x.example/spec",
            "MCP_SWAGGER_TOKEN": "tok",
            "MCP_SWAGGER_USER": "u",
            "MCP_SWAGGER_PASSWORD": "p",
            "MCP_SWAGGER_COOKIES": "a=1",
            "MCP_SWAGGER_LOGIN_URL": "https://x.example/login",
            "MCP_SWAGGER_LOGIN_METHOD": "put",
            "MCP_SWAGGER_LOGIN_BODY": '{"k": "v"}',
            "MCP_SWAGGER_CACHE_DIR": str(tmp_path),
        })
        assert config.token == "tok"
        assert (config.user, config.password) == ("u", "p")
        assert config.cookies == "a=1"
        assert config.login == LoginFlow(url="https://x.example/login", method="PUT", body='{"k": "v"}')
        assert config.cache_dir == Path(tmp_path)

    def test_empty_strings_are_unset(self):
        config = SwaggerConfig.from_env({"MCP_SWAGGER_URL": "https://x.example/spec", "MCP_SWAGGER_TOKEN": ""})
        assert config.token is None


class TestSwaggerConfig:
    def test_is_immutable(self):
        config = SwaggerConfig(url="https://x.example/spec")
        with pytest.raises(ValidationError):
            config.url = "https://y.example/spec"

    def test_login_method_defaults_to_post(self):
        assert LoginFlow(url="https://x.example/login").method == "POST"
