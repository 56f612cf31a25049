"""Connection settings for a remote Swagger/OpenAPI document."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from swagger_explorer.errors import ConfigError

DEFAULT_CACHE_DIR = Path.home() / ".mcp-swagger-client" / "cache"

ENV_PREFIX = "MCP_SWAGGER_"


class LoginFlow(BaseModel):
    """A login request whose response cookies authenticate later calls."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "POST"
    body: str | None = None  # raw JSON text

    @field_validator("method")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class SwaggerConfig(BaseModel):
    """Document source: URL plus optional authentication material."""

    model_config = ConfigDict(frozen=True)

    url: str
    token: str | None = None
    user: str | None = None
    password: str | None = None
    cookies: str | None = None
    login: LoginFlow | None = None
    cache_dir: Path = DEFAULT_CACHE_DIR
    timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "SwaggerConfig":
        """Build a config from MCP_SWAGGER_* environment variables."""
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name) or None

        url = get("URL")
        if not url:
            raise ConfigError(f"{ENV_PREFIX}URL environment variable is required")

        login = None
        if get("LOGIN_URL"):
            login = LoginFlow(
                url=get("LOGIN_URL"),
                method=get("LOGIN_METHOD") or "POST",
                body=get("LOGIN_BODY"),
            )

        values = {
            "url": url,
            "token": get("TOKEN"),
            "user": get("USER"),
            "password": get("PASSWORD"),
            "cookies": get("COOKIES"),
            "login": login,
        }
        return cls(cache_dir=cache_dir_from_env(env), **values)


def cache_dir_from_env(environ: dict[str, str] | None = None) -> Path:
    """MCP_SWAGGER_CACHE_DIR, or the default cache directory."""
    env = os.environ if environ is None else environ
    value = env.get(ENV_PREFIX + "CACHE_DIR")
    return Path(value).expanduser() if value else DEFAULT_CACHE_DIR
