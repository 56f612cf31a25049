"""CLI entry point for swagger-explorer."""

import json
import logging
import os
import sys
from pathlib import Path

import click
from pydantic import BaseModel

from swagger_explorer.cache.spec_cache import SpecCache
from swagger_explorer.client import SwaggerClient
from swagger_explorer.config import ENV_PREFIX, SwaggerConfig, cache_dir_from_env
from swagger_explorer.errors import SwaggerExplorerError

# CLI option name -> MCP_SWAGGER_* suffix
OPTION_ENV = {
    "url": "URL",
    "token": "TOKEN",
    "user": "USER",
    "password": "PASSWORD",
    "cookies": "COOKIES",
    "login_url": "LOGIN_URL",
    "login_method": "LOGIN_METHOD",
    "login_body": "LOGIN_BODY",
    "cache_dir": "CACHE_DIR",
}


def _echo_json(data) -> None:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _config(ctx: click.Context) -> SwaggerConfig:
    try:
        return SwaggerConfig.from_env(ctx.obj["environ"])
    except SwaggerExplorerError as e:
        raise click.ClickException(str(e)) from e


def _run(ctx: click.Context, operation):
    """Call ``operation`` with a session client, mapping library errors to CLI errors."""
    client = SwaggerClient(_config(ctx))
    try:
        return operation(client)
    except SwaggerExplorerError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--url", help="URL of the Swagger/OpenAPI document. [env: MCP_SWAGGER_URL]")
@click.option("--token", help="Bearer token. [env: MCP_SWAGGER_TOKEN]")
@click.option("--user", help="Basic auth user name. [env: MCP_SWAGGER_USER]")
@click.option("--password", help="Basic auth password. [env: MCP_SWAGGER_PASSWORD]")
@click.option("--cookies", help="Static Cookie header value. [env: MCP_SWAGGER_COOKIES]")
@click.option("--login-url", help="Login endpoint whose cookies are reused. [env: MCP_SWAGGER_LOGIN_URL]")
@click.option("--login-method", help="HTTP method of the login request, POST by default. [env: MCP_SWAGGER_LOGIN_METHOD]")
@click.option("--login-body", help="JSON body of the login request. [env: MCP_SWAGGER_LOGIN_BODY]")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for cached documents. [env: MCP_SWAGGER_CACHE_DIR]")
@click.option("-v", "--verbose", is_flag=True, help="Log cache and network diagnostics to stderr.")
@click.pass_context
def main(ctx, verbose, **options):
    """Swagger Explorer: search and inspect a remote OpenAPI/Swagger document.

    Command-line options override the matching MCP_SWAGGER_* environment variables.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    environ = dict(os.environ)
    for name, value in options.items():
        if value:
            environ[ENV_PREFIX + OPTION_ENV[name]] = str(value)

    ctx.ensure_object(dict)
    ctx.obj["environ"] = environ


@main.command()
@click.pass_context
def info(ctx):
    """Show title, version and base URL of the document."""
    _echo_json(_run(ctx, lambda client: client.get_api_info()))


@main.command()
@click.argument("query")
@click.pass_context
def search(ctx, query: str):
    """Search endpoints by path, method, summary, tags or parameters."""
    _echo_json(_run(ctx, lambda client: client.search_api(query)))


@main.command()
@click.argument("path")
@click.argument("method")
@click.pass_context
def details(ctx, path: str, method: str):
    """Show one endpoint with all schema references expanded."""
    result = _run(ctx, lambda client: client.get_api_details(path, method))
    if result is None:
        raise click.ClickException(f"Endpoint not found: {method.upper()} {path}")
    _echo_json(result)


@main.command()
@click.argument("name")
@click.pass_context
def model(ctx, name: str):
    """Show a model/schema with all references expanded."""
    result = _run(ctx, lambda client: client.get_model_details(name))
    if result is None:
        raise click.ClickException(f"Model not found: {name}")
    _echo_json(result)


@main.command()
@click.pass_context
def models(ctx):
    """List all model/schema names."""
    _echo_json(_run(ctx, lambda client: client.list_models()))


@main.command("clear-cache")
@click.option("--all", "clear_all", is_flag=True, help="Remove every cached document, not just this URL.")
@click.pass_context
def clear_cache(ctx, clear_all: bool):
    """Remove cached documents."""
    if clear_all:
        cache = SpecCache(cache_dir_from_env(ctx.obj["environ"]))
        removed = cache.clear_all()
        click.echo(f"Removed {removed} cached documents from {cache.cache_dir}")
        return

    config = _config(ctx)
    SpecCache(config.cache_dir).clear(config.url)
    click.echo(f"Cleared cache for {config.url}")
