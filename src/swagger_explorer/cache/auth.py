"""Authentication headers for document requests.

Priority: bearer token, then basic auth. Cookies from an optional login
flow are appended after the static cookie string and sent with either
scheme.
"""

import base64
import json
import logging

import requests

from swagger_explorer.config import LoginFlow, SwaggerConfig

logger = logging.getLogger(__name__)

_BODY_METHODS = ("POST", "PUT", "PATCH")


def perform_login(login: LoginFlow, session: requests.Session, timeout: float | None = None) -> str | None:
    """Run the login request and return its cookies as a Cookie header value."""
    kwargs = {"timeout": timeout}
    if login.body and login.method in _BODY_METHODS:
        try:
            kwargs["json"] = json.loads(login.body)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse login body as JSON: %s", e)
            return None

    logger.info("Performing login to %s...", login.url)
    try:
        response = session.request(login.method, login.url, **kwargs)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("Login failed: %s", e)
        return None

    cookies = "; ".join(f"{c.name}={c.value}" for c in response.cookies)
    if not cookies:
        logger.warning("Login successful but no cookies received")
        return None

    logger.info("Login successful, obtained cookies")
    return cookies


def build_auth_headers(config: SwaggerConfig, session: requests.Session) -> dict[str, str]:
    """Compute the headers shared by the freshness check and the full fetch."""
    headers = {}

    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    elif config.user and config.password:
        credentials = base64.b64encode(f"{config.user}:{config.password}".encode()).decode("ascii")
        headers["Authorization"] = f"Basic {credentials}"

    cookies = config.cookies
    if config.login:
        login_cookies = perform_login(config.login, session, timeout=config.timeout)
        if login_cookies:
            cookies = f"{cookies}; {login_cookies}" if cookies else login_cookies

    if cookies:
        headers["Cookie"] = cookies

    return headers
