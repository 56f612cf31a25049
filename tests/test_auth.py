import base64

import requests

from swagger_explorer.cache.auth import build_auth_headers, perform_login
from swagger_explorer.config import LoginFlow, SwaggerConfig

URL = "https://api.example.com/openapi.json"


def _login_response(response_factory, **cookies):
    resp = response_factory()
    for name, value in cookies.items():
        resp.cookies.set(name, value)
    return resp


class TestBuildAuthHeaders:
    def test_no_auth(self, session):
        assert build_auth_headers(SwaggerConfig(url=URL), session) == {}

    def test_bearer_token(self, session):
        headers = build_auth_headers(SwaggerConfig(url=URL, token="abc"), session)
        assert headers == {"Authorization": "Bearer abc"}

    def test_basic_auth(self, session):
        headers = build_auth_headers(SwaggerConfig(url=URL, user="alice", password="s3cret"), session)
        expected = base64.b64encode(b"alice:s3cret").decode()
        assert headers["Authorization"] == f"Basic {expected}"

    def test_token_takes_priority_over_basic(self, session):
        config = SwaggerConfig(url=URL, token="abc", user="alice", password="s3cret")
        assert build_auth_headers(config, session)["Authorization"] == "Bearer abc"

    def test_user_without_password_is_ignored(self, session):
        assert build_auth_headers(SwaggerConfig(url=URL, user="alice"), session) == {}

    def test_static_cookies_with_token(self, session):
        headers = build_auth_headers(SwaggerConfig(url=URL, token="abc", cookies="a=1"), session)
        assert headers == {"Authorization": "Bearer abc", "Cookie": "a=1"}

    def test_login_cookies_appended_after_static(self, session, response_factory):
        session.request.return_value = _login_response(response_factory, sid="xyz")
        config = SwaggerConfig(
            url=URL,
            cookies="a=1",
            login=LoginFlow(url="https://api.example.com/login", body='{"user": "alice"}'),
        )

        headers = build_auth_headers(config, session)

        assert headers["Cookie"] == "a=1; sid=xyz"
        session.request.assert_called_once()
        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.example.com/login")
        assert kwargs["json"] == {"user": "alice"}

    def test_login_failure_keeps_static_cookies(self, session):
        session.request.side_effect = requests.ConnectionError("down")
        config = SwaggerConfig(url=URL, cookies="a=1", login=LoginFlow(url="https://api.example.com/login"))
        assert build_auth_headers(config, session) == {"Cookie": "a=1"}


class TestPerformLogin:
    def test_get_login_sends_no_body(self, session, response_factory):
        session.request.return_value = _login_response(response_factory, sid="1")
        login = LoginFlow(url="https://api.example.com/login", method="get", body='{"x": 1}')

        assert perform_login(login, session) == "sid=1"
        assert "json" not in session.request.call_args.kwargs
        assert session.request.call_args.args[0] == "GET"

    def test_invalid_body_skips_login(self, session):
        login = LoginFlow(url="https://api.example.com/login", body="{broken")
        assert perform_login(login, session) is None
        session.request.assert_not_called()

    def test_no_cookies_returns_none(self, session, response_factory):
        session.request.return_value = response_factory()
        assert perform_login(LoginFlow(url="https://api.example.com/login"), session) is None

    def test_error_status_returns_none(self, session, response_factory):
        session.request.return_value = response_factory(status=401, reason="Unauthorized")
        assert perform_login(LoginFlow(url="https://api.example.com/login"), session) is None
