"""Unit tests for the cookie policy."""

import pytest
from fastapi import FastAPI, Request, Response
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request as StarletteRequest

from src.cg_gateway.cookies import CookiePolicy, cookies


def _request_with_cookie(header: bytes) -> StarletteRequest:
    return StarletteRequest({"type": "http", "headers": [(b"cookie", header)]})


class TestGetOptions:
    def test_defaults_outside_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "development")
        assert cookies.get_options() == {
            "httponly": True,
            "secure": False,
            "samesite": "strict",
            "max_age": 900,
            "path": "/",
        }

    def test_environment_flip_is_seen_immediately(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "development")
        assert cookies.get_options()["secure"] is False

        monkeypatch.setenv("APP_ENV", "production")
        assert cookies.get_options()["secure"] is True

    def test_fresh_dict_every_call(self) -> None:
        policy = CookiePolicy(environment=lambda: "test")
        first = policy.get_options()
        first["httponly"] = False
        assert policy.get_options()["httponly"] is True

    def test_injected_environment(self) -> None:
        assert CookiePolicy(environment=lambda: "production").get_options()["secure"] is True
        assert CookiePolicy(environment=lambda: "staging").get_options()["secure"] is False


class TestSetAndClear:
    def test_set_writes_default_attributes(self) -> None:
        policy = CookiePolicy(environment=lambda: "development")
        response = Response()

        policy.set(response, "token", "abc")

        header = response.headers["set-cookie"]
        assert header.startswith("token=abc")
        assert "HttpOnly" in header
        assert "Max-Age=900" in header
        assert "Path=/" in header
        assert "SameSite=strict" in header
        assert "Secure" not in header

    def test_set_secure_in_production(self) -> None:
        policy = CookiePolicy(environment=lambda: "production")
        response = Response()

        policy.set(response, "token", "abc")

        assert "Secure" in response.headers["set-cookie"]

    def test_overrides_win(self) -> None:
        policy = CookiePolicy(environment=lambda: "development")
        response = Response()

        policy.set(response, "token", "abc", max_age=60, path="/api", httponly=False)

        header = response.headers["set-cookie"]
        assert "Max-Age=60" in header
        assert "Path=/api" in header
        assert "HttpOnly" not in header

    def test_clear_expires_cookie_with_same_attributes(self) -> None:
        policy = CookiePolicy(environment=lambda: "production")
        response = Response()

        policy.clear(response, "token", path="/api")

        header = response.headers["set-cookie"]
        assert header.startswith('token=""')
        assert "Max-Age=0" in header
        assert "Path=/api" in header
        assert "Secure" in header
        assert "SameSite=strict" in header

    def test_clear_ignores_lifetime_override(self) -> None:
        policy = CookiePolicy(environment=lambda: "development")
        response = Response()

        policy.clear(response, "token", max_age=3600)

        assert "Max-Age=0" in response.headers["set-cookie"]

    def test_clear_forwards_domain(self) -> None:
        policy = CookiePolicy(environment=lambda: "development")
        response = Response()

        policy.clear(response, "token", domain="example.com")

        header = response.headers["set-cookie"]
        assert "Domain=example.com" in header
        assert "Max-Age=0" in header


class TestGet:
    def test_returns_value(self) -> None:
        request = _request_with_cookie(b"token=abc; other=1")
        assert cookies.get(request, "token") == "abc"

    def test_returns_none_when_absent(self) -> None:
        request = _request_with_cookie(b"other=1")
        assert cookies.get(request, "token") is None


def _cookie_app() -> FastAPI:
    app = FastAPI()

    @app.post("/set")
    async def set_cookie(response: Response) -> dict[str, str]:
        cookies.set(response, "token", "abc")
        return {}

    @app.post("/clear")
    async def clear_cookie(
        response: Response, path: str = "/", domain: str | None = None
    ) -> dict[str, str]:
        cookies.clear(response, "token", path=path, domain=domain)
        return {}

    @app.get("/get")
    async def get_cookie(request: Request) -> dict[str, str | None]:
        return {"token": cookies.get(request, "token")}

    return app


class TestRoundTrip:
    @pytest.fixture
    async def cookie_client(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APP_ENV", "development")
        transport = ASGITransport(app=_cookie_app())
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    async def test_set_then_get(self, cookie_client: AsyncClient) -> None:
        await cookie_client.post("/set")
        resp = await cookie_client.get("/get")
        assert resp.json() == {"token": "abc"}

    async def test_clear_then_get(self, cookie_client: AsyncClient) -> None:
        await cookie_client.post("/set")
        await cookie_client.post("/clear")
        resp = await cookie_client.get("/get")
        assert resp.json() == {"token": None}

    async def test_clear_with_other_path_leaves_cookie(self, cookie_client: AsyncClient) -> None:
        await cookie_client.post("/set")
        await cookie_client.post("/clear", params={"path": "/elsewhere"})
        resp = await cookie_client.get("/get")
        assert resp.json() == {"token": "abc"}

    async def test_clear_with_other_domain_leaves_cookie(self, cookie_client: AsyncClient) -> None:
        await cookie_client.post("/set")
        await cookie_client.post("/clear", params={"domain": "other.example"})
        resp = await cookie_client.get("/get")
        assert resp.json() == {"token": "abc"}
