"""Cookie policy: one attribute set for every cookie the gateway writes.

Defaults:
    httponly=True, samesite="strict", path="/",
    secure=True only when APP_ENV == "production",
    max_age=COOKIE_MAX_AGE_SECONDS (15 minutes; Starlette wants seconds).

Options are rebuilt on every call so an APP_ENV change takes effect at once.
Any default can be overridden per call with keyword arguments.

Browsers only drop a cookie when the clearing Set-Cookie names the same
path/domain it was set with, so clear() must get the same overrides as set().
"""

from collections.abc import Callable, Mapping
from typing import Any

from starlette.requests import HTTPConnection
from starlette.responses import Response

from config.settings import current_environment, settings

PRODUCTION = "production"

# delete_cookie() sets its own expiry; lifetime keys must not reach it.
_LIFETIME_KEYS = frozenset({"max_age", "expires"})


class CookiePolicy:
    def __init__(
        self,
        environment: Callable[[], str] = current_environment,
        max_age: int | None = None,
    ) -> None:
        self._environment = environment
        self._max_age = max_age if max_age is not None else settings.COOKIE_MAX_AGE_SECONDS

    def get_options(self) -> dict[str, Any]:
        return {
            "httponly": True,
            "secure": self._environment() == PRODUCTION,
            "samesite": "strict",
            "max_age": self._max_age,
            "path": "/",
        }

    def set(self, response: Response, name: str, value: str, **overrides: Any) -> None:
        response.set_cookie(name, value, **{**self.get_options(), **overrides})

    def get(self, connection: HTTPConnection, name: str) -> str | None:
        cookies: Mapping[str, str] = connection.cookies
        return cookies.get(name)

    def clear(self, response: Response, name: str, **overrides: Any) -> None:
        options = {**self.get_options(), **overrides}
        for key in _LIFETIME_KEYS:
            options.pop(key, None)
        response.delete_cookie(name, **options)


cookies = CookiePolicy()
