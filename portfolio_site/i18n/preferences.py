"""Locale preference stores: signed session (durable) and plain cookie (fallback).

Both stores hold the same value under the same key. Either can be missing
or fail independently; reads then fall through and writes are skipped.
"""

from collections.abc import Sequence
from typing import Protocol

from loguru import logger
from starlette.requests import Request
from starlette.responses import Response

from portfolio_site.config import IS_PRODUCTION, PREFERENCE_KEY, PREFERENCE_MAX_AGE
from portfolio_site.models.enums import LocaleCode
from portfolio_site.models.locale import LocaleConfig


class PreferenceStoreUnavailable(RuntimeError):
    """The backing storage of a preference store cannot be used."""


class PreferenceStore(Protocol):
    name: str

    def read(self) -> str | None: ...

    def write(self, code: str, response: Response) -> None: ...


class SessionPreferenceStore:
    """Preference kept in the signed session cookie (SessionMiddleware)."""

    name = "session"

    def __init__(self, request: Request, key: str = PREFERENCE_KEY) -> None:
        self.request = request
        self.key = key

    def _session(self) -> dict:
        if "session" not in self.request.scope:
            raise PreferenceStoreUnavailable("SessionMiddleware is not installed")
        return self.request.session

    def read(self) -> str | None:
        value = self._session().get(self.key)
        return value if isinstance(value, str) else None

    def write(self, code: str, response: Response) -> None:
        self._session()[self.key] = str(code)


class CookiePreferenceStore:
    """Preference kept in a plain cookie with a one-year lifetime."""

    name = "cookie"

    def __init__(
        self,
        request: Request,
        key: str = PREFERENCE_KEY,
        max_age: int = PREFERENCE_MAX_AGE,
        secure: bool = IS_PRODUCTION,
    ) -> None:
        self.request = request
        self.key = key
        self.max_age = max_age
        self.secure = secure

    def read(self) -> str | None:
        return self.request.cookies.get(self.key)

    def write(self, code: str, response: Response) -> None:
        response.set_cookie(
            self.key,
            str(code),
            max_age=self.max_age,
            path="/",
            samesite="lax",
            httponly=True,
            secure=self.secure,
        )


def preference_stores(request: Request) -> list[PreferenceStore]:
    """Stores for ``request`` in read-priority order."""
    return [SessionPreferenceStore(request), CookiePreferenceStore(request)]


def read_stored_preference(
    config: LocaleConfig, stores: Sequence[PreferenceStore]
) -> LocaleCode | None:
    """Return the first stored value naming an enabled locale.

    Unavailable stores and stale values (locales no longer enabled) are
    treated as absent.
    """
    for store in stores:
        try:
            value = store.read()
        except Exception:
            logger.opt(exception=True).debug("Preference store {} unreadable", store.name)
            continue
        code = config.lookup(value)
        if code is not None:
            return code
    return None


def persist_preference(
    stores: Sequence[PreferenceStore], code: str, response: Response
) -> list[str]:
    """Write ``code`` to every store, skipping the ones that fail.

    Returns:
        Names of the stores that accepted the write.
    """
    written: list[str] = []
    for store in stores:
        try:
            store.write(code, response)
        except Exception:
            logger.opt(exception=True).debug(
                "Could not persist locale {} to {} store", code, store.name
            )
            continue
        written.append(store.name)
    return written
