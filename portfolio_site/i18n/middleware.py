"""Locale middleware: resolves the request locale and redirects to prefixed URLs."""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from portfolio_site.config import LOCALE_CONFIG, NON_PAGE_PREFIXES
from portfolio_site.i18n import set_locale
from portfolio_site.i18n.detection import parse_accept_language
from portfolio_site.i18n.preferences import (
    persist_preference,
    preference_stores,
    read_stored_preference,
)
from portfolio_site.i18n.resolver import BypassPredicate, prefix_predicate, resolve
from portfolio_site.models.enums import Action
from portfolio_site.models.locale import LocaleConfig, ResolutionRequest

VARY_HEADERS = ("Accept-Language", "Cookie")


def add_vary(response: Response, *names: str) -> None:
    """Append header names to ``Vary`` without duplicating existing ones."""
    existing = [v.strip() for v in response.headers.get("Vary", "").split(",") if v.strip()]
    lowered = {v.lower() for v in existing}
    for name in names:
        if name.lower() not in lowered:
            existing.append(name)
            lowered.add(name.lower())
    response.headers["Vary"] = ", ".join(existing)


class LocaleMiddleware(BaseHTTPMiddleware):
    """Resolve the locale of every page request.

    Sets the locale ContextVar and ``request.state.lang``/``dir``, issues a
    302 to the prefixed URL when a non-default locale is wanted on an
    unprefixed path, and writes the preference back to both stores.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: LocaleConfig = LOCALE_CONFIG,
        is_bypassed: BypassPredicate | None = None,
    ) -> None:
        super().__init__(app)
        self.config = config
        self.is_bypassed = is_bypassed or prefix_predicate(NON_PAGE_PREFIXES)

    async def dispatch(self, request: Request, call_next) -> Response:
        stores = preference_stores(request)
        stored = read_stored_preference(self.config, stores)
        resolution = resolve(
            self.config,
            ResolutionRequest(
                path=request.url.path,
                query_params=request.url.query,
                stored_preference=stored,
                browser_languages=tuple(
                    parse_accept_language(request.headers.get("accept-language"))
                ),
                current_locale=stored,
            ),
            self.is_bypassed,
        )

        lang = resolution.active_locale
        set_locale(lang)
        request.state.lang = lang
        request.state.dir = self.config.direction_of(lang)

        if resolution.action is Action.REDIRECT:
            logger.debug(
                "Redirecting {} to {} (locale {})",
                request.url.path,
                resolution.redirect_target,
                lang,
            )
            response: Response = RedirectResponse(
                url=resolution.redirect_target, status_code=resolution.status_code
            )
        else:
            response = await call_next(request)

        if resolution.persist:
            persist_preference(stores, lang, response)
        if not self.is_bypassed(request.url.path):
            add_vary(response, *VARY_HEADERS)
        return response
