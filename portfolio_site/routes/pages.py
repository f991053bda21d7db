"""HTML page routes and the language switch endpoint."""

from functools import partial
from pathlib import Path
from urllib.parse import urlencode, urlparse

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.responses import Response

from portfolio_site.config import LOCALE_CONFIG
from portfolio_site.i18n.paths import localize_path, localized_route_paths, switch_locale_path
from portfolio_site.i18n.preferences import persist_preference, preference_stores
from portfolio_site.rate_limit import limiter

router = APIRouter(tags=["Pages"])
templates = Jinja2Templates(directory=str(Path(__file__).parent.parent / "templates"))

# Unprefixed path -> page name (template strings live under page.<name>.*)
PAGES: dict[str, str] = {
    "/": "index",
    "/about": "about",
    "/projects": "projects",
    "/blog": "blog",
    "/contact": "contact",
}


def _ctx(request: Request, page: str) -> dict:
    """Build common template context with locale info."""
    lang = getattr(request.state, "lang", LOCALE_CONFIG.default_code)
    return {
        "page": page,
        "lang": lang,
        "language": LOCALE_CONFIG.info(lang).language,
        "dir": LOCALE_CONFIG.direction_of(lang),
        "locales": LOCALE_CONFIG.locales,
        "nav": [(localize_path(LOCALE_CONFIG, p, lang), name) for p, name in PAGES.items()],
        "switch_url": partial(switch_url, request),
    }


def _is_local(path: str) -> bool:
    return path.startswith("/") and not path.startswith(("//", "/\\"))


def _return_path(url: str | None) -> str:
    """Path and query of ``url`` when it points back into this site, else ``/``.

    Only the path and query of absolute URLs are kept; anything that would
    leave the site (``//host``, ``/\\host``) falls back to the home page.
    """
    if not url:
        return "/"
    try:
        parsed = urlparse(url)
    except ValueError:
        return "/"
    path = parsed.path or "/"
    if not _is_local(path):
        return "/"
    return f"{path}?{parsed.query}" if parsed.query else path


def switch_url(request: Request, code: str) -> str:
    """Link that switches the current page to ``code`` through ``/set-lang``."""
    here = request.url.path
    if request.url.query:
        here = f"{here}?{request.url.query}"
    return f"/set-lang/{code}?{urlencode({'next': here})}"


@router.get("/set-lang/{code}")
async def set_lang(request: Request, code: str) -> Response:
    """Store the chosen language and redirect to the same page in that language.

    The page to return to comes from the ``next`` query parameter, falling
    back to the Referer header.
    """
    locale = LOCALE_CONFIG.lookup(code)
    if locale is None:
        raise HTTPException(404, detail=f"Unknown locale {code}")
    source = request.query_params.get("next") or request.headers.get("referer")
    path, _, query = _return_path(source).partition("?")
    target = switch_locale_path(LOCALE_CONFIG, path, locale)
    if query:
        target = f"{target}?{query}"
    response = RedirectResponse(url=target, status_code=303)
    written = persist_preference(preference_stores(request), locale, response)
    logger.debug("Language switched to {} (stored in {})", locale, ", ".join(written) or "nothing")
    return response


def _page_endpoint(page: str):
    async def endpoint(request: Request) -> Response:
        return templates.TemplateResponse(request, "page.html", _ctx(request, page))

    endpoint.__name__ = f"{page}_page"
    return limiter.limit("60/minute")(endpoint)


for _path, _page in PAGES.items():
    _endpoint = _page_endpoint(_page)
    for _localized in localized_route_paths(LOCALE_CONFIG, _path):
        router.add_api_route(_localized, _endpoint, methods=["GET"], include_in_schema=False)
