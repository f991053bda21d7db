"""Security headers and edge redirect middleware."""

from collections.abc import Sequence

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from portfolio_site.config import LEGACY_REDIRECTS, LOCALE_CONFIG
from portfolio_site.i18n.paths import localize_path, strip_locale_prefix
from portfolio_site.models.locale import LocaleConfig

PERMANENT_REDIRECT = 301


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "font-src 'self'; "
            "connect-src 'self'; "
            "frame-ancestors 'none'"
        )
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Permissions-Policy"] = (
            "camera=(), microphone=(), geolocation=(), payment=()"
        )
        return response


def edge_redirect_target(
    config: LocaleConfig,
    path: str,
    rules: Sequence[tuple[str, str]] = LEGACY_REDIRECTS,
) -> str | None:
    """Return the canonical path for ``path``, or None if it is already canonical.

    Two rewrites apply: the default locale's own prefix is dropped
    (``/ar/about`` -> ``/about``), and legacy sections are renamed
    (``/en/posts/x`` -> ``/en/blog/x``).
    """
    code, rest = strip_locale_prefix(config, path)
    changed = code == config.default_code

    for old, new in rules:
        if rest == old or rest.startswith(f"{old}/"):
            rest = new + rest[len(old) :]
            changed = True
            break

    if not changed:
        return None
    return localize_path(config, rest, code or config.default_code)


class EdgeRedirectMiddleware(BaseHTTPMiddleware):
    """Permanent redirects that sit in front of locale resolution."""

    def __init__(
        self,
        app: ASGIApp,
        config: LocaleConfig = LOCALE_CONFIG,
        rules: Sequence[tuple[str, str]] = LEGACY_REDIRECTS,
    ) -> None:
        super().__init__(app)
        self.config = config
        self.rules = tuple(rules)

    async def dispatch(self, request: Request, call_next) -> Response:
        target = edge_redirect_target(self.config, request.url.path, self.rules)
        if target is None:
            return await call_next(request)
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.debug("Permanent redirect {} -> {}", request.url.path, target)
        return RedirectResponse(url=target, status_code=PERMANENT_REDIRECT)
