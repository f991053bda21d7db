"""Bilingual portfolio site: FastAPI application."""

import os
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from portfolio_site.config import (
    APP_VERSION,
    IS_PRODUCTION,
    LOCALE_CONFIG,
    PREFERENCE_MAX_AGE,
    SESSION_COOKIE,
    SESSION_SECRET,
    SITE_ENV,
    validate_environment,
)
from portfolio_site.i18n import setup_jinja2_i18n
from portfolio_site.i18n.middleware import LocaleMiddleware
from portfolio_site.logging_config import setup_logging
from portfolio_site.middleware import EdgeRedirectMiddleware, SecurityHeadersMiddleware
from portfolio_site.rate_limit import limiter
from portfolio_site.routes.api import router as api_router
from portfolio_site.routes.pages import router as pages_router
from portfolio_site.routes.pages import templates as pages_templates

setup_logging()

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    for problem in validate_environment():
        logger.warning("Configuration: {}", problem)
    logger.info(
        "Serving locales {} (default {}) in {} mode",
        ", ".join(LOCALE_CONFIG.codes),
        LOCALE_CONFIG.default_code,
        SITE_ENV,
    )
    yield


app = FastAPI(
    title="Portfolio",
    description="Bilingual (Arabic/English) personal portfolio and blog",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
)

# Security: rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

# Middleware runs outermost-last: security headers wrap everything, the
# session must wrap locale resolution so preference writes reach the cookie
app.add_middleware(LocaleMiddleware)
app.add_middleware(EdgeRedirectMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET,
    session_cookie=SESSION_COOKIE,
    max_age=PREFERENCE_MAX_AGE,
    same_site="lax",
    https_only=IS_PRODUCTION,
)
app.add_middleware(SecurityHeadersMiddleware)

# Mount static files
STATIC_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(pages_router)
app.include_router(api_router, prefix="/api")

setup_jinja2_i18n(pages_templates.env)


def main() -> None:
    dev_mode = os.environ.get("PORTFOLIO_DEV", "1") == "1"
    uvicorn.run(
        "portfolio_site.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        reload=dev_mode,
    )


if __name__ == "__main__":
    main()
