"""JSON endpoints: health check and locale table."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from portfolio_site.config import APP_VERSION, LOCALE_CONFIG, SITE_ENV
from portfolio_site.i18n.translations import TRANSLATIONS
from portfolio_site.rate_limit import limiter

router = APIRouter(tags=["API"])

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def i18n_status() -> str:
    """``ok`` when every enabled locale has a translation catalog."""
    missing = [code for code in LOCALE_CONFIG.codes if code not in TRANSLATIONS]
    return "degraded" if missing else "ok"


@router.get("/health", response_class=JSONResponse, tags=["Health"])
@limiter.limit("120/minute")
async def health(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(
        {
            "status": "ok",
            "environment": SITE_ENV,
            "version": APP_VERSION,
            "services": {"i18n": i18n_status()},
        },
        headers=_NO_CACHE_HEADERS,
    )


@router.get("/locales", response_class=JSONResponse)
async def locales(request: Request) -> dict:
    """Enabled locales in configuration order."""
    return {
        "default": LOCALE_CONFIG.default_code,
        "locales": [
            {
                "code": info.code,
                "name": info.name,
                "language": info.language,
                "dir": info.direction,
                "default": info.code == LOCALE_CONFIG.default_code,
            }
            for info in LOCALE_CONFIG.locales
        ],
    }
