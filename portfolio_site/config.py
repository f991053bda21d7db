"""Central configuration: environment, locales, preference storage, redirects."""

import os
from collections.abc import Iterable, Mapping
from urllib.parse import urlparse

from portfolio_site.models.locale import LocaleConfig, LocaleConfigError

APP_VERSION = "0.1.0"

# Deployment environment (overridable via PORTFOLIO_ENV)
ALLOWED_ENVIRONMENTS: tuple[str, ...] = ("development", "production", "test")
SITE_ENV = os.environ.get("PORTFOLIO_ENV", "development")
IS_PRODUCTION = SITE_ENV == "production"
SITE_URL = os.environ.get("PORTFOLIO_SITE_URL", "http://localhost:8000")
LOG_LEVEL = os.environ.get("PORTFOLIO_LOG_LEVEL", "INFO" if IS_PRODUCTION else "DEBUG")

# Locales: comma-separated codes, the default one is served without a URL prefix
SITE_LOCALES: tuple[str, ...] = tuple(
    code.strip() for code in os.environ.get("PORTFOLIO_LOCALES", "ar,en").split(",") if code.strip()
)
DEFAULT_LOCALE = os.environ.get("PORTFOLIO_DEFAULT_LOCALE", "ar")

# Preference persistence: signed session (durable) + plain cookie (fallback)
PREFERENCE_KEY = "preferred-language"
PREFERENCE_MAX_AGE = 365 * 24 * 3600  # one year
SESSION_COOKIE = "portfolio_session"
SESSION_SECRET = os.environ.get("PORTFOLIO_SESSION_SECRET", "dev-only-insecure-session-secret")
MIN_SECRET_LENGTH = 32

# Paths that are not pages and skip locale resolution entirely
NON_PAGE_PREFIXES: tuple[str, ...] = (
    "/api/",
    "/static/",
    "/set-lang/",
    "/favicon.ico",
    "/robots.txt",
)

# Permanent legacy URL rewrites (old prefix -> new prefix), applied after
# the locale prefix is stripped
LEGACY_REDIRECTS: tuple[tuple[str, str], ...] = (
    ("/posts", "/blog"),
    ("/portfolio", "/projects"),
)


def build_locale_config(codes: Iterable[str], default: str) -> LocaleConfig:
    """Turn raw locale settings into a validated LocaleConfig.

    Raises:
        LocaleConfigError: unknown codes, duplicates, or a default that is
            not among the enabled codes.
    """
    return LocaleConfig.from_codes(codes, default)


LOCALE_CONFIG = build_locale_config(SITE_LOCALES, DEFAULT_LOCALE)


def validate_environment(environ: Mapping[str, str] | None = None) -> list[str]:
    """Check deployment settings and return human-readable problems.

    Nothing here is fatal; the caller decides whether to log or abort.
    """
    env = os.environ if environ is None else environ
    problems: list[str] = []

    site_env = env.get("PORTFOLIO_ENV", "development")
    if site_env not in ALLOWED_ENVIRONMENTS:
        problems.append(
            f"PORTFOLIO_ENV={site_env!r} is not one of {', '.join(ALLOWED_ENVIRONMENTS)}"
        )
    production = site_env == "production"

    site_url = env.get("PORTFOLIO_SITE_URL", "")
    parsed = urlparse(site_url)
    if not site_url:
        problems.append("PORTFOLIO_SITE_URL is not set")
    elif parsed.scheme not in ("http", "https") or not parsed.netloc:
        problems.append(f"PORTFOLIO_SITE_URL={site_url!r} is not an absolute http(s) URL")
    elif production and parsed.scheme != "https":
        problems.append("PORTFOLIO_SITE_URL must use https in production")

    codes = [c.strip() for c in env.get("PORTFOLIO_LOCALES", "ar,en").split(",") if c.strip()]
    try:
        build_locale_config(codes, env.get("PORTFOLIO_DEFAULT_LOCALE", "ar"))
    except LocaleConfigError as err:
        problems.append(f"Locale configuration: {err}")

    secret = env.get("PORTFOLIO_SESSION_SECRET", "")
    if production and len(secret) < MIN_SECRET_LENGTH:
        problems.append(
            f"PORTFOLIO_SESSION_SECRET must be at least {MIN_SECRET_LENGTH} "
            "characters in production"
        )

    return problems
