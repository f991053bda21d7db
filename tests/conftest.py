"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from portfolio_site.models.locale import LocaleConfig
from portfolio_site.rate_limit import limiter


@pytest.fixture()
def locale_config():
    """Arabic (default) + English, the site's production table."""
    return LocaleConfig.from_codes(["ar", "en"], "ar")


@pytest.fixture()
def trilingual_config():
    return LocaleConfig.from_codes(["ar", "en", "fr"], "ar")


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture()
def client():
    """FastAPI TestClient for the full application."""
    from portfolio_site.main import app

    with TestClient(app) as c:
        yield c
