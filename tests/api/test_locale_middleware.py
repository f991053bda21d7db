"""End-to-end tests for locale resolution through the middleware stack."""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from portfolio_site.i18n import get_locale
from portfolio_site.i18n.middleware import LocaleMiddleware
from portfolio_site.i18n.resolver import prefix_predicate
from tests.fixtures.cookies import preference_cookies

EN = {"accept-language": "en-US,en;q=0.9"}


class TestDetection:
    def test_default_served_in_place(self, client):
        resp = client.get("/", follow_redirects=False)
        assert resp.status_code == 200
        assert '<html lang="ar-SA" dir="rtl">' in resp.text

    def test_english_browser_redirected(self, client):
        resp = client.get("/", headers=EN, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/en"

    def test_redirect_target_serves_page(self, client):
        resp = client.get("/about", headers=EN)
        assert resp.status_code == 200
        assert str(resp.url).endswith("/en/about")
        assert '<html lang="en-US" dir="ltr">' in resp.text

    def test_query_preserved(self, client):
        resp = client.get("/projects?tag=a&tag=b&x=1", headers=EN, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/en/projects?tag=a&tag=b&x=1"

    def test_encoded_query_kept_verbatim(self, client):
        resp = client.get("/projects?q=a%20b&debug", headers=EN, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/en/projects?q=a%20b&debug"

    def test_arabic_browser_not_redirected(self, client):
        resp = client.get("/blog", headers={"accept-language": "ar-SA"}, follow_redirects=False)
        assert resp.status_code == 200


class TestPersistence:
    def test_redirect_persists_choice(self, client):
        resp = client.get("/", headers=EN, follow_redirects=False)
        [cookie] = preference_cookies(resp)
        assert cookie.startswith("preferred-language=en;")

    def test_default_choice_persisted(self, client):
        resp = client.get("/", follow_redirects=False)
        [cookie] = preference_cookies(resp)
        assert cookie.startswith("preferred-language=ar;")

    def test_stored_preference_beats_browser(self, client):
        client.cookies.set("preferred-language", "en")
        resp = client.get(
            "/contact", headers={"accept-language": "ar"}, follow_redirects=False
        )
        assert resp.status_code == 302
        assert resp.headers["location"] == "/en/contact"

    def test_stale_cookie_ignored(self, client):
        client.cookies.set("preferred-language", "de")
        resp = client.get("/", headers={"accept-language": "ar"}, follow_redirects=False)
        assert resp.status_code == 200
        assert '<html lang="ar-SA" dir="rtl">' in resp.text

    def test_preference_remembered_across_requests(self, client):
        client.get("/", headers=EN, follow_redirects=False)
        resp = client.get("/about", follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/en/about"

    def test_explicit_url_locale_updates_preference(self, client):
        client.cookies.set("preferred-language", "ar")
        resp = client.get("/en/about", follow_redirects=False)
        assert resp.status_code == 200
        [cookie] = preference_cookies(resp)
        assert cookie.startswith("preferred-language=en;")

    def test_matching_url_locale_not_rewritten(self, client):
        client.cookies.set("preferred-language", "en")
        resp = client.get("/en/about", follow_redirects=False)
        assert resp.status_code == 200
        assert preference_cookies(resp) == []


class TestNoRedirectLoop:
    @pytest.mark.parametrize("path", ["/", "/about", "/projects?page=2"])
    def test_second_hop_continues(self, client, path):
        first = client.get(path, headers=EN, follow_redirects=False)
        assert first.status_code == 302
        second = client.get(first.headers["location"], headers=EN, follow_redirects=False)
        assert second.status_code == 200


class TestBypass:
    def test_api_not_redirected(self, client):
        resp = client.get("/api/health", headers=EN, follow_redirects=False)
        assert resp.status_code == 200
        assert preference_cookies(resp) == []

    def test_api_has_no_locale_vary(self, client):
        resp = client.get("/api/health", headers=EN)
        assert "accept-language" not in resp.headers.get("vary", "").lower()

    def test_pages_vary_on_language(self, client):
        resp = client.get("/", follow_redirects=False)
        vary = resp.headers["vary"].lower()
        assert "accept-language" in vary
        assert "cookie" in vary


class TestEdgeRedirects:
    @pytest.mark.parametrize(
        "path,location",
        [
            ("/ar", "/"),
            ("/ar/about", "/about"),
            ("/ar/projects?x=1", "/projects?x=1"),
            ("/posts/hello", "/blog/hello"),
            ("/en/portfolio", "/en/projects"),
        ],
    )
    def test_permanent_redirects(self, client, path, location):
        resp = client.get(path, follow_redirects=False)
        assert resp.status_code == 301
        assert resp.headers["location"] == location

    def test_double_slash_after_default_prefix_stays_on_site(self, client):
        resp = client.get("/ar//evil.com", follow_redirects=False)
        assert resp.status_code == 301
        assert resp.headers["location"] == "/evil.com"


@pytest.fixture()
def bare_client(trilingual_config):
    """Locale middleware alone: no session store, three locales."""
    app = FastAPI()
    app.add_middleware(
        LocaleMiddleware,
        config=trilingual_config,
        is_bypassed=prefix_predicate(["/health"]),
    )

    @app.get("/{path:path}")
    async def echo(request: Request, path: str):
        return {"lang": request.state.lang, "dir": request.state.dir, "context": get_locale()}

    with TestClient(app) as c:
        yield c


class TestStandaloneMiddleware:
    def test_third_locale_redirect(self, bare_client):
        resp = bare_client.get("/", headers={"accept-language": "fr-CA"}, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/fr"

    def test_cookie_written_without_session(self, bare_client):
        resp = bare_client.get("/", headers={"accept-language": "fr"}, follow_redirects=False)
        [cookie] = preference_cookies(resp)
        assert cookie.startswith("preferred-language=fr;")

    def test_state_and_context(self, bare_client):
        resp = bare_client.get("/fr/about")
        assert resp.json() == {"lang": "fr", "dir": "ltr", "context": "fr"}

    def test_rtl_default(self, bare_client):
        resp = bare_client.get("/about")
        assert resp.json() == {"lang": "ar", "dir": "rtl", "context": "ar"}

    def test_bypass_keeps_current_locale(self, bare_client):
        bare_client.cookies.set("preferred-language", "en")
        resp = bare_client.get("/health", headers={"accept-language": "fr"})
        assert resp.status_code == 200
        assert resp.json()["lang"] == "en"
        assert preference_cookies(resp) == []
