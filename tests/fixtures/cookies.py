"""Helpers for inspecting response cookies."""

from portfolio_site.config import PREFERENCE_KEY


def set_cookie_headers(resp) -> list[str]:
    """All Set-Cookie headers of a TestClient (httpx) or Starlette response."""
    headers = resp.headers
    if hasattr(headers, "get_list"):
        return headers.get_list("set-cookie")
    return headers.getlist("set-cookie")


def preference_cookies(resp) -> list[str]:
    """Set-Cookie headers that carry the plain preference cookie."""
    return [h for h in set_cookie_headers(resp) if h.startswith(f"{PREFERENCE_KEY}=")]
