"""Locale resolution state machine.

Pure function of its inputs: no framework objects, no storage access. The
request adapter in :mod:`portfolio_site.i18n.middleware` feeds it and acts on
the returned :class:`ResolutionResult`.

Precedence, first match wins:

1. a locale embedded in the first path segment (the URL is authoritative,
   never redirected);
2. the stored preference, if it names an enabled locale;
3. browser hints, exact tag then primary subtag;
4. the default locale.

A non-default target is reached through a temporary redirect to the
prefixed path; the default locale is served in place.
"""

from collections.abc import Callable, Iterable
from urllib.parse import urlencode

from portfolio_site.i18n.detection import detect_browser_locale
from portfolio_site.i18n.paths import localize_path, path_locale
from portfolio_site.models.enums import Action
from portfolio_site.models.locale import (
    LocaleConfig,
    QueryParams,
    ResolutionRequest,
    ResolutionResult,
)

BypassPredicate = Callable[[str], bool]


def prefix_predicate(prefixes: Iterable[str]) -> BypassPredicate:
    """Build a bypass predicate matching any of ``prefixes``.

    A prefix ending in ``/`` also matches the bare path (``/api/`` matches
    ``/api``).
    """
    frozen = tuple(prefixes)

    def is_bypassed(path: str) -> bool:
        for prefix in frozen:
            if path.startswith(prefix) or path == prefix.rstrip("/"):
                return True
        return False

    return is_bypassed


def compose_url(path: str, query_params: QueryParams = (), fragment: str | None = None) -> str:
    """Join path, query and fragment into a relative URL.

    A query given as a string is an already-encoded query and is kept
    verbatim; ordered pairs are encoded.
    """
    url = path
    if query_params:
        query = query_params if isinstance(query_params, str) else urlencode(list(query_params))
        url = f"{url}?{query}"
    if fragment:
        url = f"{url}#{fragment}"
    return url


def resolve(
    config: LocaleConfig,
    req: ResolutionRequest,
    is_bypassed: BypassPredicate | None = None,
) -> ResolutionResult:
    """Decide the active locale and whether the request must be redirected.

    Never raises: unknown codes, malformed tags and empty hint lists all
    fall through to the next rule, ending at the default locale.
    """
    path = req.path if req.path.startswith("/") else f"/{req.path}"
    current = config.lookup(req.current_locale)

    if is_bypassed is not None and is_bypassed(path):
        return ResolutionResult(
            active_locale=current or config.default_code,
            action=Action.CONTINUE,
            persist=False,
        )

    url_locale = path_locale(config, path)
    if url_locale is not None:
        return ResolutionResult(
            active_locale=url_locale,
            action=Action.CONTINUE,
            persist=url_locale != current,
        )

    target = (
        config.lookup(req.stored_preference)
        or detect_browser_locale(config, req.browser_languages)
        or config.default_code
    )

    if target == config.default_code:
        return ResolutionResult(active_locale=target, action=Action.CONTINUE, persist=True)

    destination = compose_url(localize_path(config, path, target), req.query_params, req.fragment)
    if destination == compose_url(path, req.query_params, req.fragment):
        return ResolutionResult(active_locale=target, action=Action.CONTINUE, persist=True)

    return ResolutionResult(
        active_locale=target,
        action=Action.REDIRECT,
        persist=True,
        redirect_target=destination,
    )
