"""Prefix-except-default URL helpers.

The default locale is served without a prefix (``/about``), every other
locale under ``/<code>`` (``/en/about``).
"""

from portfolio_site.models.enums import LocaleCode
from portfolio_site.models.locale import LocaleConfig, LocaleConfigError


def anchor_path(path: str) -> str:
    """Return ``path`` with exactly one leading ``/``.

    Runs of leading slashes or backslashes collapse, so a rebuilt path can
    never read as a protocol-relative URL (``//host`` or ``/\\host``).
    """
    return "/" + path.lstrip("/\\")


def first_path_segment(path: str) -> str:
    """Return the first non-empty segment of ``path`` ("" for ``/``)."""
    for segment in path.split("/"):
        if segment:
            return segment
    return ""


def path_locale(config: LocaleConfig, path: str) -> LocaleCode | None:
    """Return the enabled locale carried by the first path segment, if any.

    Matching is exact: ``/EN/about`` does not carry a locale.
    """
    segment = first_path_segment(path)
    if segment and segment in config.codes:
        return LocaleCode(segment)
    return None


def strip_locale_prefix(config: LocaleConfig, path: str) -> tuple[LocaleCode | None, str]:
    """Split ``path`` into its locale prefix (if any) and the remaining path."""
    code = path_locale(config, path)
    if code is None:
        return None, path
    rest = path.lstrip("/")[len(code) :]
    return code, anchor_path(rest)


def localize_path(config: LocaleConfig, path: str, code: str) -> str:
    """Build the URL of ``path`` for locale ``code``.

    ``path`` must not already carry a locale prefix.
    """
    locale = config.lookup(code)
    if locale is None:
        raise LocaleConfigError(f"Locale {code!r} is not enabled")
    path = anchor_path(path)
    if locale == config.default_code:
        return path
    return f"/{locale}" if path == "/" else f"/{locale}{path}"


def switch_locale_path(config: LocaleConfig, path: str, code: str) -> str:
    """Return the same page as ``path`` in locale ``code``."""
    _, rest = strip_locale_prefix(config, path)
    return localize_path(config, rest, code)


def localized_route_paths(config: LocaleConfig, path: str) -> list[str]:
    """All URLs under which a page route must be registered."""
    paths: list[str] = []
    for code in config.codes:
        localized = localize_path(config, path, code)
        if localized not in paths:
            paths.append(localized)
    return paths
