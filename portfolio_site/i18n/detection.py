"""Browser language detection from client hints."""

import math
from collections.abc import Iterable

from portfolio_site.models.enums import LocaleCode
from portfolio_site.models.locale import LocaleConfig


def parse_accept_language(header: str | None) -> list[str]:
    """Parse an ``Accept-Language`` header into tags, most preferred first.

    Tags are lower-cased. Entries with ``q=0`` and the ``*`` wildcard are
    dropped; a missing or unparsable weight counts as 1. Ties keep header
    order. Malformed input never raises, it just yields fewer tags.
    """
    if not header:
        return []
    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        tag, _, params = part.partition(";")
        tag = tag.strip().lower()
        if not tag or tag == "*":
            continue
        quality = _parse_quality(params)
        if quality <= 0:
            continue
        weighted.append((quality, position, tag))
    weighted.sort(key=lambda item: (-item[0], item[1]))
    return [tag for _, _, tag in weighted]


def _parse_quality(params: str) -> float:
    for param in params.split(";"):
        name, _, value = param.partition("=")
        if name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return 1.0
        if math.isnan(quality):
            return 1.0
        return min(max(quality, 0.0), 1.0)
    return 1.0


def primary_subtag(tag: str) -> str:
    """``en`` from ``en-US``; the tag itself when it has no region."""
    return tag.split("-", 1)[0]


def detect_browser_locale(config: LocaleConfig, languages: Iterable[str]) -> LocaleCode | None:
    """Return the first enabled locale matching the client's language list.

    Each tag is tried as an exact code first, then by its primary subtag,
    before moving on to the next tag.
    """
    for tag in languages:
        if not isinstance(tag, str):
            continue
        tag = tag.strip()
        if not tag:
            continue
        match = config.lookup(tag) or config.lookup(primary_subtag(tag))
        if match is not None:
            return match
    return None
