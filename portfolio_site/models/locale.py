"""Locale configuration and the per-request resolution records."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from portfolio_site.models.enums import Action, Direction, LocaleCode, direction_for

REDIRECT_STATUS = 302

# Ordered (key, value) pairs, or an already-encoded query string
QueryParams = Sequence[tuple[str, str]] | str


class LocaleConfigError(ValueError):
    """Raised when the locale table cannot be built from configuration."""


@dataclass(frozen=True)
class LocaleInfo:
    """Display metadata for one locale.

    Attributes:
        code: Short locale identifier used in URLs and storage.
        name: Native language name shown in the language switcher.
        language: BCP 47 tag for the HTML ``lang`` attribute.
    """

    code: LocaleCode
    name: str
    language: str

    @property
    def direction(self) -> Direction:
        return direction_for(self.code)


LOCALE_CATALOG: dict[LocaleCode, LocaleInfo] = {
    LocaleCode.AR: LocaleInfo(LocaleCode.AR, "العربية", "ar-SA"),
    LocaleCode.EN: LocaleInfo(LocaleCode.EN, "English", "en-US"),
    LocaleCode.FR: LocaleInfo(LocaleCode.FR, "Français", "fr-FR"),
    LocaleCode.DE: LocaleInfo(LocaleCode.DE, "Deutsch", "de-DE"),
    LocaleCode.HE: LocaleInfo(LocaleCode.HE, "עברית", "he-IL"),
    LocaleCode.FA: LocaleInfo(LocaleCode.FA, "فارسی", "fa-IR"),
    LocaleCode.UR: LocaleInfo(LocaleCode.UR, "اردو", "ur-PK"),
}


@dataclass(frozen=True)
class LocaleConfig:
    """Ordered set of enabled locales plus the default one.

    Built once at startup and shared read-only by every request.
    """

    locales: tuple[LocaleInfo, ...]
    default_code: LocaleCode

    def __post_init__(self) -> None:
        if not self.locales:
            raise LocaleConfigError("At least one locale must be configured")
        codes = [info.code for info in self.locales]
        if len(set(codes)) != len(codes):
            raise LocaleConfigError(f"Duplicate locale codes in {codes}")
        if self.default_code not in codes:
            raise LocaleConfigError(
                f"Default locale {self.default_code!r} is not one of {codes}"
            )

    @classmethod
    def from_codes(cls, codes: Iterable[str], default: str) -> "LocaleConfig":
        """Build a config from raw code strings, rejecting unknown codes."""
        locales = tuple(LOCALE_CATALOG[_parse_code(code)] for code in codes)
        return cls(locales=locales, default_code=_parse_code(default))

    @property
    def codes(self) -> tuple[LocaleCode, ...]:
        return tuple(info.code for info in self.locales)

    def lookup(self, value: object) -> LocaleCode | None:
        """Return the enabled locale matching ``value``, or None.

        Untrusted input (cookies, headers) goes through here, so anything
        that is not a string naming an enabled locale yields None.
        """
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for code in self.codes:
            if code == normalized:
                return code
        return None

    def info(self, code: str) -> LocaleInfo:
        locale = self.lookup(code)
        if locale is None:
            raise LocaleConfigError(f"Locale {code!r} is not enabled")
        return LOCALE_CATALOG[locale]

    def direction_of(self, code: str) -> Direction:
        return self.info(code).direction


def _parse_code(raw: str) -> LocaleCode:
    try:
        return LocaleCode(raw.strip().lower())
    except ValueError as err:
        known = ", ".join(LocaleCode)
        raise LocaleConfigError(f"Unknown locale {raw!r} (known: {known})") from err


@dataclass(frozen=True)
class ResolutionRequest:
    """Inputs of one locale resolution, built from framework primitives.

    Attributes:
        path: Request path, starting with ``/``.
        query_params: Ordered ``(key, value)`` pairs with repeated keys kept,
            or the raw encoded query string, passed through unchanged.
        fragment: URL fragment without the leading ``#``.
        stored_preference: Previously persisted code; may be stale.
        browser_languages: Client language tags, most preferred first.
        current_locale: Locale currently active for the caller's session.
    """

    path: str
    query_params: QueryParams = ()
    fragment: str | None = None
    stored_preference: str | None = None
    browser_languages: Sequence[str] = ()
    current_locale: str | None = None


@dataclass(frozen=True)
class ResolutionResult:
    active_locale: LocaleCode
    action: Action
    persist: bool
    redirect_target: str | None = None

    @property
    def status_code(self) -> int | None:
        return REDIRECT_STATUS if self.action is Action.REDIRECT else None
