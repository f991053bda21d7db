"""Domain enumerations for locales, text direction and resolver actions."""

from enum import StrEnum


class LocaleCode(StrEnum):
    """Every locale the site can describe. Configuration may enable a subset."""

    AR = "ar"
    EN = "en"
    FR = "fr"
    DE = "de"
    HE = "he"
    FA = "fa"
    UR = "ur"


class Direction(StrEnum):
    """Text flow orientation (HTML ``dir`` attribute values)."""

    LTR = "ltr"
    RTL = "rtl"


class Action(StrEnum):
    """What the routing layer must do with a request after resolution."""

    CONTINUE = "continue"
    REDIRECT = "redirect"


def direction_for(code: LocaleCode) -> Direction:
    """Return the text direction of a known locale."""
    match code:
        case LocaleCode.AR | LocaleCode.HE | LocaleCode.FA | LocaleCode.UR:
            return Direction.RTL
        case _:
            return Direction.LTR
