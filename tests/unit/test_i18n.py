"""Tests for request-scoped locale and translation lookup."""

import contextvars

from jinja2 import Environment

from portfolio_site.i18n import get_locale, gettext, ngettext, set_locale, setup_jinja2_i18n


def _in_locale(lang: str, fn, *args):
    def run():
        set_locale(lang)
        return fn(*args)

    return contextvars.copy_context().run(run)


class TestGettext:
    def test_default_locale(self):
        assert contextvars.copy_context().run(get_locale) == "ar"

    def test_english(self):
        assert _in_locale("en", gettext, "nav.home") == "Home"

    def test_arabic(self):
        assert _in_locale("ar", gettext, "nav.home") == "الرئيسية"

    def test_missing_catalog_falls_back_to_default(self):
        assert _in_locale("fr", gettext, "nav.home") == "الرئيسية"

    def test_unknown_key_returned_as_is(self):
        assert _in_locale("en", gettext, "nope.missing") == "nope.missing"

    def test_ngettext_picks_form(self):
        assert _in_locale("en", ngettext, "nav.blog", "nav.projects", 2) == "Projects"


class TestJinjaIntegration:
    def test_underscore_available(self):
        env = Environment(autoescape=True)
        setup_jinja2_i18n(env)
        template = env.from_string('{{ _("nav.about") }}')
        assert _in_locale("en", template.render) == "About"
