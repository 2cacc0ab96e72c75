"""
Tests for settings and resolver wiring
"""

import pytest

from language_resolver.config import Settings
from language_resolver.configuration import LANGUAGES_KEY_PATH, read_config
from language_resolver.dependencies import build_configuration, build_resolver, new_frontend_context
from language_resolver.i18n.locale import PrefixLanguageMatcher, WeightedLanguageMatcher
from language_resolver.routing import ConfiguredSiteMatcher

SETUP_YAML = """\
plugin.:
  rest.:
    settings.:
      languages.:
        de: 1
        fr: "2"
"""


class TestSettings:
    def test_defaults(self):
        fields = Settings.model_fields
        assert fields["language_parameter"].default == "L"
        assert fields["accept_language_matcher"].default == "weighted"
        assert fields["enable_site_routing"].default is False
        assert fields["apply_system_locale"].default is False
        assert fields["default_language_id"].default == 0

    def test_languages_from_environment(self, monkeypatch):
        monkeypatch.setenv("LANGUAGES", '{"de": 1, "fr": "2"}')
        assert Settings().languages == {"de": 1, "fr": "2"}

    def test_matcher_from_environment(self, monkeypatch):
        monkeypatch.setenv("ACCEPT_LANGUAGE_MATCHER", "prefix")
        assert Settings().accept_language_matcher == "prefix"

    def test_unknown_matcher_rejected(self):
        with pytest.raises(ValueError):
            Settings(accept_language_matcher="icu")


class TestBuildConfiguration:
    def test_languages_setting(self):
        tree = build_configuration(Settings(languages={"it": 5}))
        assert read_config(f"{LANGUAGES_KEY_PATH}.it", tree) == 5

    def test_setup_file_with_overlay(self, tmp_path):
        setup_file = tmp_path / "setup.yaml"
        setup_file.write_text(SETUP_YAML, encoding="utf-8")

        tree = build_configuration(Settings(typoscript_file=str(setup_file), languages={"de": 9}))
        assert read_config(f"{LANGUAGES_KEY_PATH}.de", tree) == 9
        assert read_config(f"{LANGUAGES_KEY_PATH}.fr", tree) == "2"

    def test_empty_configuration(self):
        tree = build_configuration(Settings(languages={}))
        assert read_config(f"{LANGUAGES_KEY_PATH}.de", tree) is None


class TestBuildResolver:
    def test_legacy_mode(self):
        resolver = build_resolver(Settings(enable_site_routing=False))
        assert resolver.site_matcher is None
        assert isinstance(resolver.matcher, WeightedLanguageMatcher)

    def test_site_routing_mode(self):
        resolver = build_resolver(Settings(enable_site_routing=True, sites_file=None))
        assert isinstance(resolver.site_matcher, ConfiguredSiteMatcher)
        assert resolver.site_matcher.sites == ()

    def test_prefix_matcher_and_parameter(self):
        resolver = build_resolver(Settings(accept_language_matcher="prefix", language_parameter="lang"))
        assert isinstance(resolver.matcher, PrefixLanguageMatcher)
        assert resolver.language_parameter == "lang"


class TestNewFrontendContext:
    def test_uses_settings(self):
        settings = Settings(default_language_id=2, default_locale="de", locale_all={"de": "de_DE.UTF-8"})
        frontend = new_frontend_context(settings)
        assert frontend.sys_language_uid == 2
        assert frontend.default_locale == "de"
        assert frontend.locale_all == {"de": "de_DE.UTF-8"}

    def test_contexts_are_independent(self):
        settings = Settings(locale_all={"de": "de_DE.UTF-8"})
        first, second = new_frontend_context(settings), new_frontend_context(settings)
        first.apply_language(3, "L(int)", "de")
        assert second.sys_language_uid == 0
        assert first.locale_all is not second.locale_all
