"""
Pytest configuration and fixtures for language resolution tests
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from language_resolver.configuration import ConfigurationTree  # noqa: E402
from language_resolver.frontend import FrontendContext  # noqa: E402
from language_resolver.i18n.locale import WeightedLanguageMatcher  # noqa: E402
from language_resolver.resolver import LanguageResolver  # noqa: E402
from language_resolver.routing import ConfiguredSiteMatcher, Site, SiteLanguage  # noqa: E402

# Two-tier setup tree as it appears in a setup file
SETUP = {
    "plugin.": {
        "rest.": {
            "settings.": {
                "languages.": {
                    "en": 0,
                    "de": "3",
                    "fr": 2,
                    "de-CH": " 4 ",
                    "blank": "   ",
                    "flag": True,
                    "nested.": {"x": 1},
                    "en-GB,en;q=0": 7,
                },
            },
        },
    },
}


@pytest.fixture
def configuration():
    return ConfigurationTree.from_typoscript(SETUP)


@pytest.fixture
def resolver(configuration):
    """Resolver in legacy mode (no site routing)."""
    return LanguageResolver(configuration=configuration, matcher=WeightedLanguageMatcher())


@pytest.fixture
def frontend():
    return FrontendContext(sys_language_uid=0, default_locale="en")


@pytest.fixture
def site():
    return Site(
        identifier="main",
        base="https://example.com/",
        languages=(
            SiteLanguage(language_id=0, two_letter_iso_code="en", base="/", locale="en_US.UTF-8"),
            SiteLanguage(language_id=3, two_letter_iso_code="de", base="/de/", locale="de_DE.UTF-8"),
            SiteLanguage(language_id=2, two_letter_iso_code="fr", base="/fr/", locale="fr_FR.UTF-8"),
        ),
    )


@pytest.fixture
def site_resolver(configuration, site):
    """Resolver in site-routing mode."""
    return LanguageResolver(
        configuration=configuration,
        matcher=WeightedLanguageMatcher(),
        site_matcher=ConfiguredSiteMatcher([site]),
    )
