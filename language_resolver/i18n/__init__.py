"""
i18n (Internationalization) package

Provides Accept-Language parsing and the primary-language matcher
strategies used by the language resolver.
"""

from .locale import (
    PREFIX,
    WEIGHTED,
    PrefixLanguageMatcher,
    PrimaryLanguageMatcher,
    WeightedLanguageMatcher,
    parse_accept_language,
    primary_subtag,
    select_matcher,
)

__all__ = [
    "PREFIX",
    "WEIGHTED",
    "PrefixLanguageMatcher",
    "PrimaryLanguageMatcher",
    "WeightedLanguageMatcher",
    "parse_accept_language",
    "primary_subtag",
    "select_matcher",
]
