"""
Frontend context

Request-scoped rendering state mutated by the language resolver. A new
``FrontendContext`` is created for every request; it must never be shared
between concurrent requests.
"""

from __future__ import annotations

import locale
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE_KEY = "default"


@dataclass
class LanguageService:
    """Label language holder initialised once per request."""

    lang_key: str = DEFAULT_LANGUAGE_KEY

    def init(self, lang_key: str | None) -> None:
        self.lang_key = lang_key or DEFAULT_LANGUAGE_KEY


@dataclass
class FrontendContext:
    """
    Language configuration of the current request.

    Attributes:
        sys_language_uid: Active numeric language id
        link_vars:        Query parameters preserved across generated links
        language:         Active ISO language code, None for the system default
        default_locale:   Locale applied when no language code is set
        locale_all:       Mapping of language code to a POSIX locale name
        apply_system_locale: Also switch the process C locale on activation
        site_locale:      Locale name of the routed site language; wins over locale_all
    """

    sys_language_uid: int = 0
    link_vars: str | None = None
    language: str | None = None
    site_locale: str | None = None
    default_locale: str = "en"
    locale_all: Mapping[str, str] = field(default_factory=dict)
    apply_system_locale: bool = False
    active_locale: str | None = None
    locale_activated: bool = False
    language_service: LanguageService | None = None

    def apply_language(
        self,
        language_uid: int,
        link_vars: str,
        language_code: str | None,
        locale_name: str | None = None,
    ) -> None:
        """Set the language id, link vars and language code together."""
        self.sys_language_uid = language_uid
        self.link_vars = link_vars
        self.language = language_code
        self.site_locale = locale_name

    def activate_locale(self) -> str:
        """Establish the formatting locale for the rest of the request.

        Runs whether or not a language override was applied.
        """
        if self.site_locale:
            self.active_locale = self.site_locale
        else:
            code = self.language or self.default_locale
            self.active_locale = self.locale_all.get(code, code)
        self.locale_activated = True

        if self.apply_system_locale:
            for category in (locale.LC_NUMERIC, locale.LC_TIME, locale.LC_MONETARY):
                try:
                    locale.setlocale(category, self.active_locale)
                except locale.Error:
                    logger.warning("Locale '%s' is not available on this system", self.active_locale)
                    break

        return self.active_locale
