"""
Language Resolver

Determines the content language of a request and applies it to the
request's ``FrontendContext``.

Detection order (first match wins):
  1. ``L`` query parameter
  2. ``L`` body parameter
  3. ``locale`` query parameter, looked up in
     ``plugin.rest.settings.languages.<locale>`` (must exist)
  4. Full ``Accept-Language`` header, looked up verbatim
  5. Primary language of ``Accept-Language``
  6. Nothing: the system default stays in place

With a site matcher configured, the routed site decides which language is
actually available (site-routing mode). Without one the detected id is
applied as-is (legacy mode).
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from language_resolver.configuration import LANGUAGES_KEY_PATH, read_config
from language_resolver.exceptions import InvalidLanguageError
from language_resolver.frontend import LanguageService

if TYPE_CHECKING:
    from language_resolver.configuration import Node
    from language_resolver.frontend import FrontendContext
    from language_resolver.i18n.locale import PrimaryLanguageMatcher
    from language_resolver.request import LanguageRequest
    from language_resolver.routing import SiteLanguage, SiteMatcher

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE_PARAMETER = "L"
LOCALE_PARAMETER = "locale"
ACCEPT_LANGUAGE_HEADER = "Accept-Language"

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


class LanguageSignal(str, enum.Enum):
    """Which request signal produced the resolved language."""

    QUERY_PARAMETER = "query_parameter"
    BODY_PARAMETER = "body_parameter"
    LOCALE_PARAMETER = "locale_parameter"
    ACCEPT_LANGUAGE = "accept_language"
    PRIMARY_LANGUAGE = "primary_language"
    SITE_ROUTING = "site_routing"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedLanguage:
    language_id: int | None = None
    locale_code: str | None = None
    signal: LanguageSignal = LanguageSignal.NONE


@dataclass(frozen=True)
class Resolution:
    language: ResolvedLanguage
    request: LanguageRequest


def coerce_int(value: Any) -> int:
    """Leniently convert a request value to an int.

    "7" → 7, " 7abc" → 7, "abc" → 0, 7.9 → 7, True → 1. Lists use their
    last element.
    """
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else ""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)

    text = str(value)
    match = _LEADING_INT_RE.match(text)
    if match is None:
        if text.strip():
            logger.warning("Non-numeric language parameter %r coerced to 0", text)
        return 0
    if match.end() != len(text.rstrip()):
        logger.warning("Language parameter %r truncated to %s", text, match.group(1))
    return int(match.group(1))


class LanguageResolver:
    """
    Resolve the content language of a request.

    Args:
        configuration: Configuration tree holding the language map
        matcher: Strategy extracting the primary language from Accept-Language
        site_matcher: Site routing collaborator; None selects legacy mode
        language_parameter: Name of the numeric language parameter
    """

    def __init__(
        self,
        configuration: Node,
        matcher: PrimaryLanguageMatcher,
        site_matcher: SiteMatcher | None = None,
        language_parameter: str = DEFAULT_LANGUAGE_PARAMETER,
    ):
        self.configuration = configuration
        self.matcher = matcher
        self.site_matcher = site_matcher
        self.language_parameter = language_parameter

    @property
    def site_routing_enabled(self) -> bool:
        return self.site_matcher is not None

    @property
    def link_vars(self) -> str:
        return f"{self.language_parameter}(int)"

    # ── Public API ──────────────────────────────────────────────────────────

    def resolve(self, request: LanguageRequest, frontend: FrontendContext) -> Resolution:
        """Resolve the request language and apply it to ``frontend``.

        Returns the resolved language together with the request to pass on,
        which carries ``site``, ``language`` and ``routing`` attributes in
        site-routing mode.

        Raises:
            InvalidLanguageError: if an explicit ``locale`` is not configured
        """
        return self.detect_and_set_requested_language(frontend, request)

    def detect_requested_language_id(self, request: LanguageRequest) -> int | None:
        return self.detect_requested_language(request).language_id

    def detect_requested_language(self, request: LanguageRequest) -> ResolvedLanguage:
        """Detect the requested language id and the signal it came from."""
        query_params = request.query_params
        value = query_params.get(self.language_parameter)
        if value is not None:
            return ResolvedLanguage(coerce_int(value), signal=LanguageSignal.QUERY_PARAMETER)

        parsed_body = request.parsed_body or {}
        value = parsed_body.get(self.language_parameter)
        if value is not None:
            return ResolvedLanguage(coerce_int(value), signal=LanguageSignal.BODY_PARAMETER)

        requested_locale = query_params.get(LOCALE_PARAMETER)
        if requested_locale is not None:
            requested_locale = str(requested_locale)
            language_id = self.language_id_for_code(requested_locale)
            if language_id is None:
                logger.warning("Requested locale '%s' is not configured", requested_locale)
                raise InvalidLanguageError(requested_locale)
            return ResolvedLanguage(language_id, signal=LanguageSignal.LOCALE_PARAMETER)

        header_value = request.header_line(ACCEPT_LANGUAGE_HEADER)
        language_id = self.language_id_for_code(header_value)
        if language_id is not None:
            return ResolvedLanguage(language_id, signal=LanguageSignal.ACCEPT_LANGUAGE)

        language_code = self.requested_primary_language_code(request)
        if language_code is not None:
            language_id = self.language_id_for_code(language_code)
            if language_id is not None:
                return ResolvedLanguage(language_id, signal=LanguageSignal.PRIMARY_LANGUAGE)

        return ResolvedLanguage()

    def language_id_for_code(self, language_code: str) -> int | None:
        """Look up the configured language id for a locale or language code."""
        if not language_code or not language_code.strip():
            return None

        value = read_config(f"{LANGUAGES_KEY_PATH}.{language_code}", self.configuration)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            return None if value.strip() == "" else coerce_int(value)
        return None

    def requested_primary_language_code(self, request: LanguageRequest) -> str | None:
        header_value = request.header_line(ACCEPT_LANGUAGE_HEADER)
        if not header_value:
            return None
        return self.matcher.primary_language(header_value)

    # ── Orchestration ───────────────────────────────────────────────────────

    def detect_and_set_requested_language(self, frontend: FrontendContext, request: LanguageRequest) -> Resolution:
        detected = self.detect_requested_language(request)
        requested_language_uid = detected.language_id

        if self.site_matcher is None:
            self.set_requested_language(frontend, requested_language_uid, None)
            return Resolution(language=detected, request=request)

        route_result = self.site_matcher.match_request(request)
        site = route_result.site

        language: SiteLanguage | None
        if requested_language_uid:
            language = site.get_language_by_id(requested_language_uid)
        else:
            language = route_result.language

        annotated_request = (
            request.with_attribute("site", site)
            .with_attribute("language", language)
            .with_attribute("routing", route_result)
        )

        if language is not None and language.language_id is not None:
            self.set_requested_language(
                frontend, language.language_id, language.two_letter_iso_code, language.locale
            )
            signal = detected.signal if requested_language_uid else LanguageSignal.SITE_ROUTING
            resolved = ResolvedLanguage(language.language_id, language.two_letter_iso_code, signal)
        else:
            language_code = self.requested_primary_language_code(annotated_request)
            self.set_requested_language(frontend, requested_language_uid, language_code)
            resolved = ResolvedLanguage(
                requested_language_uid,
                language_code if requested_language_uid is not None else None,
                detected.signal,
            )

        return Resolution(language=resolved, request=annotated_request)

    def set_requested_language(
        self,
        frontend: FrontendContext,
        language_uid: int | None,
        language_code: str | None,
        locale_name: str | None = None,
    ) -> None:
        """Apply the language to ``frontend`` and activate its locale.

        A None ``language_uid`` keeps the frontend defaults. Locale
        activation always runs; ``locale_name`` is the routed site's own
        locale and takes precedence over ``locale_all``.
        """
        if language_uid is not None:
            frontend.apply_language(language_uid, self.link_vars, language_code, locale_name)
            logger.debug("Language set to %s (%s)", language_uid, language_code)

        frontend.activate_locale()

    def initialize_language_service(self, request: LanguageRequest, frontend: FrontendContext) -> LanguageService:
        """Create the label language service unless the frontend already has one."""
        if frontend.language_service is None:
            service = LanguageService()
            service.init(self.requested_primary_language_code(request))
            frontend.language_service = service
        return frontend.language_service
