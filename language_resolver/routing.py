"""
Site routing

Sites are configured content domains, each offering a set of languages.
A language is addressed by a base path below the site base, e.g.
``https://example.com/`` for English and ``https://example.com/de/`` for
German.

``SiteMatcher`` is the port the resolver depends on; ``ConfiguredSiteMatcher``
matches requests against site definitions loaded from settings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field

from language_resolver.exceptions import SiteNotFoundError

if TYPE_CHECKING:
    from language_resolver.request import LanguageRequest

logger = logging.getLogger(__name__)


def _normalize_path(path: str) -> str:
    """Ensure a leading and a trailing slash: "de" → "/de/"."""
    path = "/" + path.strip("/")
    return path if path == "/" else path + "/"


class SiteLanguage(BaseModel):
    """A language offered by a site."""

    model_config = ConfigDict(frozen=True)

    language_id: int = Field(..., ge=0)
    two_letter_iso_code: str = Field(..., min_length=2, max_length=3)
    base: str = "/"
    locale: str | None = None
    enabled: bool = True

    @property
    def base_path(self) -> str:
        return _normalize_path(urlparse(self.base).path or "/")


class Site(BaseModel):
    """A configured content domain with its available languages."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    base: str = "/"
    languages: tuple[SiteLanguage, ...] = ()

    @property
    def host(self) -> str | None:
        hostname = urlparse(self.base).hostname
        return hostname.lower() if hostname else None

    @property
    def base_path(self) -> str:
        return _normalize_path(urlparse(self.base).path or "/")

    @property
    def default_language(self) -> SiteLanguage | None:
        return next((language for language in self.languages if language.enabled), None)

    def get_language_by_id(self, language_id: int) -> SiteLanguage | None:
        """Return the enabled language with the given id, or None if the site does not offer it."""
        for language in self.languages:
            if language.language_id == language_id and language.enabled:
                return language
        return None

    def language_path(self, language: SiteLanguage) -> str:
        """Absolute path prefix of a language within this site."""
        if language.base.startswith("/") or "://" in language.base:
            return language.base_path
        return _normalize_path(self.base_path + language.base)


@dataclass(frozen=True)
class SiteRouteResult:
    site: Site
    language: SiteLanguage | None = None
    tail: str = ""


@runtime_checkable
class SiteMatcher(Protocol):
    """Resolves the site and candidate language for a request."""

    def match_request(self, request: LanguageRequest) -> SiteRouteResult: ...


class ConfiguredSiteMatcher:
    """
    Match requests against a fixed list of sites.

    Sites bound to the request host win over host-less sites; among those,
    the longest matching base path wins. Within the site, the language with
    the longest matching base path wins.
    """

    def __init__(self, sites: Iterable[Site]):
        self.sites: tuple[Site, ...] = tuple(sites)

    def match_request(self, request: LanguageRequest) -> SiteRouteResult:
        host = (request.host or "").split(":")[0].lower()
        path = _normalize_path(request.path or "/")

        candidates = [
            site
            for site in self.sites
            if (site.host is None or site.host == host) and path.startswith(site.base_path)
        ]
        if not candidates:
            logger.warning("No site matches host=%s path=%s", host, request.path)
            raise SiteNotFoundError(host=host, path=request.path or "/")

        site = max(candidates, key=lambda s: (s.host is not None, len(s.base_path)))

        language: SiteLanguage | None = None
        matched_prefix = site.base_path
        for candidate in site.languages:
            if not candidate.enabled:
                continue
            prefix = site.language_path(candidate)
            if path.startswith(prefix) and (language is None or len(prefix) > len(matched_prefix)):
                language = candidate
                matched_prefix = prefix

        tail = (request.path or "/")[len(matched_prefix.rstrip("/")) :]
        logger.debug(
            "Matched site %s language %s",
            site.identifier,
            language.language_id if language else None,
        )
        return SiteRouteResult(site=site, language=language, tail=tail)


def load_sites(definitions: Sequence[Mapping[str, Any]]) -> list[Site]:
    """Validate raw site definitions into :class:`Site` models."""
    return [Site.model_validate(definition) for definition in definitions]


def load_sites_file(path: str | Path) -> list[Site]:
    """Load site definitions from a YAML file with a top-level ``sites`` list."""
    with Path(path).open(encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    return load_sites(data.get("sites", []))
