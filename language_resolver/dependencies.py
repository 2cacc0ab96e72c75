"""
Wiring helpers

Build the shared, read-only resolver collaborators from settings and the
request-scoped frontend context.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from language_resolver.config import Settings
from language_resolver.configuration import ConfigurationTree, Node, languages_tree
from language_resolver.frontend import FrontendContext
from language_resolver.i18n.locale import select_matcher
from language_resolver.resolver import LanguageResolver
from language_resolver.routing import ConfiguredSiteMatcher, load_sites_file

logger = logging.getLogger(__name__)


def build_configuration(settings: Settings) -> Node:
    """Load the setup file (if any) and overlay the ``languages`` setting."""
    tree = Node()
    if settings.typoscript_file:
        with Path(settings.typoscript_file).open(encoding="utf-8") as fh:
            tree = ConfigurationTree.from_typoscript(yaml.safe_load(fh) or {})
        logger.info("Loaded setup tree from %s", settings.typoscript_file)

    if settings.languages:
        tree = ConfigurationTree.merge(tree, languages_tree(settings.languages))
    return tree


def build_resolver(settings: Settings) -> LanguageResolver:
    site_matcher = None
    if settings.enable_site_routing:
        sites = load_sites_file(settings.sites_file) if settings.sites_file else []
        site_matcher = ConfiguredSiteMatcher(sites)
        logger.info("Site routing enabled with %d site(s)", len(sites))

    return LanguageResolver(
        configuration=build_configuration(settings),
        matcher=select_matcher(settings.accept_language_matcher),
        site_matcher=site_matcher,
        language_parameter=settings.language_parameter,
    )


def new_frontend_context(settings: Settings) -> FrontendContext:
    """Create a fresh frontend context; one per request."""
    return FrontendContext(
        sys_language_uid=settings.default_language_id,
        default_locale=settings.default_locale,
        locale_all=dict(settings.locale_all),
        apply_system_locale=settings.apply_system_locale,
    )
