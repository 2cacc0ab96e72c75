"""Content language resolution for multi-site, multi-language requests."""

from .configuration import ConfigurationTree, Leaf, Node, languages_tree, read_config
from .exceptions import InvalidLanguageError, LanguageResolutionError, SiteNotFoundError
from .frontend import FrontendContext, LanguageService
from .request import LanguageRequest
from .resolver import LanguageResolver, LanguageSignal, Resolution, ResolvedLanguage

__all__ = [
    # Configuration
    "ConfigurationTree",
    "Leaf",
    "Node",
    "languages_tree",
    "read_config",
    # Resolution
    "FrontendContext",
    "LanguageRequest",
    "LanguageResolver",
    "LanguageService",
    "LanguageSignal",
    "Resolution",
    "ResolvedLanguage",
    # Errors
    "InvalidLanguageError",
    "LanguageResolutionError",
    "SiteNotFoundError",
]
