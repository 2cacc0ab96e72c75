"""
Language Resolution Middleware

Runs the LanguageResolver for every request and exposes the outcome on
request.state:

  - request.state.frontend: the request-scoped FrontendContext
  - request.state.language: the ResolvedLanguage
  - request.state.site / request.state.site_language / request.state.routing
    (site-routing mode only, None otherwise)

An unconfigured ``locale`` parameter or an unmatched site is answered with
the JSON error envelope. Exceptions raised inside BaseHTTPMiddleware do not
reach FastAPI's exception handlers, so they are converted here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from language_resolver.dependencies import new_frontend_context
from language_resolver.exception_handlers import language_error_response
from language_resolver.exceptions import LanguageResolutionError
from language_resolver.request import LanguageRequest

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from language_resolver.config import Settings
    from language_resolver.resolver import LanguageResolver


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolve the content language and attach it to request.state."""

    def __init__(self, app: ASGIApp, resolver: LanguageResolver, settings: Settings):
        super().__init__(app)
        self.resolver = resolver
        self.settings = settings

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        snapshot = await LanguageRequest.from_starlette(request)
        frontend = new_frontend_context(self.settings)

        try:
            resolution = self.resolver.resolve(snapshot, frontend)
        except LanguageResolutionError as exc:
            return language_error_response(request, exc)

        annotated = resolution.request
        self.resolver.initialize_language_service(annotated, frontend)

        request.state.frontend = frontend
        request.state.language = resolution.language
        request.state.site = annotated.get_attribute("site")
        request.state.site_language = annotated.get_attribute("language")
        request.state.routing = annotated.get_attribute("routing")

        response = await call_next(request)
        if frontend.language:
            response.headers.setdefault("Content-Language", frontend.language)
        return response
