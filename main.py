import logging

from fastapi import FastAPI, Request

from language_resolver.config import Settings, settings as default_settings
from language_resolver.dependencies import build_resolver
from language_resolver.exception_handlers import register_exception_handlers
from language_resolver.middleware.language import LanguageMiddleware
from language_resolver.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_structured_logging(settings.log_level, json_format=settings.json_logs)

    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
    resolver = build_resolver(settings)
    app.state.resolver = resolver

    # Starlette middleware is LIFO: logging wraps language resolution
    app.add_middleware(LanguageMiddleware, resolver=resolver, settings=settings)
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.api_route("/api/v1/language", methods=["GET", "POST"])
    def current_language(request: Request):
        frontend = request.state.frontend
        resolved = request.state.language
        site = request.state.site
        return {
            "language_id": frontend.sys_language_uid,
            "language": frontend.language,
            "link_vars": frontend.link_vars,
            "locale": frontend.active_locale,
            "label_language": frontend.language_service.lang_key if frontend.language_service else None,
            "signal": resolved.signal.value,
            "site": site.identifier if site else None,
        }

    logger.info("Language resolution %s", "with site routing" if resolver.site_routing_enabled else "in legacy mode")
    return app


app = create_app()
