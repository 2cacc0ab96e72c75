from typing import Literal, Optional, Union

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Content Language Resolver"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Language map: locale / language code -> language id
    # e.g. LANGUAGES='{"de": 1, "fr": "2", "en-US": 0}'
    languages: dict[str, Union[int, str]] = {}

    # Optional YAML file holding a two-tier setup tree (plugin. -> rest. -> ...)
    typoscript_file: Optional[str] = None

    # Site routing
    enable_site_routing: bool = False
    sites_file: Optional[str] = None

    # Resolution
    accept_language_matcher: Literal["weighted", "prefix"] = "weighted"
    language_parameter: str = "L"
    default_language_id: int = 0
    default_locale: str = "en"

    # Locale activation
    locale_all: dict[str, str] = {}
    apply_system_locale: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
