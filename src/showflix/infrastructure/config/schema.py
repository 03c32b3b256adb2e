"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class BackendConfig(BaseModel):
    """Catalog backend (Parse Server) connection settings.

    The credential fields are static values published by the site's web
    client; they are passed through verbatim.
    """

    parse_base_url: str = Field(
        default="https://parse.showflix.shop/parse",
        description="Parse Server base URL (without /classes/...).",
    )
    site_url: str = Field(
        default="https://showflix.xyz",
        description="Public site origin, sent as Referer and returned with streams.",
    )
    application_id: str = Field(default="SHOWFLIXAPPID")
    javascript_key: str = Field(default="SHOWFLIXMASTERKEY")
    client_version: str = Field(default="js3.4.1")
    installation_id: str = Field(default="e26c34d7-8f79-4161-92d8-36d19023fc60")

    home_page_limit: int = Field(
        default=10,
        description="Max records per kind for a category/home row.",
    )
    scan_limit: int = Field(
        default=1000,
        description="Max records fetched by a full-catalog scan (id lookup).",
    )

    @field_validator("parse_base_url", "site_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("home_page_limit", "scan_limit")
    @classmethod
    def _validate_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("limits must be > 0")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/backend/categories).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="showflix", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for backend requests.",
    )
    http_user_agent: str = Field(
        default="Showflix/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Catalog backend (YAML section: backend.*)
    backend: BackendConfig = Field(default_factory=BackendConfig)

    # Home page categories: display label -> backend regex (order preserved)
    categories: dict[str, str] = Field(default_factory=dict)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("categories")
    @classmethod
    def _validate_categories(cls, v: dict[str, str]) -> dict[str, str]:
        for label, pattern in v.items():
            if not label.strip() or not pattern:
                raise ValueError(f"category {label!r} needs a label and a pattern")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read SHOWFLIX_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - SHOWFLIX_ENVIRONMENT
    - SHOWFLIX_HTTP_TIMEOUT_SECONDS
    - SHOWFLIX_LOG_LEVEL
    - SHOWFLIX_PARSE_BASE_URL
    """

    model_config = SettingsConfigDict(
        env_prefix="SHOWFLIX_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    parse_base_url: Optional[str] = None
    site_url: Optional[str] = None
    application_id: Optional[str] = None
    javascript_key: Optional[str] = None
    client_version: Optional[str] = None
    installation_id: Optional[str] = None
    home_page_limit: Optional[int] = None
    scan_limit: Optional[int] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
