"""Configuration models for orionzb."""

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
StreamTypeFilter = Literal["usenet", "torrent", "hoster"]

MAX_RESULTS_CEILING = 500


class OrionoidConfig(BaseModel):
    """Orionoid credentials. Either ``token`` or ``app_key`` + ``user_key``."""

    app_key: str | None = Field(default=None, description="Orionoid app key (keyapp).")
    user_key: str | None = Field(default=None, description="Orionoid user key (keyuser).")
    token: str | None = Field(default=None, description="Orionoid API token.")
    api_url: str = Field(
        default="https://api.orionoid.com",
        description="Orionoid API root.",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.token) or bool(self.app_key and self.user_key)


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0", description="Bind host.")
    port: int = Field(default=3000, description="Bind port.")
    base_url: str | None = Field(
        default=None,
        description=(
            "Public URL used in feed links and enclosures. "
            "If unset, derived as http://localhost:{port}."
        ),
    )

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("server.port must be between 1 and 65535")
        return v

    @model_validator(mode="after")
    def _derive_base_url(self) -> "ServerConfig":
        if not self.base_url:
            self.base_url = f"http://localhost:{self.port}"
        self.base_url = self.base_url.rstrip("/")
        return self


class NewznabConfig(BaseModel):
    api_key: str = Field(default="", description="API key clients must send.")
    server_name: str = Field(
        default="Orionoid Newznab", description="caps server title / channel title."
    )
    server_description: str = Field(
        default="Orionoid to Newznab bridge", description="caps server strapline."
    )


class FeaturesConfig(BaseModel):
    """Search behaviour knobs."""

    cache_ttl_seconds: int = Field(
        default=300,
        description="Lifetime of cached streams for details/get lookups.",
    )
    max_results: int = Field(
        default=100,
        description="Upper bound for the client 'limit' parameter (caps max).",
    )
    default_results: int = Field(
        default=50,
        description="Page size when the client sends no 'limit' (caps default).",
    )
    preferred_languages: str | None = Field(
        default="en",
        description="Orionoid sortLanguages value (comma-separated codes).",
    )
    stream_type: StreamTypeFilter | None = Field(
        default="usenet",
        description="Orionoid streamtype filter.",
    )
    upstream_limit: int = Field(
        default=20,
        description="Fixed limitcount sent to Orionoid per content type.",
    )

    @field_validator("cache_ttl_seconds", "upstream_limit")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be > 0")
        return v

    @field_validator("max_results")
    @classmethod
    def _validate_max_results(cls, v: int) -> int:
        if not 1 <= v <= MAX_RESULTS_CEILING:
            raise ValueError(f"max_results must be between 1 and {MAX_RESULTS_CEILING}")
        return v

    @model_validator(mode="after")
    def _validate_default_results(self) -> "FeaturesConfig":
        if not 1 <= self.default_results <= self.max_results:
            raise ValueError("default_results must be between 1 and max_results")
        return self


class AppConfig(BaseModel):
    """Validated settings for one orionzb process.

    Built only by ``load_config``. YAML uses the sectioned layout
    (orionoid, server, newznab, features, http, logging); the http and
    logging values are exposed as flat attributes.
    """

    # General
    app_name: str = Field(default="orionzb", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="dev, test or prod; prod switches logs to JSON.",
    )

    orionoid: OrionoidConfig = Field(default_factory=OrionoidConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    newznab: NewznabConfig = Field(default_factory=NewznabConfig)
    features: FeaturesConfig = Field(default_factory=FeaturesConfig)

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for Orionoid and container requests.",
    )
    http_user_agent: str = Field(
        default="orionzb/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent sent to Orionoid and container hosts.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Minimum level for application and uvicorn logs.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "console or json. Unset means json in prod, console elsewhere."
        ),
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _validate_required(self) -> "AppConfig":
        if not self.orionoid.has_credentials:
            raise ValueError(
                "Either orionoid.token or (orionoid.app_key + orionoid.user_key) is required"
            )
        if not self.newznab.api_key:
            raise ValueError("newznab.api_key is required")
        return self

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def base_url(self) -> str:
        return self.server.base_url or f"http://localhost:{self.server.port}"


class EnvOverrides(BaseSettings):
    """ORIONZB_* environment variables, all optional and flat.

    ``load_config`` merges only the variables that are set, so an unset
    variable never masks a YAML value. Examples: ORIONZB_ORIONOID_TOKEN,
    ORIONZB_NEWZNAB_API_KEY, ORIONZB_BASE_URL, ORIONZB_LOG_LEVEL.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORIONZB_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    orionoid_app_key: Optional[str] = None
    orionoid_user_key: Optional[str] = None
    orionoid_token: Optional[str] = None
    orionoid_api_url: Optional[str] = None

    host: Optional[str] = None
    port: Optional[int] = None
    base_url: Optional[str] = None

    newznab_api_key: Optional[str] = None
    newznab_server_name: Optional[str] = None
    newznab_server_description: Optional[str] = None

    cache_ttl_seconds: Optional[int] = None
    max_results: Optional[int] = None
    default_results: Optional[int] = None
    preferred_languages: Optional[str] = None
    stream_type: Optional[StreamTypeFilter] = None
    upstream_limit: Optional[int] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Values that were set, keyed by flat name."""
        return self.model_dump(exclude_none=True)
