"""Configuration management using pydantic-settings."""

import warnings
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class ConvexSettings(BaseSettings):
    """Convex deployment configuration (status, chunk storage and token endpoints)."""

    model_config = SettingsConfigDict(env_prefix="CONVEX_", case_sensitive=False)

    deployment_url: Optional[str] = Field(
        default=None,
        description="Convex deployment URL. Env var: CONVEX_DEPLOYMENT_URL",
    )
    timeout: float = Field(
        default=30.0, description="Request timeout in seconds. Env var: CONVEX_TIMEOUT"
    )

    @property
    def is_configured(self) -> bool:
        """Check if the deployment URL is set."""
        return bool(self.deployment_url)


class GraphSettings(BaseSettings):
    """Microsoft Graph configuration for OneDrive downloads."""

    model_config = SettingsConfigDict(env_prefix="GRAPH_", case_sensitive=False)

    base_url: str = Field(
        default="https://graph.microsoft.com/v1.0",
        description="Microsoft Graph base URL. Env var: GRAPH_BASE_URL",
    )
    timeout: float = Field(
        default=60.0, description="Download timeout in seconds. Env var: GRAPH_TIMEOUT"
    )


class EmbeddingSettings(BaseSettings):
    """Embedding configuration."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("openai_api_key", "convex_openai_api_key"),
        description="OpenAI API key. Env var: OPENAI_API_KEY (or CONVEX_OPENAI_API_KEY)",
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Optional OpenAI base URL (advanced). Env var: OPENAI_BASE_URL",
    )
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name. Env var: EMBEDDING_MODEL",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension. Env var: EMBEDDING_DIMENSION",
    )
    embedding_timeout: float = Field(
        default=30.0,
        description="Embedding request timeout in seconds. Env var: EMBEDDING_TIMEOUT",
    )
    embedding_max_retries: int = Field(
        default=3,
        ge=1,
        description="Max attempts per embedding request. Env var: EMBEDDING_MAX_RETRIES",
    )

    @property
    def is_configured(self) -> bool:
        """Check if the embedding provider is configured."""
        return bool(self.openai_api_key)


class ChunkingSettings(BaseSettings):
    """Text chunking configuration."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    max_chunk_size: int = Field(
        default=1000, gt=0, description="Maximum chunk size in characters. Env var: MAX_CHUNK_SIZE"
    )


class ServerSettings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    host: str = Field(default="0.0.0.0", description="Server host. Env var: HOST")
    port: int = Field(default=3001, description="HTTP server port. Env var: PORT")
    reload: bool = Field(
        default=False, description="Enable auto-reload (development only). Env var: RELOAD"
    )


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="file-processor", description="Application name. Env var: APP_NAME"
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment. Env var: ENVIRONMENT",
    )
    debug: bool = Field(default=False, description="Enable debug mode. Env var: DEBUG")
    log_level: str = Field(
        default="INFO", description="Logging level. Env var: LOG_LEVEL"
    )
    file_processor_secret: Optional[str] = Field(
        default=None,
        description="Shared secret callers must send with each request. Env var: FILE_PROCESSOR_SECRET",
    )

    # Sub-settings
    convex: Optional[ConvexSettings] = None
    graph: Optional[GraphSettings] = None
    embedding: Optional[EmbeddingSettings] = None
    chunking: Optional[ChunkingSettings] = None
    server: Optional[ServerSettings] = None

    @model_validator(mode="after")
    def initialize_nested_settings(self) -> "Settings":
        """Initialize nested settings to ensure they read from environment."""
        if self.convex is None:
            self.convex = ConvexSettings()
        if self.graph is None:
            self.graph = GraphSettings()
        if self.embedding is None:
            self.embedding = EmbeddingSettings()
        if self.chunking is None:
            self.chunking = ChunkingSettings()
        if self.server is None:
            self.server = ServerSettings()
        return self

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        """Parse environment from string."""
        if isinstance(v, str):
            try:
                return Environment(v.lower())
            except ValueError:
                return Environment.DEVELOPMENT
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def validate_configuration(self) -> None:
        """Warn about collaborators that are not configured."""
        if not self.file_processor_secret:
            warnings.warn(
                "FILE_PROCESSOR_SECRET is not set. Every /process-file request will be rejected.",
                UserWarning,
            )

        if not self.convex.is_configured:
            warnings.warn(
                "Convex is not configured. Set CONVEX_DEPLOYMENT_URL.",
                UserWarning,
            )

        if not self.embedding.is_configured:
            warnings.warn(
                "Embeddings are not configured. Set OPENAI_API_KEY (or CONVEX_OPENAI_API_KEY).",
                UserWarning,
            )

    def validate_production_settings(self) -> None:
        """Validate that production settings are secure."""
        if self.is_production:
            if self.debug:
                raise ValueError("DEBUG must be False in production")

            if not self.file_processor_secret:
                raise ValueError("FILE_PROCESSOR_SECRET must be set in production")

            if not self.convex.is_configured:
                raise ValueError("CONVEX_DEPLOYMENT_URL must be set in production")

            if not self.embedding.is_configured:
                raise ValueError("OPENAI_API_KEY must be set in production")


@lru_cache()
def get_settings() -> Settings:
    """Build the settings once per process and validate them."""
    settings = Settings()
    settings.validate_configuration()
    try:
        settings.validate_production_settings()
    except ValueError as e:
        import logging

        logging.error(f"Configuration validation failed: {e}")
        if settings.is_production:
            raise
    return settings
