import pytest

from file_processor.config import (
    ChunkingSettings,
    ConvexSettings,
    EmbeddingSettings,
    Environment,
    Settings,
)


def test_defaults(monkeypatch):
    for var in ("OPENAI_API_KEY", "CONVEX_OPENAI_API_KEY", "CONVEX_DEPLOYMENT_URL", "PORT"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings()

    assert settings.environment == Environment.DEVELOPMENT
    assert settings.server.port == 3001
    assert settings.chunking.max_chunk_size == 1000
    assert settings.embedding.embedding_model == "text-embedding-3-small"
    assert settings.embedding.embedding_dimension == 1536
    assert settings.graph.base_url == "https://graph.microsoft.com/v1.0"
    assert settings.convex.is_configured is False


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("CONVEX_DEPLOYMENT_URL", "https://example.convex.site")
    monkeypatch.setenv("MAX_CHUNK_SIZE", "500")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.convex.deployment_url == "https://example.convex.site"
    assert settings.chunking.max_chunk_size == 500
    assert settings.server.port == 8080
    assert settings.log_level == "DEBUG"


def test_openai_key_fallback_alias(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("CONVEX_OPENAI_API_KEY", "sk-convex")

    assert EmbeddingSettings().openai_api_key == "sk-convex"


def test_non_positive_chunk_size_rejected():
    with pytest.raises(ValueError):
        ChunkingSettings(max_chunk_size=0)


def test_unknown_environment_falls_back_to_development():
    assert Settings(environment="qa").environment == Environment.DEVELOPMENT


def test_production_requires_secret_and_collaborators():
    settings = Settings(
        environment="production",
        convex=ConvexSettings(deployment_url="https://example.convex.site"),
        embedding=EmbeddingSettings(openai_api_key="sk-test"),
    )

    with pytest.raises(ValueError, match="FILE_PROCESSOR_SECRET"):
        settings.validate_production_settings()

    settings.file_processor_secret = "s3cret"
    settings.validate_production_settings()


def test_missing_secret_warns():
    with pytest.warns(UserWarning, match="FILE_PROCESSOR_SECRET"):
        Settings(
            convex=ConvexSettings(deployment_url="https://example.convex.site"),
            embedding=EmbeddingSettings(openai_api_key="sk-test"),
        ).validate_configuration()
