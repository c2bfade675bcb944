"""Embedding generation service (OpenAI)."""

from __future__ import annotations

from typing import List, Optional

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from file_processor.config import EmbeddingSettings
from file_processor.utils.errors import EmbeddingError
from file_processor.utils.logging import get_logger

logger = get_logger("embedding_service")


class EmbeddingService:
    """Generate one fixed-dimension embedding per text using the OpenAI API."""

    def __init__(self, settings: EmbeddingSettings) -> None:
        self._settings = settings
        self._model_name = settings.embedding_model
        self._dimension = settings.embedding_dimension
        self._client = None  # lazy

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_client(self):
        """Create the OpenAI client on first use."""
        if self._client is not None:
            return self._client

        if not self._settings.openai_api_key:
            raise EmbeddingError(
                "OPENAI_API_KEY is required for embeddings",
                model=self._model_name,
            )

        from openai import AsyncOpenAI

        self._client = AsyncOpenAI(
            api_key=self._settings.openai_api_key,
            base_url=self._settings.openai_base_url,
            timeout=self._settings.embedding_timeout,
            # retries are driven by tenacity below
            max_retries=0,
        )
        return self._client

    async def _embed_once(self, text: str) -> List[float]:
        client = self._get_client()
        try:
            resp = await client.embeddings.create(
                model=self._model_name,
                input=text,
                dimensions=self._dimension,
            )
        except Exception as e:
            raise EmbeddingError(f"Embedding API failed: {e}", model=self._model_name) from e

        if not resp.data:
            raise EmbeddingError("Embedding API returned no data", model=self._model_name)
        return list(resp.data[0].embedding)

    async def embed(self, text: str) -> List[float]:
        """
        Embed one chunk of text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector of the configured dimension

        Raises:
            EmbeddingError: If the provider call fails after retries or the
                vector has the wrong dimension
        """
        self._get_client()

        vector: Optional[List[float]] = None
        async for attempt in AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self._settings.embedding_max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(EmbeddingError),
        ):
            with attempt:
                vector = await self._embed_once(text)

        if vector is None or len(vector) != self._dimension:
            raise EmbeddingError(
                "Embedding dimension mismatch",
                model=self._model_name,
                details={
                    "expected_dimension": self._dimension,
                    "actual_dimension": len(vector) if vector is not None else 0,
                },
            )

        logger.debug(f"Embedding generated: chars={len(text)}, dimension={len(vector)}")
        return vector
