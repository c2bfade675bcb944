"""Sentence-based text chunking."""

import re
from typing import List, Optional

from file_processor.config import ChunkingSettings
from file_processor.models.chunk import TextChunk
from file_processor.utils.errors import ChunkingError
from file_processor.utils.logging import get_logger

logger = get_logger("chunking_service")

SENTENCE_SEPARATOR = ". "
_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


class ChunkingService:
    """
    Service for packing sentences into character-bounded chunks.

    Text is split on runs of sentence terminators (``.``, ``!``, ``?``) and the
    sentences are packed greedily, joined by ``". "``. A sentence longer than
    the limit becomes its own chunk; sentences are never cut.
    """

    def __init__(self, settings: Optional[ChunkingSettings] = None):
        """
        Initialize the chunking service.

        Args:
            settings: Chunking settings; defaults are used when omitted
        """
        self._default_size = (settings or ChunkingSettings()).max_chunk_size

    async def chunk_text(self, text: str, max_chunk_size: Optional[int] = None) -> List[TextChunk]:
        """
        Split text into ordered chunks.

        Args:
            text: Input text
            max_chunk_size: Maximum characters per chunk (defaults to settings)

        Returns:
            List of TextChunk with contiguous indices from 0. Empty when the
            text has no content.

        Raises:
            ChunkingError: If max_chunk_size is not positive
        """
        if max_chunk_size is None:
            max_chunk_size = self._default_size
        if max_chunk_size <= 0:
            raise ChunkingError(
                "max_chunk_size must be > 0", details={"max_chunk_size": max_chunk_size}
            )

        if not text or not text.strip():
            return []

        sentences = self._split_sentences(text)

        texts: List[str] = []
        current = ""
        for sentence in sentences:
            if current and len(current) + len(SENTENCE_SEPARATOR) + len(sentence) > max_chunk_size:
                texts.append(current)
                current = sentence
            elif current:
                current = f"{current}{SENTENCE_SEPARATOR}{sentence}"
            else:
                current = sentence
        if current:
            texts.append(current)

        oversized = sum(1 for t in texts if len(t) > max_chunk_size)
        logger.info(
            f"Chunked text: sentences={len(sentences)}, chunks={len(texts)}, "
            f"max_chunk_size={max_chunk_size}, oversized={oversized}"
        )

        return [TextChunk(chunk_index=i, text=t) for i, t in enumerate(texts)]

    def _split_sentences(self, text: str) -> List[str]:
        return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]
