"""
Collaborator interfaces used by the processing pipeline.

The pipeline only speaks these protocols, so the Convex/OneDrive clients can
be swapped for other backends (or test doubles) without touching it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from file_processor.models.document import RawDocument
from file_processor.models.request import ProcessFileRequest
from file_processor.models.status import ProcessingStatus


class StatusGateway(ABC):
    """
    Durable store for per-file processing status.

    Status reporting is a best-effort side channel: implementations must not
    raise, and return False when the update could not be delivered.
    """

    @abstractmethod
    async def report_status(
        self,
        file_id: str,
        status: ProcessingStatus,
        metadata: Optional[Dict[str, Any]] = None,
        error_message: Optional[str] = None,
    ) -> bool:
        """Record a status for the file. Returns whether it was acknowledged."""


class ChunkStore(ABC):
    """Durable store for chunk text and embedding records."""

    @abstractmethod
    async def store_chunk(
        self,
        file_id: str,
        chunk_index: int,
        text: str,
        embedding: List[float],
        created_at: int,
    ) -> bool:
        """
        Persist one chunk with its embedding.

        Returns:
            True if the record was stored, False if the store rejected it

        Raises:
            PersistenceError: If the store could not be reached
        """


class DocumentSource(ABC):
    """Loads the bytes of the file named by a processing request."""

    @abstractmethod
    async def fetch(self, request: ProcessFileRequest) -> RawDocument:
        """
        Materialize the requested file in memory.

        Raises:
            FileProcessorException: If the file cannot be retrieved
        """
