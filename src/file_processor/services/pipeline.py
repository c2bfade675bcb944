"""File processing pipeline: extract, chunk, embed and store one file."""

import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

from file_processor.clients.base import ChunkStore, DocumentSource, StatusGateway
from file_processor.models.chunk import TextChunk
from file_processor.models.document import RawDocument
from file_processor.models.request import ProcessFileRequest, ProcessingResult
from file_processor.models.status import ProcessingStatus
from file_processor.services.chunking_service import ChunkingService
from file_processor.services.embedding_service import EmbeddingService
from file_processor.services.extractor_service import ExtractorService
from file_processor.utils.errors import (
    ChunkingError,
    ExtractionError,
    FileProcessorException,
    StatusTransitionError,
)
from file_processor.utils.logging import FileLogger, file_logger, get_logger

logger = get_logger("pipeline")


def _now_ms() -> int:
    return int(time.time() * 1000)


class ProcessingRun:
    """
    Status state machine for a single file-processing request.

    Processing is reported first; Ready or Failed is reported exactly once
    after it, and nothing is reported after a terminal status.
    """

    def __init__(self, file_id: str, status_gateway: StatusGateway):
        self.file_id = file_id
        self.status: Optional[ProcessingStatus] = None
        self._status_gateway = status_gateway
        self._log = file_logger(logger, file_id)

    async def transition(
        self,
        status: ProcessingStatus,
        metadata: Optional[Dict[str, Any]] = None,
        error_message: Optional[str] = None,
    ) -> None:
        current = self.status
        if current is None and status != ProcessingStatus.PROCESSING:
            raise StatusTransitionError("Start", status.value)
        if current is not None and (current.is_terminal or not status.is_terminal):
            raise StatusTransitionError(current.value, status.value)

        self.status = status
        acknowledged = await self._status_gateway.report_status(
            self.file_id, status, metadata=metadata, error_message=error_message
        )
        if not acknowledged:
            self._log.warning(f"Status update not acknowledged: {status.value}")


class FileProcessingPipeline:
    """
    Orchestrates one file through the processing stages.

    Processing pipeline:
    1. Report Processing
    2. Load the document (OneDrive download, or bytes already in memory)
    3. Extract text
    4. Chunk text
    5. Embed and store each chunk, in order; a failing chunk is skipped
    6. Report Ready with counts, or Failed if any of steps 2-4 failed
    """

    def __init__(
        self,
        extractor: ExtractorService,
        chunker: ChunkingService,
        embedder: EmbeddingService,
        status_gateway: StatusGateway,
        chunk_store: ChunkStore,
        document_source: Optional[DocumentSource] = None,
        max_chunk_size: Optional[int] = None,
    ):
        self.extractor = extractor
        self.chunker = chunker
        self.embedder = embedder
        self.status_gateway = status_gateway
        self.chunk_store = chunk_store
        self.document_source = document_source
        self.max_chunk_size = max_chunk_size

    async def process_file(self, request: ProcessFileRequest) -> ProcessingResult:
        """
        Fetch the requested file and process it.

        Args:
            request: Validated process-file request

        Returns:
            ProcessingResult with counts, or with the error of a fatal stage
        """
        if self.document_source is None:
            raise RuntimeError("FileProcessingPipeline has no document source configured")

        async def load() -> RawDocument:
            return await self.document_source.fetch(request)

        return await self._execute(request.file_id, load)

    async def process_document(self, file_id: str, document: RawDocument) -> ProcessingResult:
        """Process a document whose bytes are already in memory."""

        async def load() -> RawDocument:
            return document

        return await self._execute(file_id, load)

    async def _execute(
        self, file_id: str, load: Callable[[], Awaitable[RawDocument]]
    ) -> ProcessingResult:
        log = file_logger(logger, file_id)
        run = ProcessingRun(file_id, self.status_gateway)
        await run.transition(ProcessingStatus.PROCESSING)

        try:
            document = await load()
            log.info(
                f"Processing file: filename={document.file_name}, "
                f"type={document.file_type}, size={len(document.data)} bytes"
            )

            extraction = await self.extractor.extract(
                document.data, document.file_type, document.file_name
            )
            if not extraction.text:
                raise ExtractionError("Empty content extracted", file_type=document.file_type)

            chunks = await self.chunker.chunk_text(extraction.text, self.max_chunk_size)
            if not chunks:
                raise ChunkingError("Chunking failed")
        except Exception as e:
            message = e.message if isinstance(e, FileProcessorException) else str(e)
            log.error(f"Processing failed: {message}", exc_info=True)
            await run.transition(ProcessingStatus.FAILED, error_message=message)
            return ProcessingResult.failed(message)

        embeddings_created = await self._embed_and_store(log, file_id, chunks)

        await run.transition(
            ProcessingStatus.READY,
            metadata={
                **extraction.metadata,
                "processedAt": _now_ms(),
                "embeddingsCount": embeddings_created,
                "chunksCreated": len(chunks),
            },
        )

        log.info(
            f"Processed file: chunks={len(chunks)}, embeddings={embeddings_created}",
            extra={
                "extra_fields": {
                    "chunks_created": len(chunks),
                    "embeddings_created": embeddings_created,
                }
            },
        )
        return ProcessingResult.completed(len(chunks), embeddings_created)

    async def _embed_and_store(
        self, log: FileLogger, file_id: str, chunks: List[TextChunk]
    ) -> int:
        """Embed and store chunks in index order. Returns how many were stored."""
        created_at = _now_ms()
        stored_count = 0

        for chunk in chunks:
            chunk_fields = {"extra_fields": {"chunk_index": chunk.chunk_index}}
            try:
                embedding = await self.embedder.embed(chunk.text)
                stored = await self.chunk_store.store_chunk(
                    file_id, chunk.chunk_index, chunk.text, embedding, created_at
                )
            except FileProcessorException as e:
                log.error(
                    f"Embedding failed at chunk {chunk.chunk_index}: {e.message} ({e.code})",
                    extra=chunk_fields,
                )
                continue
            except Exception as e:
                log.error(
                    f"Embedding failed at chunk {chunk.chunk_index}: {e}",
                    exc_info=True,
                    extra=chunk_fields,
                )
                continue

            if stored:
                stored_count += 1
            else:
                log.warning(f"Chunk {chunk.chunk_index} was not stored", extra=chunk_fields)

        return stored_count
