"""Pydantic models for documents, chunks, statuses and API bodies."""

from file_processor.models.chunk import TextChunk
from file_processor.models.document import ExtractionResult, FileFormat, RawDocument
from file_processor.models.request import ProcessFileRequest, ProcessingResult
from file_processor.models.status import ProcessingStatus

__all__ = [
    "ExtractionResult",
    "FileFormat",
    "ProcessFileRequest",
    "ProcessingResult",
    "ProcessingStatus",
    "RawDocument",
    "TextChunk",
]
