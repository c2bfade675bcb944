"""Pytest configuration and fixtures for file-processor tests."""

import io
import os
from typing import Any, Dict, List, Optional

import pytest

# Keep the developer's .env / shell from leaking into the settings under test
for _var in ("ENVIRONMENT", "FILE_PROCESSOR_SECRET", "MAX_CHUNK_SIZE", "EMBEDDING_DIMENSION"):
    os.environ.pop(_var, None)

from file_processor.clients.base import ChunkStore, StatusGateway
from file_processor.config import ConvexSettings, EmbeddingSettings, Settings
from file_processor.models.status import ProcessingStatus


class RecordingStatusGateway(StatusGateway):
    """Status gateway that records every report."""

    def __init__(self, acknowledge: bool = True):
        self.calls: List[Dict[str, Any]] = []
        self.acknowledge = acknowledge

    async def report_status(
        self,
        file_id: str,
        status: ProcessingStatus,
        metadata: Optional[Dict[str, Any]] = None,
        error_message: Optional[str] = None,
    ) -> bool:
        self.calls.append(
            {
                "file_id": file_id,
                "status": status,
                "metadata": metadata,
                "error_message": error_message,
            }
        )
        return self.acknowledge

    @property
    def statuses(self) -> List[ProcessingStatus]:
        return [c["status"] for c in self.calls]


class RecordingChunkStore(ChunkStore):
    """Chunk store that keeps records in memory."""

    def __init__(self, reject_indices: tuple = ()):
        self.records: List[Dict[str, Any]] = []
        self.reject_indices = set(reject_indices)

    async def store_chunk(self, file_id, chunk_index, text, embedding, created_at) -> bool:
        if chunk_index in self.reject_indices:
            return False
        self.records.append(
            {
                "file_id": file_id,
                "chunk_index": chunk_index,
                "text": text,
                "embedding": embedding,
                "created_at": created_at,
            }
        )
        return True


@pytest.fixture
def test_settings():
    """Settings with a known secret and a dummy Convex deployment."""
    return Settings(
        file_processor_secret="test-secret",
        convex=ConvexSettings(deployment_url="https://convex.test"),
        embedding=EmbeddingSettings(openai_api_key="sk-test"),
    )


@pytest.fixture
def status_gateway():
    return RecordingStatusGateway()


@pytest.fixture
def chunk_store():
    return RecordingChunkStore()


@pytest.fixture
def docx_bytes():
    """A small Word document with two paragraphs and a table."""
    from docx import Document

    doc = Document()
    doc.add_paragraph("Quarterly report.")
    doc.add_paragraph("Revenue grew in every region.")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "North"
    table.rows[0].cells[1].text = "12%"
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes():
    """A workbook with one populated sheet and one empty sheet."""
    from openpyxl import Workbook

    wb = Workbook()
    ws = wb.active
    ws.title = "Data"
    ws.append(["Name", "Age"])
    ws.append(["Alice", 30])
    ws.append(["Bob", None, "notes"])
    wb.create_sheet("Empty")
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
