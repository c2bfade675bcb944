"""Text extraction for the supported document formats."""

import io
import time
import warnings
from typing import Any, Awaitable, Callable, Dict, Tuple

from file_processor.models.document import ExtractionResult, FileFormat
from file_processor.utils.errors import ExtractionError, FileProcessorException
from file_processor.utils.logging import get_logger

logger = get_logger("extractor_service")

POWERPOINT_PLACEHOLDER = "PowerPoint content extraction is simplified."
POWERPOINT_NOTE = "Basic placeholder. Use specialized service for deep extraction."

_Extracted = Tuple[str, Dict[str, Any]]


class ExtractorService:
    """
    Service for extracting plain text from documents.

    Supports:
    - PDF - PyPDF2
    - Word (OOXML) - python-docx
    - Excel (OOXML) - openpyxl
    - PowerPoint - placeholder text only
    """

    def __init__(self):
        """Initialize the handler table, one handler per format."""
        self._handlers: Dict[FileFormat, Callable[[bytes, str], Awaitable[_Extracted]]] = {
            FileFormat.PDF: self._extract_pdf,
            FileFormat.WORD: self._extract_word,
            FileFormat.EXCEL: self._extract_excel,
            FileFormat.POWERPOINT: self._extract_powerpoint,
        }
        missing = set(FileFormat) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No extractor registered for: {sorted(f.value for f in missing)}")

    async def extract(self, file_data: bytes, file_type: str, file_name: str) -> ExtractionResult:
        """
        Extract text and metadata from a document.

        Args:
            file_data: Raw file bytes
            file_type: Declared format tag (pdf, word, excel, powerpoint)
            file_name: Display name, recorded in metadata

        Returns:
            ExtractionResult with stripped text and metadata

        Raises:
            UnsupportedFormatError: If the format tag is not recognized
            ExtractionError: If parsing fails
        """
        file_format = FileFormat.parse(file_type)
        handler = self._handlers[file_format]

        logger.info(f"Extracting document: type={file_format.value}, filename={file_name}")

        try:
            raw_text, format_metadata = await handler(file_data, file_name)
        except FileProcessorException:
            raise
        except Exception as e:
            logger.error(f"Extract error: {file_name} - {e}", exc_info=True)
            raise ExtractionError(
                f"Failed to extract: {e}",
                file_type=file_format.value,
            ) from e

        text = raw_text.strip()
        metadata: Dict[str, Any] = {
            "fileType": file_type,
            "fileName": file_name,
            **format_metadata,
            "extractedAt": int(time.time() * 1000),
            "contentLength": len(text),
        }

        logger.info(
            f"Extracted document: filename={file_name}, type={file_format.value}, "
            f"chars={len(text)}"
        )
        return ExtractionResult(text=text, metadata=metadata)

    async def _extract_pdf(self, file_data: bytes, file_name: str) -> _Extracted:
        import PyPDF2

        try:
            reader = PyPDF2.PdfReader(io.BytesIO(file_data))
            page_count = len(reader.pages)
        except PyPDF2.errors.PdfReadError as e:
            raise ExtractionError(
                f"Failed to extract: PDF file is corrupted or invalid: {e}",
                file_type=FileFormat.PDF.value,
            ) from e

        pages = []
        for page_num, page in enumerate(reader.pages, start=1):
            try:
                pages.append(page.extract_text() or "")
            except Exception as page_error:
                logger.warning(
                    f"Failed to extract text from page {page_num} in {file_name}: {page_error}"
                )

        text = "\n".join(pages)
        if not text.strip():
            raise ExtractionError(
                "Failed to extract: no text found in PDF. The file may be image-based.",
                file_type=FileFormat.PDF.value,
            )
        return text, {"pages": page_count}

    async def _extract_word(self, file_data: bytes, file_name: str) -> _Extracted:
        from docx import Document

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            doc = Document(io.BytesIO(file_data))

        parts = [paragraph.text for paragraph in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                line = "\t".join(cell.text.strip() for cell in row.cells)
                if line.strip():
                    parts.append(line)

        text = "\n".join(parts)
        if not text.strip():
            raise ExtractionError(
                "Failed to extract: no text found in Word document.",
                file_type=FileFormat.WORD.value,
            )
        return text, {"warnings": [str(w.message) for w in caught]}

    async def _extract_excel(self, file_data: bytes, file_name: str) -> _Extracted:
        from openpyxl import load_workbook

        workbook = load_workbook(io.BytesIO(file_data), read_only=True, data_only=True)
        try:
            sheets = []
            for worksheet in workbook.worksheets:
                # read-only sheets trust the stored <dimension>, which some writers leave stale
                worksheet.reset_dimensions()
                rows = []
                for row in worksheet.iter_rows(values_only=True):
                    line = "\t".join(filter(None, (_cell_text(value) for value in row)))
                    if line.strip():
                        rows.append(line)
                if rows:
                    sheets.append(f"Sheet: {worksheet.title}\n" + "\n".join(rows))
            sheet_count = len(workbook.worksheets)
        finally:
            workbook.close()

        text = "\n\n".join(sheets)
        if not text.strip():
            raise ExtractionError(
                "Failed to extract: workbook contains no cell values.",
                file_type=FileFormat.EXCEL.value,
            )
        return text, {"sheets": sheet_count}

    async def _extract_powerpoint(self, file_data: bytes, file_name: str) -> _Extracted:
        logger.warning(f"PowerPoint extraction is a placeholder: {file_name}")
        return POWERPOINT_PLACEHOLDER, {"note": POWERPOINT_NOTE}


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
