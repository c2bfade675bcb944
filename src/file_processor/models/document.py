"""Document models for raw input and extracted content."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from file_processor.utils.errors import UnsupportedFormatError


class FileFormat(str, Enum):
    """Document formats the extractor understands."""

    PDF = "pdf"
    WORD = "word"
    EXCEL = "excel"
    POWERPOINT = "powerpoint"

    @classmethod
    def parse(cls, file_type: str) -> "FileFormat":
        """
        Resolve a declared file type tag.

        Raises:
            UnsupportedFormatError: If the tag is not a known format
        """
        try:
            return cls((file_type or "").strip().lower())
        except ValueError as e:
            raise UnsupportedFormatError(file_type) from e


class RawDocument(BaseModel):
    """File bytes fully loaded in memory, as handed to the extractor."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., repr=False, description="Raw file content")
    file_type: str = Field(..., description="Declared file type tag (pdf, word, excel, powerpoint)")
    file_name: str = Field(..., description="Display name of the file")


class ExtractionResult(BaseModel):
    """
    Plain text extracted from a document plus descriptive metadata.

    ``metadata`` always carries ``fileType``, ``fileName``, ``extractedAt`` and
    ``contentLength``; formats add their own keys (``pages``, ``warnings``,
    ``sheets``, ``note``).
    """

    text: str = Field(..., description="Extracted text, stripped")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Extraction metadata")
