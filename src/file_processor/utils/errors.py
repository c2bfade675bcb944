"""Custom exception classes for the File Processor service."""

from typing import Any, Dict, Optional


class FileProcessorException(Exception):
    """Base exception for all File Processor errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "status_code": self.status_code,
                "details": self.details,
            }
        }


class ExtractionError(FileProcessorException):
    """Exception raised when a document's text cannot be extracted."""

    def __init__(
        self,
        message: str = "Document extraction failed",
        file_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: str = "EXTRACTION_ERROR",
    ):
        error_details = details or {}
        if file_type:
            error_details["file_type"] = file_type
        super().__init__(
            message=message,
            status_code=422,
            code=code,
            details=error_details,
        )


class UnsupportedFormatError(ExtractionError):
    """Exception raised for a file type outside the supported formats."""

    def __init__(self, file_type: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Unsupported file type: {file_type}",
            file_type=file_type,
            details=details,
            code="UNSUPPORTED_FORMAT",
        )


class ChunkingError(FileProcessorException):
    """Exception raised for text chunking errors."""

    def __init__(
        self,
        message: str = "Chunking failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="CHUNKING_ERROR",
            details=details,
        )


class EmbeddingError(FileProcessorException):
    """Exception raised for embedding generation errors."""

    def __init__(
        self,
        message: str = "Embedding generation failed",
        model: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if model:
            error_details["model"] = model
        super().__init__(
            message=message,
            status_code=502,
            code="EMBEDDING_ERROR",
            details=error_details,
        )


class PersistenceError(FileProcessorException):
    """Exception raised when a chunk record cannot be stored."""

    def __init__(
        self,
        message: str = "Chunk persistence failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=502,
            code="PERSISTENCE_ERROR",
            details=details,
        )


class ExternalServiceError(FileProcessorException):
    """Exception raised when external service calls fail."""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_message = message or f"External service '{service}' unavailable"
        error_details = details or {}
        error_details["service"] = service
        super().__init__(
            message=error_message,
            status_code=status_code,
            code="EXTERNAL_SERVICE_ERROR",
            details=error_details,
        )


class StatusTransitionError(FileProcessorException):
    """Exception raised when a status change is attempted after a terminal status."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot transition status from {current} to {requested}",
            status_code=500,
            code="STATUS_TRANSITION_ERROR",
            details={"current": current, "requested": requested},
        )


class UnauthorizedError(FileProcessorException):
    """Exception raised when the shared secret is missing or wrong."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message, status_code=401, code="UNAUTHORIZED")


class InvalidRequestError(FileProcessorException):
    """Exception raised when required request fields are missing."""

    def __init__(
        self,
        message: str = "Missing required parameters",
        missing: Optional[list] = None,
    ):
        super().__init__(
            message=message,
            status_code=400,
            code="INVALID_REQUEST",
            details={"missing": missing} if missing else None,
        )
