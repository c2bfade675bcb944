from file_processor.utils.errors import (
    EmbeddingError,
    ExtractionError,
    ExternalServiceError,
    FileProcessorException,
    InvalidRequestError,
    UnauthorizedError,
    UnsupportedFormatError,
)


def test_to_dict():
    error = ExtractionError("Failed to extract: bad header", file_type="pdf")

    assert error.to_dict() == {
        "error": {
            "message": "Failed to extract: bad header",
            "code": "EXTRACTION_ERROR",
            "status_code": 422,
            "details": {"file_type": "pdf"},
        }
    }


def test_unsupported_format_is_extraction_error():
    error = UnsupportedFormatError("txt")

    assert isinstance(error, ExtractionError)
    assert isinstance(error, FileProcessorException)
    assert error.message == "Unsupported file type: txt"
    assert error.code == "UNSUPPORTED_FORMAT"


def test_request_errors():
    assert UnauthorizedError().status_code == 401
    error = InvalidRequestError(missing=["fileId"])
    assert error.status_code == 400
    assert error.message == "Missing required parameters"
    assert error.details == {"missing": ["fileId"]}


def test_service_errors_carry_context():
    assert ExternalServiceError("onedrive").message == "External service 'onedrive' unavailable"
    assert EmbeddingError("rate limited", model="text-embedding-3-small").details == {
        "model": "text-embedding-3-small"
    }
