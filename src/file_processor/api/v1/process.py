"""File processing endpoint."""

import secrets
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from file_processor.config import Settings
from file_processor.dependencies import get_app_settings, get_pipeline
from file_processor.models.request import ProcessFileRequest
from file_processor.services.pipeline import FileProcessingPipeline
from file_processor.utils.errors import InvalidRequestError, UnauthorizedError
from file_processor.utils.logging import get_logger

logger = get_logger("process")

router = APIRouter(tags=["processing"])


def _secret_matches(provided: Any, expected: Optional[str]) -> bool:
    if not isinstance(provided, str) or not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def _read_payload(request: Request) -> Dict[str, Any]:
    """Return the JSON object body, or an empty dict when there is none."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def validate_request(payload: Dict[str, Any], settings: Settings) -> ProcessFileRequest:
    """
    Check the shared secret, then the required fields.

    The secret is checked on the raw payload so that a malformed body is
    still answered with 401 when the caller is not authorized.

    Raises:
        UnauthorizedError: If the secret is missing or wrong
        InvalidRequestError: If a required field is missing or not a string
    """
    if not _secret_matches(payload.get("secret"), settings.file_processor_secret):
        raise UnauthorizedError()

    try:
        body = ProcessFileRequest.model_validate(payload)
    except ValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidRequestError(missing=invalid) from e

    missing = body.missing_fields()
    if missing:
        raise InvalidRequestError(missing=missing)
    return body


@router.post(
    "/process-file",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": ProcessFileRequest.model_json_schema(by_alias=True)}
            },
            "required": True,
        }
    },
)
async def process_file(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    pipeline: FileProcessingPipeline = Depends(get_pipeline),
):
    """
    Download, extract, chunk, embed and store one OneDrive file.

    Responds 401 for a bad secret and 400 for missing fields, before any
    status is recorded; 500 when a fatal processing stage fails; 200 with
    chunk and embedding counts otherwise.
    """
    payload = await _read_payload(request)
    try:
        body = validate_request(payload, settings)
    except (UnauthorizedError, InvalidRequestError) as e:
        logger.warning(f"Rejected process-file request: {e.code} - {e.details or e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})

    result = await pipeline.process_file(body)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.to_response(),
        )
    return result.to_response()
