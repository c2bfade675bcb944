"""Convex deployment client: status updates, chunk storage and Graph tokens."""

from typing import Any, Dict, List, Optional

import httpx

from file_processor.clients.base import ChunkStore, StatusGateway
from file_processor.config import ConvexSettings
from file_processor.models.status import ProcessingStatus
from file_processor.utils.errors import ExternalServiceError, PersistenceError
from file_processor.utils.logging import get_logger

logger = get_logger("convex_client")

UPDATE_STATUS_PATH = "/api/chatbotFilesMutations/updateFileStatus"
INSERT_CHUNK_PATH = "/api/chatbotFilesMutations/insertChunkAndEmbedding"
ACCESS_TOKEN_PATH = "/api/microsoftGraph/getValidAccessToken"


class ConvexClient(StatusGateway, ChunkStore):
    """
    HTTP client for the Convex deployment's HTTP actions.

    Handles:
    - Updating file processing status (best-effort)
    - Inserting chunk + embedding records
    - Looking up a valid Microsoft Graph access token for a user
    """

    def __init__(self, settings: ConvexSettings):
        """Initialize Convex client."""
        self.base_url = (settings.deployment_url or "").rstrip("/")
        self.timeout = settings.timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def report_status(
        self,
        file_id: str,
        status: ProcessingStatus,
        metadata: Optional[Dict[str, Any]] = None,
        error_message: Optional[str] = None,
    ) -> bool:
        """
        Update file processing status.

        Failures are logged and reported through the return value only.
        """
        payload = {
            "fileId": file_id,
            "status": status.value,
            "metadata": metadata,
            "errorMessage": error_message,
        }
        try:
            response = await self._client.post(UPDATE_STATUS_PATH, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Request error updating file status: {file_id} -> {status.value} - {e}")
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error updating file status: {file_id} -> {status.value} - {e}",
                exc_info=True,
            )
            return False

        if response.is_success:
            logger.info(f"Updated file status: {file_id} -> {status.value}")
            return True

        logger.error(
            f"Failed to update file status: {file_id} -> {status.value}. "
            f"Status: {response.status_code}, Response: {response.text}"
        )
        return False

    async def store_chunk(
        self,
        file_id: str,
        chunk_index: int,
        text: str,
        embedding: List[float],
        created_at: int,
    ) -> bool:
        """Insert one chunk and its embedding. Returns whether Convex accepted it."""
        payload = {
            "fileId": file_id,
            "chunkIndex": chunk_index,
            "text": text,
            "embedding": embedding,
            "createdAt": created_at,
        }
        try:
            response = await self._client.post(INSERT_CHUNK_PATH, json=payload)
        except httpx.TimeoutException as e:
            raise PersistenceError(
                f"Timeout storing chunk {chunk_index} for file {file_id}",
                details={"chunk_index": chunk_index},
            ) from e
        except httpx.HTTPError as e:
            raise PersistenceError(
                f"Request error storing chunk {chunk_index} for file {file_id}: {e}",
                details={"chunk_index": chunk_index},
            ) from e

        if not response.is_success:
            logger.warning(
                f"Convex rejected chunk {chunk_index} for file {file_id}: "
                f"status={response.status_code}"
            )
        return response.is_success

    async def get_valid_access_token(self, user_email: str) -> str:
        """
        Get a Microsoft Graph access token for the user.

        Raises:
            ExternalServiceError: If Convex does not return a token
        """
        try:
            response = await self._client.post(ACCESS_TOKEN_PATH, json={"userEmail": user_email})
        except httpx.HTTPError as e:
            logger.error(f"Request error fetching access token for {user_email} - {e}")
            raise ExternalServiceError(
                "convex", f"Failed to fetch access token: {e}"
            ) from e

        if not response.is_success:
            logger.error(
                f"Invalid token response for {user_email}: status={response.status_code}"
            )
            raise ExternalServiceError(
                "convex",
                "Invalid token response",
                details={"status_code": response.status_code},
            )

        try:
            access_token = response.json().get("accessToken")
        except ValueError as e:
            raise ExternalServiceError("convex", "Invalid token response") from e
        if not access_token:
            raise ExternalServiceError("convex", "Invalid token response")
        return access_token
