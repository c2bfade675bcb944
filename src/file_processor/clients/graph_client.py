"""Microsoft Graph client for OneDrive file downloads."""

import httpx

from file_processor.config import GraphSettings
from file_processor.utils.errors import ExternalServiceError
from file_processor.utils.logging import get_logger

logger = get_logger("graph_client")


class GraphClient:
    """Downloads drive item content from OneDrive."""

    def __init__(self, settings: GraphSettings):
        self.graph_api_url = settings.base_url.rstrip("/")
        self.timeout = settings.timeout

    async def download_file(self, item_id: str, access_token: str) -> bytes:
        """
        Download a OneDrive item's content.

        Args:
            item_id: Drive item ID
            access_token: Graph bearer token of the item owner

        Returns:
            File content as bytes

        Raises:
            ExternalServiceError: If the download fails
        """
        url = f"{self.graph_api_url}/me/drive/items/{item_id}/content"
        logger.info(f"Downloading OneDrive item: {item_id}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(
                    url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Request error downloading OneDrive item: {item_id} - {e}")
            raise ExternalServiceError(
                "onedrive", f"Failed to download from OneDrive: {e}"
            ) from e

        if not response.is_success:
            logger.error(
                f"Failed to download OneDrive item: {item_id}, status={response.status_code}"
            )
            raise ExternalServiceError(
                "onedrive",
                "Failed to download from OneDrive",
                details={"status_code": response.status_code},
            )

        logger.info(f"Downloaded OneDrive item: {item_id}, size={len(response.content)} bytes")
        return response.content
