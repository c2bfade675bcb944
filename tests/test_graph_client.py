from unittest.mock import AsyncMock, patch

import httpx
import pytest

from file_processor.clients.graph_client import GraphClient
from file_processor.config import GraphSettings
from file_processor.utils.errors import ExternalServiceError


def _patched_async_client(response=None, error=None):
    mock_client = AsyncMock()
    if error is not None:
        mock_client.get.side_effect = error
    else:
        mock_client.get.return_value = response
    patcher = patch("file_processor.clients.graph_client.httpx.AsyncClient")
    return patcher, mock_client


@pytest.mark.asyncio
async def test_download_file_uses_bearer_token():
    response = httpx.Response(
        200, content=b"file-bytes", request=httpx.Request("GET", "https://graph.test")
    )
    patcher, mock_client = _patched_async_client(response=response)

    with patcher as client_cls:
        client_cls.return_value.__aenter__.return_value = mock_client
        data = await GraphClient(GraphSettings()).download_file("item-1", "token-abc")

    assert data == b"file-bytes"
    args, kwargs = mock_client.get.call_args
    assert args[0] == "https://graph.microsoft.com/v1.0/me/drive/items/item-1/content"
    assert kwargs["headers"] == {"Authorization": "Bearer token-abc"}
    assert client_cls.call_args.kwargs["follow_redirects"] is True


@pytest.mark.asyncio
async def test_download_failure_status_raises():
    response = httpx.Response(404, request=httpx.Request("GET", "https://graph.test"))
    patcher, mock_client = _patched_async_client(response=response)

    with patcher as client_cls:
        client_cls.return_value.__aenter__.return_value = mock_client
        with pytest.raises(ExternalServiceError) as exc_info:
            await GraphClient(GraphSettings()).download_file("item-1", "token-abc")

    assert exc_info.value.message == "Failed to download from OneDrive"
    assert exc_info.value.details["status_code"] == 404


@pytest.mark.asyncio
async def test_download_transport_error_raises():
    patcher, mock_client = _patched_async_client(error=httpx.ConnectError("unreachable"))

    with patcher as client_cls:
        client_cls.return_value.__aenter__.return_value = mock_client
        with pytest.raises(ExternalServiceError) as exc_info:
            await GraphClient(GraphSettings()).download_file("item-1", "token-abc")

    assert exc_info.value.details["service"] == "onedrive"
