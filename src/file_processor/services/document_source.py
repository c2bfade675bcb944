"""OneDrive-backed document source."""

from file_processor.clients.base import DocumentSource
from file_processor.clients.convex_client import ConvexClient
from file_processor.clients.graph_client import GraphClient
from file_processor.models.document import RawDocument
from file_processor.models.request import ProcessFileRequest
from file_processor.utils.logging import get_logger

logger = get_logger("document_source")


class OneDriveDocumentSource(DocumentSource):
    """Fetches a user's OneDrive file using a token issued by Convex."""

    def __init__(self, convex_client: ConvexClient, graph_client: GraphClient):
        self.convex_client = convex_client
        self.graph_client = graph_client

    async def fetch(self, request: ProcessFileRequest) -> RawDocument:
        access_token = await self.convex_client.get_valid_access_token(request.user_email)
        data = await self.graph_client.download_file(request.one_drive_file_id, access_token)
        return RawDocument(data=data, file_type=request.file_type, file_name=request.file_name)
