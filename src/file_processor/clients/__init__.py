"""Clients for collaborator services (Convex, Microsoft Graph)."""

from file_processor.clients.base import ChunkStore, DocumentSource, StatusGateway
from file_processor.clients.convex_client import ConvexClient
from file_processor.clients.graph_client import GraphClient

__all__ = [
    "ChunkStore",
    "ConvexClient",
    "DocumentSource",
    "GraphClient",
    "StatusGateway",
]
