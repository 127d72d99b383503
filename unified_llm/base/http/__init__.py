"""HTTP transport package: pooled clients and the transport collaborator."""

from .client import close_all_clients, get_httpx_client
from .transport import ChunkSource, HttpTransport

__all__ = ["get_httpx_client", "close_all_clients", "HttpTransport", "ChunkSource"]
