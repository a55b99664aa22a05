"""HTML 클라이언트(위젯) 패키지 - export only."""

from .base import BaseHtmlClient
from .context import ClientContext
from .factory import create_client, register_client, registered_clients
from .catalog import CatalogProductClient, CatalogProductItemsClient

__all__ = [
    "BaseHtmlClient",
    "ClientContext",
    "create_client",
    "register_client",
    "registered_clients",
    "CatalogProductClient",
    "CatalogProductItemsClient",
]
