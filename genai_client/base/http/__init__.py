"""HTTP transport layer: pooled clients, header contract and dispatcher."""

from .client import close_all_clients, get_httpx_client
from .dispatcher import Dispatcher
from .headers import ClientInfo

__all__ = ["get_httpx_client", "close_all_clients", "Dispatcher", "ClientInfo"]
