"""
HTTP client for the clothing store API.

Mirrors the mobile app's service layer: thin wrappers around the REST
endpoints plus a small on-disk session (token, user, cached cart).
"""

from clothing_client.config import ClientConfig
from clothing_client.errors import ApiError, ClientError, NotLoggedInError, StockLimitError
from clothing_client.api import ApiClient
from clothing_client.session import SessionStore

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientConfig",
    "ClientError",
    "NotLoggedInError",
    "SessionStore",
    "StockLimitError",
]
