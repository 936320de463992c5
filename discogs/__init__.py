"""
Thin client for the Discogs REST API.
"""
from .client import DiscogsClient
from .config import AccessToken, ClientConfiguration, RequestToken
from .exceptions import ConfigurationError, DiscogsError, PropertyAccessError
from .oauth import OAuthConsumer
from .responses import JsonObject, Response, SearchResponse

__all__ = [
    "AccessToken",
    "ClientConfiguration",
    "ConfigurationError",
    "DiscogsClient",
    "DiscogsError",
    "JsonObject",
    "OAuthConsumer",
    "PropertyAccessError",
    "RequestToken",
    "Response",
    "SearchResponse",
]
