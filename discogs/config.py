"""
Construction-time configuration for DiscogsClient.

Options arrive as a plain mapping (snake_case keys, camelCase accepted as an
alias) and are frozen into a ClientConfiguration. Defaults for the user agent,
consumer credentials and timeout come from Django settings.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from django.conf import settings

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

API_BASE_URI = "https://api.discogs.com"
OAUTH_REQUEST_TOKEN_URL = "https://api.discogs.com/oauth/request_token"
OAUTH_AUTHORIZE_URL = "https://www.discogs.com/oauth/authorize"
OAUTH_ACCESS_TOKEN_URL = "https://api.discogs.com/oauth/access_token"

DEFAULT_TIMEOUT = 20.0

_OPTION_ALIASES = {
    "accessToken": "access_token",
    "oauthOptions": "oauth_options",
    "httpClientOptions": "http_client_options",
    "httpClient": "http_client",
}

# Friendlier names for the OAuth1Session keyword arguments
_OAUTH_OPTION_ALIASES = {
    "consumer_key": "client_key",
    "consumerKey": "client_key",
    "consumer_secret": "client_secret",
    "consumerSecret": "client_secret",
    "callback_url": "callback_uri",
    "callbackUrl": "callback_uri",
    "signatureMethod": "signature_method",
}

# Session attributes that http_client_options may set; timeout is applied per request
HTTP_CLIENT_OPTIONS = ("headers", "timeout", "proxies", "verify", "cert", "max_redirects")


@dataclass(frozen=True)
class AccessToken:
    """An authorized (token, secret) pair."""

    token: str
    secret: str = field(repr=False)

    @classmethod
    def coerce(cls, value):
        """
        Build an AccessToken from an AccessToken, a mapping with token/secret
        (or oauth_token/oauth_token_secret) keys, or a (token, secret) pair.
        Raises ConfigurationError if either half is missing or empty.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            token = value.get("token", value.get("oauth_token"))
            secret = value.get("secret", value.get("oauth_token_secret"))
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            token, secret = value
        else:
            raise ConfigurationError(
                f"Access token must be a mapping or a (token, secret) pair, got {type(value).__name__}"
            )
        if not token or not secret:
            raise ConfigurationError("Access token requires both a token and a secret")
        return cls(token=str(token), secret=str(secret))

    def as_oauth_kwargs(self):
        """Keyword arguments for OAuth1Session."""
        return {"resource_owner_key": self.token, "resource_owner_secret": self.secret}


@dataclass(frozen=True)
class RequestToken:
    """Temporary credentials returned by the request-token endpoint."""

    token: str
    secret: str = field(repr=False)
    callback_confirmed: bool = False

    @classmethod
    def from_response(cls, data):
        return cls(
            token=data.get("oauth_token", ""),
            secret=data.get("oauth_token_secret", ""),
            callback_confirmed=str(data.get("oauth_callback_confirmed", "")).lower() == "true",
        )


@dataclass(frozen=True)
class ClientConfiguration:
    """Immutable snapshot of everything DiscogsClient was built with."""

    base_uri: str = API_BASE_URI
    request_token_url: str = OAUTH_REQUEST_TOKEN_URL
    authorize_url: str = OAUTH_AUTHORIZE_URL
    access_token_url: str = OAUTH_ACCESS_TOKEN_URL
    access_token: AccessToken = None
    oauth_options: Mapping = field(default_factory=lambda: MappingProxyType({}))
    http_client_options: Mapping = field(default_factory=lambda: MappingProxyType({}))
    http_client: object = None

    @classmethod
    def from_options(cls, options=None):
        """Normalise a construction options mapping into a ClientConfiguration."""
        options = _normalise_keys(options or {}, _OPTION_ALIASES)
        for key in options:
            if key not in ("access_token", "oauth_options", "http_client_options", "http_client"):
                logger.debug(f"Ignoring unknown client option {key!r}")

        access_token = options.get("access_token")
        if access_token is not None:
            access_token = AccessToken.coerce(access_token)

        return cls(
            base_uri=getattr(settings, "DISCOGS_API_BASE_URL", None) or API_BASE_URI,
            access_token=access_token,
            oauth_options=MappingProxyType(_oauth_options(options.get("oauth_options"))),
            http_client_options=MappingProxyType(_http_client_options(options.get("http_client_options"))),
            http_client=options.get("http_client"),
        )

    @property
    def timeout(self):
        return self.http_client_options.get("timeout", DEFAULT_TIMEOUT)

    def url(self, path):
        """Base URI + path, appended verbatim."""
        return f"{self.base_uri.rstrip('/')}{path}"


def _normalise_keys(options, aliases):
    if not isinstance(options, Mapping):
        raise ConfigurationError(f"Options must be a mapping, got {type(options).__name__}")
    normalised = {}
    for key, value in options.items():
        normalised[aliases.get(key, key)] = value
    return normalised


def _oauth_options(oauth_options):
    """Caller OAuth options with consumer defaults filled in and the Discogs endpoints forced."""
    merged = _normalise_keys(oauth_options or {}, _OAUTH_OPTION_ALIASES)
    if not merged.get("client_key"):
        merged["client_key"] = getattr(settings, "DISCOGS_CONSUMER_KEY", "") or ""
    if not merged.get("client_secret"):
        merged["client_secret"] = getattr(settings, "DISCOGS_CONSUMER_SECRET", "") or ""
    merged["request_token_url"] = OAUTH_REQUEST_TOKEN_URL
    merged["authorize_url"] = OAUTH_AUTHORIZE_URL
    merged["access_token_url"] = OAUTH_ACCESS_TOKEN_URL
    return merged


def _http_client_options(http_client_options):
    options = dict(_normalise_keys(http_client_options or {}, {}))
    unknown = sorted(set(options) - set(HTTP_CLIENT_OPTIONS))
    if unknown:
        raise ConfigurationError(f"Unsupported http_client_options: {', '.join(unknown)}")

    headers = {"User-Agent": getattr(settings, "DISCOGS_USER_AGENT", "") or "DiscogsClient/0.1"}
    headers.update(options.get("headers") or {})
    options["headers"] = MappingProxyType(headers)
    options.setdefault("timeout", getattr(settings, "DISCOGS_REQUEST_TIMEOUT", None) or DEFAULT_TIMEOUT)
    return options
