"""
Discogs API client. Construct with no options for public, unsigned calls, or
with an access token for calls signed on behalf of a user:

    client = DiscogsClient({"access_token": {"token": "...", "secret": "..."}})
    client.identity()

Without a token, the OAuth handshake runs through the client itself
(get_request_token / get_authorize_url / get_access_token); once an access
token is obtained every later call is signed.

A client is not thread-safe: callers sharing one across threads must
serialise access to its transport.
"""
import json
import logging
from collections.abc import Mapping
from urllib.parse import quote

from .config import AccessToken, ClientConfiguration
from .exceptions import ConfigurationError
from .oauth import OAuthConsumer
from .responses import Response, SearchResponse, json_default
from .transport import build_session, build_signing_session, is_signing

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class DiscogsClient:
    """Facade over the Discogs REST API; every call returns a Response (or SearchResponse)."""

    def __init__(self, options=None, consumer=None, http_client=None):
        self.config = ClientConfiguration.from_options(options)
        self.oauth_consumer = None

        # An access token gives us a signing transport straight away
        if self.config.access_token is not None:
            self.http_client = build_signing_session(
                self.config.oauth_options, self.config.access_token, self.config.http_client_options
            )
            self._owns_http_client = True
            logger.debug("Discogs client using signed requests")
            return

        if http_client is None:
            http_client = self.config.http_client
        self._owns_http_client = http_client is None
        self.http_client = http_client if http_client is not None else build_session(self.config.http_client_options)

        if consumer is None:
            consumer = OAuthConsumer(self.config.oauth_options, self.config.http_client_options)
        self.oauth_consumer = consumer

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.http_client.close()

    def is_authorised(self):
        """True when requests are OAuth-signed. Says nothing about token validity."""
        return is_signing(self.http_client)

    # Domain calls

    def identity(self):
        """GET /oauth/identity — the user behind the access token."""
        return Response(self._get("/oauth/identity"))

    def profile(self, username):
        return Response(self._get(f"/users/{_escape(username)}"))

    def label(self, label_id):
        return Response(self._get(f"/labels/{label_id}"))

    def release(self, release_id):
        return Response(self._get(f"/release/{release_id}"))

    def create_listing(self, data):
        """POST /marketplace/listings — data is a mapping or a raw JSON string."""
        return Response(self._post("/marketplace/listings", data))

    def update_listing(self, listing_id, data):
        # Discogs takes POST, not PUT, for listing edits
        return Response(self._post(f"/marketplace/listings/{listing_id}", data))

    def delete_listing(self, listing_id):
        return Response(self._delete(f"/marketplace/listings/{listing_id}"))

    def inventory(self, username, params=None):
        """
        GET /users/{username}/inventory. With an authorized client, username
        comes from identity().username; params may include status
        ('For Sale' / 'Draft'), sort, sort_order, page and per_page.
        """
        return Response(self._get(f"/users/{_escape(username)}/inventory", params))

    def search(self, query, params=None):
        """GET /database/search — params may include type, title, artist, label, page, per_page."""
        params = dict(params or {})
        params["q"] = query
        return SearchResponse(self._get("/database/search", params))

    def search_releases(self, query, params=None):
        return self._search_type("release", query, params)

    def search_masters(self, query, params=None):
        return self._search_type("master", query, params)

    def search_artists(self, query, params=None):
        return self._search_type("artist", query, params)

    def search_labels(self, query, params=None):
        return self._search_type("label", query, params)

    def _search_type(self, resource_type, query, params):
        params = dict(params or {})
        params["type"] = resource_type
        return self.search(query, params)

    # OAuth handshake, delegated to the consumer

    def _consumer(self):
        if self.oauth_consumer is None:
            raise ConfigurationError(
                "This client was built with an access token and has no OAuth consumer"
            )
        return self.oauth_consumer

    def get_request_token(self, http_method="GET", **kwargs):
        """
        Step 1 of the handshake. Defaults to GET: Discogs refuses POST token
        requests without an explicit Content-Length.
        """
        return self._consumer().get_request_token(http_method=http_method, **kwargs)

    def get_authorize_url(self, request_token=None, **kwargs):
        """Step 2: the URL where the user approves the request token."""
        return self._consumer().get_authorize_url(request_token=request_token, **kwargs)

    def parse_authorization_response(self, url):
        """Pull oauth_token / oauth_verifier out of the callback URL."""
        return self._consumer().parse_authorization_response(url)

    def get_access_token(self, verifier=None, request_token=None, **kwargs):
        """
        Step 3: exchange the authorized request token for an access token.
        On success the client switches to a signing transport built from it.
        """
        token = self._consumer().get_access_token(verifier=verifier, request_token=request_token, **kwargs)
        if isinstance(token, AccessToken):
            previous, owned = self.http_client, self._owns_http_client
            self.http_client = build_signing_session(
                self.config.oauth_options, token, self.config.http_client_options
            )
            self._owns_http_client = True
            # a caller-supplied transport is theirs to close
            if owned:
                previous.close()
            logger.info("Discogs client authorised; switched to signed requests")
        return token

    # HTTP

    def _request(self, method, path, params=None, data=None, headers=None):
        url = self.config.url(path)
        logger.debug(f"{method} {url}")
        # fresh kwargs each call so nothing carries over between requests
        return self.http_client.request(
            method,
            url,
            params=dict(params) if params else None,
            data=data,
            headers=dict(headers) if headers else None,
            timeout=self.config.timeout,
        )

    def _get(self, path, params=None):
        return self._request("GET", path, params=params)

    def _post(self, path, data=None):
        return self._send_body("POST", path, data)

    def _put(self, path, data=None):
        return self._send_body("PUT", path, data)

    def _send_body(self, method, path, data):
        if isinstance(data, (Mapping, list, tuple, Response)):
            data = json.dumps(data, default=json_default)
        return self._request(method, path, data=data, headers=JSON_HEADERS)

    def _delete(self, path):
        return self._request("DELETE", path, headers=JSON_HEADERS)


def _escape(value):
    return quote(str(value), safe="")
