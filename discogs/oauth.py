"""
OAuth 1.0a consumer for Discogs. Signing and token exchange are done by
requests-oauthlib; this module only knows the Discogs endpoints and keeps the
temporary request token between the handshake steps.
"""
import logging

from oauthlib.common import urldecode
from requests_oauthlib.oauth1_session import TokenRequestDenied

from .config import (
    OAUTH_ACCESS_TOKEN_URL,
    OAUTH_AUTHORIZE_URL,
    OAUTH_REQUEST_TOKEN_URL,
    AccessToken,
    RequestToken,
)
from .exceptions import ConfigurationError
from .transport import build_signing_session

logger = logging.getLogger(__name__)


class OAuthConsumer:
    """
    Three-legged OAuth handshake against Discogs:

        consumer.get_request_token()
        url = consumer.get_authorize_url()      # send the user here
        token = consumer.get_access_token(verifier)
    """

    def __init__(self, oauth_options, http_client_options=None):
        self.oauth_options = dict(oauth_options)
        self.request_token_url = self.oauth_options.get("request_token_url", OAUTH_REQUEST_TOKEN_URL)
        self.authorize_url = self.oauth_options.get("authorize_url", OAUTH_AUTHORIZE_URL)
        self.access_token_url = self.oauth_options.get("access_token_url", OAUTH_ACCESS_TOKEN_URL)
        self.http_client_options = dict(http_client_options or {})
        self.request_token = None
        self.verifier = None
        self._session = None

    def _new_session(self, request_token=None, **extra):
        return build_signing_session(
            self.oauth_options, request_token, self.http_client_options, **extra
        )

    def get_request_token(self, http_method="GET", **request_kwargs):
        """
        Fetch temporary credentials. GET is the default because Discogs rejects
        POST token requests that carry no explicit Content-Length.
        """
        session = self._new_session()
        request_kwargs.setdefault("timeout", self.http_client_options.get("timeout"))
        if http_method.upper() == "POST":
            token = session.fetch_request_token(self.request_token_url, **request_kwargs)
        else:
            response = session.request(http_method.upper(), self.request_token_url, **request_kwargs)
            if response.status_code >= 400:
                raise TokenRequestDenied(
                    f"Token request failed with code {response.status_code}, "
                    f"response was '{response.text}'.",
                    response,
                )
            token = dict(urldecode(response.text.strip()))
            # populates resource_owner_key/secret, raises TokenMissing if absent
            session.token = token

        self._session = session
        self.request_token = RequestToken.from_response(token)
        logger.info("Obtained Discogs request token")
        return self.request_token

    def get_authorize_url(self, request_token=None, **kwargs):
        """URL the user visits to grant access to the request token."""
        request_token = request_token or self.request_token
        if request_token is None:
            raise ConfigurationError("No request token; call get_request_token() first")
        session = self._session or self._new_session()
        return session.authorization_url(self.authorize_url, request_token=request_token.token, **kwargs)

    def parse_authorization_response(self, url):
        """Extract oauth_token and oauth_verifier from the callback URL."""
        session = self._session or self._new_session()
        self._session = session
        data = session.parse_authorization_response(url)
        self.verifier = data.get("oauth_verifier")
        return data

    def get_access_token(self, verifier=None, request_token=None, **request_kwargs):
        """Exchange the authorized request token (plus verifier) for an AccessToken."""
        request_token = request_token or self.request_token
        if request_token is None:
            raise ConfigurationError("No request token; call get_request_token() first")
        verifier = verifier or self.verifier

        session = self._new_session(
            request_token=AccessToken(token=request_token.token, secret=request_token.secret),
            verifier=verifier,
        )
        request_kwargs.setdefault("timeout", self.http_client_options.get("timeout"))
        token = session.fetch_access_token(self.access_token_url, **request_kwargs)
        self.request_token = None
        self.verifier = None
        self._session = None
        logger.info("Exchanged Discogs request token for an access token")
        return AccessToken.coerce(token)

    def build_http_client(self, access_token, http_client_options=None):
        """A transport that signs every request with access_token."""
        if http_client_options is None:
            http_client_options = self.http_client_options
        return build_signing_session(self.oauth_options, AccessToken.coerce(access_token), http_client_options)
