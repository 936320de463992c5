"""
HTTP transports: a plain requests.Session, or an OAuth1Session that signs
every request with the consumer credentials and an access token.
"""
import requests
from requests_oauthlib import OAuth1Session

from .exceptions import ConfigurationError

# Keys in oauth_options that are ours, not OAuth1Session's
_ENDPOINT_KEYS = ("request_token_url", "authorize_url", "access_token_url")


def session_kwargs(oauth_options):
    """OAuth1Session keyword arguments from the merged oauth options."""
    kwargs = {k: v for k, v in oauth_options.items() if k not in _ENDPOINT_KEYS}
    if not kwargs.get("client_key"):
        raise ConfigurationError(
            "A Discogs consumer key is required for OAuth (set DISCOGS_CONSUMER_KEY "
            "or pass oauth_options={'consumer_key': ...})"
        )
    return kwargs


def apply_options(session, http_client_options):
    """Copy session-level http_client_options (headers, proxies, ...) onto a session."""
    for key, value in http_client_options.items():
        if key == "headers":
            session.headers.update(value)
        elif key != "timeout":
            setattr(session, key, value)
    return session


def build_session(http_client_options):
    return apply_options(requests.Session(), http_client_options)


def build_signing_session(oauth_options, access_token, http_client_options, **extra):
    """An OAuth1Session that signs requests on behalf of access_token."""
    kwargs = session_kwargs(oauth_options)
    kwargs.update(extra)
    if access_token is not None:
        kwargs.update(access_token.as_oauth_kwargs())
    return apply_options(OAuth1Session(**kwargs), http_client_options)


def is_signing(http_client):
    return isinstance(http_client, OAuth1Session)
