"""
Tests for the OAuth handshake. OAuth1Session.request is patched so token
endpoints answer with canned form-encoded bodies.
"""
from unittest import mock

from django.test import SimpleTestCase, override_settings
from requests_oauthlib import OAuth1Session
from requests_oauthlib.oauth1_session import TokenMissing, TokenRequestDenied

from discogs.client import DiscogsClient
from discogs.config import AccessToken, RequestToken
from discogs.exceptions import ConfigurationError

from .helpers import DISCOGS_SETTINGS, make_response

REQUEST_TOKEN_BODY = "oauth_token=rt&oauth_token_secret=rs&oauth_callback_confirmed=true"
ACCESS_TOKEN_BODY = "oauth_token=at&oauth_token_secret=as"


@override_settings(**DISCOGS_SETTINGS)
class OAuthConsumerTests(SimpleTestCase):

    def setUp(self):
        patcher = mock.patch.object(OAuth1Session, "request")
        self.request = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = DiscogsClient()
        self.consumer = self.client.oauth_consumer

    def test_request_token_defaults_to_get(self):
        self.request.return_value = make_response(200, body=REQUEST_TOKEN_BODY)
        token = self.consumer.get_request_token()

        self.assertEqual(token, RequestToken("rt", "rs", True))
        args, _ = self.request.call_args
        self.assertEqual(args, ("GET", "https://api.discogs.com/oauth/request_token"))

    def test_request_token_via_post(self):
        self.request.return_value = make_response(200, body=REQUEST_TOKEN_BODY)
        token = self.consumer.get_request_token(http_method="POST")
        self.assertEqual(token.token, "rt")
        self.assertEqual(self.request.call_args.args[0], "POST")

    def test_request_token_denied(self):
        self.request.return_value = make_response(401, body="Invalid consumer.")
        with self.assertRaises(TokenRequestDenied):
            self.consumer.get_request_token()

    def test_request_token_missing_from_body(self):
        self.request.return_value = make_response(200, body="oauth_callback_confirmed=true")
        with self.assertRaises(TokenMissing):
            self.consumer.get_request_token()

    def test_request_token_needs_consumer_key(self):
        with override_settings(DISCOGS_CONSUMER_KEY=""):
            client = DiscogsClient()
        with self.assertRaises(ConfigurationError):
            client.get_request_token()
        self.request.assert_not_called()

    def test_authorize_url(self):
        self.request.return_value = make_response(200, body=REQUEST_TOKEN_BODY)
        self.consumer.get_request_token()
        self.assertEqual(
            self.consumer.get_authorize_url(),
            "https://www.discogs.com/oauth/authorize?oauth_token=rt",
        )

    def test_authorize_url_for_explicit_token(self):
        url = self.consumer.get_authorize_url(RequestToken("other", "secret"))
        self.assertEqual(url, "https://www.discogs.com/oauth/authorize?oauth_token=other")

    def test_authorize_url_without_request_token(self):
        with self.assertRaises(ConfigurationError):
            self.consumer.get_authorize_url()

    def test_access_token_exchange(self):
        self.request.side_effect = [
            make_response(200, body=REQUEST_TOKEN_BODY),
            make_response(200, body=ACCESS_TOKEN_BODY),
        ]
        self.consumer.get_request_token()
        token = self.consumer.get_access_token("verifier")

        self.assertEqual(token, AccessToken("at", "as"))
        args, _ = self.request.call_args
        self.assertEqual(args, ("POST", "https://api.discogs.com/oauth/access_token"))
        # the request token is single-use
        self.assertIsNone(self.consumer.request_token)

    def test_access_token_uses_verifier_from_callback(self):
        self.request.side_effect = [
            make_response(200, body=REQUEST_TOKEN_BODY),
            make_response(200, body=ACCESS_TOKEN_BODY),
        ]
        self.consumer.get_request_token()
        parsed = self.consumer.parse_authorization_response(
            "https://example.com/callback?oauth_token=rt&oauth_verifier=v123"
        )
        self.assertEqual(parsed, {"oauth_token": "rt", "oauth_verifier": "v123"})
        self.assertEqual(self.consumer.get_access_token(), AccessToken("at", "as"))

    def test_access_token_without_request_token(self):
        with self.assertRaises(ConfigurationError):
            self.consumer.get_access_token("verifier")

    def test_full_handshake_authorises_client(self):
        self.request.side_effect = [
            make_response(200, body=REQUEST_TOKEN_BODY),
            make_response(200, body=ACCESS_TOKEN_BODY),
        ]
        self.assertFalse(self.client.is_authorised())
        request_token = self.client.get_request_token()
        self.assertIn("oauth_token=rt", self.client.get_authorize_url(request_token))
        access_token = self.client.get_access_token("verifier", request_token)

        self.assertEqual(access_token, AccessToken("at", "as"))
        self.assertTrue(self.client.is_authorised())
        self.assertEqual(self.client.http_client.headers["User-Agent"], "DiscogsClientTests/1.0")

    def test_build_http_client(self):
        session = self.consumer.build_http_client({"token": "at", "secret": "as"})
        self.assertIsInstance(session, OAuth1Session)
        self.assertEqual(session.headers["User-Agent"], "DiscogsClientTests/1.0")
