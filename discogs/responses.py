"""
Response wrappers for Discogs API calls.

A Response never raises for API-level failures; check is_success() and
get_error() before reading payload fields. Top-level JSON keys are readable as
attributes (response.name) or items (response["name"]); unknown keys raise
PropertyAccessError.

Response's own attributes (status_code, reason, headers, text, data, get,
to_dict, ...) win over JSON keys of the same name in attribute access. Read
such keys with get_field("text") or response["text"].
"""
import logging
from collections.abc import Mapping

from .exceptions import PropertyAccessError

logger = logging.getLogger(__name__)

_MISSING = object()


def wrap(value):
    """Wrap JSON objects (and lists of them) in JsonObject; leave scalars alone."""
    if isinstance(value, JsonObject):
        return value
    if isinstance(value, Mapping):
        return JsonObject(value)
    if isinstance(value, list):
        return [wrap(v) for v in value]
    return value


class JsonObject:
    """Read-only attribute/item view over a decoded JSON object."""

    __slots__ = ("_data",)

    def __init__(self, data):
        if isinstance(data, JsonObject):
            data = data._data
        object.__setattr__(self, "_data", dict(data))

    def __getattr__(self, name):
        if name.startswith("__"):
            raise AttributeError(name)
        return self.get_field(name)

    def __getitem__(self, name):
        return self.get_field(name)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __contains__(self, name):
        return name in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __eq__(self, other):
        if isinstance(other, JsonObject):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"JsonObject({self._data!r})"

    def get_field(self, name):
        value = self._data.get(name, _MISSING)
        if value is _MISSING:
            raise PropertyAccessError(name, self._data.keys())
        return wrap(value)

    def get(self, name, default=None):
        if name in self._data:
            return wrap(self._data[name])
        return default

    def keys(self):
        return self._data.keys()

    def to_dict(self):
        return dict(self._data)


# A read-only mapping as far as isinstance() is concerned. Not a subclass, so the
# Mapping mixins (items, values) don't hide JSON keys of the same name.
Mapping.register(JsonObject)


def json_default(value):
    """json.dumps hook that unwraps JsonObject and Response back to plain dicts."""
    if isinstance(value, (JsonObject, Response)):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class Response:
    """Wraps a requests.Response holding a Discogs JSON payload."""

    def __init__(self, http_response):
        self.http_response = http_response
        self._data = _MISSING

    def __repr__(self):
        return f"<{type(self).__name__} [{self.status_code}]>"

    @property
    def status_code(self):
        return self.http_response.status_code

    @property
    def reason(self):
        return self.http_response.reason

    @property
    def headers(self):
        return self.http_response.headers

    @property
    def text(self):
        return self.http_response.text

    @property
    def data(self):
        """Decoded JSON body, or None when the body is empty or not JSON."""
        if self._data is _MISSING:
            self._data = self._decode()
        return self._data

    def _decode(self):
        if not self.http_response.content:
            return None
        try:
            return self.http_response.json()
        except ValueError:
            logger.warning(f"Discogs returned a non-JSON body ({self.status_code}) for {self.http_response.url}")
            return None

    def _payload(self):
        data = self.data
        return data if isinstance(data, Mapping) else {}

    def is_success(self):
        return 200 <= self.status_code < 300 and "error" not in self._payload()

    def get_error(self):
        """The API's error message, a generic one for bare HTTP failures, or None."""
        payload = self._payload()
        if "error" in payload:
            return payload["error"]
        if self.is_success():
            return None
        if payload.get("message"):
            return payload["message"]
        return f"HTTP {self.status_code} {self.reason or ''}".rstrip()

    def get_field(self, name):
        payload = self._payload()
        if name not in payload:
            raise PropertyAccessError(name, payload.keys())
        return wrap(payload[name])

    def get(self, name, default=None):
        payload = self._payload()
        if name in payload:
            return wrap(payload[name])
        return default

    def __getattr__(self, name):
        # only reached for names that are not real attributes
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get_field(name)

    def __getitem__(self, name):
        return self.get_field(name)

    def __contains__(self, name):
        return name in self._payload()

    def to_dict(self):
        return dict(self._payload())

    def _header_int(self, name):
        value = self.headers.get(name)
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @property
    def rate_limit(self):
        return self._header_int("X-Discogs-Ratelimit")

    @property
    def rate_limit_used(self):
        return self._header_int("X-Discogs-Ratelimit-Used")

    @property
    def rate_limit_remaining(self):
        return self._header_int("X-Discogs-Ratelimit-Remaining")


class SearchResponse(Response):
    """
    Paginated /database/search result. Indexing and iteration run over the
    results of the fetched page, in the order the API returned them:

        results = client.search("Kompakt")
        for result in results:
            print(result.type, result.uri)
    """

    @property
    def pagination(self):
        return self.get_field("pagination")

    @property
    def page(self):
        return self.pagination.page

    @property
    def pages(self):
        return self.pagination.pages

    @property
    def items(self):
        return self.pagination.items

    @property
    def per_page(self):
        return self.pagination.per_page

    @property
    def results(self):
        return self.get_field("results")

    def has_next_page(self):
        urls = self._payload().get("pagination", {}).get("urls") or {}
        return bool(urls.get("next"))

    def __len__(self):
        return len(self._payload().get("results") or [])

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.get_field(key)
        results = self._payload().get("results") or []
        try:
            return wrap(results[key])
        except IndexError:
            raise IndexError(f"Search result index {key} out of range (page holds {len(results)})") from None

    def __iter__(self):
        for result in self._payload().get("results") or []:
            yield wrap(result)
