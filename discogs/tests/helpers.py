"""Builders for canned HTTP responses used across the client tests."""
import json
from http import HTTPStatus

import requests

# Settings the offline tests run under, independent of the local .env
DISCOGS_SETTINGS = dict(
    DISCOGS_API_BASE_URL="https://api.discogs.com",
    DISCOGS_CONSUMER_KEY="consumer-key",
    DISCOGS_CONSUMER_SECRET="consumer-secret",
    DISCOGS_USER_AGENT="DiscogsClientTests/1.0",
    DISCOGS_REQUEST_TIMEOUT=20.0,
)


def make_response(status=200, payload=None, body=None, headers=None, url="https://api.discogs.com/"):
    """A real requests.Response carrying payload as JSON (or body verbatim)."""
    response = requests.Response()
    response.status_code = status
    response.reason = HTTPStatus(status).phrase
    response.url = url
    response.encoding = "utf-8"
    if body is None:
        body = json.dumps(payload).encode("utf-8") if payload is not None else b""
    elif isinstance(body, str):
        body = body.encode("utf-8")
    response._content = body
    response.headers.update(headers or {})
    return response


def search_payload(results, page=1, pages=3, per_page=5, items=None):
    return {
        "pagination": {
            "page": page,
            "pages": pages,
            "per_page": per_page,
            "items": len(results) * pages if items is None else items,
            "urls": {"next": "https://api.discogs.com/database/search?page=2"} if page < pages else {},
        },
        "results": results,
    }


def search_result(index, resource_type="label"):
    return {
        "id": 1000 + index,
        "type": resource_type,
        "title": f"Kompakt {index}",
        "uri": f"/{resource_type}/{1000 + index}-Kompakt-{index}",
        "resource_url": f"https://api.discogs.com/{resource_type}s/{1000 + index}",
    }
