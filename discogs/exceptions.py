"""
Errors raised by the Discogs client. API-level failures (non-2xx status, JSON
error field) are not raised; check Response.is_success() instead.
"""


class DiscogsError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(DiscogsError, ValueError):
    """Raised for malformed client options or a missing OAuth consumer."""


class PropertyAccessError(DiscogsError, AttributeError, KeyError):
    """Raised when a JSON payload has no field with the requested name."""

    def __init__(self, name, available=()):
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self):
        if self.available:
            return f"No such property {self.name!r} (available: {', '.join(self.available)})"
        return f"No such property {self.name!r}"
