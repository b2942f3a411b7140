"""
Module: headers.py
Description: Request and content header scopes for outbound webhooks.

An outbound request carries two header scopes: headers describing the
request itself and headers describing its body. Each scope accepts
only the names that belong to it, so caller-supplied headers can be
routed to the right place or rejected.
"""

import re
from abc import ABC, abstractmethod

import httpx

# RFC 7230 token
_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_FORBIDDEN_VALUE_CHARS = ("\r", "\n", "\0")

CONTENT_HEADERS = frozenset({
    "allow",
    "content-disposition",
    "content-encoding",
    "content-language",
    "content-length",
    "content-location",
    "content-md5",
    "content-range",
    "content-type",
    "expires",
    "last-modified",
})

RESPONSE_HEADERS = frozenset({
    "accept-ranges",
    "age",
    "etag",
    "location",
    "proxy-authenticate",
    "retry-after",
    "server",
    "vary",
    "www-authenticate",
})


def is_valid_header_name(name: str) -> bool:
    return isinstance(name, str) and bool(_TOKEN_RE.fullmatch(name))


def is_valid_header_value(value: str) -> bool:
    # httpx encodes header values as ASCII
    if not isinstance(value, str) or not value.isascii():
        return False
    return not any(char in value for char in _FORBIDDEN_VALUE_CHARS)


class _ScopedHeaders(httpx.Headers, ABC):
    """httpx headers restricted to the names a scope accepts."""

    @abstractmethod
    def accepts(self, name: str) -> bool:
        """Whether a header name belongs to this scope."""

    def try_add_without_validation(self, name: str, value: str) -> bool:
        """
        Set a header if it belongs to this scope.

        Only the header's shape is checked (token name, ASCII value with
        no line breaks); the value's syntax is not. An accepted header
        replaces any existing value with the same name.

        Returns:
            True if the header was set, False if it was rejected
        """
        if not is_valid_header_name(name) or not is_valid_header_value(value):
            return False
        if not self.accepts(name):
            return False
        self[name] = value
        return True


class RequestHeaders(_ScopedHeaders):
    """Headers describing the request (custom names included)."""

    def accepts(self, name: str) -> bool:
        lowered = name.lower()
        return lowered not in CONTENT_HEADERS and lowered not in RESPONSE_HEADERS


class ContentHeaders(_ScopedHeaders):
    """Headers describing the request body."""

    def accepts(self, name: str) -> bool:
        return name.lower() in CONTENT_HEADERS
