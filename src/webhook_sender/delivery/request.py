"""
Module: request.py
Description: Outbound webhook request construction.

Builds the request message that the sender signs and sends, and
merges caller-supplied headers into it. Every caller header must land
in either the request or the content scope; one that fits neither
fails the whole delivery.

Key Components:
- WebHookRequestMessage: method, URL, header scopes and body
- add_additional_headers(): strict merge of caller headers

Dependencies: httpx
Author: Webhook Sender Team
"""

from typing import Iterable, List, Optional, Tuple

import httpx

from ..exceptions import InvalidHeaderError
from ..models.sender_input import WebHookSenderInput
from ..utils.logger import get_logger
from .headers import ContentHeaders, RequestHeaders
from .signing import SIGNATURE_HEADER_NAME

logger = get_logger(__name__)

# Set by the sender and never taken from callers
RESERVED_HEADERS = frozenset({SIGNATURE_HEADER_NAME, "content-length"})


class WebHookRequestMessage:
    """
    Mutable outbound request, assembled step by step before sending.

    Attributes:
        method: HTTP method
        url: Target URL
        headers: Request-scope headers
        content_headers: Content-scope headers
        content: Body bytes, None until signed
    """

    def __init__(
        self,
        method: str,
        url: str,
        headers: Optional[Iterable[Tuple[str, str]]] = None
    ):
        self.method = method
        self.url = url
        self.headers = RequestHeaders(headers)
        self.content_headers = ContentHeaders()
        self.content: Optional[bytes] = None

    def set_content(self, content: bytes, content_type: str) -> None:
        """Attach the body and its content type."""
        self.content = content
        self.content_headers["Content-Type"] = content_type

    def all_headers(self) -> List[Tuple[str, str]]:
        """Request headers followed by content headers, when there is a body."""
        headers = list(self.headers.multi_items())
        if self.content is not None:
            headers.extend(self.content_headers.multi_items())
        return headers

    def build(self, client: Optional[httpx.AsyncClient] = None) -> httpx.Request:
        """
        Produce the httpx request to send.

        When a client is given the request is built through it, so the
        client's timeout and default headers apply.
        """
        if client is not None:
            return client.build_request(
                self.method,
                self.url,
                headers=self.all_headers(),
                content=self.content,
            )
        return httpx.Request(
            self.method,
            self.url,
            headers=self.all_headers(),
            content=self.content,
        )


def add_additional_headers(
    request: WebHookRequestMessage,
    sender_input: WebHookSenderInput
) -> None:
    """
    Merge caller headers into a signed request.

    Each header is tried as a request header, then as a content header.

    Args:
        request: Request message, already signed
        sender_input: Delivery arguments carrying the caller headers

    Raises:
        InvalidHeaderError: If a header fits neither scope or is reserved
    """
    for name, value in sender_input.headers.items():
        if name.lower() not in RESERVED_HEADERS:
            if request.headers.try_add_without_validation(name, value):
                continue
            if request.content_headers.try_add_without_validation(name, value):
                continue

        logger.warning(
            "Rejected webhook header",
            subscription_id=str(sender_input.webhook_subscription_id),
            header_name=name
        )
        raise InvalidHeaderError(sender_input.webhook_subscription_id, name, value)
