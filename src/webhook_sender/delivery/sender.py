"""
Module: sender.py
Description: Webhook delivery executor with blocking and async entry points.

Performs one delivery attempt per call: validates the identifiers,
records a work item, builds and signs the body, posts it under the
configured timeout and writes the response back onto the work item.
Both entry points return a boolean and never raise.

Key Components:
- DefaultWebHookSender: delivery pipeline with overridable steps
- DeliveryOutcome: status code and content of one attempt
- try_send_webhook_async(): cooperative entry point
- try_send_webhook(): blocking entry point driving the same pipeline

Dependencies: httpx, asyncio, concurrent.futures, time
Author: Webhook Sender Team
"""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import httpx

from ..config.settings import Settings, settings
from ..exceptions import ArgumentMissingError, TrackingNotConfiguredError
from ..models.body import WebhookBody
from ..models.sender_input import NIL_UUID, WebHookSenderInput
from ..models.work_item import WebHookWorkItem
from ..storage import WebHookWorkItemStore, get_work_item_store
from ..utils.logger import get_logger
from ..utils.metrics import (
    OUTCOME_FAILED,
    OUTCOME_SUCCEEDED,
    OUTCOME_TIMED_OUT,
    MetricsClient,
)
from .request import WebHookRequestMessage, add_additional_headers
from .signing import WebhookSigner

logger = get_logger(__name__)

REQUEST_TIMEOUT_CONTENT = "Request Timeout"


@dataclass(frozen=True)
class DeliveryOutcome:
    """Status code and response content of one delivery attempt."""

    status_code: int
    content: str
    timed_out: bool = False
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return httpx.codes.is_success(self.status_code)

    @classmethod
    def request_timeout(cls, elapsed_seconds: float = 0.0) -> "DeliveryOutcome":
        return cls(
            httpx.codes.REQUEST_TIMEOUT,
            REQUEST_TIMEOUT_CONTENT,
            timed_out=True,
            elapsed_seconds=elapsed_seconds
        )


class DefaultWebHookSender:
    """
    Sends a single signed webhook and tracks it as a work item.

    Every step of the pipeline is a method so subclasses can change
    how the request is built or the body is produced without touching
    signing or tracking.

    Attributes:
        config: Settings providing the timeout and JSON options
        work_item_store: Store receiving the work item of each attempt
        metrics_client: Optional CloudWatch client for attempt metrics

    Example:
        >>> sender = DefaultWebHookSender(work_item_store=InMemoryWebHookWorkItemStore())
        >>> await sender.try_send_webhook_async(sender_input)
        True
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        work_item_store: Optional[WebHookWorkItemStore] = None,
        metrics_client: Optional[MetricsClient] = None
    ):
        """
        Initialize the sender.

        Args:
            config: Settings; the global settings when None
            work_item_store: Work item store; selected from config when None
            metrics_client: CloudWatch client; created when metrics are
                enabled in config and none is given

        Raises:
            TrackingNotConfiguredError: If config requires a durable store
                and only the null store is available
        """
        self.config = config or settings
        if work_item_store is None:
            work_item_store = get_work_item_store(self.config)
        self.work_item_store = work_item_store

        if self.config.require_work_item_store and not self.work_item_store.is_persistent:
            raise TrackingNotConfiguredError(
                "A persistent webhook work item store is required but none is configured"
            )

        if metrics_client is None and self.config.metrics_enabled:
            metrics_client = MetricsClient(
                namespace=self.config.metrics_namespace,
                region_name=self.config.aws_region
            )
        self.metrics_client = metrics_client

        logger.info(
            "Webhook sender initialized",
            timeout_seconds=self.config.webhook_timeout,
            store=type(self.work_item_store).__name__,
            tracking_enabled=self.tracking_enabled,
            metrics_enabled=self.metrics_client is not None
        )

    @property
    def tracking_enabled(self) -> bool:
        """Whether attempts are recorded in a persistent store."""
        return self.work_item_store.is_persistent

    async def try_send_webhook_async(self, sender_input: WebHookSenderInput) -> bool:
        """
        Deliver one webhook attempt.

        Args:
            sender_input: Delivery arguments

        Returns:
            True if the endpoint answered with a 2xx status, False for any
            other status, a timeout, or an error (which is logged)
        """
        try:
            self._validate(sender_input)

            work_item_id = await self.insert_and_get_id_work_item(sender_input)

            request = self.create_webhook_request_message(sender_input)

            body = await self.get_webhook_body(sender_input, work_item_id)

            serialized_body = self.serialize_body(body)

            self.sign_webhook_request(request, serialized_body, sender_input.secret)

            self.add_additional_headers(request, sender_input)

            outcome = await self.send_request(request)

            await self.store_response_on_work_item(
                sender_input.tenant_id,
                work_item_id,
                outcome.status_code,
                outcome.content
            )

            await self._publish_outcome(outcome)

            log = logger.info if outcome.succeeded else logger.warning
            log(
                "Webhook delivery attempt recorded",
                work_item_id=str(work_item_id),
                webhook_id=str(sender_input.webhook_id),
                subscription_id=str(sender_input.webhook_subscription_id),
                attempt=body.attempt,
                status_code=outcome.status_code,
                succeeded=outcome.succeeded,
                timed_out=outcome.timed_out
            )

            return outcome.succeeded

        except Exception as e:
            logger.error(
                "Error while sending webhook",
                webhook_id=str(getattr(sender_input, 'webhook_id', None)),
                subscription_id=str(getattr(sender_input, 'webhook_subscription_id', None)),
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True
            )
            return False

    def try_send_webhook(self, sender_input: WebHookSenderInput) -> bool:
        """
        Blocking form of try_send_webhook_async().

        Runs the async pipeline to completion on a dedicated worker thread
        with its own event loop, so it can be called from synchronous code
        and from inside a running loop alike.
        """
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="webhook-sender") as executor:
            return executor.submit(self._run_to_completion, sender_input).result()

    def _run_to_completion(self, sender_input: WebHookSenderInput) -> bool:
        return asyncio.run(self.try_send_webhook_async(sender_input))

    @staticmethod
    def _validate(sender_input: WebHookSenderInput) -> None:
        if sender_input.webhook_id == NIL_UUID:
            raise ArgumentMissingError("webhook_id")

        if sender_input.webhook_subscription_id == NIL_UUID:
            raise ArgumentMissingError("webhook_subscription_id")

    async def insert_and_get_id_work_item(self, sender_input: WebHookSenderInput) -> UUID:
        """Record the attempt before anything is sent and return its id."""
        work_item = WebHookWorkItem(
            webhook_id=sender_input.webhook_id,
            webhook_subscription_id=sender_input.webhook_subscription_id,
            tenant_id=sender_input.tenant_id
        )

        async with self.work_item_store.unit_of_work():
            return await self.work_item_store.insert_async(work_item)

    async def store_response_on_work_item(
        self,
        tenant_id: Optional[int],
        work_item_id: UUID,
        status_code: int,
        content: Optional[str]
    ) -> None:
        """Re-fetch the work item and record the response on it."""
        async with self.work_item_store.unit_of_work():
            work_item = await self.work_item_store.get_async(tenant_id, work_item_id)

            work_item.record_response(status_code, content)

            await self.work_item_store.update_async(work_item)

    def create_webhook_request_message(
        self,
        sender_input: WebHookSenderInput
    ) -> WebHookRequestMessage:
        """Override to change the method, URL or base headers of the request."""
        return WebHookRequestMessage("POST", sender_input.webhook_uri)

    async def get_webhook_body(
        self,
        sender_input: WebHookSenderInput,
        work_item_id: Optional[UUID] = None
    ) -> WebhookBody:
        """
        Decode the payload and number the attempt.

        Attempt is one more than the number of earlier work items for the
        same tenant, webhook and subscription; the item recorded for this
        attempt (work_item_id) is not counted.
        """
        data = None
        if sender_input.data is not None:
            data = self.config.json_serializer.deserialize(sender_input.data)

        repetition_count = await self.work_item_store.get_repetition_count_async(
            sender_input.tenant_id,
            sender_input.webhook_id,
            sender_input.webhook_subscription_id,
            exclude_work_item_id=work_item_id
        )

        return WebhookBody(
            event=sender_input.webhook_definition,
            data=data,
            attempt=repetition_count + 1
        )

    def serialize_body(self, body: WebhookBody) -> str:
        return self.config.json_serializer.serialize(body.to_wire())

    def sign_webhook_request(
        self,
        request: WebHookRequestMessage,
        serialized_body: str,
        secret: str
    ) -> None:
        WebhookSigner.sign_request(request, serialized_body, secret)

    def add_additional_headers(
        self,
        request: WebHookRequestMessage,
        sender_input: WebHookSenderInput
    ) -> None:
        add_additional_headers(request, sender_input)

    async def send_request(self, request: WebHookRequestMessage) -> DeliveryOutcome:
        """
        Post the request under the configured timeout.

        A timeout is a completed attempt with status 408; any other
        transport error propagates.
        """
        started = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.config.webhook_timeout) as client:
                response = await client.send(request.build(client))
                return DeliveryOutcome(
                    response.status_code,
                    response.text,
                    elapsed_seconds=time.perf_counter() - started
                )

        except httpx.TimeoutException:
            logger.warning(
                "Webhook delivery timeout",
                url=request.url,
                timeout_seconds=self.config.webhook_timeout
            )
            return DeliveryOutcome.request_timeout(time.perf_counter() - started)

    async def _publish_outcome(self, outcome: DeliveryOutcome) -> None:
        if self.metrics_client is None:
            return

        if outcome.timed_out:
            result = OUTCOME_TIMED_OUT
        elif outcome.succeeded:
            result = OUTCOME_SUCCEEDED
        else:
            result = OUTCOME_FAILED

        try:
            await asyncio.to_thread(
                self.metrics_client.record_delivery_attempt,
                result,
                outcome.elapsed_seconds
            )
        except Exception as e:
            # The attempt is already recorded; metrics never change its result
            logger.warning(
                "Failed to publish delivery metrics",
                outcome=result,
                error=str(e)
            )
