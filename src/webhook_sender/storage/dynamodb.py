"""
Module: dynamodb.py
Description: DynamoDB store for webhook work items.

Stores one item per delivery attempt and answers repetition-count
queries from a GSI keyed by the (tenant, webhook, subscription)
triple, with proper error handling and logging.

Key Components:
- DynamoDBWebHookWorkItemStore: boto3-backed WebHookWorkItemStore
- Conditional writes: insert never overwrites, update never creates
- Tenant scoping and strongly consistent reads on get()
- One table resource per thread

Table layout:
- Hash key: id (S)
- GSI RepetitionIndex: repetition_key (S) / creation_time (S)

Dependencies: boto3, botocore, threading, datetime, typing
Author: Webhook Sender Team
"""

import threading
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

import boto3
from botocore.exceptions import ClientError

from ..exceptions import WorkItemNotFoundError
from ..models.work_item import WebHookWorkItem
from ..utils.logger import get_logger
from .base import WebHookWorkItemStore

logger = get_logger(__name__)

REPETITION_INDEX = "RepetitionIndex"
_HOST_TENANT = "host"


def repetition_key(
    tenant_id: Optional[int],
    webhook_id: UUID,
    webhook_subscription_id: UUID
) -> str:
    """Partition key grouping attempts of one webhook to one subscription."""
    tenant = _HOST_TENANT if tenant_id is None else str(tenant_id)
    return f"{tenant}#{webhook_id}#{webhook_subscription_id}"


class DynamoDBWebHookWorkItemStore(WebHookWorkItemStore):
    """
    DynamoDB-backed work item store.

    Each put_item is atomic on its own, so the inherited unit_of_work()
    has nothing to commit. boto3 resources are not thread-safe and the
    async forms run on worker threads, so every thread gets its own
    session and table resource.

    Attributes:
        table_name: Name of the DynamoDB work items table
        region_name: AWS region, or None for boto3's default resolution

    Example:
        >>> store = DynamoDBWebHookWorkItemStore(table_name="webhook-work-items")
        >>> work_item_id = store.insert(work_item)
        >>> store.get(work_item.tenant_id, work_item_id)
    """

    def __init__(self, table_name: str, region_name: Optional[str] = None):
        """
        Initialize DynamoDB store.

        Args:
            table_name: Name of the DynamoDB work items table
            region_name: AWS region; boto3's default resolution when None

        Raises:
            ValueError: If table_name is empty or invalid
        """
        if not table_name or not isinstance(table_name, str):
            raise ValueError("table_name must be a non-empty string")

        self.table_name = table_name
        self.region_name = region_name
        self._local = threading.local()

        logger.info(
            "DynamoDB work item store initialized",
            table_name=table_name
        )

    @property
    def table(self):
        """DynamoDB table resource owned by the calling thread."""
        table = getattr(self._local, 'table', None)
        if table is None:
            session = boto3.Session(region_name=self.region_name)
            table = session.resource('dynamodb').Table(self.table_name)
            self._local.table = table
        return table

    @staticmethod
    def _to_item(work_item: WebHookWorkItem) -> Dict[str, Any]:
        item = {
            'id': str(work_item.id),
            'webhook_id': str(work_item.webhook_id),
            'webhook_subscription_id': str(work_item.webhook_subscription_id),
            'tenant_id': work_item.tenant_id,
            'repetition_key': repetition_key(
                work_item.tenant_id,
                work_item.webhook_id,
                work_item.webhook_subscription_id
            ),
            'creation_time': work_item.creation_time.isoformat(),
            'response_status_code': work_item.response_status_code,
            'response_content': work_item.response_content,
        }
        # DynamoDB doesn't store None values
        return {k: v for k, v in item.items() if v is not None}

    @staticmethod
    def _from_item(item: Dict[str, Any]) -> WebHookWorkItem:
        tenant_id = item.get('tenant_id')
        status_code = item.get('response_status_code')
        return WebHookWorkItem(
            id=UUID(item['id']),
            webhook_id=UUID(item['webhook_id']),
            webhook_subscription_id=UUID(item['webhook_subscription_id']),
            tenant_id=int(tenant_id) if tenant_id is not None else None,
            response_status_code=int(status_code) if status_code is not None else None,
            response_content=item.get('response_content'),
            creation_time=datetime.fromisoformat(item['creation_time']),
        )

    def insert(self, work_item: WebHookWorkItem) -> UUID:
        """
        Store a new work item.

        Raises:
            ClientError: If DynamoDB operation fails, including when an
                item with the same id already exists
        """
        try:
            self.table.put_item(
                Item=self._to_item(work_item),
                ConditionExpression='attribute_not_exists(#id)',
                ExpressionAttributeNames={'#id': 'id'}
            )

            logger.info(
                "Work item stored in DynamoDB",
                work_item_id=str(work_item.id),
                webhook_id=str(work_item.webhook_id),
                subscription_id=str(work_item.webhook_subscription_id),
                table_name=self.table_name
            )

            return work_item.id

        except ClientError as e:
            logger.error(
                "Failed to store work item in DynamoDB",
                work_item_id=str(work_item.id),
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    def get(self, tenant_id: Optional[int], work_item_id: UUID) -> WebHookWorkItem:
        """
        Retrieve a work item by tenant and id.

        Raises:
            WorkItemNotFoundError: If the item is missing or belongs to
                another tenant
            ClientError: If DynamoDB operation fails
        """
        try:
            response = self.table.get_item(
                Key={'id': str(work_item_id)},
                ConsistentRead=True
            )
        except ClientError as e:
            logger.error(
                "Failed to retrieve work item from DynamoDB",
                work_item_id=str(work_item_id),
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        if 'Item' not in response:
            logger.warning(
                "Work item not found in DynamoDB",
                work_item_id=str(work_item_id),
                table_name=self.table_name
            )
            raise WorkItemNotFoundError(tenant_id, work_item_id)

        work_item = self._from_item(response['Item'])
        if work_item.tenant_id != tenant_id:
            logger.warning(
                "Work item belongs to another tenant",
                work_item_id=str(work_item_id),
                tenant_id=tenant_id,
                table_name=self.table_name
            )
            raise WorkItemNotFoundError(tenant_id, work_item_id)

        return work_item

    def update(self, work_item: WebHookWorkItem) -> None:
        """
        Replace an existing work item.

        Raises:
            WorkItemNotFoundError: If the item does not exist
            ClientError: If DynamoDB operation fails
        """
        try:
            self.table.put_item(
                Item=self._to_item(work_item),
                ConditionExpression='attribute_exists(#id)',
                ExpressionAttributeNames={'#id': 'id'}
            )

            logger.info(
                "Work item updated in DynamoDB",
                work_item_id=str(work_item.id),
                status_code=work_item.response_status_code,
                table_name=self.table_name
            )

        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                raise WorkItemNotFoundError(work_item.tenant_id, work_item.id) from e

            logger.error(
                "Failed to update work item in DynamoDB",
                work_item_id=str(work_item.id),
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    def get_repetition_count(
        self,
        tenant_id: Optional[int],
        webhook_id: UUID,
        webhook_subscription_id: UUID,
        exclude_work_item_id: Optional[UUID] = None
    ) -> int:
        """
        Count work items stored for the triple.

        Reads the RepetitionIndex GSI, which is eventually consistent.

        Raises:
            ClientError: If DynamoDB operation fails
        """
        query_kwargs: Dict[str, Any] = {
            'IndexName': REPETITION_INDEX,
            'KeyConditionExpression': '#repetition_key = :repetition_key',
            'ExpressionAttributeNames': {'#repetition_key': 'repetition_key'},
            'ExpressionAttributeValues': {
                ':repetition_key': repetition_key(tenant_id, webhook_id, webhook_subscription_id)
            },
            'Select': 'COUNT'
        }
        if exclude_work_item_id is not None:
            query_kwargs['FilterExpression'] = '#id <> :exclude_id'
            query_kwargs['ExpressionAttributeNames']['#id'] = 'id'
            query_kwargs['ExpressionAttributeValues'][':exclude_id'] = str(exclude_work_item_id)

        try:
            count = 0
            while True:
                response = self.table.query(**query_kwargs)
                count += response.get('Count', 0)

                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                query_kwargs['ExclusiveStartKey'] = last_key

            return count

        except ClientError as e:
            logger.error(
                "Failed to count work items in DynamoDB",
                webhook_id=str(webhook_id),
                subscription_id=str(webhook_subscription_id),
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise
