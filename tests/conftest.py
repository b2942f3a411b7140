"""
Module: conftest.py
Description: Shared pytest fixtures for webhook sender tests.

Provides test settings, sample delivery input, work item stores and
senders. Uses moto for DynamoDB so store tests run without AWS.
"""

from uuid import UUID

import boto3
import pytest
from moto import mock_aws
from pydantic import Field
from pydantic_settings import SettingsConfigDict

from webhook_sender.config.settings import Settings
from webhook_sender.delivery.sender import DefaultWebHookSender
from webhook_sender.models.sender_input import WebHookSenderInput
from webhook_sender.storage.dynamodb import REPETITION_INDEX, DynamoDBWebHookWorkItemStore
from webhook_sender.storage.memory import InMemoryWebHookWorkItemStore

WEBHOOK_URI = "https://hooks.example.com/webhooks/receive"
WEBHOOK_ID = UUID("11111111-1111-4111-8111-111111111111")
SUBSCRIPTION_ID = UUID("22222222-2222-4222-8222-222222222222")
TABLE_NAME = "test-webhook-work-items"


class TestSettings(Settings):
    """Test settings that don't read environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="DEBUG", description="Logging level")
    webhook_timeout: float = Field(default=5.0, gt=0, description="HTTP timeout")


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake AWS credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def test_settings():
    """
    Provide test configuration settings.

    Disables environment variable loading for predictable tests.
    """
    return TestSettings()


@pytest.fixture
def sample_sender_input():
    """Provide a valid delivery input."""
    return WebHookSenderInput(
        webhook_id=WEBHOOK_ID,
        webhook_subscription_id=SUBSCRIPTION_ID,
        tenant_id=7,
        webhook_uri=WEBHOOK_URI,
        webhook_definition="order.created",
        data='{"x":1}',
        secret="s3cr3t",
        headers={"X-Correlation-Id": "corr-123"}
    )


@pytest.fixture
def memory_store():
    """Provide an empty in-memory work item store."""
    return InMemoryWebHookWorkItemStore()


@pytest.fixture
def sender(test_settings, memory_store):
    """Provide a sender tracking attempts in the in-memory store."""
    return DefaultWebHookSender(config=test_settings, work_item_store=memory_store)


@pytest.fixture
def mock_work_items_table():
    """
    Create mock DynamoDB table for work items.

    Uses moto to mock AWS DynamoDB and creates a table with the same
    schema as production.
    """
    with mock_aws():
        dynamodb = boto3.resource('dynamodb', region_name='us-east-1')

        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[
                {'AttributeName': 'id', 'KeyType': 'HASH'}
            ],
            AttributeDefinitions=[
                {'AttributeName': 'id', 'AttributeType': 'S'},
                {'AttributeName': 'repetition_key', 'AttributeType': 'S'},
                {'AttributeName': 'creation_time', 'AttributeType': 'S'}
            ],
            GlobalSecondaryIndexes=[
                {
                    'IndexName': REPETITION_INDEX,
                    'KeySchema': [
                        {'AttributeName': 'repetition_key', 'KeyType': 'HASH'},
                        {'AttributeName': 'creation_time', 'KeyType': 'RANGE'}
                    ],
                    'Projection': {'ProjectionType': 'ALL'}
                }
            ],
            BillingMode='PAY_PER_REQUEST'
        )

        yield table


@pytest.fixture
def dynamodb_store(mock_work_items_table):
    """Provide a DynamoDB work item store bound to the mock table."""
    return DynamoDBWebHookWorkItemStore(table_name=TABLE_NAME, region_name='us-east-1')
