"""
Module: test_metrics.py
Description: Unit tests for CloudWatch metrics and log redaction.
"""

from unittest.mock import MagicMock

import boto3
from botocore.exceptions import ClientError
from moto import mock_aws

from webhook_sender.utils.logger import _redact_sensitive, get_logger
from webhook_sender.utils.metrics import (
    ATTEMPTS_METRIC,
    DURATION_METRIC,
    OUTCOME_FAILED,
    OUTCOME_SUCCEEDED,
    OUTCOME_TIMED_OUT,
    MetricsClient,
)


class TestMetricsClient:
    """Test cases for MetricsClient."""

    @mock_aws
    def test_record_delivery_attempt(self):
        client = MetricsClient(namespace="WebHooksTest", region_name="us-east-1")

        client.record_delivery_attempt(OUTCOME_SUCCEEDED, 0.25)

        cloudwatch = boto3.client("cloudwatch", region_name="us-east-1")
        metrics = cloudwatch.list_metrics(Namespace="WebHooksTest")["Metrics"]
        assert sorted(metric["MetricName"] for metric in metrics) == [
            ATTEMPTS_METRIC,
            DURATION_METRIC
        ]
        for metric in metrics:
            assert metric["Dimensions"] == [{"Name": "Outcome", "Value": "Succeeded"}]

    @mock_aws
    def test_metric_data(self):
        """Test the count and duration are published in one call."""
        client = MetricsClient(region_name="us-east-1")
        client.cloudwatch = MagicMock()

        client.record_delivery_attempt(OUTCOME_TIMED_OUT, 5.0)

        dimensions = [{"Name": "Outcome", "Value": "TimedOut"}]
        client.cloudwatch.put_metric_data.assert_called_once_with(
            Namespace="WebHooks",
            MetricData=[
                {"MetricName": ATTEMPTS_METRIC, "Value": 1, "Unit": "Count", "Dimensions": dimensions},
                {"MetricName": DURATION_METRIC, "Value": 5.0, "Unit": "Seconds", "Dimensions": dimensions},
            ]
        )

    @mock_aws
    def test_publish_failure_is_swallowed(self):
        client = MetricsClient(region_name="us-east-1")
        client.cloudwatch = MagicMock()
        client.cloudwatch.put_metric_data.side_effect = ClientError(
            error_response={"Error": {"Code": "Throttling", "Message": "Rate exceeded"}},
            operation_name="PutMetricData"
        )

        # Should not raise
        client.record_delivery_attempt(OUTCOME_FAILED, 1.0)


class TestLogRedaction:
    """Test cases for the secret redaction processor."""

    def test_sensitive_keys_masked(self):
        event_dict = {
            "event": "Sending",
            "secret": "s3cr3t",
            "Signature": "sha256=AA",
            "authorization": "Bearer x",
            "webhook_id": "abc"
        }

        result = _redact_sensitive(None, "info", event_dict)

        assert result["secret"] == "***REDACTED***"
        assert result["Signature"] == "***REDACTED***"
        assert result["authorization"] == "***REDACTED***"
        assert result["webhook_id"] == "abc"
        assert result["event"] == "Sending"

    def test_get_logger(self):
        logger = get_logger(__name__)

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
