"""
Module: metrics.py
Description: CloudWatch metrics for webhook delivery attempts.

Every recorded attempt publishes one data point per metric, both
dimensioned by Outcome (Succeeded, Failed or TimedOut):
- WebHookDeliveryAttempts (Count)
- WebHookDeliveryDuration (Seconds): time spent on the HTTP call

Publishing errors are logged and dropped.

Dependencies: boto3, botocore, logger
Author: Webhook Sender Team
"""

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .logger import get_logger

logger = get_logger(__name__)

ATTEMPTS_METRIC = "WebHookDeliveryAttempts"
DURATION_METRIC = "WebHookDeliveryDuration"

OUTCOME_SUCCEEDED = "Succeeded"
OUTCOME_FAILED = "Failed"
OUTCOME_TIMED_OUT = "TimedOut"


def _datum(name: str, value: float, unit: str, outcome: str) -> Dict[str, Any]:
    return {
        'MetricName': name,
        'Value': value,
        'Unit': unit,
        'Dimensions': [{'Name': 'Outcome', 'Value': outcome}]
    }


class MetricsClient:
    """
    Publishes delivery attempt metrics to CloudWatch.

    Attributes:
        namespace: CloudWatch namespace the metrics are written to
        cloudwatch: boto3 CloudWatch client
    """

    def __init__(self, namespace: str = "WebHooks", region_name: Optional[str] = None):
        self.namespace = namespace
        self.cloudwatch = boto3.client('cloudwatch', region_name=region_name)

        logger.info(
            "Metrics client initialized",
            namespace=namespace
        )

    def record_delivery_attempt(self, outcome: str, elapsed_seconds: float) -> None:
        """
        Publish the count and duration of one delivery attempt.

        Args:
            outcome: OUTCOME_SUCCEEDED, OUTCOME_FAILED or OUTCOME_TIMED_OUT
            elapsed_seconds: Duration of the HTTP call
        """
        self._publish([
            _datum(ATTEMPTS_METRIC, 1, 'Count', outcome),
            _datum(DURATION_METRIC, elapsed_seconds, 'Seconds', outcome),
        ])

    def _publish(self, metric_data: List[Dict[str, Any]]) -> None:
        try:
            self.cloudwatch.put_metric_data(
                Namespace=self.namespace,
                MetricData=metric_data
            )

            logger.debug(
                "Delivery metrics published",
                metric_names=[datum['MetricName'] for datum in metric_data],
                namespace=self.namespace
            )

        except (BotoCoreError, ClientError) as e:
            logger.warning(
                "Failed to publish delivery metrics",
                namespace=self.namespace,
                error=str(e)
            )
