from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


@dataclass
class SQSConfig:
    region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None


class SQSBus:
    """Thin wrapper over the boto3 SQS client used by the walkthrough.

    Every service call logs a failure and re-raises it; nothing is retried here.
    """

    def __init__(self, cfg: SQSConfig):
        self.cfg = cfg
        endpoint = cfg.endpoint_url or os.getenv("AWS_ENDPOINT_URL")
        self.client = boto3.client(
            "sqs",
            region_name=cfg.region,
            endpoint_url=endpoint,
            aws_access_key_id=cfg.access_key_id,
            aws_secret_access_key=cfg.secret_access_key,
        )

    def _call(self, operation: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            return getattr(self.client, operation)(**kwargs)
        except ClientError as e:
            logger.error(
                f"SQS {operation} failed for {kwargs.get('QueueUrl') or kwargs.get('QueueName')}: "
                f"{e.response['Error']['Code']} {e.response['Error'].get('Message', '')}"
            )
            raise
        except BotoCoreError:
            logger.exception(f"SQS {operation} could not reach the service")
            raise

    def create_queue(
        self,
        name: str,
        dead_letter_queue_url: Optional[str] = None,
        max_receive_count: Optional[str] = None,
        receive_wait_time: Optional[str] = None,
    ) -> str:
        """Create a queue and return its URL.

        With a dead-letter queue URL the queue gets a redrive policy pointing at
        that queue's ARN and a long-polling wait time. Without one the queue is
        created with no attributes, which is how dead-letter queues are made.
        """
        attrs: Dict[str, str] = {}
        if dead_letter_queue_url:
            attrs["ReceiveMessageWaitTimeSeconds"] = str(receive_wait_time)
            attrs["RedrivePolicy"] = json.dumps(
                {
                    "deadLetterTargetArn": self.get_queue_arn(dead_letter_queue_url),
                    "maxReceiveCount": str(max_receive_count),
                }
            )

        response = self._call("create_queue", QueueName=name, Attributes=attrs)
        queue_url = response["QueueUrl"]
        logger.info(f"Created queue {name} at {queue_url}")
        return queue_url

    def get_queue_arn(self, queue_url: str) -> str:
        response = self._call("get_queue_attributes", QueueUrl=queue_url, AttributeNames=["QueueArn"])
        return response["Attributes"]["QueueArn"]

    def get_all_attributes(self, queue_url: str) -> Dict[str, str]:
        response = self._call("get_queue_attributes", QueueUrl=queue_url, AttributeNames=["All"])
        return response.get("Attributes", {})

    def list_queues(self, prefix: str = "") -> List[str]:
        response = self._call("list_queues", QueueNamePrefix=prefix)
        return response.get("QueueUrls", [])

    def publish(self, queue_url: str, payload: Dict[str, Any]) -> str:
        response = self._call(
            "send_message",
            QueueUrl=queue_url,
            MessageBody=json.dumps(payload),
            MessageAttributes={},
        )
        message_id = response["MessageId"]
        logger.info(f"Sent message {message_id} to {queue_url}")
        return message_id

    def receive_messages(self, queue_url: str, wait_time_seconds: int) -> List[Dict[str, Any]]:
        """Receive messages from SQS with long polling."""
        response = self._call(
            "receive_message",
            QueueUrl=queue_url,
            WaitTimeSeconds=wait_time_seconds,
            AttributeNames=["ApproximateReceiveCount"],
            MessageAttributeNames=["All"],
        )
        return response.get("Messages", [])

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        """Delete a processed message."""
        self._call(
            "delete_message",
            QueueUrl=queue_url,
            ReceiptHandle=receipt_handle,
        )
