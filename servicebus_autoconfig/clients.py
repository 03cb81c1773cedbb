# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Queue, topic and subscription client handles.

Each handle pairs an azure-servicebus ``ServiceBusClient`` with the entity it
addresses, so callers can ask for senders and receivers without repeating
entity names and receive modes.
"""

import logging
from typing import Any

from azure.servicebus import ServiceBusClient, ServiceBusReceiver, ServiceBusSender

from .config import ReceiveMode

logger = logging.getLogger(__name__)


class _EntityClient:
    """Owns a ServiceBusClient and closes it with the handle."""

    def __init__(self, client: ServiceBusClient):
        self.client = client

    @property
    def entity_path(self) -> str:
        raise NotImplementedError

    def close(self) -> None:
        """Close the underlying ServiceBusClient."""
        try:
            if self.client:
                self.client.close()
                logger.info(f"Closed Service Bus client for {self.entity_path}")
        except Exception as e:
            logger.error(f"Error closing Service Bus client for {self.entity_path}: {e}")

    def __enter__(self) -> "_EntityClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entity_path={self.entity_path!r})"


class QueueClient(_EntityClient):
    """Sends to and receives from a single queue."""

    def __init__(self, client: ServiceBusClient, queue_name: str, receive_mode: ReceiveMode):
        super().__init__(client)
        self.queue_name = queue_name
        self.receive_mode = receive_mode

    @property
    def entity_path(self) -> str:
        return self.queue_name

    def get_sender(self, **kwargs: Any) -> ServiceBusSender:
        return self.client.get_queue_sender(queue_name=self.queue_name, **kwargs)

    def get_receiver(self, **kwargs: Any) -> ServiceBusReceiver:
        return self.client.get_queue_receiver(
            queue_name=self.queue_name,
            receive_mode=self.receive_mode.to_sdk(),
            **kwargs,
        )


class TopicClient(_EntityClient):
    """Sends to a single topic."""

    def __init__(self, client: ServiceBusClient, topic_name: str):
        super().__init__(client)
        self.topic_name = topic_name

    @property
    def entity_path(self) -> str:
        return self.topic_name

    def get_sender(self, **kwargs: Any) -> ServiceBusSender:
        return self.client.get_topic_sender(topic_name=self.topic_name, **kwargs)


class SubscriptionClient(_EntityClient):
    """Receives from a single topic subscription."""

    def __init__(
        self,
        client: ServiceBusClient,
        topic_name: str,
        subscription_name: str,
        receive_mode: ReceiveMode,
    ):
        super().__init__(client)
        self.topic_name = topic_name
        self.subscription_name = subscription_name
        self.receive_mode = receive_mode

    @property
    def entity_path(self) -> str:
        return f"{self.topic_name}/subscriptions/{self.subscription_name}"

    def get_receiver(self, **kwargs: Any) -> ServiceBusReceiver:
        return self.client.get_subscription_receiver(
            topic_name=self.topic_name,
            subscription_name=self.subscription_name,
            receive_mode=self.receive_mode.to_sdk(),
            **kwargs,
        )
