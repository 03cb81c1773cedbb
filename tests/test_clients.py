# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for Service Bus client handles."""

from unittest.mock import Mock

from azure.servicebus import ServiceBusReceiveMode

from servicebus_autoconfig.clients import QueueClient, SubscriptionClient, TopicClient
from servicebus_autoconfig.config import ReceiveMode


class TestQueueClient:
    """Tests for QueueClient."""

    def test_get_sender(self):
        sdk_client = Mock()
        queue_client = QueueClient(sdk_client, "orders", ReceiveMode.PEEK_LOCK)

        sender = queue_client.get_sender()

        sdk_client.get_queue_sender.assert_called_once_with(queue_name="orders")
        assert sender is sdk_client.get_queue_sender.return_value

    def test_get_receiver_uses_receive_mode(self):
        sdk_client = Mock()
        queue_client = QueueClient(sdk_client, "orders", ReceiveMode.RECEIVE_AND_DELETE)

        queue_client.get_receiver(max_wait_time=5)

        sdk_client.get_queue_receiver.assert_called_once_with(
            queue_name="orders",
            receive_mode=ServiceBusReceiveMode.RECEIVE_AND_DELETE,
            max_wait_time=5,
        )

    def test_entity_path(self):
        assert QueueClient(Mock(), "orders", ReceiveMode.PEEK_LOCK).entity_path == "orders"


class TestTopicClient:
    """Tests for TopicClient."""

    def test_get_sender(self):
        sdk_client = Mock()

        TopicClient(sdk_client, "events").get_sender()

        sdk_client.get_topic_sender.assert_called_once_with(topic_name="events")

    def test_repr(self):
        assert repr(TopicClient(Mock(), "events")) == "TopicClient(entity_path='events')"


class TestSubscriptionClient:
    """Tests for SubscriptionClient."""

    def test_entity_path(self):
        subscription_client = SubscriptionClient(Mock(), "events", "audit", ReceiveMode.PEEK_LOCK)

        assert subscription_client.entity_path == "events/subscriptions/audit"

    def test_get_receiver(self):
        sdk_client = Mock()
        subscription_client = SubscriptionClient(sdk_client, "events", "audit", ReceiveMode.PEEK_LOCK)

        subscription_client.get_receiver()

        sdk_client.get_subscription_receiver.assert_called_once_with(
            topic_name="events",
            subscription_name="audit",
            receive_mode=ServiceBusReceiveMode.PEEK_LOCK,
        )


class TestClose:
    """Tests for closing client handles."""

    def test_context_manager_closes(self):
        sdk_client = Mock()

        with TopicClient(sdk_client, "events") as topic_client:
            assert topic_client.client is sdk_client

        sdk_client.close.assert_called_once()

    def test_close_error_is_logged(self, caplog):
        sdk_client = Mock()
        sdk_client.close.side_effect = RuntimeError("already closed")

        TopicClient(sdk_client, "events").close()

        assert "Error closing Service Bus client for events: already closed" in caplog.text
