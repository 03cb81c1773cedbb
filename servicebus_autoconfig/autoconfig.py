# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Conditional construction of Service Bus clients from properties.

Which clients get built depends only on which properties are set:

- queue_client: queue-name and queue-receive-mode
- topic_client: topic-name
- subscription_client: topic-name, subscription-name and subscription-receive-mode

Nothing is built without a connection-string. Every client built reports one
anonymized telemetry event.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from azure.servicebus import ServiceBusClient

from .clients import QueueClient, SubscriptionClient, TopicClient
from .config import (
    CONNECTION_STRING,
    QUEUE_NAME,
    QUEUE_RECEIVE_MODE,
    SUBSCRIPTION_NAME,
    SUBSCRIPTION_RECEIVE_MODE,
    TOPIC_NAME,
    ServiceBusProperties,
)
from .exceptions import ServiceBusConfigError
from .telemetry import TelemetryProxy, TelemetrySink, track_client_created

logger = logging.getLogger(__name__)

EVENT_NAME = "ServiceBusAutoConfiguration"


@dataclass(frozen=True)
class ClientRule:
    """Build ``name`` with ``build`` when every key in ``required_keys`` is set."""

    name: str
    required_keys: frozenset[str]
    build: Callable[["ServiceBusAutoConfiguration"], Any]

    def matches(self, present_keys: frozenset[str]) -> bool:
        return self.required_keys <= present_keys


def _build_queue_client(autoconfig: "ServiceBusAutoConfiguration") -> QueueClient:
    props = autoconfig.properties
    return QueueClient(
        autoconfig.new_servicebus_client(),
        queue_name=props.queue_name,
        receive_mode=props.queue_receive_mode,
    )


def _build_topic_client(autoconfig: "ServiceBusAutoConfiguration") -> TopicClient:
    props = autoconfig.properties
    return TopicClient(autoconfig.new_servicebus_client(), topic_name=props.topic_name)


def _build_subscription_client(autoconfig: "ServiceBusAutoConfiguration") -> SubscriptionClient:
    props = autoconfig.properties
    return SubscriptionClient(
        autoconfig.new_servicebus_client(),
        topic_name=props.topic_name,
        subscription_name=props.subscription_name,
        receive_mode=props.subscription_receive_mode,
    )


CLIENT_RULES: tuple[ClientRule, ...] = (
    ClientRule("queue_client", frozenset({QUEUE_NAME, QUEUE_RECEIVE_MODE}), _build_queue_client),
    ClientRule("topic_client", frozenset({TOPIC_NAME}), _build_topic_client),
    ClientRule(
        "subscription_client",
        frozenset({TOPIC_NAME, SUBSCRIPTION_NAME, SUBSCRIPTION_RECEIVE_MODE}),
        _build_subscription_client,
    ),
)


class ServiceBusAutoConfiguration:
    """Builds the Service Bus clients that the given properties call for."""

    def __init__(
        self,
        properties: ServiceBusProperties,
        telemetry_sink: TelemetrySink | None = None,
        rules: tuple[ClientRule, ...] = CLIENT_RULES,
        client_factory: Callable[[str], ServiceBusClient] | None = None,
        existing: Mapping[str, Any] | None = None,
    ):
        """Initialize the auto-configuration.

        Args:
            properties: Service Bus connection properties
            telemetry_sink: Sink for usage events; ``properties.allow_telemetry``
                decides whether it is used
            rules: Client rule table, evaluated by create_clients()
            client_factory: Builds a ServiceBusClient from a connection string
                (default: ServiceBusClient.from_connection_string)
            existing: Clients already provided by the host, keyed by rule name.
                Builders return these as-is; close() leaves them open.
        """
        self.properties = properties
        self.telemetry = TelemetryProxy(telemetry_sink, allow_telemetry=properties.allow_telemetry)
        self.rules = rules
        self._client_factory = client_factory or self._from_connection_string
        self._clients: dict[str, Any] = {}
        self._provided: dict[str, Any] = dict(existing or {})

    @staticmethod
    def _from_connection_string(connection_string: str) -> ServiceBusClient:
        return ServiceBusClient.from_connection_string(conn_str=connection_string)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], **kwargs: Any) -> "ServiceBusAutoConfiguration":
        """Create an auto-configuration from ``azure.servicebus.*`` keys."""
        return cls(ServiceBusProperties.from_mapping(values), **kwargs)

    @property
    def active(self) -> bool:
        """Whether a connection string is configured."""
        return self.properties.connection_string is not None

    def new_servicebus_client(self) -> ServiceBusClient:
        return self._client_factory(self.properties.connection_string)

    def _get_rule(self, name: str) -> ClientRule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(name)

    def _get_or_build(self, rule: ClientRule) -> Any:
        if rule.name in self._provided:
            return self._provided[rule.name]
        if rule.name in self._clients:
            return self._clients[rule.name]

        present = self.properties.present_keys()
        missing = (rule.required_keys | {CONNECTION_STRING}) - present
        if missing:
            raise ServiceBusConfigError(
                f"Cannot create {rule.name}: missing azure.servicebus properties {', '.join(sorted(missing))}"
            )

        # Usage is reported per creation attempt, before the SDK is touched
        track_client_created(self.telemetry, self.properties.connection_string, EVENT_NAME)

        client = rule.build(self)
        self._clients[rule.name] = client
        logger.info(f"Created Service Bus {rule.name} for {getattr(client, 'entity_path', rule.name)}")
        return client

    def queue_client(self) -> QueueClient:
        """Return the queue client, building it on first use.

        Raises:
            ServiceBusConfigError: If queue properties are missing
        """
        return self._get_or_build(self._get_rule("queue_client"))

    def topic_client(self) -> TopicClient:
        """Return the topic client, building it on first use.

        Raises:
            ServiceBusConfigError: If topic properties are missing
        """
        return self._get_or_build(self._get_rule("topic_client"))

    def subscription_client(self) -> SubscriptionClient:
        """Return the subscription client, building it on first use.

        Raises:
            ServiceBusConfigError: If subscription properties are missing
        """
        return self._get_or_build(self._get_rule("subscription_client"))

    def create_clients(self, existing: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Evaluate the rule table and build every client whose keys are set.

        Args:
            existing: Clients already provided by the host, keyed by rule name.
                These are remembered, returned unchanged and never rebuilt,
                including by the individual builders.

        Returns:
            Mapping of rule name to client, for every rule that matched or was
            supplied by the host
        """
        self._provided.update(existing or {})

        if not self.active:
            logger.debug("No azure.servicebus connection-string configured, skipping Service Bus clients")
            return dict(self._provided)

        present = self.properties.present_keys()
        clients = dict(self._provided)
        for rule in self.rules:
            if rule.name in self._provided:
                logger.debug(f"Using provided {rule.name}")
                continue
            if not rule.matches(present):
                logger.debug(f"Skipping {rule.name}: missing {', '.join(sorted(rule.required_keys - present))}")
                continue
            clients[rule.name] = self._get_or_build(rule)
        return clients

    def close(self) -> None:
        """Close every client this configuration built.

        A client that fails to close is logged and the rest are still closed.
        """
        try:
            for name, client in self._clients.items():
                try:
                    client.close()
                except Exception as e:
                    logger.error(f"Error closing Service Bus {name}: {e}")
        finally:
            self._clients.clear()
