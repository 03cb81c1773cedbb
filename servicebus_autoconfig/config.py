# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Service Bus connection properties.

Properties can be loaded from a flat mapping of ``azure.servicebus.*`` keys
(as produced by a hosting application's configuration system) or from
``AZURE_SERVICEBUS_*`` environment variables.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from azure.servicebus import ServiceBusReceiveMode

from .exceptions import ServiceBusConfigError

DEFAULT_PREFIX = "azure.servicebus"
ENV_PREFIX = "AZURE_SERVICEBUS_"

CONNECTION_STRING = "connection-string"
QUEUE_NAME = "queue-name"
QUEUE_RECEIVE_MODE = "queue-receive-mode"
TOPIC_NAME = "topic-name"
SUBSCRIPTION_NAME = "subscription-name"
SUBSCRIPTION_RECEIVE_MODE = "subscription-receive-mode"
ALLOW_TELEMETRY = "allow-telemetry"

_TRUE_VALUES = {"true", "1", "yes", "on"}


class ReceiveMode(str, Enum):
    """How receivers settle messages."""

    PEEK_LOCK = "PEEK_LOCK"
    RECEIVE_AND_DELETE = "RECEIVE_AND_DELETE"

    @classmethod
    def parse(cls, value: "str | ReceiveMode") -> "ReceiveMode":
        """Parse a receive mode name.

        Accepts any case and either ``-`` or ``_`` as word separator
        (``peek-lock`` and ``Peek_Lock`` both parse).

        Raises:
            ServiceBusConfigError: If the value names no known receive mode
        """
        if isinstance(value, ReceiveMode):
            return value
        normalized = str(value).strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError as e:
            supported = ", ".join(mode.value for mode in cls)
            raise ServiceBusConfigError(
                f"Unknown receive mode: {value}. Supported modes: {supported}"
            ) from e

    def to_sdk(self) -> ServiceBusReceiveMode:
        """Return the equivalent azure-servicebus receive mode."""
        if self is ReceiveMode.RECEIVE_AND_DELETE:
            return ServiceBusReceiveMode.RECEIVE_AND_DELETE
        return ServiceBusReceiveMode.PEEK_LOCK


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_receive_mode(value: Any) -> ReceiveMode | None:
    text = _clean(value)
    return ReceiveMode.parse(text) if text is not None else None


@dataclass(frozen=True)
class ServiceBusProperties:
    """Connection properties for the Service Bus auto-configuration.

    Attributes:
        connection_string: Namespace connection string; nothing is built without it
        queue_name: Queue for the queue client
        queue_receive_mode: Receive mode for the queue client
        topic_name: Topic for the topic and subscription clients
        subscription_name: Subscription for the subscription client
        subscription_receive_mode: Receive mode for the subscription client
        allow_telemetry: Whether client creation events may be reported
    """

    connection_string: str | None = None
    queue_name: str | None = None
    queue_receive_mode: ReceiveMode | None = None
    topic_name: str | None = None
    subscription_name: str | None = None
    subscription_receive_mode: ReceiveMode | None = None
    allow_telemetry: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], prefix: str = DEFAULT_PREFIX) -> "ServiceBusProperties":
        """Load properties from a flat mapping of kebab-case keys.

        Args:
            values: Mapping such as ``{"azure.servicebus.queue-name": "orders"}``
            prefix: Key prefix; pass an empty string for unprefixed keys

        Returns:
            ServiceBusProperties instance

        Raises:
            ServiceBusConfigError: If a receive mode is not recognized
        """
        key_prefix = f"{prefix}." if prefix else ""

        def get(key: str) -> Any:
            return values.get(key_prefix + key)

        allow_telemetry = get(ALLOW_TELEMETRY)
        return cls(
            connection_string=_clean(get(CONNECTION_STRING)),
            queue_name=_clean(get(QUEUE_NAME)),
            queue_receive_mode=_parse_receive_mode(get(QUEUE_RECEIVE_MODE)),
            topic_name=_clean(get(TOPIC_NAME)),
            subscription_name=_clean(get(SUBSCRIPTION_NAME)),
            subscription_receive_mode=_parse_receive_mode(get(SUBSCRIPTION_RECEIVE_MODE)),
            allow_telemetry=True if _clean(allow_telemetry) is None else _parse_bool(allow_telemetry),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceBusProperties":
        """Load properties from ``AZURE_SERVICEBUS_*`` environment variables.

        Environment Variables:
            AZURE_SERVICEBUS_CONNECTION_STRING: Namespace connection string
            AZURE_SERVICEBUS_QUEUE_NAME: Queue name
            AZURE_SERVICEBUS_QUEUE_RECEIVE_MODE: PEEK_LOCK or RECEIVE_AND_DELETE
            AZURE_SERVICEBUS_TOPIC_NAME: Topic name
            AZURE_SERVICEBUS_SUBSCRIPTION_NAME: Subscription name
            AZURE_SERVICEBUS_SUBSCRIPTION_RECEIVE_MODE: PEEK_LOCK or RECEIVE_AND_DELETE
            AZURE_SERVICEBUS_ALLOW_TELEMETRY: "true" (default) or "false"
        """
        env = os.environ if environ is None else environ
        keys = (
            CONNECTION_STRING,
            QUEUE_NAME,
            QUEUE_RECEIVE_MODE,
            TOPIC_NAME,
            SUBSCRIPTION_NAME,
            SUBSCRIPTION_RECEIVE_MODE,
            ALLOW_TELEMETRY,
        )
        values = {}
        for key in keys:
            env_name = ENV_PREFIX + key.upper().replace("-", "_")
            if env_name in env:
                values[key] = env[env_name]
        return cls.from_mapping(values, prefix="")

    def present_keys(self) -> frozenset[str]:
        """Return the kebab-case keys that carry a value."""
        fields = {
            CONNECTION_STRING: self.connection_string,
            QUEUE_NAME: self.queue_name,
            QUEUE_RECEIVE_MODE: self.queue_receive_mode,
            TOPIC_NAME: self.topic_name,
            SUBSCRIPTION_NAME: self.subscription_name,
            SUBSCRIPTION_RECEIVE_MODE: self.subscription_receive_mode,
        }
        return frozenset(key for key, value in fields.items() if value is not None)
