# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Service Bus auto-configuration.

Builds Azure Service Bus queue, topic and subscription clients from
``azure.servicebus.*`` properties and reports anonymized usage telemetry
for each client created.

Example:
    >>> from servicebus_autoconfig import ServiceBusAutoConfiguration, create_telemetry_sink
    >>> autoconfig = ServiceBusAutoConfiguration.from_mapping(
    ...     {
    ...         "azure.servicebus.connection-string": "Endpoint=sb://contoso.servicebus.windows.net/;...",
    ...         "azure.servicebus.topic-name": "orders",
    ...     },
    ...     telemetry_sink=create_telemetry_sink("noop"),
    ... )
    >>> clients = autoconfig.create_clients()
"""

__version__ = "0.1.0"

from .autoconfig import CLIENT_RULES, EVENT_NAME, ClientRule, ServiceBusAutoConfiguration
from .clients import QueueClient, SubscriptionClient, TopicClient
from .config import ReceiveMode, ServiceBusProperties
from .exceptions import ServiceBusConfigError
from .fingerprint import NamespaceFingerprinter, extract_namespace, fingerprint, is_valid_namespace
from .telemetry import NoopTelemetrySink, TelemetryProxy, TelemetrySink, create_telemetry_sink

__all__ = [
    "__version__",
    # Auto-configuration
    "CLIENT_RULES",
    "EVENT_NAME",
    "ClientRule",
    "ServiceBusAutoConfiguration",
    # Clients
    "QueueClient",
    "SubscriptionClient",
    "TopicClient",
    # Configuration
    "ReceiveMode",
    "ServiceBusProperties",
    "ServiceBusConfigError",
    # Fingerprinting
    "NamespaceFingerprinter",
    "extract_namespace",
    "fingerprint",
    "is_valid_namespace",
    # Telemetry
    "NoopTelemetrySink",
    "TelemetryProxy",
    "TelemetrySink",
    "create_telemetry_sink",
]
