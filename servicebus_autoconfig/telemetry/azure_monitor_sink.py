# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Azure Monitor telemetry sink implementation using OpenTelemetry."""

import logging
import os
from typing import Any

from azure.monitor.opentelemetry.exporter import AzureMonitorMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from .base import TelemetrySink

logger = logging.getLogger(__name__)


class AzureMonitorTelemetrySink(TelemetrySink):
    """Telemetry sink that reports events to Azure Monitor (Application Insights).

    Each event name becomes an OpenTelemetry counter; tracking an event adds 1
    with the event properties as dimensions.

    Configuration via environment variables:
    - APPLICATIONINSIGHTS_CONNECTION_STRING: Azure Monitor connection string
    - AZURE_MONITOR_EXPORT_INTERVAL_MILLIS: Export interval in ms (default: 60000)
    """

    def __init__(
        self,
        connection_string: str | None = None,
        namespace: str = "servicebus",
        export_interval_millis: int = 60000,
    ):
        """Initialize Azure Monitor telemetry sink.

        Args:
            connection_string: Azure Monitor connection string (or use env var)
            namespace: Prefix for event counter names (default: "servicebus")
            export_interval_millis: Export interval in milliseconds (default: 60000)

        Raises:
            ValueError: If no connection string is available
        """
        self.connection_string = connection_string or os.getenv("APPLICATIONINSIGHTS_CONNECTION_STRING")
        if not self.connection_string:
            raise ValueError(
                "Azure Monitor connection string is required. "
                "Set APPLICATIONINSIGHTS_CONNECTION_STRING or pass connection_string parameter."
            )

        self.namespace = namespace

        export_interval_env = os.getenv("AZURE_MONITOR_EXPORT_INTERVAL_MILLIS")
        if export_interval_env:
            try:
                export_interval_millis = int(export_interval_env)
            except ValueError:
                logger.warning(
                    "Invalid AZURE_MONITOR_EXPORT_INTERVAL_MILLIS value: %s. Using default: %s",
                    export_interval_env,
                    export_interval_millis,
                )

        exporter = AzureMonitorMetricExporter(connection_string=self.connection_string)
        reader = PeriodicExportingMetricReader(
            exporter=exporter,
            export_interval_millis=export_interval_millis,
        )
        resource = Resource.create({"service.name": self.namespace})

        # Private provider so hosts keep control of the global meter provider
        self._provider = MeterProvider(resource=resource, metric_readers=[reader])
        self._meter = self._provider.get_meter(name=f"{self.namespace}.telemetry", version="0.1.0")
        self._counters: dict[str, Any] = {}

        logger.info(
            "AzureMonitorTelemetrySink initialized with namespace '%s' and export interval %sms",
            self.namespace,
            export_interval_millis,
        )

    def _get_or_create_counter(self, name: str) -> Any:
        if name not in self._counters:
            self._counters[name] = self._meter.create_counter(
                name=f"{self.namespace}.{name}",
                description=f"Usage event: {name}",
            )
        return self._counters[name]

    def track_event(self, name: str, properties: dict[str, str]) -> None:
        counter = self._get_or_create_counter(name)
        counter.add(1, attributes=dict(properties))
        logger.debug("AzureMonitorTelemetrySink: event %s with properties %s", name, properties)

    def flush(self) -> None:
        """Force export of pending events."""
        self._provider.force_flush()

    def shutdown(self) -> None:
        """Flush and release the exporter."""
        self._provider.shutdown()
