# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Fire-and-forget front for telemetry sinks."""

import logging
from collections.abc import Callable

from ..fingerprint import fingerprint
from .base import HASHED_NAMESPACE, SERVICE_NAME, TelemetrySink

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "servicebus"


class TelemetryProxy:
    """Gate and isolate calls to a telemetry sink.

    Events are dropped when ``allow_telemetry`` is false. Failures while
    building or delivering an event are logged and never reach the caller.
    """

    def __init__(self, sink: TelemetrySink | None, allow_telemetry: bool = True):
        self.sink = sink
        self.allow_telemetry = allow_telemetry

    @property
    def enabled(self) -> bool:
        return self.allow_telemetry and self.sink is not None

    def track_event(self, name: str, properties: dict[str, str]) -> None:
        """Forward an event to the sink if telemetry is allowed."""
        self.track_lazy_event(name, lambda: properties)

    def track_lazy_event(self, name: str, build_properties: Callable[[], dict[str, str]]) -> None:
        """Build event properties and forward them, only if telemetry is allowed.

        Args:
            name: Event name
            build_properties: Called once to produce the event properties
        """
        if not self.enabled:
            logger.debug(f"Telemetry disabled, dropping event {name}")
            return

        try:
            self.sink.track_event(name, build_properties())
        except Exception as e:
            logger.warning(f"Failed to track telemetry event {name}: {e}")


def track_client_created(
    proxy: TelemetryProxy,
    connection_string: str,
    event_name: str,
    service_name: str = DEFAULT_SERVICE_NAME,
) -> None:
    """Report creation of a Service Bus client without disclosing its namespace.

    Args:
        proxy: Telemetry proxy to report through
        connection_string: Connection string the client was built from
        event_name: Event name reported to the sink
        service_name: Value of the ``serviceName`` property
    """
    proxy.track_lazy_event(
        event_name,
        lambda: {
            SERVICE_NAME: service_name,
            HASHED_NAMESPACE: fingerprint(connection_string),
        },
    )
