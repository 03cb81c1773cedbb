# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Base abstraction for usage telemetry sinks."""

from abc import ABC, abstractmethod

# Event property keys
SERVICE_NAME = "serviceName"
HASHED_NAMESPACE = "hashedNamespace"


class TelemetrySink(ABC):
    """Abstract base class for telemetry sinks.

    A sink accepts named events carrying a small mapping of string properties.
    Delivery, batching and transport are entirely the sink's concern.
    """

    @abstractmethod
    def track_event(self, name: str, properties: dict[str, str]) -> None:
        """Record a named event.

        Args:
            name: Event name (e.g., "ServiceBusAutoConfiguration")
            properties: Event properties as string key/value pairs
        """
        pass

    def flush(self) -> None:
        """Push any buffered events to the backend. No-op by default."""
