# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""No-op telemetry sink for testing and local development."""

import logging

from .base import TelemetrySink

logger = logging.getLogger(__name__)


class NoopTelemetrySink(TelemetrySink):
    """Telemetry sink that keeps events in memory and sends nothing.

    Stores every tracked event so tests can inspect what would have been sent.
    """

    def __init__(self, **kwargs):
        """Initialize no-op sink.

        Args:
            **kwargs: Ignored (for compatibility with the factory)
        """
        self.events: list[tuple[str, dict[str, str]]] = []

    def track_event(self, name: str, properties: dict[str, str]) -> None:
        self.events.append((name, dict(properties)))
        logger.debug(f"NoopTelemetrySink: event {name} with properties {properties}")

    def get_events(self, name: str) -> list[dict[str, str]]:
        """Get the properties of every tracked event with the given name."""
        return [properties for event_name, properties in self.events if event_name == name]

    def clear_events(self) -> None:
        """Clear all stored events (useful for testing)."""
        self.events.clear()
