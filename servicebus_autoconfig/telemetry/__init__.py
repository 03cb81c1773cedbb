# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Usage telemetry for the Service Bus auto-configuration."""

from .base import HASHED_NAMESPACE, SERVICE_NAME, TelemetrySink
from .factory import create_telemetry_sink
from .noop_sink import NoopTelemetrySink
from .proxy import DEFAULT_SERVICE_NAME, TelemetryProxy, track_client_created

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "HASHED_NAMESPACE",
    "SERVICE_NAME",
    "NoopTelemetrySink",
    "TelemetryProxy",
    "TelemetrySink",
    "create_telemetry_sink",
    "track_client_created",
]
