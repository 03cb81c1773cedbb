# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory function for creating telemetry sinks."""

import logging
from collections.abc import Callable
from typing import Any

from .base import TelemetrySink

logger = logging.getLogger(__name__)


def _build_noop(**kwargs: Any) -> TelemetrySink:
    from .noop_sink import NoopTelemetrySink

    return NoopTelemetrySink(**kwargs)


def _build_azure_monitor(**kwargs: Any) -> TelemetrySink:
    from .azure_monitor_sink import AzureMonitorTelemetrySink

    return AzureMonitorTelemetrySink(**kwargs)


_DRIVERS: dict[str, Callable[..., TelemetrySink]] = {
    "noop": _build_noop,
    "azure_monitor": _build_azure_monitor,
}


def create_telemetry_sink(driver: str = "noop", **kwargs: Any) -> TelemetrySink:
    """Create a telemetry sink based on driver type.

    Supported drivers:
    - "noop": In-memory sink for testing and local development
    - "azure_monitor" or "azuremonitor": Azure Monitor via OpenTelemetry

    Args:
        driver: Driver name (case-insensitive)
        **kwargs: Driver-specific constructor arguments

    Returns:
        TelemetrySink instance

    Raises:
        ValueError: If driver type is unknown
    """
    if driver is None:
        raise ValueError("telemetry driver is required")

    driver_type = str(driver).lower()
    if driver_type == "azuremonitor":
        driver_type = "azure_monitor"

    try:
        factory = _DRIVERS[driver_type]
    except KeyError as exc:
        supported = ", ".join(sorted(_DRIVERS.keys()))
        raise ValueError(f"Unknown telemetry driver: {driver}. Supported drivers: {supported}") from exc

    logger.debug("Creating telemetry sink with driver %s", driver_type)
    return factory(**kwargs)
