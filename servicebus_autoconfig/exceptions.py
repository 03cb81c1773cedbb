# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions raised by the Service Bus auto-configuration."""


class ServiceBusConfigError(ValueError):
    """Raised when Service Bus properties cannot produce a requested client."""
