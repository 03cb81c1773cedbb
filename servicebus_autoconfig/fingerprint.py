# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Anonymized namespace fingerprints for telemetry correlation.

A Service Bus connection string names its namespace in the endpoint host,
e.g. ``Endpoint=sb://contoso.servicebus.windows.net/;...``. Telemetry must be
able to correlate events from the same namespace without ever transmitting the
namespace itself, so only a SHA-256 digest of the token leaves this module.
"""

import hashlib
import logging
import re

logger = logging.getLogger(__name__)

# Letter first, letter or digit last, hyphens allowed inside, 6-50 chars total.
_NAMESPACE_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9-]{4,48}[a-zA-Z0-9]")


def extract_namespace(connection_endpoint: str) -> str:
    """Return the namespace token of a connection endpoint.

    Drops everything up to and including the first ``//`` and everything from
    the first following ``.``. Either step is skipped when its delimiter is
    missing.
    """
    _, separator, remainder = connection_endpoint.partition("//")
    token = remainder if separator else connection_endpoint
    return token.split(".", 1)[0]


def is_valid_namespace(token: str) -> bool:
    """Check a token against the Service Bus namespace naming rule."""
    return _NAMESPACE_PATTERN.fullmatch(token) is not None


def fingerprint(connection_endpoint: str) -> str:
    """Compute the anonymized fingerprint of a connection endpoint.

    Args:
        connection_endpoint: Connection string or endpoint URL

    Returns:
        Lowercase hex SHA-256 digest (64 characters) of the namespace token
    """
    namespace = extract_namespace(connection_endpoint)

    if not is_valid_namespace(namespace):
        logger.warning(
            "Unexpected namespace name %r, check that it is valid or whether the namespace naming rule changed",
            namespace,
        )

    # Lone surrogates from undecodable environ bytes must hash too
    return hashlib.sha256(namespace.encode("utf-8", errors="surrogatepass")).hexdigest()


class NamespaceFingerprinter:
    """Injectable wrapper around :func:`fingerprint`."""

    def fingerprint(self, connection_endpoint: str) -> str:
        return fingerprint(connection_endpoint)

    def __call__(self, connection_endpoint: str) -> str:
        return fingerprint(connection_endpoint)
