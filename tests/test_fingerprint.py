# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for namespace fingerprinting."""

import hashlib
import logging
import re

from hypothesis import given, settings
from hypothesis import strategies as st

from servicebus_autoconfig.fingerprint import (
    NamespaceFingerprinter,
    extract_namespace,
    fingerprint,
    is_valid_namespace,
)

HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class TestExtractNamespace:
    """Tests for namespace token extraction."""

    def test_connection_string(self):
        """Test extraction from a full connection string."""
        connection_string = (
            "Endpoint=sb://contoso.servicebus.windows.net/;"
            "SharedAccessKeyName=RootManageSharedAccessKey;SharedAccessKey=test123"
        )
        assert extract_namespace(connection_string) == "contoso"

    def test_endpoint_with_path(self):
        assert extract_namespace("protocol://my-namespace.example.net/extra/path") == "my-namespace"

    def test_no_scheme_separator(self):
        """Test that the whole prefix before the first dot is used without '//'."""
        assert extract_namespace("justtext.domain") == "justtext"

    def test_no_dot_after_scheme(self):
        """Test that the remainder after '//' is used unchanged without a dot."""
        assert extract_namespace("sb://contoso") == "contoso"

    def test_no_delimiters(self):
        assert extract_namespace("contoso") == "contoso"

    def test_strips_only_through_first_separator(self):
        assert extract_namespace("sb://contoso//x.example") == "contoso//x"


class TestIsValidNamespace:
    """Tests for the namespace naming rule."""

    def test_valid_names(self):
        assert is_valid_namespace("contoso")
        assert is_valid_namespace("my-namespace-01")
        assert is_valid_namespace("a" * 50)
        assert is_valid_namespace("abcdef")

    def test_too_short(self):
        assert not is_valid_namespace("ab")
        assert not is_valid_namespace("abcde")

    def test_too_long(self):
        assert not is_valid_namespace("a" * 51)

    def test_must_start_with_letter(self):
        assert not is_valid_namespace("1contoso")
        assert not is_valid_namespace("-contoso")

    def test_must_end_with_letter_or_digit(self):
        assert not is_valid_namespace("contoso-")
        assert is_valid_namespace("contoso1")

    def test_rejects_other_characters(self):
        assert not is_valid_namespace("con_toso")
        assert not is_valid_namespace("con toso")


class TestFingerprint:
    """Tests for fingerprint()."""

    def test_hashes_namespace_token(self):
        """Test that only the namespace token is hashed."""
        assert fingerprint("sb://contoso.servicebus.windows.net/") == sha256_hex("contoso")

    def test_fallbacks_hash_extracted_token(self):
        assert fingerprint("justtext.domain") == sha256_hex("justtext")
        assert fingerprint("sb://contoso") == sha256_hex("contoso")

    def test_short_token_warns_but_still_hashes(self, caplog):
        """Test that an invalid token is logged and still fingerprinted."""
        with caplog.at_level(logging.WARNING, logger="servicebus_autoconfig.fingerprint"):
            result = fingerprint("sb://ab.servicebus.windows.net/")

        assert result == sha256_hex("ab")
        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.WARNING
        assert "'ab'" in caplog.records[0].getMessage()

    def test_valid_token_does_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="servicebus_autoconfig.fingerprint"):
            fingerprint("Endpoint=sb://contoso.servicebus.windows.net/;SharedAccessKey=x")

        assert caplog.records == []

    def test_different_namespaces_differ(self):
        assert fingerprint("sb://contoso.servicebus.windows.net/") != fingerprint(
            "sb://fabrikam.servicebus.windows.net/"
        )

    def test_does_not_contain_namespace(self):
        assert "contoso" not in fingerprint("sb://contoso.servicebus.windows.net/")

    def test_lone_surrogate_is_hashed(self):
        """Test that undecodable environment bytes do not break fingerprinting."""
        result = fingerprint("sb://cont\udcffoso.servicebus.windows.net/")

        assert HEX_DIGEST.fullmatch(result)
        assert result == hashlib.sha256("cont\udcffoso".encode("utf-8", "surrogatepass")).hexdigest()

    def test_fingerprinter_delegates(self):
        fingerprinter = NamespaceFingerprinter()
        endpoint = "sb://contoso.servicebus.windows.net/"

        assert fingerprinter.fingerprint(endpoint) == fingerprint(endpoint)
        assert fingerprinter(endpoint) == fingerprint(endpoint)


# Any text, including lone surrogates as produced by surrogateescape decoding
ANY_TEXT = st.text(
    alphabet=st.one_of(
        st.characters(),
        st.characters(min_codepoint=0xD800, max_codepoint=0xDFFF, categories=["Cs"]),
    ),
    min_size=1,
)


@given(ANY_TEXT)
@settings(max_examples=200)
def test_fingerprint_is_64_lowercase_hex(endpoint: str) -> None:
    """Test that any non-empty string yields a 64-character lowercase hex digest."""
    assert HEX_DIGEST.fullmatch(fingerprint(endpoint))


@given(ANY_TEXT)
@settings(max_examples=100)
def test_fingerprint_is_deterministic(endpoint: str) -> None:
    assert fingerprint(endpoint) == fingerprint(endpoint)


@given(st.from_regex(r"[a-z][a-z0-9-]{4,20}[a-z0-9]", fullmatch=True))
@settings(max_examples=100)
def test_fingerprint_matches_token_digest(namespace: str) -> None:
    """Test that well-formed endpoints hash exactly their namespace."""
    endpoint = f"Endpoint=sb://{namespace}.servicebus.windows.net/;SharedAccessKey=x"
    assert fingerprint(endpoint) == sha256_hex(namespace)
