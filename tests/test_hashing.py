#!/usr/bin/env python3
"""
Unit tests for SHA-256 hashing and HashState loop prevention.

Tests compute_hash for consistent output and HashState for per-path echo
detection.
"""
from keymapsync.hashing import HashState, compute_hash


def test_compute_hash_produces_sha256_hex() -> None:
    """Test compute_hash returns 64-character hex SHA-256 digest."""
    result = compute_hash("test content")
    assert len(result) == 64
    assert all(c in "0123456789abcdef" for c in result)


def test_compute_hash_known_value() -> None:
    """Test compute_hash hashes the UTF-8 encoding."""
    assert compute_hash("") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_compute_hash_consistent_output() -> None:
    """Test same input always produces same hash."""
    data = "[{\"key\": \"ctrl+k\"}]"
    assert compute_hash(data) == compute_hash(data)


def test_compute_hash_different_for_different_input() -> None:
    """Test different inputs produce different hashes, whitespace included."""
    assert compute_hash("content A") != compute_hash("content B")
    assert compute_hash("[]") != compute_hash("[]\n")


def test_compute_hash_non_ascii() -> None:
    """Test non-ASCII content hashes without error."""
    assert len(compute_hash("⌘K é")) == 64


def test_hashstate_initially_empty() -> None:
    """Test HashState starts with no recorded writes."""
    state = HashState()
    assert state.last_written == {}
    assert state.is_echo("/a", "abc123") is False


def test_hashstate_is_echo_after_record() -> None:
    """Test recorded hash is recognized as echo for the same path only."""
    state = HashState()
    state.record_written("/a", "abc123")
    assert state.is_echo("/a", "abc123") is True
    assert state.is_echo("/b", "abc123") is False
    assert state.is_echo("/a", "def456") is False


def test_hashstate_record_overwrites() -> None:
    """Test a later record replaces the earlier one for that path."""
    state = HashState()
    state.record_written("/a", "first")
    state.record_written("/a", "second")
    assert state.is_echo("/a", "first") is False
    assert state.is_echo("/a", "second") is True
