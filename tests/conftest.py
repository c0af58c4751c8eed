"""Shared test fixtures for the urlsluice test suite."""

from __future__ import annotations

import pytest

ALL_PATTERNS_INPUT = (
    "https://example.com/users?id=123&token=abc\n"
    "user@example.com\n"
    "192.168.1.1\n"
    "550e8400-e29b-41d4-a716-446655440000"
)


@pytest.fixture
def all_patterns_input() -> bytes:
    return ALL_PATTERNS_INPUT.encode()


@pytest.fixture
def mixed_corpus() -> bytes:
    """Several hundred lines mixing every pattern class with noise and repeats."""
    lines: list[str] = []
    for i in range(300):
        lines.append(f"visit https://host{i % 7}.example.org/p?page={i % 5}&q=term{i % 3}")
        lines.append(f"contact ops{i % 11}@corp.example.net for access")
        lines.append(f"peer 10.0.{i % 4}.{i % 9} reported 300.1.1.{i % 2}")
        lines.append(f"id 550e8400-e29b-41d4-a716-44665544{i % 13:04d}")
        lines.append("nothing interesting on this line")
    return "\n".join(lines).encode()
