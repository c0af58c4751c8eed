"""Unit test fixtures; everything runs against temp files."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def write_input(tmp_path: Path):
    """Write ``content`` to a temp file and return its path."""

    def _write(content: str | bytes, name: str = "input.txt") -> Path:
        p = tmp_path / name
        if isinstance(content, str):
            p.write_text(content, encoding="utf-8")
        else:
            p.write_bytes(content)
        return p

    return _write
