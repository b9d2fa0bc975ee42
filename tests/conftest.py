"""Pytest configuration and fixtures."""

import pytest
import re
import tempfile
from collections import OrderedDict
from datetime import datetime, timezone
from pathlib import Path

from json_typecodec import BigInt


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_typed_value():
    """Value holding one instance of every default-registry type."""
    return {
        "date": datetime(1970, 1, 1, tzinfo=timezone.utc),
        "regex": re.compile("foo", re.IGNORECASE),
        "set": {"foo", "bar"},
        "map": OrderedDict([("foo1", "bar1"), ("foo2", "bar2")]),
        "bigint": BigInt(123),
        "null": None,
    }


@pytest.fixture
def sample_plain_json():
    """Nested value built only from JSON primitives."""
    return {
        "users": {
            "user1": {
                "name": "Alice",
                "email": "alice@example.com",
                "profile": {"age": 30, "score": 4.5, "tags": ["a", "b"]}
            },
            "user2": {
                "name": "Bob",
                "active": False,
                "profile": None
            }
        },
        "items": [1, [2, [3, []]], {}, "", True],
    }


@pytest.fixture
def portable_file(temp_dir):
    """Write JSON text to a file and return its path."""
    def _write(text: str, name: str = "input.json") -> Path:
        path = temp_dir / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
