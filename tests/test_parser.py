"""Tests for JSON parser and text helpers."""

import json
import pytest
from datetime import datetime, timezone

from json_typecodec import CodecError, ErrorType, create_mapping, default_registry, dumps, loads
from json_typecodec.parser import JSONParser


class TestJSONParser:
    """Tests for JSONParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = JSONParser()

    def test_parse_valid_json(self):
        """Test parsing portable JSON text."""
        data = self.parser.parse('{"d": {"$jtc$datetime": "1970-01-01T00:00:00.000Z"}}')
        assert data == {"d": {"$jtc$datetime": "1970-01-01T00:00:00.000Z"}}

    def test_parse_invalid_json(self):
        """Test that syntax errors raise CodecError."""
        with pytest.raises(CodecError) as exc_info:
            self.parser.parse('{"d": ')

        assert exc_info.value.error_type == ErrorType.SYNTAX
        assert "Invalid JSON input" in str(exc_info.value)

    def test_parse_empty_json(self):
        """Test that empty text is rejected."""
        with pytest.raises(CodecError, match="empty"):
            self.parser.parse("")

    def test_serialize(self):
        """Test serialization to JSON text."""
        assert self.parser.serialize({"a": [1, None]}) == '{"a": [1, null]}'

    def test_serialize_rejects_non_portable(self):
        """Test that non-JSON values raise CodecError."""
        with pytest.raises(CodecError) as exc_info:
            self.parser.serialize({"n": float("inf")})
        assert exc_info.value.error_type == ErrorType.STRUCTURE


class TestTextHelpers:
    """Tests for dumps and loads."""

    def test_dumps_and_loads(self, sample_typed_value):
        """Test the text round trip of typed values."""
        text = dumps(sample_typed_value)

        assert json.loads(text)["date"] == {"$jtc$datetime": "1970-01-01T00:00:00.000Z"}
        assert loads(text) == sample_typed_value

    def test_dumps_indent(self):
        """Test indented output."""
        assert dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_custom_registry(self):
        """Test dumps and loads with a custom registry."""
        registry = default_registry.without("datetime").extend(
            create_mapping(datetime, lambda value: value.timestamp(),
                           lambda stamp: datetime.fromtimestamp(stamp, timezone.utc))
        )
        value = {"at": datetime(2001, 9, 9, 1, 46, 40, tzinfo=timezone.utc)}

        text = dumps(value, registry)

        assert json.loads(text) == {"at": {"$jtc$datetime": 1000000000.0}}
        assert loads(text, registry) == value
