"""Tests for error handler."""

from json_typecodec.error_handler import ErrorHandler
from json_typecodec.types import (
    CodecError,
    ConversionError,
    ErrorType,
    RegistryConfigurationError,
)


class TestErrorHandler:
    """Tests for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_validate_input_valid_json(self):
        """Test validation of valid JSON input."""
        result = self.error_handler.validate_input('{"s": {"$jtc$set": [1, 2]}}')

        assert result.is_valid
        assert len(result.errors) == 0

    def test_validate_input_invalid_json(self):
        """Test validation of invalid JSON input."""
        result = self.error_handler.validate_input('{"s": [1, 2}')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SYNTAX

    def test_handle_configuration_error(self):
        """Test handling of registry configuration errors."""
        error = RegistryConfigurationError("Duplicate tag", context={"tag": "$jtc$Point"})

        response = self.error_handler.handle_codec_error(error)

        assert not response.can_recover
        assert "unique tag" in response.suggested_action
        assert response.partial_results == "$jtc$Point"

    def test_handle_conversion_error(self):
        """Test handling of conversion errors."""
        error = ConversionError("bad date", context={"tag": "$jtc$datetime", "path": ("d",)})

        response = self.error_handler.handle_codec_error(error)

        assert not response.can_recover
        assert "same registry" in response.suggested_action
        assert response.partial_results == ("d",)

    def test_handle_structure_error(self):
        """Test handling of non-portable output."""
        error = CodecError("not portable", ErrorType.STRUCTURE, context={"errors": ["x"]})

        response = self.error_handler.handle_codec_error(error)

        assert response.can_recover
        assert response.partial_results == ["x"]

    def test_handle_syntax_error(self):
        """Test handling of invalid JSON text."""
        response = self.error_handler.handle_codec_error(CodecError("bad", ErrorType.SYNTAX))

        assert response.can_recover
        assert "syntax" in response.suggested_action.lower()
        assert response.partial_results is None
