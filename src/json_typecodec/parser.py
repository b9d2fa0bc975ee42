"""JSON text layer on top of the codec."""

import json
import logging
from typing import Any, Optional
from .types import CodecError, ErrorType, PortableValue
from .error_handler import ErrorHandler
from .codec import TypeCodec
from .registry import Registry


class JSONParser:
    """
    Parses JSON text into portable values and serializes them back.

    The portable value is handed to the standard json module with
    ``allow_nan=False``; nothing here adds a format of its own.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> PortableValue:
        """
        Parse a JSON string into a portable value.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed portable value, ready for decode

        Raises:
            CodecError: If the JSON is invalid
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise CodecError(
                f"Invalid JSON input: {'; '.join(error_messages)}",
                ErrorType.SYNTAX,
                context={"errors": validation_result.errors}
            )

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        data = json.loads(json_string)
        self.logger.debug(f"Parsed JSON input of {len(json_string)} characters")
        return PortableValue(data)

    def serialize(self, value: PortableValue, indent: Optional[int] = None) -> str:
        """
        Serialize a portable value to JSON text.

        Raises:
            CodecError: If the value holds anything the json module rejects
        """
        try:
            return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise CodecError(
                f"Value is not serializable: {e}",
                ErrorType.STRUCTURE
            ) from e


def dumps(value: Any, registry: Optional[Registry] = None, indent: Optional[int] = None) -> str:
    """Encode a value and serialize it to JSON text."""
    return JSONParser().serialize(TypeCodec(registry).encode(value), indent=indent)


def loads(json_string: str, registry: Optional[Registry] = None) -> Any:
    """Parse JSON text and decode it with the given registry."""
    return TypeCodec(registry).decode(JSONParser().parse(json_string))
