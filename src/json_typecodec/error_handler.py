"""Error handling implementation for the JSON type codec."""

import logging
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    CodecError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for codec operations.

    Validates JSON input before it is decoded and turns codec errors into
    responses a caller can act on.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data)
        except RecursionError as e:
            self.logger.error(f"Input nesting too deep to validate: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.STRUCTURE,
                    message="Input nesting exceeds the interpreter's recursion limit",
                    location="input"
                )],
                warnings=[]
            )

    def handle_codec_error(self, error: CodecError) -> ErrorResponse:
        """
        Handle codec errors and provide recovery suggestions.

        Args:
            error: CodecError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Codec error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.CONFIGURATION:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Give each mapping a unique tag, for example with "
                                 "create_mapping(..., name=...), and rebuild the registry.",
                partial_results=error.context.get("tag") if error.context else None
            )
        elif error.error_type == ErrorType.CONVERSION:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Check the conversion functions of the failing mapping and "
                                 "decode with the same registry that was used to encode.",
                partial_results=error.context.get("path") if error.context else None
            )
        elif error.error_type == ErrorType.STRUCTURE:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Register a mapping for the non-portable types, or make the "
                                 "conversion functions return portable values.",
                partial_results=error.context.get("errors") if error.context else None
            )
        elif error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Fix the JSON syntax of the input and retry.",
                partial_results=None
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                partial_results=None
            )
