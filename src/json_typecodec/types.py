"""Core type definitions for the JSON type codec."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, NewType, Optional


# Produced only by encode and expected by decode. Static checkers reject a
# plain payload passed to decode without an explicit PortableValue(...) cast.
PortableValue = NewType("PortableValue", object)


class NodeType(Enum):
    """Enumeration of node shapes seen during traversal."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    PRIMITIVE = "primitive"
    OTHER = "other"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    CONFIGURATION = "configuration"
    CONVERSION = "conversion"


class _Absent:
    """Marker for a value that is present in a container but undefined."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class CodecError(Exception):
    """Base exception for codec errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class RegistryConfigurationError(CodecError):
    """Raised when a registry or mapping is built from invalid parts."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.CONFIGURATION, context)


class ConversionError(CodecError):
    """Raised when a mapping's conversion function fails on a value."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.CONVERSION, context)


# Abstract base classes for interfaces

class CodecInterface(ABC):
    """Abstract interface for a reversible value codec."""

    @abstractmethod
    def encode(self, value: Any) -> PortableValue:
        """Convert a nested value into its portable form."""
        pass

    @abstractmethod
    def decode(self, value: PortableValue) -> Any:
        """Reconstruct a nested value from its portable form."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_codec_error(self, error: CodecError) -> ErrorResponse:
        """Handle codec errors."""
        pass
