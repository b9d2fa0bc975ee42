"""Validation utilities for JSON text and portable values."""

import json
import math
from collections.abc import Mapping
from typing import Any, List, Set, Tuple

from ..types import ValidationResult, ValidationError, ErrorType


MAX_RECOMMENDED_DEPTH = 20


def format_path(path: Tuple[Any, ...]) -> str:
    """Render a traversal path as ``$.key[0].other``."""
    parts = ["$"]
    for step in path:
        if isinstance(step, int) and not isinstance(step, bool):
            parts.append(f"[{step}]")
        else:
            parts.append(f".{step}")
    return "".join(parts)


class ValidationUtils:
    """Utility class for validating inputs and portable values."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax and structure.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if string is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        max_depth = ValidationUtils._calculate_max_depth(data)
        if max_depth > MAX_RECOMMENDED_DEPTH:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). This may impact performance.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_portable(value: Any) -> ValidationResult:
        """
        Check that a value is built only from strict interchange primitives.

        Strings, finite numbers, booleans, None, lists and string-keyed
        dicts are accepted. Tuples are accepted as arrays.

        Args:
            value: Value to check, usually the output of encode

        Returns:
            ValidationResult listing every offending location
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if ValidationUtils.has_circular_references(value):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="Circular references detected in value",
                location="unknown"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        ValidationUtils._check_portable(value, (), errors)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _check_portable(value: Any, path: Tuple[Any, ...], errors: List[ValidationError]) -> None:
        if value is None or isinstance(value, (str, bool)):
            return
        if type(value) is int:
            return
        if type(value) is float:
            if not math.isfinite(value):
                errors.append(ValidationError(
                    type=ErrorType.STRUCTURE,
                    message=f"Non-finite number {value!r}",
                    location=format_path(path)
                ))
            return
        if type(value) is dict:
            for key, member in value.items():
                if not isinstance(key, str):
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Non-string key {key!r}",
                        location=format_path(path)
                    ))
                ValidationUtils._check_portable(member, path + (key,), errors)
            return
        if type(value) in (list, tuple):
            for index, item in enumerate(value):
                ValidationUtils._check_portable(item, path + (index,), errors)
            return

        errors.append(ValidationError(
            type=ErrorType.STRUCTURE,
            message=f"Value of type {type(value).__name__} is not portable",
            location=format_path(path)
        ))

    @staticmethod
    def has_circular_references(data: Any, seen: Set[int] = None) -> bool:
        """Check for circular references in data structure."""
        if seen is None:
            seen = set()

        if isinstance(data, (Mapping, list, tuple)):
            obj_id = id(data)
            if obj_id in seen:
                return True
            seen.add(obj_id)

            members = data.values() if isinstance(data, Mapping) else data
            for member in members:
                if ValidationUtils.has_circular_references(member, seen):
                    return True

            seen.remove(obj_id)

        return False

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if isinstance(data, dict):
            if not data:
                return current_depth + 1
            return max(ValidationUtils._calculate_max_depth(value, current_depth + 1)
                       for value in data.values())
        elif isinstance(data, list):
            if not data:
                return current_depth + 1
            return max(ValidationUtils._calculate_max_depth(item, current_depth + 1)
                       for item in data)
        else:
            return current_depth
