"""Utility functions for the JSON type codec."""

from .validation import ValidationUtils, format_path

__all__ = ["ValidationUtils", "format_path"]
