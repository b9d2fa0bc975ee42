"""Node classification and tagged-wrapper detection."""

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any, Dict, Optional

from .registry import TAG_PREFIX, Registry
from .types import ABSENT, NodeType


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


class DataTypeDetector:
    """
    Classifies nodes for the codec's traversal.

    Decides which values are containers to recurse into, which are
    interchange-format primitives, and which mappings are tagged wrappers
    standing in for a converted value.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the data type detector.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def detect_element_type(self, element: Any) -> NodeType:
        """
        Detect the shape of a single element.

        Args:
            element: Element to classify

        Returns:
            NodeType enum indicating the element shape
        """
        if isinstance(element, PRIMITIVE_TYPES):
            return NodeType.PRIMITIVE
        if isinstance(element, Mapping):
            return NodeType.MAPPING
        if isinstance(element, (list, tuple)):
            return NodeType.SEQUENCE
        return NodeType.OTHER

    def is_wrapper_shaped(self, element: Any) -> bool:
        """True for a dict with exactly one string key."""
        return (
            isinstance(element, Mapping)
            and len(element) == 1
            and isinstance(next(iter(element)), str)
        )

    def find_wrapper_tag(self, element: Any, registry: Registry) -> Optional[str]:
        """
        Return the tag of a tagged wrapper, if the element is one.

        An element is a wrapper when it is a mapping with exactly one key
        and that key is a tag in the registry. A plain mapping shaped the
        same way is indistinguishable and is treated as a wrapper too.

        Args:
            element: Node from a portable value
            registry: Registry the value was encoded with

        Returns:
            The tag, or None if the element is not a wrapper
        """
        if not self.is_wrapper_shaped(element):
            return None
        key = next(iter(element))
        if key in registry:
            return key
        if key.startswith(TAG_PREFIX):
            self.logger.debug(f"Leaving unresolved wrapper with unknown tag '{key}'")
        return None

    def analyze_tags(self, data: Any, registry: Registry) -> Dict[str, Any]:
        """
        Summarize the tagged wrappers found in a portable value.

        Args:
            data: Portable value to analyze
            registry: Registry used to resolve tags

        Returns:
            Dictionary with per-tag counts, unresolved tags and max depth
        """
        resolved: Counter = Counter()
        unresolved: Counter = Counter()
        self._collect_tags(data, registry, resolved, unresolved)

        return {
            "resolved": dict(resolved),
            "unresolved": dict(unresolved),
            "wrapper_count": sum(resolved.values()),
            "max_depth": self._calculate_element_depth(data),
        }

    def _collect_tags(self, element: Any, registry: Registry,
                      resolved: Counter, unresolved: Counter) -> None:
        if self.is_wrapper_shaped(element):
            key = next(iter(element))
            if key in registry:
                resolved[key] += 1
                return
            if key.startswith(TAG_PREFIX):
                unresolved[key] += 1

        element_type = self.detect_element_type(element)
        if element_type == NodeType.MAPPING:
            for value in element.values():
                self._collect_tags(value, registry, resolved, unresolved)
        elif element_type == NodeType.SEQUENCE:
            for item in element:
                self._collect_tags(item, registry, resolved, unresolved)

    def _calculate_element_depth(self, element: Any) -> int:
        """
        Calculate the nesting depth of an element.

        Args:
            element: Element to analyze

        Returns:
            Nesting depth (0 for primitives)
        """
        if isinstance(element, Mapping):
            if not element:
                return 1
            return 1 + max(self._calculate_element_depth(value) for value in element.values())
        elif isinstance(element, (list, tuple)):
            if not element:
                return 1
            return 1 + max(self._calculate_element_depth(item) for item in element)
        else:
            return 0

    @staticmethod
    def is_absent(element: Any) -> bool:
        """True for the undefined-value marker."""
        return element is ABSENT
