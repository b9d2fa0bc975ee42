"""Recursive codec that swaps registered types for tagged wrappers and back."""

import logging
from typing import Any, Callable, Optional, Tuple

from .builtin_types import default_registry
from .data_type_detector import DataTypeDetector
from .registry import Registry, TypeMapping
from .types import (
    CodecInterface,
    CodecError,
    ConversionError,
    ErrorType,
    NodeType,
    PortableValue,
)
from .utils.validation import ValidationUtils, format_path


Path = Tuple[Any, ...]

# Returned by a substitution callback that leaves the node alone.
NOT_REPLACED = object()

Substitute = Callable[[Any, Path], Any]


def clone_with(value: Any, substitute: Substitute,
               detector: Optional[DataTypeDetector] = None,
               path: Path = ()) -> Any:
    """
    Deep-copy a nested value, giving a callback the chance to replace each node.

    The callback is tried first at every node. A replacement is used as
    is and never recursed into. Otherwise mappings are rebuilt as dicts,
    lists as lists and tuples as tuples, with every member cloned the same
    way. Primitives and unrecognized values are returned unchanged.

    Undefined members (``ABSENT``) are dropped from mappings and become
    None inside sequences, as a JSON serializer would do.

    Args:
        value: Value to copy
        substitute: Callback ``(node, path) -> replacement or NOT_REPLACED``
        detector: Optional DataTypeDetector used to classify nodes
        path: Keys and indexes leading to ``value``

    Returns:
        The copied value
    """
    detector = detector or DataTypeDetector()

    replaced = substitute(value, path)
    if replaced is not NOT_REPLACED:
        return replaced

    node_type = detector.detect_element_type(value)

    if node_type == NodeType.MAPPING:
        return {
            key: clone_with(member, substitute, detector, path + (key,))
            for key, member in value.items()
            if not detector.is_absent(member)
        }

    if node_type == NodeType.SEQUENCE:
        items = [
            None if detector.is_absent(item) else clone_with(item, substitute, detector, path + (index,))
            for index, item in enumerate(value)
        ]
        return items if isinstance(value, list) else tuple(items)

    return value


class TypeCodec(CodecInterface):
    """
    Reversible codec for values the interchange format cannot hold.

    Each node matched by a registry mapping is replaced by a single-key
    wrapper ``{tag: portable}`` on encode, and wrappers are turned back
    into typed values on decode. Decode with the same registry that was
    used to encode; a wrapper whose tag the registry lacks is left as a
    plain dict.

    The output of a conversion function is not traversed again: values
    nested inside it are only portable if the function made them so.
    Cyclic input recurses without bound.
    """

    def __init__(self, registry: Optional[Registry] = None,
                 logger: Optional[logging.Logger] = None,
                 strict: bool = False):
        """
        Initialize the codec.

        Args:
            registry: Registry of type mappings (defaults to default_registry)
            logger: Optional logger instance
            strict: Validate that encoded output holds only interchange primitives
        """
        self.registry = default_registry if registry is None else registry
        self.logger = logger or logging.getLogger(__name__)
        self.strict = strict
        self.detector = DataTypeDetector(self.logger)

    def encode(self, value: Any) -> PortableValue:
        """
        Convert a nested value into its portable form.

        Args:
            value: Nested value, left unmodified

        Returns:
            Fresh portable copy with tagged wrappers in place of registered types

        Raises:
            ConversionError: If a mapping's to_portable fails
            CodecError: In strict mode, if the output is not portable
        """
        self.logger.debug(f"Encoding with {len(self.registry)} mappings")
        result = clone_with(value, self._encode_node, self.detector)

        if self.strict:
            validation = ValidationUtils.validate_portable(result)
            if not validation.is_valid:
                locations = [f"{error.location}: {error.message}" for error in validation.errors]
                raise CodecError(
                    f"Encoded value is not portable: {'; '.join(locations)}",
                    ErrorType.STRUCTURE,
                    context={"errors": validation.errors}
                )

        return PortableValue(result)

    def decode(self, value: PortableValue) -> Any:
        """
        Reconstruct a nested value from its portable form.

        Args:
            value: Output of encode with the same registry

        Returns:
            Fresh copy with tagged wrappers replaced by typed values

        Raises:
            ConversionError: If a mapping's from_portable fails
        """
        self.logger.debug(f"Decoding with {len(self.registry)} mappings")
        return clone_with(value, self._decode_node, self.detector)

    def _encode_node(self, node: Any, path: Path) -> Any:
        mapping = self.registry.match(node)
        if mapping is None:
            return NOT_REPLACED
        return {mapping.tag: self._convert(mapping, mapping.to_portable, node, path, "encode")}

    def _decode_node(self, node: Any, path: Path) -> Any:
        tag = self.detector.find_wrapper_tag(node, self.registry)
        if tag is None:
            return NOT_REPLACED
        mapping = self.registry.lookup(tag)
        return self._convert(mapping, mapping.from_portable, node[tag], path, "decode")

    def _convert(self, mapping: TypeMapping, function: Callable[[Any], Any],
                 node: Any, path: Path, direction: str) -> Any:
        try:
            return function(node)
        except Exception as e:
            raise ConversionError(
                f"Failed to {direction} '{mapping.tag}' at {format_path(path)}: {e}",
                context={"tag": mapping.tag, "path": path}
            ) from e


def encode(value: Any, registry: Optional[Registry] = None) -> PortableValue:
    """Encode a value with the given registry, or the default one."""
    return TypeCodec(registry).encode(value)


def decode(value: PortableValue, registry: Optional[Registry] = None) -> Any:
    """Decode a portable value with the given registry, or the default one."""
    return TypeCodec(registry).decode(value)
