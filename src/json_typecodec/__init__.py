"""
JSON Type Codec - Reversible encoding of typed values into plain JSON.

Replaces values the JSON data model cannot hold (datetimes, compiled
patterns, ordered mappings, sets, big integers, and any registered type)
with single-key tagged wrappers, and restores them on decode.
"""

__version__ = "1.0.0"

from .builtin_types import (
    BigInt,
    DEFAULT_MAPPINGS,
    EXTENDED_MAPPINGS,
    MAX_SAFE_INTEGER,
    default_registry,
    extended_registry,
)
from .codec import TypeCodec, clone_with, decode, encode
from .parser import JSONParser, dumps, loads
from .registry import TAG_PREFIX, Kind, Registry, TypeMapping, create_mapping
from .types import (
    ABSENT,
    CodecError,
    ConversionError,
    ErrorType,
    PortableValue,
    RegistryConfigurationError,
)

__all__ = [
    "ABSENT",
    "BigInt",
    "CodecError",
    "ConversionError",
    "DEFAULT_MAPPINGS",
    "EXTENDED_MAPPINGS",
    "ErrorType",
    "JSONParser",
    "Kind",
    "MAX_SAFE_INTEGER",
    "PortableValue",
    "Registry",
    "RegistryConfigurationError",
    "TAG_PREFIX",
    "TypeCodec",
    "TypeMapping",
    "clone_with",
    "create_mapping",
    "decode",
    "default_registry",
    "dumps",
    "encode",
    "extended_registry",
    "loads",
]
