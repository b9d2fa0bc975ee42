"""Type mappings and the ordered registry that holds them."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .types import RegistryConfigurationError


TAG_PREFIX = "$jtc$"


@dataclass(frozen=True)
class Kind:
    """
    A named primitive kind used as a discriminator.

    Lets a mapping match values that share a Python class with ordinary
    data (for example integers too large for the interchange format).

    Attributes:
        name: Name the mapping's tag is derived from
        predicate: Returns True for values of this kind
    """
    name: str
    predicate: Callable[[Any], bool]

    def __call__(self, value: Any) -> bool:
        return bool(self.predicate(value))


Discriminator = Union[type, Kind, str]


@dataclass(frozen=True)
class TypeMapping:
    """
    Binding of a discriminator to a pair of conversion functions and a tag.

    ``from_portable(to_portable(v))`` must equal ``v`` for every value the
    discriminator matches.
    """
    discriminator: Discriminator
    to_portable: Callable[[Any], Any]
    from_portable: Callable[[Any], Any]
    tag: str

    @property
    def name(self) -> str:
        """Name of the discriminator without the tag prefix."""
        return self.tag[len(TAG_PREFIX):]

    def matches(self, value: Any) -> bool:
        """
        Test whether this mapping applies to a value.

        Args:
            value: Any node visited by the codec

        Returns:
            True if the discriminator matches the value's runtime type
        """
        discriminator = self.discriminator
        if isinstance(discriminator, Kind):
            return discriminator(value)
        if isinstance(discriminator, str):
            return type(value).__name__ == discriminator
        return isinstance(value, discriminator)


def discriminator_name(discriminator: Discriminator) -> str:
    """Return the name a tag is derived from."""
    if isinstance(discriminator, Kind):
        return discriminator.name
    if isinstance(discriminator, str):
        return discriminator
    if isinstance(discriminator, type):
        return discriminator.__name__
    raise RegistryConfigurationError(
        f"Discriminator must be a class, Kind or type name, got {type(discriminator).__name__}",
        context={"discriminator": discriminator}
    )


def make_tag(name: str) -> str:
    """Derive a tag from a discriminator name."""
    return f"{TAG_PREFIX}{name}"


def create_mapping(discriminator: Discriminator,
                   to_portable: Callable[[Any], Any],
                   from_portable: Callable[[Any], Any],
                   name: Optional[str] = None) -> TypeMapping:
    """
    Create a type mapping with a tag derived from its discriminator.

    Two independently built registries produce the same tag for the same
    discriminator, so values encoded in one process decode in another.

    Args:
        discriminator: Class, Kind, or structural type name to match
        to_portable: Converts a matched value to its portable form
        from_portable: Rebuilds the value from its portable form
        name: Optional name overriding the discriminator's own name

    Returns:
        Immutable TypeMapping

    Raises:
        RegistryConfigurationError: If any part is of the wrong type
    """
    if name is None:
        name = discriminator_name(discriminator)
    else:
        discriminator_name(discriminator)

    if not name:
        raise RegistryConfigurationError("Mapping name cannot be empty")
    if not callable(to_portable) or not callable(from_portable):
        raise RegistryConfigurationError(
            f"Conversion functions for '{name}' must be callable",
            context={"name": name}
        )

    return TypeMapping(
        discriminator=discriminator,
        to_portable=to_portable,
        from_portable=from_portable,
        tag=make_tag(name)
    )


class Registry:
    """
    Ordered, immutable sequence of type mappings.

    The first mapping whose discriminator matches a value wins, so a
    mapping placed earlier overrides a later one that also matches.
    Tags are checked for collisions when the registry is built.
    """

    __slots__ = ("_mappings", "_by_tag")

    def __init__(self, mappings: Iterable[TypeMapping] = (),
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the registry.

        Args:
            mappings: Mappings in precedence order
            logger: Optional logger instance

        Raises:
            RegistryConfigurationError: If two mappings share a tag
        """
        mappings = tuple(mappings)
        by_tag: Dict[str, TypeMapping] = {}

        for position, mapping in enumerate(mappings):
            if not isinstance(mapping, TypeMapping):
                raise RegistryConfigurationError(
                    f"Registry entry {position} is not a TypeMapping: {mapping!r}",
                    context={"position": position}
                )
            if mapping.tag in by_tag:
                raise RegistryConfigurationError(
                    f"Duplicate tag '{mapping.tag}' at position {position}",
                    context={"tag": mapping.tag, "position": position}
                )
            by_tag[mapping.tag] = mapping

        object.__setattr__(self, "_mappings", mappings)
        object.__setattr__(self, "_by_tag", by_tag)

        (logger or logging.getLogger(__name__)).debug(
            f"Built registry with {len(mappings)} mappings"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Registry is immutable")

    def __iter__(self) -> Iterator[TypeMapping]:
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return self._mappings == other._mappings

    def __hash__(self) -> int:
        return hash(self._mappings)

    def __repr__(self) -> str:
        return f"Registry({', '.join(self.tags)})"

    @property
    def tags(self) -> Tuple[str, ...]:
        """Tags in precedence order."""
        return tuple(mapping.tag for mapping in self._mappings)

    def match(self, value: Any) -> Optional[TypeMapping]:
        """
        Find the first mapping that applies to a value.

        Args:
            value: Node to test

        Returns:
            Matching TypeMapping or None
        """
        for mapping in self._mappings:
            if mapping.matches(value):
                return mapping
        return None

    def lookup(self, tag: str) -> Optional[TypeMapping]:
        """Return the mapping registered under a tag, if any."""
        return self._by_tag.get(tag)

    def extend(self, *mappings: TypeMapping) -> "Registry":
        """Return a new registry with mappings appended after the existing ones."""
        return Registry(self._mappings + mappings)

    def prepend(self, *mappings: TypeMapping) -> "Registry":
        """Return a new registry with mappings taking precedence over the existing ones."""
        return Registry(mappings + self._mappings)

    def without(self, *names: str) -> "Registry":
        """
        Return a new registry that omits some mappings.

        Args:
            names: Tags or discriminator names to drop

        Returns:
            Registry without the named mappings
        """
        dropped = {name if name.startswith(TAG_PREFIX) else make_tag(name) for name in names}
        unknown: List[str] = sorted(dropped - set(self._by_tag))
        if unknown:
            raise RegistryConfigurationError(
                f"Unknown tags: {', '.join(unknown)}",
                context={"tags": unknown}
            )
        return Registry(mapping for mapping in self._mappings if mapping.tag not in dropped)
