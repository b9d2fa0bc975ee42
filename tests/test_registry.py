"""Tests for type mappings and registries."""

import pytest
from datetime import datetime

from json_typecodec import (
    ErrorType,
    Kind,
    Registry,
    RegistryConfigurationError,
    TypeMapping,
    create_mapping,
    default_registry,
)
from json_typecodec.registry import TAG_PREFIX, discriminator_name


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def point_mapping(name=None):
    return create_mapping(Point, lambda p: [p.x, p.y], lambda xy: Point(*xy), name=name)


class TestCreateMapping:
    """Tests for create_mapping."""

    def test_tag_derived_from_class_name(self):
        """Test that the tag is the prefixed class name."""
        mapping = point_mapping()

        assert mapping.tag == f"{TAG_PREFIX}Point"
        assert mapping.name == "Point"

    def test_tag_is_deterministic(self):
        """Test that separately built mappings share a tag."""
        assert point_mapping().tag == point_mapping().tag

    def test_tag_from_kind_and_type_name(self):
        """Test tags for Kind and structural name discriminators."""
        kind = Kind("even", lambda value: isinstance(value, int) and value % 2 == 0)

        assert create_mapping(kind, str, int).tag == "$jtc$even"
        assert create_mapping("Decimal", str, str).tag == "$jtc$Decimal"

    def test_name_override(self):
        """Test that an explicit name replaces the discriminator name."""
        assert point_mapping(name="geo.Point").tag == "$jtc$geo.Point"

    def test_invalid_discriminator(self):
        """Test that a non-class discriminator is rejected."""
        with pytest.raises(RegistryConfigurationError) as exc_info:
            create_mapping(42, str, str)
        assert exc_info.value.error_type == ErrorType.CONFIGURATION

    def test_non_callable_converter(self):
        """Test that conversion functions must be callable."""
        with pytest.raises(RegistryConfigurationError, match="callable"):
            create_mapping(Point, "not callable", Point)

    def test_mapping_is_immutable(self):
        """Test that a mapping cannot be changed after construction."""
        mapping = point_mapping()
        with pytest.raises(AttributeError):
            mapping.tag = "$jtc$Other"

    def test_matches(self):
        """Test discriminator matching for each discriminator form."""
        assert point_mapping().matches(Point(1, 2))
        assert not point_mapping().matches((1, 2))
        assert create_mapping("Point", str, str).matches(Point(1, 2))
        assert create_mapping(Kind("neg", lambda v: v < 0), str, int).matches(-1)

    def test_discriminator_name(self):
        """Test names for each discriminator form."""
        assert discriminator_name(datetime) == "datetime"
        assert discriminator_name("Thing") == "Thing"
        assert discriminator_name(Kind("bigint", bool)) == "bigint"


class TestRegistry:
    """Tests for Registry."""

    def test_duplicate_tags_rejected_at_construction(self):
        """Test that a tag collision fails eagerly."""
        with pytest.raises(RegistryConfigurationError) as exc_info:
            Registry([point_mapping(), point_mapping()])

        assert exc_info.value.context == {"tag": "$jtc$Point", "position": 1}

    def test_extend_with_existing_tag_rejected(self):
        """Test that extending with a colliding tag fails."""
        registry = Registry([point_mapping()])
        with pytest.raises(RegistryConfigurationError):
            registry.extend(point_mapping())

    def test_non_mapping_entry_rejected(self):
        """Test that only TypeMapping entries are accepted."""
        with pytest.raises(RegistryConfigurationError):
            Registry([point_mapping(), "oops"])

    def test_match_first_wins(self):
        """Test first-match precedence."""
        specific = create_mapping(Kind("origin", lambda v: isinstance(v, Point) and v.x == v.y == 0), str, str)
        registry = Registry([specific, point_mapping()])

        assert registry.match(Point(0, 0)) is specific
        assert registry.match(Point(1, 0)).tag == "$jtc$Point"
        assert registry.match("text") is None

    def test_lookup_and_contains(self):
        """Test access by tag."""
        mapping = point_mapping()
        registry = Registry([mapping])

        assert registry.lookup("$jtc$Point") is mapping
        assert registry.lookup("$jtc$Missing") is None
        assert "$jtc$Point" in registry
        assert "Point" not in registry

    def test_extend_and_prepend_return_new_registries(self):
        """Test that derived registries leave the original untouched."""
        registry = Registry([point_mapping()])
        extra = create_mapping(complex, str, complex)

        extended = registry.extend(extra)
        prepended = registry.prepend(extra)

        assert registry.tags == ("$jtc$Point",)
        assert extended.tags == ("$jtc$Point", "$jtc$complex")
        assert prepended.tags == ("$jtc$complex", "$jtc$Point")

    def test_without(self):
        """Test dropping mappings by name or tag."""
        registry = default_registry.without("set", "$jtc$bigint")

        assert "$jtc$set" not in registry
        assert "$jtc$bigint" not in registry
        assert len(registry) == len(default_registry) - 2

    def test_without_unknown_name(self):
        """Test that dropping an unknown mapping is a configuration error."""
        with pytest.raises(RegistryConfigurationError, match="Unknown tags"):
            default_registry.without("nothing")

    def test_registry_is_immutable(self):
        """Test that attributes cannot be reassigned."""
        with pytest.raises(AttributeError):
            default_registry._mappings = ()

    def test_iteration_and_equality(self):
        """Test iteration order and equality of equivalent registries."""
        mappings = list(default_registry)

        assert all(isinstance(mapping, TypeMapping) for mapping in mappings)
        assert Registry(mappings) == default_registry
        assert hash(Registry(mappings)) == hash(default_registry)
        assert "$jtc$datetime" in repr(default_registry)
