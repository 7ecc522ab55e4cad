"""
Unit tests for TypeResolver
"""

import pytest

from rb_binding_generator.type_mapper import (
    ExternalClass, OwnedClass, Primitive, TypeResolutionError, TypeResolver,
)


class TestAliasResolution:
    """Test alias chasing"""

    def test_resolves_alias_chain(self, resolver):
        resolver.add_alias("Size", "Radius")
        assert resolver.resolve_alias("Size") == "float64"

    def test_keeps_pointer_prefix(self, resolver):
        assert resolver.resolve_alias("*Handle") == "**File"

    def test_unaliased_type_is_unchanged(self, resolver):
        assert resolver.resolve_alias("*Circle") == "*Circle"

    def test_empty_alias_target_stops_chain(self, resolver):
        resolver.add_alias("Blank", "")
        assert resolver.resolve_alias("Blank") == "Blank"

    def test_detects_alias_cycle(self):
        resolver = TypeResolver("shapes", aliases={"A": "B", "B": "A"})
        with pytest.raises(TypeResolutionError, match="cycle"):
            resolver.resolve_alias("A")

    def test_resolved_type_strips_pointers(self, resolver):
        assert resolver.resolved_type("*Handle") == "File"
        assert resolver.resolved_type("Flag") == "bool"
        assert resolver.resolved_type("") == ""


class TestClassify:
    """Test marshaling strategy selection"""

    def test_owned_class(self, resolver, circle):
        assert resolver.classify("*Circle") == OwnedClass("Circle", circle)

    def test_owned_class_without_registration(self, resolver):
        assert resolver.classify("Square") == OwnedClass("Square", None)

    def test_external_class(self, resolver):
        assert resolver.classify("*time.Time") == ExternalClass("time.Time", "Time::Time", "time")

    def test_external_class_with_unknown_package(self, resolver):
        with pytest.raises(TypeResolutionError, match="not imported"):
            resolver.classify("net.Conn")

    def test_primitive(self, resolver):
        assert resolver.classify("string") == Primitive("string", "StringValue", "GoString")

    def test_aliased_primitive(self, resolver):
        assert resolver.classify("Radius") == Primitive("float64", "FloatValue", "GoFloat64")

    def test_unknown_type(self, resolver):
        with pytest.raises(TypeResolutionError, match="complex128"):
            resolver.classify("complex128")

    def test_custom_conversion(self, resolver):
        resolver.add_conversion("complex128", "ComplexValue", "GoComplex")
        assert resolver.conversion_pair("complex128") == ("ComplexValue", "GoComplex")


class TestConversionHelpers:
    """Test conversion pair and native type helpers"""

    def test_class_types_use_struct_pair(self, resolver):
        assert resolver.conversion_pair("*Circle") == ("StructValue", "GoStruct")
        assert resolver.conversion_pair("time.Time") == ("StructValue", "GoStruct")

    def test_native_type_name_qualifies_owned_types(self, resolver):
        assert resolver.native_type_name("*Circle") == "*shapes.Circle"
        assert resolver.native_type_name("Handle") == "*shapes.File"
        assert resolver.native_type_name("string") == "string"
        assert resolver.native_type_name("*time.Time") == "*time.Time"

    def test_is_value_type(self, resolver):
        assert resolver.is_value_type("Circle")
        assert not resolver.is_value_type("*Circle")
        assert not resolver.is_value_type("string")

    def test_required_imports(self, resolver):
        assert resolver.required_imports("time.Time") == {"time"}
        assert resolver.required_imports("*Circle") == set()
        assert resolver.required_imports("int") == set()

    def test_find_class(self, resolver, circle):
        assert resolver.find_class("*Circle") is circle
        assert resolver.find_class("Square") is None

    def test_qualified_module_path(self, resolver):
        assert resolver.qualified_module_path("*time.Time") == "Time::Time"

    def test_alias_to_pointer_is_not_a_value_type(self, resolver):
        assert not resolver.is_value_type("Handle")
        resolver.add_alias("Shape", "Circle")
        assert resolver.is_value_type("Shape")
