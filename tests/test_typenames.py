from oas_functions.typenames import (
    base_type_name,
    capitalize_first,
    map_primitive,
    sanitize_type,
    split_generic_type,
    strip_array_suffix,
)


class TestSanitizeType:
    def test_strips_grouping(self):
        assert sanitize_type("(Foo)[]") == "Foo[]"

    def test_strips_every_parenthesis(self):
        assert sanitize_type("(A | (B))[]") == "A | B[]"

    def test_plain_type_unchanged(self):
        assert sanitize_type("Foo") == "Foo"


class TestBaseTypeName:
    def test_array_and_grouping_removed(self):
        assert base_type_name("(Foo)[]") == "Foo"

    def test_nested_arrays(self):
        assert strip_array_suffix("Foo[][]") == "Foo"

    def test_surrounding_whitespace(self):
        assert base_type_name(" Bar[] ") == "Bar"


class TestSplitGenericType:
    def test_outer_and_inner(self):
        assert split_generic_type("Record<Foo>") == ["Record", "Foo"]

    def test_multiple_arguments(self):
        assert split_generic_type("Record<string, Foo>") == ["Record", "string", "Foo"]

    def test_non_generic(self):
        assert split_generic_type("Foo[]") == ["Foo[]"]

    def test_only_one_bracket_is_not_generic(self):
        assert split_generic_type("Foo<") == ["Foo<"]


class TestPrimitivesAndNames:
    def test_integer_maps_to_number(self):
        assert map_primitive("integer") == "number"

    def test_other_primitives_pass_through(self):
        assert map_primitive("boolean") == "boolean"
        assert map_primitive("string") == "string"

    def test_capitalize_first_only(self):
        assert capitalize_first("blogPost") == "BlogPost"

    def test_capitalize_empty(self):
        assert capitalize_first("") == ""
