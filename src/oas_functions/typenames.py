"""Type-name helpers shared by the registry and the route classifier.

Type strings arrive already rendered by the upstream parser, e.g.
``(Foo)[]``, ``Record<string, Bar>`` or ``void``.
"""

import re

VOID_TYPE = "void"
ANY_TYPE = "any"

# Generated API client module; every functions file imports it.
API_ARTIFACT = "Api"

RESERVED_TYPES = frozenset({"void", "any", "string", "Record", "number"})

MAP_WRAPPERS = ("Record<", "Map<")

# OpenAPI primitive -> target type. Anything not listed passes through.
PRIMITIVE_TYPE_MAP = {
    "integer": "number",
}


def sanitize_type(type_str: str) -> str:
    """Drop the grouping parentheses the parser puts around unions/arrays.

    ``(Foo)[]`` -> ``Foo[]``
    """
    return type_str.replace("(", "").replace(")", "")


def strip_array_suffix(type_str: str) -> str:
    while type_str.endswith("[]"):
        type_str = type_str[:-2]
    return type_str


def base_type_name(type_str: str) -> str:
    """Bare type name with grouping and array decoration removed."""
    return strip_array_suffix(sanitize_type(type_str).strip())


def split_generic_type(type_str: str) -> list[str]:
    """Split ``Outer<Inner>`` into its component names.

    Strings without both angle brackets come back as a single item.
    ``Record<string, Foo>`` -> ``["Record", "string", "Foo"]``
    """
    if "<" in type_str and ">" in type_str:
        parts = re.split(r"[<>,]", type_str)
        return [p.strip() for p in parts if p.strip()]
    return [type_str]


def map_primitive(type_name: str) -> str:
    return PRIMITIVE_TYPE_MAP.get(type_name, type_name)


def capitalize_first(value: str) -> str:
    """Upper-case the first character only (``blogPost`` -> ``BlogPost``)."""
    return value[:1].upper() + value[1:]
