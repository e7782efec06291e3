"""Functions context builder.

Runs one generation pass over a parsed document and assembles the context
the functions template is rendered with.
"""

import logging

from oas_functions.generator.models import FunctionsContext
from oas_functions.generator.routes import RouteClassifier
from oas_functions.parser.base import ParsedDocument
from oas_functions.registry.components import SchemaRegistry

logger = logging.getLogger(__name__)


def parse_headers(directive: str | None) -> dict[str, str]:
    """Parse a ``key1=value1&key2=value2`` header directive.

    Values may contain ``=``; a piece without ``=`` maps to an empty value.
    """
    header_map: dict[str, str] = {}
    if not directive:
        return header_map
    for piece in directive.split("&"):
        key, _, value = piece.partition("=")
        header_map[key] = value
    return header_map


def join_header_directives(values: tuple[str, ...] | list[str] | None) -> str | None:
    """Merge repeated header options into a single directive."""
    values = [v for v in (values or ()) if v]
    if not values:
        return None
    return "&".join(values)


def build_registry(document: ParsedDocument) -> SchemaRegistry:
    """Populate and classify the schema registry for a document."""
    registry = SchemaRegistry.from_document(document)
    registry.classify()
    relaxed = sum(1 for c in registry.components if c.is_relaxed_type)
    logger.info("classified %d schema components (%d relaxed)", len(registry.components), relaxed)
    return registry


def build_functions_context(
    document: ParsedDocument,
    headers: str | None = None,
    base_url: str | None = None,
) -> FunctionsContext:
    """Build the functions template context for every route in the document."""
    registry = build_registry(document)

    classifier = RouteClassifier(registry)
    for route in document.routes:
        classifier.classify(route)

    return FunctionsContext(
        api_routes=classifier.api_routes,
        import_list=classifier.import_list,
        base_url=base_url or "",
        header_map=parse_headers(headers),
    )
