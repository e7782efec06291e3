"""Parsed-document loader.

Reads a dump of the OpenAPI document parser's output (YAML or JSON) and
decodes it into a ParsedDocument.
"""

from pathlib import Path
from typing import Callable

import yaml
from pydantic import ValidationError

from oas_functions.errors import DocumentError

from .base import ParsedDocument

DescriptionFixer = Callable[[str | None], str | None]


def load_document(file_path: Path, fix_description: DescriptionFixer | None = None) -> ParsedDocument:
    """Load a parsed-document dump from disk."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Failed to read document: {e}", str(file_path)) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML/JSON: {e}", str(file_path)) from e

    if not isinstance(data, dict):
        raise DocumentError("Document root must be a mapping", str(file_path))

    return parse_document(data, fix_description=fix_description, source=str(file_path))


def parse_document(
    data: dict,
    fix_description: DescriptionFixer | None = None,
    source: str | None = None,
) -> ParsedDocument:
    """Decode an already-loaded mapping into a ParsedDocument."""
    try:
        document = ParsedDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentError(f"Invalid parsed document: {e}", source) from e

    if fix_description is not None:
        _apply_description_fixer(document, fix_description)
    return document


def _apply_description_fixer(document: ParsedDocument, fix_description: DescriptionFixer) -> None:
    for component in document.components:
        if component.raw_type_data is not None:
            component.raw_type_data.description = fix_description(component.raw_type_data.description)
    for route in document.routes:
        route.raw.description = fix_description(route.raw.description)
