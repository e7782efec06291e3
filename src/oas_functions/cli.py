"""CLI entry point for oas-functions."""

import logging
from pathlib import Path

import click

from oas_functions.errors import OasFunctionsError
from oas_functions.generator.functions import build_functions_context, build_registry, join_header_directives
from oas_functions.parser.document import load_document


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """OAS Functions: classify parsed OpenAPI routes and schemas for code generation."""
    _setup_logging(verbose)


@main.command()
@click.argument("doc_path", envvar="NDC_OAS_DOCUMENT_URI", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the functions context JSON.")
@click.option("-b", "--base-url", default=None, envvar="NDC_OAS_BASE_URL", help="Base URL of the API.")
@click.option("-H", "--headers", multiple=True, envvar="NDC_OAS_HEADERS", help="Headers to include in requests (key=value).")
def classify(doc_path: Path, output: Path | None, base_url: str | None, headers: tuple[str, ...]):
    """Classify every route and write the functions template context."""
    try:
        document = load_document(doc_path)
        context = build_functions_context(
            document,
            headers=join_header_directives(headers),
            base_url=base_url,
        )
    except OasFunctionsError as e:
        raise click.ClickException(str(e)) from e

    result = context.model_dump_json(indent=2)
    if output is None:
        click.echo(result)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")
    click.echo(f"Classified {len(context.api_routes)} routes, saved to {output}")


@main.command()
@click.argument("doc_path", envvar="NDC_OAS_DOCUMENT_URI", type=click.Path(exists=True, path_type=Path))
def components(doc_path: Path):
    """List registered schema components and their relaxed/strict state."""
    try:
        registry = build_registry(load_document(doc_path))
    except OasFunctionsError as e:
        raise click.ClickException(str(e)) from e

    for component in registry.components:
        state = "relaxed" if component.is_relaxed_type else "strict"
        click.echo(f"{component.ref}\t{component.generated_type_name or '-'}\t{state}")
