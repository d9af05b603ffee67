"""CLI entry point for swagger-explorer."""

import importlib
import logging
from pathlib import Path

import click

from swagger_explorer.document.assembler import validate_document
from swagger_explorer.document.loader import FORMATS, detect_format, dump_document, load_document
from swagger_explorer.errors import SwaggerError
from swagger_explorer.service import SwaggerService


def _load_service(target: str) -> SwaggerService:
    """Resolve 'module:attribute' to a SwaggerService or a factory returning one."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"expected 'module:attribute', got {target!r}", param_hint="TARGET")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name!r}: {e}", param_hint="TARGET") from e

    obj = getattr(module, attribute, None)
    if obj is None:
        raise click.BadParameter(f"{module_name!r} has no attribute {attribute!r}", param_hint="TARGET")
    if not isinstance(obj, SwaggerService) and callable(obj):
        obj = obj()
    if not isinstance(obj, SwaggerService):
        raise click.BadParameter(f"{target!r} is not a SwaggerService", param_hint="TARGET")
    return obj


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log exploration details.")
def main(verbose: bool):
    """swagger-explorer: assemble and serve OpenAPI documents from annotated endpoints."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.argument("target")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the document.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", *FORMATS]), help="Output format.")
def export(target: str, output: Path, fmt: str):
    """Write the document of TARGET (module:attribute) to a file."""
    service = _load_service(target)
    if fmt == "auto":
        fmt = detect_format(output)

    try:
        document = service.get_document()
    except SwaggerError as e:
        raise click.ClickException(str(e)) from e

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_document(document, fmt), encoding="utf-8")
    click.echo(f"Document with {len(document['paths'])} paths saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def validate(doc_path: Path):
    """Check that a document has paths, info.title and info.version."""
    try:
        validate_document(load_document(doc_path))
    except SwaggerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{doc_path} is valid.")


@main.command()
@click.argument("target")
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Bind port.")
def serve(target: str, host: str, port: int):
    """Serve the document of TARGET as JSON and Swagger UI."""
    import uvicorn
    from fastapi import FastAPI

    from swagger_explorer.web import register_routes

    service = _load_service(target)
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    try:
        register_routes(app, service)
    except SwaggerError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Serving {service.config.docs_url} on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)
