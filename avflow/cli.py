"""CLI interface."""
from __future__ import annotations

import json
import logging
from typing import Any, NoReturn, Optional

import typer

from avflow.errors import GraphError
from avflow.flattener import flatten
from avflow.graph_schema import validate_document
from avflow.models.graph import AVWiringGraph
from avflow.renderers.translator import to_cytoscape, to_mermaid
from avflow.utils.config import settings
from avflow.utils.file_utils import read_json_document

app = typer.Typer(add_completion=False)

_FORMATS = ("elements", "cytoscape", "mermaid")


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, "--log-level", help="Override AVFLOW_LOG_LEVEL.")):
    logging.basicConfig(level=(log_level or settings.log_level).upper())


def _load(file: str) -> Any:
    try:
        return read_json_document(file)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="FILE") from exc


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=settings.output_indent, ensure_ascii=False)


def _fail(errors: tuple[GraphError, ...]) -> NoReturn:
    typer.echo(_dump([err.to_dict() for err in errors]))
    raise typer.Exit(code=1)


@app.command()
def validate(file: str = typer.Argument(..., help="Path to a wiring graph JSON file.")):
    """Validate a wiring graph document without flattening it."""
    result = flatten(_load(file))
    if not result.ok:
        _fail(result.errors)
    typer.echo("OK")


@app.command("flatten")
def flatten_command(
    file: str = typer.Argument(..., help="Path to a wiring graph JSON file."),
    output_format: Optional[str] = typer.Option(None, "--format", "-F", help="elements, cytoscape or mermaid."),
):
    """Print the flattened element sequence."""
    fmt = (output_format or settings.output_format).lower()
    if fmt not in _FORMATS:
        raise typer.BadParameter(f"Unknown format '{fmt}'", param_hint="--format")
    raw = _load(file)
    result = flatten(raw)
    if not result.ok:
        _fail(result.errors)
    if fmt == "cytoscape":
        typer.echo(_dump(to_cytoscape(result.elements)))
    elif fmt == "mermaid":
        layout = AVWiringGraph.model_validate(raw).layout
        typer.echo(to_mermaid(result.elements, layout))
    else:
        typer.echo(_dump(result.to_list()))


@app.command()
def categories(file: str = typer.Argument(..., help="Path to a wiring graph JSON file.")):
    """List the device categories present in a document."""
    raw = _load(file)
    report = validate_document(raw)
    if not report.ok:
        _fail(report.errors)
    typer.echo(_dump(AVWiringGraph.model_validate(raw).node_categories()))


if __name__ == "__main__":
    app()
