"""Schema validation tool."""
from __future__ import annotations

from typing import Any

from avflow.errors import GraphValidationError
from avflow.graph_schema import validate_document
from avflow.models.graph import AVWiringGraph


def load_wiring_graph(data: Any) -> AVWiringGraph:
    """Validate ``data`` against the document schema and build the domain graph."""
    if isinstance(data, AVWiringGraph):
        return data
    report = validate_document(data)
    if not report.ok:
        raise GraphValidationError(report.errors)
    return AVWiringGraph.model_validate(data)
