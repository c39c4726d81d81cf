"""Validation and flattening of A/V wiring graph documents."""
from __future__ import annotations

from avflow.errors import ErrorKind, GraphError, GraphValidationError, ValidationReport
from avflow.flattener import FlattenResult, flatten, flatten_graph
from avflow.graph_schema import validate_document
from avflow.identifiers import is_valid_id
from avflow.ir.hierarchy import AreaForest, resolve_hierarchy
from avflow.tools.reference_checker import check_references
from avflow.tools.schema_validator import load_wiring_graph

__all__ = [
    "AreaForest",
    "ErrorKind",
    "FlattenResult",
    "GraphError",
    "GraphValidationError",
    "ValidationReport",
    "check_references",
    "flatten",
    "flatten_graph",
    "is_valid_id",
    "load_wiring_graph",
    "resolve_hierarchy",
    "validate_document",
]
