"""JSON Schema for A/V wiring graph documents."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from jsonschema import Draft202012Validator, FormatChecker, ValidationError

from avflow.errors import ErrorKind, GraphError, ValidationReport
from avflow.identifiers import ID_PATTERN, is_valid_id

ID_FORMAT = "av-identifier"

_ID_FIELD: Dict[str, Any] = {"type": "string", "format": ID_FORMAT}
_METADATA: Dict[str, Any] = {"type": "object"}

PORT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["alignment", "label", "type", "gender"],
    "properties": {
        "alignment": {"type": "string", "enum": ["In", "Out", "Bidirectional"]},
        "label": {"type": "string"},
        "type": {"type": "string"},
        "gender": {"type": "string", "enum": ["M", "F", "N/A"]},
        "metadata": _METADATA,
    },
    "additionalProperties": True,
}

NODE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "manufacturer", "model", "category", "status", "ports"],
    "properties": {
        "id": _ID_FIELD,
        "manufacturer": {"type": "string"},
        "model": {"type": "string"},
        "category": {"type": "string"},
        "subcategory": {"type": "string"},
        "status": {"type": "string", "enum": ["Existing", "Regular", "Defect"]},
        "label": {"type": "string"},
        "areaId": {"type": "string"},
        "ports": {"type": "object", "additionalProperties": PORT_SCHEMA},
        "metadata": _METADATA,
    },
    "additionalProperties": True,
}

EDGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "source", "target"],
    "properties": {
        "id": _ID_FIELD,
        "wireId": {"type": "string"},
        "category": {"type": "string"},
        "subcategory": {"type": "string"},
        "cableType": {"type": "string"},
        "label": {"type": "string"},
        "source": {"type": "string"},
        "sourcePortKey": {"type": "string"},
        "target": {"type": "string"},
        "targetPortKey": {"type": "string"},
        "binding": {"type": "string", "enum": ["auto", "exact"]},
        "metadata": _METADATA,
    },
    "additionalProperties": True,
}

AREA_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "label"],
    "properties": {
        "id": _ID_FIELD,
        "label": {"type": "string"},
        "parentId": {"type": "string"},
        "metadata": _METADATA,
    },
    "additionalProperties": True,
}

WIRING_GRAPH_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "AVWiringGraph",
    "type": "object",
    "required": ["nodes", "edges"],
    "properties": {
        "layout": {
            "type": "object",
            "properties": {
                "direction": {"type": "string", "enum": ["LR", "TB"]},
                "portBinding": {"type": "string", "enum": ["auto", "exact"]},
                "areaFirst": {"type": "boolean"},
                "areaPadding": {"type": "number", "minimum": 0},
            },
            "additionalProperties": True,
        },
        "areas": {"type": "array", "items": AREA_SCHEMA},
        "nodes": {"type": "array", "items": NODE_SCHEMA},
        "edges": {"type": "array", "items": EDGE_SCHEMA},
        "metadata": _METADATA,
    },
    "additionalProperties": True,
}

_FORMAT_CHECKER = FormatChecker(formats=())


@_FORMAT_CHECKER.checks(ID_FORMAT)
def _check_identifier(instance: Any) -> bool:
    # Non-strings are reported by the "type" keyword.
    if not isinstance(instance, str):
        return True
    return is_valid_id(instance)


_VALIDATOR = Draft202012Validator(WIRING_GRAPH_SCHEMA, format_checker=_FORMAT_CHECKER)


def _escape_pointer_token(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def json_pointer(path: Iterable[Any]) -> str:
    return "".join(f"/{_escape_pointer_token(part)}" for part in path)


def _describe(error: ValidationError) -> str:
    if error.validator == "format" and error.validator_value == ID_FORMAT:
        return f"{error.instance!r} is not a valid identifier; must match pattern {ID_PATTERN}"
    return error.message


def _sort_key(error: ValidationError) -> tuple:
    # Sibling path parts always share a type, so mixed int/str comparisons cannot happen.
    return (list(error.absolute_path), str(error.validator), error.message)


def schema_errors(raw: Any) -> List[GraphError]:
    """Return every structural violation of ``raw``, ordered by document path."""
    errors = sorted(_VALIDATOR.iter_errors(raw), key=_sort_key)
    return [
        GraphError(
            kind=ErrorKind.SCHEMA_VIOLATION,
            locator=json_pointer(err.absolute_path),
            message=_describe(err),
        )
        for err in errors
    ]


def validate_document(raw: Any) -> ValidationReport:
    return ValidationReport.from_errors(schema_errors(raw))
