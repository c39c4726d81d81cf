"""Error records returned by every validation stage."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple


class ErrorKind(str, Enum):
    SCHEMA_VIOLATION = "SchemaViolation"
    DUPLICATE_IDENTIFIER = "DuplicateIdentifier"
    UNRESOLVED_NODE_REFERENCE = "UnresolvedNodeReference"
    UNRESOLVED_PORT_REFERENCE = "UnresolvedPortReference"
    UNRESOLVED_AREA_REFERENCE = "UnresolvedAreaReference"
    CYCLIC_AREA_HIERARCHY = "CyclicAreaHierarchy"


@dataclass(frozen=True)
class GraphError:
    """A single problem found in a wiring graph document.

    ``locator`` is a JSON Pointer for schema violations and the offending
    entity id for every other kind.
    """

    kind: ErrorKind
    locator: str
    message: str
    reference: Optional[str] = None
    port_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "kind": self.kind.value,
            "locator": self.locator,
            "message": self.message,
        }
        if self.reference is not None:
            payload["reference"] = self.reference
        if self.port_key is not None:
            payload["portKey"] = self.port_key
        return payload

    def __str__(self) -> str:
        return f"{self.kind.value} at '{self.locator}': {self.message}"


@dataclass(frozen=True)
class ValidationReport:
    errors: Tuple[GraphError, ...] = field(default_factory=tuple)

    @classmethod
    def from_errors(cls, errors: Iterable[GraphError]) -> "ValidationReport":
        return cls(tuple(errors))

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise GraphValidationError(self.errors)

    def to_list(self) -> list[Dict[str, Any]]:
        return [err.to_dict() for err in self.errors]


class GraphValidationError(ValueError):
    """Raised when a caller asks for a value from a failed validation."""

    def __init__(self, errors: Iterable[GraphError]):
        self.errors: Tuple[GraphError, ...] = tuple(errors)
        if not self.errors:
            message = "Graph validation failed"
        elif len(self.errors) == 1:
            message = f"Graph validation failed: {self.errors[0]}"
        else:
            message = f"Graph validation failed with {len(self.errors)} errors; first: {self.errors[0]}"
        super().__init__(message)
