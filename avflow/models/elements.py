"""Renderer-agnostic elements produced by the graph flattener."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple, Union

ElementKind = Literal["area", "node", "edge"]


@dataclass(frozen=True)
class Classification:
    """Typed classification fields a renderer may turn into style classes."""

    kind: ElementKind
    category: Optional[str] = None
    status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "category": self.category, "status": self.status}


@dataclass(frozen=True)
class PortSummary:
    key: str
    alignment: str
    label: str
    type: str
    gender: str
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "alignment": self.alignment,
            "label": self.label,
            "type": self.type,
            "gender": self.gender,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class AreaElement:
    id: str
    label: str
    parent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def classification(self) -> Classification:
        return Classification(kind="area")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "area",
            "id": self.id,
            "label": self.label,
            "parent": self.parent,
            "metadata": self.metadata,
            "classification": self.classification.to_dict(),
        }


@dataclass(frozen=True)
class NodeElement:
    id: str
    label: str
    category: str
    status: str
    manufacturer: str
    model: str
    ports: Tuple[PortSummary, ...] = ()
    subcategory: Optional[str] = None
    parent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def port_count(self) -> int:
        return len(self.ports)

    @property
    def classification(self) -> Classification:
        return Classification(kind="node", category=self.category, status=self.status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "node",
            "id": self.id,
            "label": self.label,
            "parent": self.parent,
            "category": self.category,
            "subcategory": self.subcategory,
            "status": self.status,
            "portCount": self.port_count,
            "ports": [port.to_dict() for port in self.ports],
            "manufacturer": self.manufacturer,
            "model": self.model,
            "metadata": self.metadata,
            "classification": self.classification.to_dict(),
        }


@dataclass(frozen=True)
class EdgeElement:
    id: str
    source: str
    target: str
    label: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    cable_type: Optional[str] = None
    wire_id: Optional[str] = None
    source_port_key: Optional[str] = None
    target_port_key: Optional[str] = None
    binding: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def classification(self) -> Classification:
        return Classification(kind="edge", category=self.category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "edge",
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "category": self.category,
            "subcategory": self.subcategory,
            "cableType": self.cable_type,
            "wireId": self.wire_id,
            "sourcePortKey": self.source_port_key,
            "targetPortKey": self.target_port_key,
            "binding": self.binding,
            "metadata": self.metadata,
            "classification": self.classification.to_dict(),
        }


Element = Union[AreaElement, NodeElement, EdgeElement]
