"""Immutable domain model of an A/V wiring graph document."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

PortAlignment = Literal["In", "Out", "Bidirectional"]
PortGender = Literal["M", "F", "N/A"]
NodeStatus = Literal["Existing", "Regular", "Defect"]
LayoutDirection = Literal["LR", "TB"]
PortBinding = Literal["auto", "exact"]

_MODEL_CONFIG = {
    "frozen": True,
    "extra": "ignore",
}


class Port(BaseModel):
    alignment: PortAlignment
    label: str
    type: str
    gender: PortGender
    metadata: Optional[Dict[str, Any]] = None

    model_config = _MODEL_CONFIG


class Node(BaseModel):
    id: str
    manufacturer: str
    model: str
    category: str
    subcategory: Optional[str] = None
    status: NodeStatus
    label: Optional[str] = None
    area_id: Optional[str] = Field(default=None, alias="areaId")
    ports: Dict[str, Port] = {}
    metadata: Optional[Dict[str, Any]] = None

    model_config = _MODEL_CONFIG

    @property
    def display_label(self) -> str:
        return self.label or f"{self.manufacturer} {self.model}"


class Edge(BaseModel):
    id: str
    wire_id: Optional[str] = Field(default=None, alias="wireId")
    category: Optional[str] = None
    subcategory: Optional[str] = None
    cable_type: Optional[str] = Field(default=None, alias="cableType")
    label: Optional[str] = None
    source: str
    source_port_key: Optional[str] = Field(default=None, alias="sourcePortKey")
    target: str
    target_port_key: Optional[str] = Field(default=None, alias="targetPortKey")
    binding: Optional[PortBinding] = None
    metadata: Optional[Dict[str, Any]] = None

    model_config = _MODEL_CONFIG


class Area(BaseModel):
    id: str
    label: str
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    metadata: Optional[Dict[str, Any]] = None

    model_config = _MODEL_CONFIG


class LayoutConfig(BaseModel):
    direction: Optional[LayoutDirection] = None
    port_binding: Optional[PortBinding] = Field(default=None, alias="portBinding")
    area_first: Optional[bool] = Field(default=None, alias="areaFirst")
    area_padding: Optional[float] = Field(default=None, alias="areaPadding")

    model_config = _MODEL_CONFIG


class AVWiringGraph(BaseModel):
    layout: Optional[LayoutConfig] = None
    areas: List[Area] = []
    nodes: List[Node]
    edges: List[Edge]
    metadata: Optional[Dict[str, Any]] = None

    model_config = _MODEL_CONFIG

    def node_categories(self) -> List[str]:
        """Sorted unique categories of the graph's devices."""
        return sorted({node.category for node in self.nodes if node.category})

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
