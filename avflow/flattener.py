"""Flatten a validated wiring graph into an ordered element sequence."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from avflow.errors import GraphError, GraphValidationError
from avflow.graph_schema import validate_document
from avflow.ir.hierarchy import AreaForest, resolve_hierarchy
from avflow.models.elements import AreaElement, EdgeElement, Element, NodeElement, PortSummary
from avflow.models.graph import AVWiringGraph, Edge, Node
from avflow.tools.reference_checker import check_references

logger = logging.getLogger(__name__)

PORT_ARROW = " → "


@dataclass(frozen=True)
class FlattenResult:
    """Either the full element sequence or the full error report, never both."""

    elements: Tuple[Element, ...] = field(default_factory=tuple)
    errors: Tuple[GraphError, ...] = field(default_factory=tuple)
    failed_stage: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Tuple[Element, ...]:
        if self.errors:
            raise GraphValidationError(self.errors)
        return self.elements

    def to_list(self) -> List[dict]:
        return [element.to_dict() for element in self.elements]


def _node_element(node: Node) -> NodeElement:
    ports = tuple(
        PortSummary(
            key=key,
            alignment=port.alignment,
            label=port.label,
            type=port.type,
            gender=port.gender,
            metadata=port.metadata,
        )
        for key, port in node.ports.items()
    )
    return NodeElement(
        id=node.id,
        label=node.display_label,
        category=node.category,
        subcategory=node.subcategory,
        status=node.status,
        manufacturer=node.manufacturer,
        model=node.model,
        ports=ports,
        parent=node.area_id,
        metadata=node.metadata,
    )


def edge_label(edge: Edge, source: Node, target: Node) -> str:
    """Base label (label, then wireId) with the connected port labels appended."""
    base = edge.label or edge.wire_id or ""
    port_labels: List[str] = []
    if edge.source_port_key:
        port_labels.append(source.ports[edge.source_port_key].label)
    if edge.target_port_key:
        port_labels.append(target.ports[edge.target_port_key].label)
    if not port_labels:
        return base
    ports = PORT_ARROW.join(port_labels)
    return f"{base} ({ports})" if base else ports


def _edge_element(edge: Edge, source: Node, target: Node) -> EdgeElement:
    return EdgeElement(
        id=edge.id,
        source=edge.source,
        target=edge.target,
        label=edge_label(edge, source, target),
        category=edge.category,
        subcategory=edge.subcategory,
        cable_type=edge.cable_type,
        wire_id=edge.wire_id,
        source_port_key=edge.source_port_key,
        target_port_key=edge.target_port_key,
        binding=edge.binding,
        metadata=edge.metadata,
    )


def flatten_graph(graph: AVWiringGraph, forest: AreaForest) -> Tuple[Element, ...]:
    """Emit areas (parent-first), then nodes, then edges.

    ``graph`` must already have passed the reference checks.
    """
    elements: List[Element] = [
        AreaElement(id=area.id, label=area.label, parent=area.parent_id, metadata=area.metadata)
        for area in forest.ordered_areas()
    ]
    nodes = {}
    for node in graph.nodes:
        nodes.setdefault(node.id, node)
        elements.append(_node_element(node))
    for edge in graph.edges:
        elements.append(_edge_element(edge, nodes[edge.source], nodes[edge.target]))
    return tuple(elements)


def _failed(stage: str, errors: Tuple[GraphError, ...]) -> FlattenResult:
    logger.warning(
        "Wiring graph rejected at %s stage with %d error(s)",
        stage,
        len(errors),
        extra={"stage": stage, "error_count": len(errors)},
    )
    return FlattenResult(errors=errors, failed_stage=stage)


def flatten(raw: Any) -> FlattenResult:
    """Validate a decoded wiring graph document and flatten it into elements."""
    if isinstance(raw, AVWiringGraph):
        raw = raw.to_dict()
    report = validate_document(raw)
    if not report.ok:
        return _failed("schema", report.errors)
    graph = AVWiringGraph.model_validate(raw)

    report = check_references(graph)
    if not report.ok:
        return _failed("references", report.errors)

    hierarchy = resolve_hierarchy(graph.areas)
    if not hierarchy.ok:
        return _failed("hierarchy", hierarchy.errors)

    elements = flatten_graph(graph, hierarchy.unwrap())
    logger.info(
        "Flattened wiring graph: %d area(s), %d node(s), %d edge(s)",
        len(graph.areas),
        len(graph.nodes),
        len(graph.edges),
        extra={"element_count": len(elements)},
    )
    return FlattenResult(elements=elements)
