"""Referential integrity checks for structurally valid wiring graphs."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from avflow.errors import ErrorKind, GraphError, ValidationReport
from avflow.models.graph import AVWiringGraph, Edge, Node


def duplicate_id_errors(ids: Iterable[str], entity: str) -> List[GraphError]:
    """One DuplicateIdentifier per id that occurs more than once, in first-repeat order."""
    seen: set[str] = set()
    reported: set[str] = set()
    errors: List[GraphError] = []
    for entity_id in ids:
        if entity_id in seen and entity_id not in reported:
            reported.add(entity_id)
            errors.append(
                GraphError(
                    kind=ErrorKind.DUPLICATE_IDENTIFIER,
                    locator=entity_id,
                    message=f"Duplicate {entity} id '{entity_id}'",
                )
            )
        seen.add(entity_id)
    return errors


def _check_edge(edge: Edge, nodes: Dict[str, Node]) -> Optional[GraphError]:
    for node_id in (edge.source, edge.target):
        if node_id not in nodes:
            return GraphError(
                kind=ErrorKind.UNRESOLVED_NODE_REFERENCE,
                locator=edge.id,
                message=f"Edge '{edge.id}' references node '{node_id}' which does not exist in graph",
                reference=node_id,
            )
    for node_id, port_key in ((edge.source, edge.source_port_key), (edge.target, edge.target_port_key)):
        if port_key and port_key not in nodes[node_id].ports:
            return GraphError(
                kind=ErrorKind.UNRESOLVED_PORT_REFERENCE,
                locator=edge.id,
                message=f"Edge '{edge.id}' references port '{port_key}' which does not exist in node '{node_id}'",
                reference=node_id,
                port_key=port_key,
            )
    return None


def check_references(graph: AVWiringGraph) -> ValidationReport:
    """Verify ids are unique per kind and that every reference resolves.

    Area ``parentId`` links are left to the hierarchy resolver.
    """
    errors: List[GraphError] = []
    errors.extend(duplicate_id_errors((a.id for a in graph.areas), "area"))
    errors.extend(duplicate_id_errors((n.id for n in graph.nodes), "node"))
    errors.extend(duplicate_id_errors((e.id for e in graph.edges), "edge"))

    area_ids = {area.id for area in graph.areas}
    for node in graph.nodes:
        if node.area_id is not None and node.area_id not in area_ids:
            errors.append(
                GraphError(
                    kind=ErrorKind.UNRESOLVED_AREA_REFERENCE,
                    locator=node.id,
                    message=f"Node '{node.id}' references area '{node.area_id}' which does not exist in graph",
                    reference=node.area_id,
                )
            )

    nodes: Dict[str, Node] = {}
    for node in graph.nodes:
        nodes.setdefault(node.id, node)
    for edge in graph.edges:
        error = _check_edge(edge, nodes)
        if error is not None:
            errors.append(error)

    return ValidationReport.from_errors(errors)
