"""Translate flattened elements into renderer-specific inputs."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from avflow.models.elements import AreaElement, EdgeElement, Element, NodeElement
from avflow.models.graph import LayoutConfig


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def _classes(element: Element) -> str:
    tags = element.classification
    if tags.kind == "area":
        return "area"
    if tags.kind == "node":
        return f"node node-{tags.category} status-{tags.status}"
    return f"edge edge-{tags.category}" if tags.category else "edge edge-default"


def _cytoscape_data(element: Element) -> Dict[str, Any]:
    data = element.to_dict()
    data.pop("kind", None)
    data.pop("classification", None)
    return _compact(data)


def to_cytoscape(elements: Iterable[Element]) -> List[Dict[str, Any]]:
    """Cytoscape.js element definitions; edges connect nodes, never ports."""
    return [{"data": _cytoscape_data(el), "classes": _classes(el)} for el in elements]


def _sanitize_id(value: str) -> str:
    cleaned = "".join(ch if ch.isalnum() or ch == "_" else "_" for ch in value)
    if not cleaned[0].isalpha():
        cleaned = f"n_{cleaned}"
    return cleaned


def _quote(label: str) -> str:
    return label.replace('"', "#quot;")


def to_mermaid(elements: Iterable[Element], layout: Optional[LayoutConfig] = None) -> str:
    elements = list(elements)
    direction = layout.direction if layout is not None and layout.direction else "LR"
    lines: List[str] = [f"flowchart {direction}"]

    areas = [el for el in elements if isinstance(el, AreaElement)]
    nodes = [el for el in elements if isinstance(el, NodeElement)]
    edges = [el for el in elements if isinstance(el, EdgeElement)]

    # Area and node ids are separate namespaces; Mermaid ids are shared.
    used: set[str] = set()

    def assign(source: List[Any]) -> Dict[str, str]:
        mapping: Dict[str, str] = {}
        for el in source:
            safe_id = _sanitize_id(el.id)
            base, suffix = safe_id, 1
            while safe_id in used:
                suffix += 1
                safe_id = f"{base}_{suffix}"
            used.add(safe_id)
            mapping[el.id] = safe_id
        return mapping

    area_ids = assign(areas)
    node_ids = assign(nodes)

    child_areas: Dict[Optional[str], List[AreaElement]] = {}
    for area in areas:
        child_areas.setdefault(area.parent, []).append(area)
    area_nodes: Dict[Optional[str], List[NodeElement]] = {}
    for node in nodes:
        area_nodes.setdefault(node.parent, []).append(node)

    def emit(parent: Optional[str], indent: str) -> None:
        for area in child_areas.get(parent, []):
            lines.append(f'{indent}subgraph {area_ids[area.id]}["{_quote(area.label)}"]')
            emit(area.id, indent + "  ")
            lines.append(f"{indent}end")
        for node in area_nodes.get(parent, []):
            lines.append(f'{indent}{node_ids[node.id]}["{_quote(node.label)}"]')

    emit(None, "")

    for edge in edges:
        label = f'|"{_quote(edge.label)}"|' if edge.label else ""
        lines.append(f"{node_ids[edge.source]} -->{label} {node_ids[edge.target]}")

    return "\n".join(lines)
