from avflow.errors import ErrorKind
from avflow.models.graph import AVWiringGraph
from avflow.tools.reference_checker import check_references


def _node(node_id, ports=(), **extra):
    node = {
        "id": node_id,
        "manufacturer": "Test",
        "model": "Test",
        "category": "Test",
        "status": "Regular",
        "ports": {key: {"alignment": "Out", "label": key, "type": "SDI", "gender": "M"} for key in ports},
    }
    node.update(extra)
    return node


def _graph(nodes, edges, areas=None):
    payload = {"nodes": nodes, "edges": edges}
    if areas is not None:
        payload["areas"] = areas
    return AVWiringGraph.model_validate(payload)


def test_resolved_references_pass():
    graph = _graph(
        [_node("node1", ["port1"]), _node("node2", ["in1"])],
        [{"id": "edge1", "source": "node1", "target": "node2", "sourcePortKey": "port1", "targetPortKey": "in1"}],
    )
    assert check_references(graph).ok


def test_dangling_target_node():
    graph = _graph([_node("node1")], [{"id": "edge1", "source": "node1", "target": "nonexistent"}])
    report = check_references(graph)
    assert len(report.errors) == 1
    err = report.errors[0]
    assert err.kind is ErrorKind.UNRESOLVED_NODE_REFERENCE
    assert err.locator == "edge1"
    assert err.reference == "nonexistent"
    assert "nonexistent" in err.message


def test_dangling_source_port():
    graph = _graph(
        [_node("node1", ["port1"]), _node("node2")],
        [{"id": "edge1", "source": "node1", "target": "node2", "sourcePortKey": "nonexistent-port"}],
    )
    [err] = check_references(graph).errors
    assert err.kind is ErrorKind.UNRESOLVED_PORT_REFERENCE
    assert err.reference == "node1"
    assert err.port_key == "nonexistent-port"
    assert "node1" in err.message and "nonexistent-port" in err.message


def test_dangling_target_port_names_target_node():
    graph = _graph(
        [_node("node1", ["out"]), _node("node2", ["in"])],
        [{"id": "edge1", "source": "node1", "target": "node2", "sourcePortKey": "out", "targetPortKey": "missing"}],
    )
    [err] = check_references(graph).errors
    assert err.reference == "node2"
    assert err.port_key == "missing"


def test_one_error_per_edge_but_all_edges_reported():
    graph = _graph(
        [_node("node1")],
        [
            {"id": "edge1", "source": "ghost-a", "target": "ghost-b", "sourcePortKey": "p"},
            {"id": "edge2", "source": "node1", "target": "node1", "targetPortKey": "p"},
            {"id": "edge3", "source": "node1", "target": "node1"},
        ],
    )
    errors = check_references(graph).errors
    assert [(e.locator, e.kind) for e in errors] == [
        ("edge1", ErrorKind.UNRESOLVED_NODE_REFERENCE),
        ("edge2", ErrorKind.UNRESOLVED_PORT_REFERENCE),
    ]
    assert errors[0].reference == "ghost-a"


def test_duplicate_ids_are_scoped_per_kind():
    graph = _graph(
        [_node("dup"), _node("dup"), _node("dup"), _node("shared")],
        [
            {"id": "shared", "source": "dup", "target": "dup"},
            {"id": "e", "source": "dup", "target": "dup"},
            {"id": "e", "source": "dup", "target": "dup"},
        ],
        areas=[{"id": "shared", "label": "Shared"}],
    )
    errors = check_references(graph).errors
    assert [(e.kind, e.locator) for e in errors] == [
        (ErrorKind.DUPLICATE_IDENTIFIER, "dup"),
        (ErrorKind.DUPLICATE_IDENTIFIER, "e"),
    ]


def test_dangling_area_id_is_rejected():
    graph = _graph([_node("node1", areaId="backstage")], [], areas=[{"id": "stage", "label": "Stage"}])
    [err] = check_references(graph).errors
    assert err.kind is ErrorKind.UNRESOLVED_AREA_REFERENCE
    assert err.locator == "node1"
    assert err.reference == "backstage"


def test_check_does_not_mutate_graph():
    graph = _graph([_node("node1")], [{"id": "edge1", "source": "node1", "target": "nope"}])
    before = graph.to_dict()
    check_references(graph)
    assert graph.to_dict() == before


def test_empty_port_key_is_not_a_reference():
    graph = _graph(
        [_node("node1"), _node("node2")],
        [{"id": "edge1", "source": "node1", "target": "node2", "sourcePortKey": "", "targetPortKey": ""}],
    )
    assert check_references(graph).ok
