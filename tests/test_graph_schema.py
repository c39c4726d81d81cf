import pytest

from avflow.errors import ErrorKind, GraphValidationError
from avflow.graph_schema import validate_document
from avflow.tools.schema_validator import load_wiring_graph


def _node(node_id="node1", **extra):
    node = {
        "id": node_id,
        "manufacturer": "Manufacturer A",
        "model": "Model X",
        "category": "Audio",
        "status": "Regular",
        "ports": {
            "port1": {"alignment": "In", "label": "Input 1", "type": "XLR", "gender": "F"},
        },
    }
    node.update(extra)
    return node


def test_valid_document_passes():
    report = validate_document({"nodes": [_node()], "edges": []})
    assert report.ok
    assert report.errors == ()


def test_minimal_document_passes():
    assert validate_document({"nodes": [], "edges": []}).ok


def test_cross_references_are_not_checked():
    doc = {
        "nodes": [_node()],
        "edges": [{"id": "edge1", "source": "node1", "target": "node2", "sourcePortKey": "port1"}],
    }
    assert validate_document(doc).ok


def test_rejects_invalid_node_id_pattern():
    report = validate_document({"nodes": [_node("invalid node!")], "edges": []})
    assert not report.ok
    assert len(report.errors) == 1
    err = report.errors[0]
    assert err.kind is ErrorKind.SCHEMA_VIOLATION
    assert err.locator == "/nodes/0/id"
    assert "invalid node!" in err.message


def test_rejects_invalid_area_and_edge_ids():
    doc = {
        "areas": [{"id": "main stage", "label": "Main"}],
        "nodes": [],
        "edges": [{"id": "edge#1", "source": "a", "target": "b"}],
    }
    locators = [err.locator for err in validate_document(doc).errors]
    assert locators == ["/areas/0/id", "/edges/0/id"]


def test_missing_required_fields():
    node = {"id": "node1", "status": "Regular", "ports": {}}
    report = validate_document({"nodes": [node], "edges": []})
    messages = [err.message for err in report.errors]
    assert len(messages) == 3
    assert any("'manufacturer' is a required property" in m for m in messages)
    assert any("'model' is a required property" in m for m in messages)
    assert any("'category' is a required property" in m for m in messages)
    assert {err.locator for err in report.errors} == {"/nodes/0"}


def test_reports_every_violation_in_path_order():
    node = _node(status="Broken")
    del node["manufacturer"]
    doc = {
        "layout": {"direction": "XY"},
        "nodes": [node],
        "edges": [{"id": "edge1", "source": "node1"}],
    }
    report = validate_document(doc)
    assert [err.locator for err in report.errors] == [
        "/edges/0",
        "/layout/direction",
        "/nodes/0",
        "/nodes/0/status",
    ]


def test_enumerations_are_enforced():
    port = {"alignment": "Sideways", "label": "P", "type": "XLR", "gender": "X"}
    doc = {
        "layout": {"portBinding": "loose"},
        "nodes": [_node(ports={"p": port})],
        "edges": [{"id": "e", "source": "node1", "target": "node1", "binding": "fuzzy"}],
    }
    locators = {err.locator for err in validate_document(doc).errors}
    assert locators == {
        "/layout/portBinding",
        "/nodes/0/ports/p/alignment",
        "/nodes/0/ports/p/gender",
        "/edges/0/binding",
    }


def test_type_conformance():
    doc = {
        "layout": {"areaFirst": "yes", "areaPadding": -1},
        "nodes": [_node(label=5, ports=[])],
        "edges": {},
    }
    locators = {err.locator for err in validate_document(doc).errors}
    assert locators == {
        "/layout/areaFirst",
        "/layout/areaPadding",
        "/nodes/0/label",
        "/nodes/0/ports",
        "/edges",
    }


def test_root_must_be_an_object():
    report = validate_document([])
    assert len(report.errors) == 1
    assert report.errors[0].locator == ""


def test_pointer_escapes_port_keys():
    port = {"alignment": "In", "label": "P", "type": "XLR", "gender": "?"}
    report = validate_document({"nodes": [_node(ports={"in/1": port})], "edges": []})
    assert report.errors[0].locator == "/nodes/0/ports/in~11/gender"


def test_unknown_properties_are_tolerated():
    assert validate_document({"nodes": [_node(rackUnit=3)], "edges": [], "version": 2}).ok


def test_load_wiring_graph_builds_models():
    graph = load_wiring_graph({"nodes": [_node(areaId="stage")], "edges": [], "areas": [{"id": "stage", "label": "Stage"}]})
    node = graph.nodes[0]
    assert node.area_id == "stage"
    assert node.ports["port1"].label == "Input 1"
    assert node.display_label == "Manufacturer A Model X"


def test_load_wiring_graph_raises_with_report():
    with pytest.raises(GraphValidationError) as excinfo:
        load_wiring_graph({"nodes": [_node("bad id")]})
    kinds = {err.kind for err in excinfo.value.errors}
    assert kinds == {ErrorKind.SCHEMA_VIOLATION}
    assert len(excinfo.value.errors) == 2


def test_node_categories_are_sorted_and_unique():
    graph = load_wiring_graph(
        {
            "nodes": [
                _node("a", category="Video"),
                _node("b", category="Audio"),
                _node("c", category="Video"),
            ],
            "edges": [],
        }
    )
    assert graph.node_categories() == ["Audio", "Video"]
