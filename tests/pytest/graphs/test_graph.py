import numpy as np
import pytest

import nnop.graphs.op as O
from nnop.graphs.graph import NNGraph
from nnop.graphs.node import NNNode
from nnop.operators import NNOperDot, NNOperParameter, OpValidationError
from nnop.types import NNTensorType, PartialShape


def mlp_graph():
    with O.graph(name="mlp") as gb:
        x = O.parameter([4, 8], "float32", name="x")
        w1 = O.parameter([8, 16], "float32", name="w1")
        w2 = O.parameter([16, 2], "float32", name="w2")
        h = O.dot(x, w1, name="h")
        O.dot(h, w2, name="y")
    return gb.graph


def test_builder_inputs_outputs():
    graph = mlp_graph()
    assert graph.name == "mlp"
    assert graph.inputs == ["x", "w1", "w2"]
    assert graph.outputs == ["y"]
    assert list(graph.nodes) == ["x", "w1", "w2", "h", "y"]


def test_builder_graph_inside_scope_is_fatal():
    with pytest.raises(AssertionError):
        with O.graph(name="g") as gb:
            gb.graph


def test_builder_explicit_outputs():
    with O.graph(name="g") as gb:
        x = O.parameter([4, 8], "float32", name="x")
        w = O.parameter([8, 8], "float32", name="w")
        h = O.dot(x, w, name="h")
        O.dot(h, w, name="y")
        gb.set_outputs(h)
    assert gb.graph.outputs == ["h", "y"]


def test_builder_outer_parameter():
    w = O.parameter([8, 2], "float32", name="w")
    with O.graph(name="g") as gb:
        x = O.parameter([4, 8], "float32", name="x")
        O.dot(x, w, name="y")
    graph = gb.graph
    assert graph.inputs == ["x", "w"]
    assert "w" in graph.nodes


def test_builder_outer_operation_rejected():
    a = O.parameter([2, 2], "float32", name="a")
    outer = O.dot(a, a, name="outer")
    with pytest.raises(RuntimeError, match="is not a parameter"):
        with O.graph(name="g") as gb:
            O.dot(outer, a, name="y")


def test_infer_types():
    graph = mlp_graph()
    (out,) = graph.infer_types()
    assert out == NNTensorType([4, 2], "float32")
    assert graph.nodes["h"].output_shape() == PartialShape([4, 16])


def test_infer_types_reports_node():
    with O.graph(name="bad") as gb:
        x = O.parameter([4, 8], "float32", name="x")
        w = O.parameter([7, 2], "float32", name="w")
        O.dot(x, w, name="y")
    with pytest.raises(OpValidationError) as excinfo:
        gb.graph.infer_types()
    assert excinfo.value.op == "Dot"
    assert excinfo.value.node == "y"
    assert str(excinfo.value).startswith("Dot (y): Reduction dimensions")


def test_node_read_before_resolved_is_fatal():
    graph = mlp_graph()
    with pytest.raises(AssertionError):
        graph.nodes["y"].inputs_types
    with pytest.raises(AssertionError):
        graph.nodes["h"].outputs_types


def test_node_resolved_once():
    graph = mlp_graph()
    graph.infer_types()
    with pytest.raises(AssertionError, match="already resolved"):
        graph.nodes["h"].infer_types()
    # A second graph level inference keeps resolved nodes
    assert graph.infer_types()[0].shape == PartialShape([4, 2])


def test_translate_in_topological_order():
    graph = mlp_graph()
    graph.infer_types()
    fragments = graph.translate("indexed")
    assert list(fragments) == ["h", "y"]
    assert "where K in 8" in fragments["h"].code
    assert "where K in 16" in fragments["y"].code


def test_forward():
    graph = mlp_graph()
    graph.infer_types()
    x = np.ones((4, 8), dtype="float32")
    w1 = np.full((8, 16), 0.5, dtype="float32")
    w2 = np.ones((16, 2), dtype="float32")
    (out,) = graph.forward([x, w1, w2])
    np.testing.assert_allclose(out, np.full((4, 2), 64.0))


def test_duplicate_node_name():
    graph = NNGraph(name="g")
    a = NNNode(NNOperParameter(NNTensorType([2], "float32")), name="a")
    b = NNNode(NNOperParameter(NNTensorType([2], "float32")), name="a")
    with pytest.raises(RuntimeError, match="non unique name"):
        graph.add_nodes([a, b])


def test_node_default_name_and_str():
    a = NNNode(NNOperParameter(NNTensorType([2, 2], "float32")))
    node = NNNode(NNOperDot(), [a, a])
    assert node.name.startswith("%")
    assert node.kind == "Dot"
    assert str(node) == f"Dot({a.name}, {a.name})"
    assert str(a) == "Parameter(float32{2,2})"


def test_graph_str():
    text = str(mlp_graph())
    assert text.startswith("graph:\n  name: mlp\n")
    assert "    y: Dot(h, w2)\n" in text


def test_builder_infer_on_exit():
    with O.graph(name="g", infer=True) as gb:
        x = O.parameter([4, 8], "float32", name="x")
        w = O.parameter([8, 2], "float32", name="w")
        O.dot(x, w, name="y")
    assert gb.graph.nodes["y"].is_resolved
    with pytest.raises(OpValidationError, match="Reduction dimensions"):
        with O.graph(name="bad", infer=True):
            x = O.parameter([4, 8], "float32", name="x")
            w = O.parameter([7, 2], "float32", name="w")
            O.dot(x, w, name="y")


def test_builder_explicit_inputs_order():
    with O.graph(name="g") as gb:
        x = O.parameter([4, 8], "float32", name="x")
        w = O.parameter([8, 2], "float32", name="w")
        O.dot(x, w, name="y")
        gb.set_inputs(w)
    assert gb.graph.inputs == ["w", "x"]


def test_topological_nodes_producers_first():
    graph = mlp_graph()
    names = [node.name for node in graph.topological_nodes()]
    assert names == ["x", "w1", "h", "w2", "y"]
