import numpy as np
import pytest

import nnop.graphs.op as O

from kernel_interp import np_init, eval_direct, eval_indexed


def build(fn, shapes, dtype="float32"):
    with O.graph(name=fn.__name__) as gb:
        params = [
            O.parameter(shape, dtype, name=f"input{idx}")
            for idx, shape in enumerate(shapes)
        ]
        fn(*params)
    graph = gb.graph
    graph.infer_types()
    inputs = [np_init(shape, dtype) for shape in shapes]
    return graph, inputs


def check_equivalent(graph, inputs):
    (node,) = [node for node in graph.nodes.values() if not node.is_parameter]
    fragments = {
        dialect: graph.translate(dialect)[node.name] for dialect in ["direct", "indexed"]
    }
    named = {f"input{idx}": inp for idx, inp in enumerate(inputs)}
    out_shape = node.output_shape(0).to_shape()
    direct = eval_direct(fragments["direct"].code, named)
    indexed = eval_indexed(fragments["indexed"].code, named, out_shape)
    reference = graph.forward(inputs)[0]
    np.testing.assert_allclose(direct, indexed, rtol=1e-6)
    np.testing.assert_allclose(indexed, reference, rtol=1e-6)


CONV_CASES = [
    ("NCHW", [1, 2, 5, 5], [3, 2, 3, 3], {}),
    ("NCHW", [1, 2, 5, 5], [3, 2, 3, 3], {"padding_below": 1, "padding_above": 1}),
    ("NCHW", [2, 2, 7, 7], [2, 2, 3, 3], {"window_movement_strides": 2, "padding_below": 1, "padding_above": 1}),
    ("NCHW", [1, 1, 7, 6], [2, 1, 2, 2], {"window_movement_strides": (2, 1), "padding_below": 1}),
    ("NCHW", [1, 2, 7, 7], [2, 2, 3, 3], {"window_dilation_strides": 2, "padding_below": 2, "padding_above": 2}),
    ("NCHW", [1, 1, 6, 6], [1, 1, 3, 3], {"padding_above": 2}),
    ("NHWC", [1, 5, 5, 2], [3, 3, 2, 3], {"padding_below": 1, "padding_above": 1}),
    ("NHWC", [1, 7, 7, 2], [2, 2, 2, 2], {"window_movement_strides": 2, "window_dilation_strides": 2, "padding_below": 1}),
    ("NCHW", [1, 1, 5, 6], [1, 1, 3, 3], {"padding_below": (1, 0), "padding_above": (1, 0)}),
    ("NCHW", [1, 2, 6, 7], [2, 2, 3, 3], {"padding_below": (1, 0), "padding_above": (2, 1)}),
    ("NHWC", [1, 6, 5, 2], [3, 2, 2, 2], {"window_movement_strides": (1, 2), "padding_below": (0, 1), "padding_above": (2, 0)}),
]


@pytest.mark.parametrize("data_format, data_shape, filters_shape, attrs", CONV_CASES)
def test_convolution(data_format, data_shape, filters_shape, attrs):
    def conv(x, w):
        return O.convolution(x, w, data_format=data_format, **attrs)

    graph, inputs = build(conv, [data_shape, filters_shape])
    check_equivalent(graph, inputs)


@pytest.mark.parametrize(
    "shape, lower, upper, strides",
    [
        ([10], [2], [7], [2]),
        ([6, 5], [0, 1], [6, 5], [2, 3]),
        ([4, 3, 5], [1, 0, 0], [4, 3, 5], None),
    ],
)
def test_slice(shape, lower, upper, strides):
    def sl(x):
        return O.slice(x, lower, upper, strides)

    graph, inputs = build(sl, [shape])
    check_equivalent(graph, inputs)


@pytest.mark.parametrize("i, j, k", [(1, 1, 1), (3, 4, 5), (6, 2, 7)])
def test_dot(i, j, k):
    graph, inputs = build(O.dot, [[i, k], [k, j]])
    check_equivalent(graph, inputs)


@pytest.mark.parametrize(
    "shape, repl_shape, lower, upper, strides",
    [
        ([10], [3], [2], [7], [2]),
        ([8, 4], [2, 4], [0, 0], [4, 4], [2, 1]),
        ([5, 6], [3, 2], [1, 2], [4, 6], [1, 3]),
    ],
)
def test_replace_slice_indexed(shape, repl_shape, lower, upper, strides):
    def rs(x, r):
        return O.replace_slice(x, r, lower, upper, strides)

    graph, inputs = build(rs, [shape, repl_shape])
    (node,) = [node for node in graph.nodes.values() if not node.is_parameter]
    fragment = graph.translate("indexed")[node.name]
    named = {"input0": inputs[0], "input1": -inputs[1]}
    out = eval_indexed(fragment.code, named, tuple(shape))
    expected = node.operator.forward([inputs[0], -inputs[1]])[0]
    np.testing.assert_array_equal(out, expected)
