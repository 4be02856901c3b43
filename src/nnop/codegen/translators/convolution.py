#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing import cast
import logging

from nnop.graphs.node import NNNode
from nnop.operators import NNOperConvolution

from ..template import Template
from ..substitutions import Substitutions
from ..primitives import get_primitive, get_plan
from ..fragment import Dialect, KernelFragment

__all__ = [
    "translate_direct",
    "translate_indexed",
]

logger = logging.getLogger(__name__)


DIRECT_TEMPLATE = Template(
    ' - input("input0", @input_shape_0@); input("input1", @input_shape_1@); '
    "output(@output_shape@, topi=@primitive@("
    'args("input0"), args("input1"), '
    "stride=@stride@, padding=@padding@, dilation=@dilation@)); "
)

INDEXED_TEMPLATE = Template(
    " @output0@@output0_layout@ +=! @input0@@input0_layout@ * "
    "@input1@@input1_layout@@pad_cond@ where HO in @height@, WO in @width@; "
)

INPUT0_LAYOUTS = {
    "NCHW": Template("[N, C, @h_index@, @w_index@]"),
    "NHWC": Template("[N, @h_index@, @w_index@, C]"),
}
INPUT1_LAYOUTS = {"NCHW": "[F, C, KH, KW]", "NHWC": "[KH, KW, C, F]"}
OUTPUT0_LAYOUTS = {"NCHW": "[N, F, HO, WO]", "NHWC": "[N, HO, WO, F]"}

PAD_BOUNDS_TEMPLATE = Template("@index@ >= 0, @index@ < @extent@")
PAD_COND_TEMPLATE = Template(".when([@bounds@], 0.0)")


def _conv_op(node: NNNode) -> NNOperConvolution:
    assert isinstance(node.operator, NNOperConvolution), (
        f"node {node.name} is not a Convolution: {node.kind}"
    )
    return cast(NNOperConvolution, node.operator)


def _index_template(axis: int, out_axis: str, k_axis: str, op: NNOperConvolution) -> str:
    # input index = out * stride + k * dilation - padding_below
    terms = [
        out_axis if op.strides[axis] == 1 else f"{out_axis} * @stride_{axis}@",
        k_axis if op.dilations[axis] == 1 else f"{k_axis} * @dilation_{axis}@",
    ]
    if op.padding_below[axis] != 0:
        terms.insert(0, f"-@pad_{axis}@")
    return " + ".join(terms)


def translate_direct(node: NNNode) -> KernelFragment:
    op = _conv_op(node)
    below, above = op.padding_below, op.padding_above
    # Spatial paddings are passed width first: [below_w, below_h, above_w, above_h]
    padding = [below[1], below[0], above[1], above[0]]
    subs = (
        Substitutions()
        .shape("input_shape_0", node.input_shape(0))
        .shape("input_shape_1", node.input_shape(1))
        .shape("output_shape", node.output_shape(0))
        .text("primitive", get_primitive(op.name, op.data_format))
        .ints("stride", op.strides)
        .ints("padding", padding)
        .ints("dilation", op.dilations)
    )
    code = DIRECT_TEMPLATE.render(subs)
    logger.debug("%s: direct: %s", node.name, code)
    return KernelFragment(Dialect.DIRECT, code)


def translate_indexed(node: NNNode) -> KernelFragment:
    op = _conv_op(node)
    in_shape = node.input_shape(0).to_shape()
    out_shape = node.output_shape(0).to_shape()
    h_axis, w_axis = (2, 3) if op.is_nchw else (1, 2)
    subs = (
        Substitutions()
        .text("output0", "output0")
        .text("input0", "input0")
        .text("input1", "input1")
        .text("output0_layout", OUTPUT0_LAYOUTS[op.data_format])
        .text("input1_layout", INPUT1_LAYOUTS[op.data_format])
        .integer("height", out_shape[h_axis])
        .integer("width", out_shape[w_axis])
        .integer("in_height", in_shape[h_axis])
        .integer("in_width", in_shape[w_axis])
    )
    for axis in range(2):
        subs.integer(f"pad_{axis}", op.padding_below[axis])
        subs.integer(f"stride_{axis}", op.strides[axis])
        subs.integer(f"dilation_{axis}", op.dilations[axis])
    subs.template("h_index", _index_template(0, "HO", "KH", op))
    subs.template("w_index", _index_template(1, "WO", "KW", op))
    subs.template("input0_layout", INPUT0_LAYOUTS[op.data_format])

    # One guard over both spatial axes as soon as any side of any axis is padded
    padded = any(op.padding_below) or any(op.padding_above)
    pad_cond = ""
    if padded:
        bounds = [
            PAD_BOUNDS_TEMPLATE.render({"index": subs[index], "extent": subs[extent]})
            for index, extent in [("h_index", "in_height"), ("w_index", "in_width")]
        ]
        pad_cond = PAD_COND_TEMPLATE.render({"bounds": ", ".join(bounds)})
    subs.text("pad_cond", pad_cond)

    code = INDEXED_TEMPLATE.render(subs)
    plan = get_plan(op.name, op.data_format).value
    logger.debug("%s: indexed: %s plan: %s", node.name, code, plan)
    return KernelFragment(Dialect.INDEXED, code, plan=plan)
