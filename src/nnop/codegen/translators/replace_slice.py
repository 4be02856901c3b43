#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing import cast

from nnop.graphs.node import NNNode
from nnop.operators import NNOperReplaceSlice

from ..template import Template
from ..substitutions import Substitutions
from ..primitives import get_plan
from ..fragment import Dialect, KernelFragment
from .common import axes_names, layout

__all__ = [
    "translate_indexed",
]


INDEXED_TEMPLATE = Template(" output0@output_layout@ = @replacement@@slice_cond@; ")
SLICE_COND_TEMPLATE = Template(".when([@conds@], input0@output_layout@)")


def _offset(axis: str, lower: int) -> str:
    return axis if lower == 0 else f"({axis} - {lower})"


def _slice_index(axis: str, lower: int, stride: int) -> str:
    # Position in the replacement tensor of output coordinate axis
    if stride == 1:
        return axis if lower == 0 else f"{axis} - {lower}"
    return f"{_offset(axis, lower)} // {stride}"


def translate_indexed(node: NNNode) -> KernelFragment:
    op = node.operator
    assert isinstance(op, NNOperReplaceSlice), (
        f"node {node.name} is not a ReplaceSlice: {node.kind}"
    )
    op = cast(NNOperReplaceSlice, op)
    shape = node.output_shape(0).to_shape()
    axes = axes_names(len(shape))
    indices = []
    conds = []
    for axis, extent, lower, upper, stride in zip(
        axes, shape, op.lower_bounds, op.upper_bounds, op.strides
    ):
        indices.append(_slice_index(axis, lower, stride))
        if lower != 0:
            conds.append(f"{axis} >= {lower}")
        if upper != extent:
            conds.append(f"{axis} < {upper}")
        if stride != 1:
            conds.append(f"{_offset(axis, lower)} % {stride} == 0")
    subs = (
        Substitutions()
        .text("output_layout", layout(axes))
        .text("replacement", "input1" + layout(indices))
    )
    slice_cond = ""
    if conds:
        slice_cond = SLICE_COND_TEMPLATE.render(
            Substitutions().text("conds", ", ".join(conds)).text(
                "output_layout", subs["output_layout"]
            )
        )
    subs.text("slice_cond", slice_cond)
    code = INDEXED_TEMPLATE.render(subs)
    return KernelFragment(Dialect.INDEXED, code, plan=get_plan(op.name).value)
