#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing import cast

from nnop.graphs.node import NNNode
from nnop.operators import NNOperSlice

from ..template import Template
from ..substitutions import Substitutions
from ..primitives import get_primitive, get_plan
from ..fragment import Dialect, KernelFragment
from .common import affine_index, axes_names, direct_code, layout

__all__ = [
    "translate_direct",
    "translate_indexed",
]


SLICE_ATTRS_TEMPLATE = Template("begin=@begin@, end=@end@, strides=@strides@")
INDEXED_TEMPLATE = Template(" output0@output_layout@ = input0@input_layout@; ")


def _slice_op(node: NNNode) -> NNOperSlice:
    assert isinstance(node.operator, NNOperSlice), (
        f"node {node.name} is not a Slice: {node.kind}"
    )
    return cast(NNOperSlice, node.operator)


def translate_direct(node: NNNode) -> KernelFragment:
    op = _slice_op(node)
    attrs = SLICE_ATTRS_TEMPLATE.render(
        Substitutions()
        .ints("begin", op.lower_bounds)
        .ints("end", op.upper_bounds)
        .ints("strides", op.strides)
    )
    code = direct_code(node, get_primitive(op.name), attrs)
    return KernelFragment(Dialect.DIRECT, code)


def translate_indexed(node: NNNode) -> KernelFragment:
    op = _slice_op(node)
    rank = len(node.output_shape(0).to_shape())
    axes = axes_names(rank)
    indices = [
        affine_index(lower, [(axis, stride)])
        for axis, lower, stride in zip(axes, op.lower_bounds, op.strides)
    ]
    subs = (
        Substitutions()
        .text("output_layout", layout(axes))
        .text("input_layout", layout(indices))
    )
    code = INDEXED_TEMPLATE.render(subs)
    return KernelFragment(Dialect.INDEXED, code, plan=get_plan(op.name).value)
