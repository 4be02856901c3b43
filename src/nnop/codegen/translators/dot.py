#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from nnop.graphs.node import NNNode
from nnop.operators import NNOperDot

from ..template import Template
from ..substitutions import Substitutions
from ..primitives import get_primitive, get_plan
from ..fragment import Dialect, KernelFragment
from .common import direct_code

__all__ = [
    "translate_direct",
    "translate_indexed",
]


INDEXED_TEMPLATE = Template(
    " output0[I, J] +=! input0[I, K] * input1[K, J] where K in @reduction@; "
)


def translate_direct(node: NNNode) -> KernelFragment:
    assert isinstance(node.operator, NNOperDot)
    code = direct_code(node, get_primitive(node.kind))
    return KernelFragment(Dialect.DIRECT, code)


def translate_indexed(node: NNNode) -> KernelFragment:
    assert isinstance(node.operator, NNOperDot)
    _, k = node.input_shape(0).to_shape()
    code = INDEXED_TEMPLATE.render(Substitutions().integer("reduction", k))
    return KernelFragment(Dialect.INDEXED, code, plan=get_plan(node.kind).value)
