#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Sequence
from typing import Any

from nnop.types import NNTensorType
from nnop.types.shape import ShapeLike
from nnop.types.element import ElementTypeLike
from nnop.operators import (
    NNOperator,
    NNOperParameter,
    NNOperConvolution,
    NNOperReplaceSlice,
    NNOperSlice,
    NNOperDot,
)

from .builder import graph_builder
from .context import NNGraphContext
from .node import NNNode

__all__ = [
    "graph",
    "node",
    "parameter",
    "convolution",
    "replace_slice",
    "slice",
    "dot",
]


def graph(**graph_kwargs: Any) -> graph_builder:
    return graph_builder(**graph_kwargs)


def node(
    operator: NNOperator, inputs: Sequence[NNNode] = (), name: str | None = None
) -> NNNode:
    return NNGraphContext.append(NNNode(operator, inputs, name=name))


def parameter(
    shape: ShapeLike = None, dtype: ElementTypeLike = None, name: str | None = None
) -> NNNode:
    return node(NNOperParameter(NNTensorType(shape, dtype)), name=name)


def convolution(
    data: NNNode, filters: NNNode, name: str | None = None, **attrs: Any
) -> NNNode:
    return node(NNOperConvolution(**attrs), (data, filters), name=name)


def replace_slice(
    data: NNNode,
    replacement: NNNode,
    lower_bounds: Sequence[int],
    upper_bounds: Sequence[int],
    strides: Sequence[int] | None = None,
    name: str | None = None,
) -> NNNode:
    return node(
        NNOperReplaceSlice(lower_bounds, upper_bounds, strides),
        (data, replacement),
        name=name,
    )


def slice(
    data: NNNode,
    lower_bounds: Sequence[int],
    upper_bounds: Sequence[int],
    strides: Sequence[int] | None = None,
    name: str | None = None,
) -> NNNode:
    return node(NNOperSlice(lower_bounds, upper_bounds, strides), (data,), name=name)


def dot(a: NNNode, b: NNNode, name: str | None = None) -> NNNode:
    return node(NNOperDot(), (a, b), name=name)
